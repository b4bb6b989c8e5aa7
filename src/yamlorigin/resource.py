"""Readable sources of YAML text."""

from __future__ import annotations

import codecs
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from yamlorigin.models.errors import ParseError


def decode_yaml_bytes(data: bytes, description: str) -> str:
    """Decode a YAML byte stream: UTF-16 when it starts with a BOM, else UTF-8."""
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        encoding = "utf-16"
    else:
        encoding = "utf-8-sig"
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(f"cannot decode {description}: {exc}") from exc


class Resource(ABC):
    """A source that can be read any number of times."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable name used in origins and error messages."""

    @abstractmethod
    def read_text(self) -> str: ...


@dataclass(frozen=True)
class FileResource(Resource):
    path: Path

    @property
    def description(self) -> str:
        return f"file [{self.path}]"

    def read_text(self) -> str:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise ParseError(f"cannot read {self.description}: {exc}") from exc
        return decode_yaml_bytes(data, self.description)


@dataclass(frozen=True)
class ByteArrayResource(Resource):
    data: bytes
    name: str = "resource loaded from byte array"

    @property
    def description(self) -> str:
        return f"byte array resource [{self.name}]"

    def read_text(self) -> str:
        return decode_yaml_bytes(self.data, self.description)


@dataclass(frozen=True)
class StringResource(Resource):
    text: str
    name: str = "<string>"

    @property
    def description(self) -> str:
        return self.name

    def read_text(self) -> str:
        return self.text


def as_resource(source: Resource | os.PathLike[str] | bytes | bytearray | str) -> Resource:
    """Adapt a path, raw bytes or YAML text to a ``Resource``.

    A plain ``str`` is treated as YAML content, not as a file name.
    """
    if isinstance(source, Resource):
        return source
    if isinstance(source, os.PathLike):
        return FileResource(Path(source))
    if isinstance(source, (bytes, bytearray)):
        return ByteArrayResource(bytes(source))
    if isinstance(source, str):
        return StringResource(source)
    raise TypeError(f"cannot read YAML from {type(source).__name__}")
