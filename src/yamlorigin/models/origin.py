"""Origin-tagged values produced by the YAML loader."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NoReturn

from pydantic import BaseModel, ConfigDict


class Origin(BaseModel):
    """Points to the exact location in a YAML resource a value came from."""

    model_config = ConfigDict(frozen=True)

    resource: str
    line: int
    column: int

    @property
    def location(self) -> str:
        return f"{self.line}:{self.column}"

    def __str__(self) -> str:
        return f"{self.resource} - {self.location}"


@dataclass(frozen=True, eq=False)
class OriginTrackedValue:
    """A scalar payload paired with the origin it was read from.

    Equality, hashing and the string form delegate to the payload, so a
    tracked value can be compared directly with a plain one. Booleans print
    as ``true`` / ``false``, the way they are written in properties.
    """

    value: Any
    origin: Origin

    @classmethod
    def of(cls, value: Any, origin: Origin) -> OriginTrackedValue:
        return cls(value="" if value is None else value, origin=origin)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OriginTrackedValue):
            return bool(self.value == other.value)
        return bool(self.value == other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def __repr__(self) -> str:
        return f"OriginTrackedValue({self.value!r}, origin={self.origin})"


class EmptyMapping(Mapping[str, Any]):
    """Value of a flattened key whose YAML node was ``{}``."""

    __slots__ = ()

    def __getitem__(self, key: str) -> NoReturn:
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "{}"


class EmptySequence(Sequence[Any]):
    """Value of a flattened key whose YAML node was ``[]``."""

    __slots__ = ()

    def __getitem__(self, index: Any) -> NoReturn:
        raise IndexError(index)

    def __len__(self) -> int:
        return 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, bytes, bytearray)):
            return False
        return isinstance(other, Sequence) and len(other) == 0

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "[]"


EMPTY_MAP = EmptyMapping()
EMPTY_LIST = EmptySequence()
