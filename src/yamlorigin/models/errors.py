"""Load error kinds with YAML source position tracking."""

from __future__ import annotations

from pydantic import BaseModel

from yamlorigin.models.origin import Origin


class ErrorReport(BaseModel):
    """A structured, serialisable description of a failed load."""

    code: str
    message: str
    origin: Origin | None = None


class YamlLoadError(Exception):
    """Base class for every error raised while loading a YAML resource."""

    code = "YAML_LOAD_ERROR"

    def __init__(self, message: str, origin: Origin | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.origin = origin

    def __str__(self) -> str:
        if self.origin is None:
            return self.message
        return f"{self.message} ({self.origin})"

    def to_report(self) -> ErrorReport:
        return ErrorReport(code=self.code, message=self.message, origin=self.origin)


class ParseError(YamlLoadError):
    """Malformed YAML syntax, or a source that could not be read."""

    code = "YAML_PARSE_ERROR"


class ConstructionError(YamlLoadError):
    """A tag outside the allow-list, or a tagged value that cannot be built."""

    code = "YAML_CONSTRUCTION_ERROR"


class DuplicateKeyError(ConstructionError):
    code = "YAML_DUPLICATE_KEY"


class StructuralError(YamlLoadError):
    """Unknown or recursive aliases that cannot be flattened."""

    code = "YAML_STRUCTURAL_ERROR"


class YAMLSafetyError(StructuralError):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors: these indicate potentially malicious input
    (e.g., billion-laughs anchors, excessive nesting, oversized documents).
    """

    code = "YAML_SAFETY_ERROR"
