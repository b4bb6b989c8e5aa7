"""Value and error models shared by the loader and its callers."""

from yamlorigin.models.errors import (
    ConstructionError,
    DuplicateKeyError,
    ErrorReport,
    ParseError,
    StructuralError,
    YamlLoadError,
    YAMLSafetyError,
)
from yamlorigin.models.origin import (
    EMPTY_LIST,
    EMPTY_MAP,
    EmptyMapping,
    EmptySequence,
    Origin,
    OriginTrackedValue,
)

__all__ = [
    "EMPTY_LIST",
    "EMPTY_MAP",
    "ConstructionError",
    "DuplicateKeyError",
    "EmptyMapping",
    "EmptySequence",
    "ErrorReport",
    "Origin",
    "OriginTrackedValue",
    "ParseError",
    "StructuralError",
    "YAMLSafetyError",
    "YamlLoadError",
]
