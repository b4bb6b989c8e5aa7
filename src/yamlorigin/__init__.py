"""Origin-tracked YAML configuration loader."""

from yamlorigin.models import (
    EMPTY_LIST,
    EMPTY_MAP,
    ConstructionError,
    DuplicateKeyError,
    Origin,
    OriginTrackedValue,
    ParseError,
    StructuralError,
    YamlLoadError,
    YAMLSafetyError,
)
from yamlorigin.parser import OriginTrackedYamlLoader, load, load_string, path_segments
from yamlorigin.resource import ByteArrayResource, FileResource, Resource, StringResource
from yamlorigin.settings import LoaderSettings

__version__ = "0.1.0"

__all__ = [
    "EMPTY_LIST",
    "EMPTY_MAP",
    "ByteArrayResource",
    "ConstructionError",
    "DuplicateKeyError",
    "FileResource",
    "LoaderSettings",
    "Origin",
    "OriginTrackedValue",
    "OriginTrackedYamlLoader",
    "ParseError",
    "Resource",
    "StringResource",
    "StructuralError",
    "YAMLSafetyError",
    "YamlLoadError",
    "__version__",
    "load",
    "load_string",
    "path_segments",
]
