"""Origin-tracking YAML parsing: events -> resolved trees -> flat properties."""

from yamlorigin.parser.flatten import flatten, join_segments, path_segments
from yamlorigin.parser.loader import OriginTrackedYamlLoader, load, load_string

__all__ = [
    "OriginTrackedYamlLoader",
    "flatten",
    "join_segments",
    "load",
    "load_string",
    "path_segments",
]
