"""Allow-listed YAML tags and the constructors for tagged scalars.

Only the tags named here can ever be applied to a node. Anything else
(``!!python/object``, ``!!java.net.URL``, local ``!foo`` tags, ...) is rejected
with ``ConstructionError`` before a value is built.
"""

from __future__ import annotations

import base64
import binascii
import datetime
import math
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any
from urllib.parse import unquote

from yamlorigin.models.errors import ConstructionError
from yamlorigin.models.origin import Origin

TAG_PREFIX = "tag:yaml.org,2002:"
NON_SPECIFIC_TAG = "!"

# ruamel.yaml's parser falls back to these when no %TAG directive is given.
_DEFAULT_HANDLES = {"!": "!", "!!": TAG_PREFIX}


class NodeKind(StrEnum):
    MAPPING = "mapping"
    SEQUENCE = "sequence"


# ---------------------------------------------------------------------------
# Scalar constructors
# ---------------------------------------------------------------------------

# YAML 1.1 implicit types, as configuration files are usually written
# against them: ``on``/``yes`` are booleans, ``010`` is octal.
_NULL_RE = re.compile(r"^(?:~|null|Null|NULL|)$")
_BOOL_RE = re.compile(
    r"^(?:yes|Yes|YES|no|No|NO|true|True|TRUE|false|False|FALSE|on|On|ON|off|Off|OFF)$"
)
_INT_RE = re.compile(
    r"^(?:[-+]?0b_*[0-1]+[0-1_]*"
    r"|[-+]?0_*[0-7]+[0-7_]*"
    r"|[-+]?(?:0|[1-9][0-9_]*)"
    r"|[-+]?0x_*[0-9a-fA-F]+[0-9a-fA-F_]*"
    r"|[-+]?[1-9][0-9_]*(?::[0-5]?[0-9])+)$"
)
_FLOAT_RE = re.compile(
    r"^(?:[-+]?(?:\.[0-9]+|[0-9][0-9_]*(?:\.[0-9_]*)?)(?:[eE][-+]?[0-9]+)?"
    r"|[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*"
    r"|[-+]?\.(?:inf|Inf|INF)"
    r"|\.(?:nan|NaN|NAN))$"
)
_TIMESTAMP_RE = re.compile(
    r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})"
    r"(?:(?:[Tt]|[ \t]+)(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]*))?"
    r"(?:[ \t]*(?P<tz>Z|(?P<tz_sign>[-+])(?P<tz_hour>[0-9]{1,2})(?::(?P<tz_minute>[0-9]{2}))?))?)?$"
)

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})


def construct_null(text: str) -> None:
    return None


def construct_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"'{text}' is not a boolean")


def _sexagesimal(digits: str, cast: Callable[[str], Any]) -> Any:
    """Evaluate base-60 notation such as ``190:20:30``."""
    value = 0
    for part in digits.split(":"):
        value = value * 60 + cast(part)
    return value


def construct_int(text: str) -> int:
    digits = text.replace("_", "")
    sign = -1 if digits.startswith("-") else 1
    digits = digits.lstrip("+-")
    if digits[:2] in ("0x", "0X"):
        return sign * int(digits[2:], 16)
    if digits[:2] in ("0o", "0O"):
        return sign * int(digits[2:], 8)
    if digits[:2] in ("0b", "0B"):
        return sign * int(digits[2:], 2)
    if ":" in digits:
        return sign * _sexagesimal(digits, int)
    if len(digits) > 1 and digits.startswith("0"):
        return sign * int(digits, 8)
    return sign * int(digits, 10)


def construct_float(text: str) -> float:
    lowered = text.replace("_", "").lower()
    if lowered in (".inf", "+.inf"):
        return math.inf
    if lowered == "-.inf":
        return -math.inf
    if lowered == ".nan":
        return math.nan
    if ":" in lowered:
        sign = -1 if lowered.startswith("-") else 1
        return sign * float(_sexagesimal(lowered.lstrip("+-"), float))
    return float(lowered)


def construct_binary(text: str) -> bytes:
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 data: {exc}") from None


def construct_timestamp(text: str) -> datetime.date | datetime.datetime:
    match = _TIMESTAMP_RE.match(text.strip())
    if match is None:
        raise ValueError(f"'{text}' is not a timestamp")
    parts = match.groupdict()
    date = datetime.date(int(parts["year"]), int(parts["month"]), int(parts["day"]))
    if parts["hour"] is None:
        return date
    fraction = (parts["fraction"] or "")[:6].ljust(6, "0")
    tzinfo = None
    if parts["tz"] == "Z":
        tzinfo = datetime.timezone.utc
    elif parts["tz"]:
        offset = datetime.timedelta(
            hours=int(parts["tz_hour"]), minutes=int(parts["tz_minute"] or 0)
        )
        tzinfo = datetime.timezone(-offset if parts["tz_sign"] == "-" else offset)
    return datetime.datetime(
        date.year,
        date.month,
        date.day,
        int(parts["hour"]),
        int(parts["minute"]),
        int(parts["second"]),
        int(fraction),
        tzinfo=tzinfo,
    )


_SCALAR_CONSTRUCTORS: dict[str, Callable[[str], Any]] = {
    "str": str,
    "int": construct_int,
    "float": construct_float,
    "bool": construct_bool,
    "null": construct_null,
    "binary": construct_binary,
    "timestamp": construct_timestamp,
    "merge": str,
}

_COLLECTION_KINDS: dict[str, NodeKind] = {
    "map": NodeKind.MAPPING,
    "set": NodeKind.MAPPING,
    "seq": NodeKind.SEQUENCE,
    "omap": NodeKind.SEQUENCE,
    "pairs": NodeKind.SEQUENCE,
}

SUPPORTED_TAGS: frozenset[str] = frozenset(_SCALAR_CONSTRUCTORS) | frozenset(_COLLECTION_KINDS)

# Plain scalars are tried against these, in order; no match means ``str``.
_IMPLICIT_RESOLVERS: list[tuple[str, re.Pattern[str]]] = [
    ("null", _NULL_RE),
    ("bool", _BOOL_RE),
    ("int", _INT_RE),
    ("float", _FLOAT_RE),
]


def short_name(tag: str) -> str:
    """Return ``int`` for ``tag:yaml.org,2002:int``; other tags unchanged."""
    return tag[len(TAG_PREFIX):] if tag.startswith(TAG_PREFIX) else tag


def event_tag(event: Any) -> str | None:
    """Return the fully expanded tag URI of a parse event, if it has one.

    Newer ruamel.yaml releases keep the tag as a ``Tag`` object on ``ctag``;
    older ones store the expanded string on ``tag``.
    """
    tag = event.ctag if hasattr(event, "ctag") else getattr(event, "tag", None)
    if tag is None or isinstance(tag, str):
        return tag
    suffix = unquote(tag.suffix or "")
    if tag.handle is None:
        return suffix
    handles = getattr(tag, "handles", None) or _DEFAULT_HANDLES
    return handles.get(tag.handle, _DEFAULT_HANDLES.get(tag.handle, tag.handle)) + suffix


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


class TagPolicy:
    """Tagged-variant dispatch over the enabled subset of ``SUPPORTED_TAGS``."""

    def __init__(self, allowed_tags: frozenset[str] = SUPPORTED_TAGS) -> None:
        unknown = set(allowed_tags) - SUPPORTED_TAGS
        if unknown:
            raise ValueError(f"unsupported tags: {', '.join(sorted(unknown))}")
        self.allowed_tags = frozenset(allowed_tags)

    def _check_allowed(self, tag: str, origin: Origin) -> str:
        name = short_name(tag)
        if not tag.startswith(TAG_PREFIX) or name not in self.allowed_tags:
            raise ConstructionError(
                f"could not determine a constructor for the tag '{tag}'", origin
            )
        return name

    def resolve_scalar(
        self, text: str, tag: str | None, plain: bool, origin: Origin
    ) -> tuple[str, Any]:
        """Return ``(short tag, payload)`` for a scalar event."""
        if tag is None or tag == NON_SPECIFIC_TAG:
            if plain and tag is None:
                for name, pattern in _IMPLICIT_RESOLVERS:
                    if pattern.match(text):
                        return name, _SCALAR_CONSTRUCTORS[name](text)
            return "str", text

        name = self._check_allowed(tag, origin)
        constructor = _SCALAR_CONSTRUCTORS.get(name)
        if constructor is None:
            raise ConstructionError(
                f"tag '!!{name}' expects a {_COLLECTION_KINDS[name]}, found a scalar",
                origin,
            )
        try:
            return name, constructor(text)
        except ValueError as exc:
            raise ConstructionError(
                f"cannot construct '!!{name}' from '{text}': {exc}", origin
            ) from exc

    def resolve_collection(self, tag: str | None, kind: NodeKind, origin: Origin) -> str:
        """Return the short tag a mapping/sequence start event resolves to."""
        default = "map" if kind is NodeKind.MAPPING else "seq"
        if tag is None or tag == NON_SPECIFIC_TAG:
            return default
        name = self._check_allowed(tag, origin)
        if _COLLECTION_KINDS.get(name) is not kind:
            raise ConstructionError(f"tag '!!{name}' cannot be applied to a {kind}", origin)
        return name
