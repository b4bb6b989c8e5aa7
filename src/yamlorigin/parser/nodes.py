"""Immutable nodes of a resolved YAML document.

Aliased content is shared: several parents may hold the very same node
instance. Nodes are never mutated once built, so sharing is safe and the
flattener expands each occurrence by value at its own path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from yamlorigin.models.origin import Origin


@dataclass(frozen=True)
class ScalarNode:
    """A leaf: constructed payload plus the raw source text."""

    value: Any
    text: str
    tag: str
    origin: Origin
    plain: bool = False

    size: int = field(default=1, init=False)
    depth: int = field(default=1, init=False)

    @property
    def is_merge_key(self) -> bool:
        return self.tag == "merge" or (self.plain and self.text == "<<")


@dataclass(frozen=True)
class MappingNode:
    """Ordered ``path segment -> node`` entries."""

    entries: dict[str, Node]
    origin: Origin
    tag: str = "map"
    size: int = 1
    depth: int = 1


@dataclass(frozen=True)
class SequenceNode:
    items: tuple[Node, ...]
    origin: Origin
    tag: str = "seq"
    size: int = 1
    depth: int = 1


@dataclass(frozen=True)
class RecursiveRef:
    """An alias to an anchor whose node was still being built."""

    anchor: str
    origin: Origin

    size: int = field(default=1, init=False)
    depth: int = field(default=1, init=False)


Node = ScalarNode | MappingNode | SequenceNode | RecursiveRef
