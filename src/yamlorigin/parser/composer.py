"""Build resolved document trees from a ruamel.yaml parse-event stream.

A single forward pass over the events keeps a stack of open collections
and a per-document anchor table. Aliases are resolved by looking the
anchor up in that table, which makes resolution linear in the number of
events no matter how many anchors and aliases a document uses. Each node
records its expanded size and depth, so oversized alias expansions are
rejected before anything is flattened.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from yamlorigin.models.errors import (
    ConstructionError,
    DuplicateKeyError,
    StructuralError,
    YAMLSafetyError,
)
from yamlorigin.models.origin import Origin
from yamlorigin.parser.flatten import key_segment
from yamlorigin.parser.nodes import MappingNode, Node, RecursiveRef, ScalarNode, SequenceNode
from yamlorigin.parser.positions import PositionTracker
from yamlorigin.tags import NodeKind, TagPolicy, event_tag

# Marks a mapping frame that is waiting for its next key.
_NO_KEY: Any = object()


@dataclass
class _Frame:
    """A mapping or sequence whose end event has not been seen yet."""

    kind: NodeKind
    tag: str
    anchor: str | None
    origin: Origin
    # (segment or None for a merge key, key node, value node)
    entries: list[tuple[str | None, Node, Node]] = field(default_factory=list)
    items: list[Node] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)
    pending_key: Any = _NO_KEY
    size: int = 1
    depth: int = 1


class EventResolver:
    """Consumes parse events and returns one resolved tree per document."""

    def __init__(
        self,
        tracker: PositionTracker,
        policy: TagPolicy,
        max_nodes: int,
        max_depth: int,
    ) -> None:
        self._tracker = tracker
        self._policy = policy
        self._max_nodes = max_nodes
        self._max_depth = max_depth
        self._documents: list[Node] = []
        self._anchors: dict[str, Node] = {}
        self._stack: list[_Frame] = []
        self._root: Node | None = None

    def resolve(self, events: Iterable[Any]) -> list[Node]:
        self._documents = []
        for event in events:
            name = type(event).__name__.lower().removesuffix("event")
            handler = getattr(self, f"_on_{name}", None)
            if handler is not None:
                handler(event)
        if self._stack:
            raise StructuralError("unterminated collection", self._stack[-1].origin)
        return self._documents

    # -- documents -----------------------------------------------------------

    def _on_documentstart(self, event: Any) -> None:
        self._anchors = {}
        self._stack = []
        self._root = None

    def _on_documentend(self, event: Any) -> None:
        if self._stack or self._root is None:
            raise StructuralError(
                "document ended before its content was complete",
                self._tracker.origin_of_mark(event.start_mark),
            )
        self._documents.append(self._root)
        self._root = None

    # -- leaves --------------------------------------------------------------

    def _on_scalar(self, event: Any) -> None:
        origin = self._tracker.origin_of(event)
        plain = bool(event.implicit and event.implicit[0])
        tag, value = self._policy.resolve_scalar(event.value, event_tag(event), plain, origin)
        node = ScalarNode(value=value, text=event.value, tag=tag, origin=origin, plain=plain)
        self._check_depth(node.depth)
        if event.anchor:
            self._anchors[event.anchor] = node
        self._attach(node)

    def _on_alias(self, event: Any) -> None:
        origin = self._tracker.origin_of(event)
        try:
            node = self._anchors[event.anchor]
        except KeyError:
            raise StructuralError(f"found undefined alias '*{event.anchor}'", origin) from None
        self._check_depth(node.depth)
        self._attach(node)

    # -- collections ---------------------------------------------------------

    def _on_mappingstart(self, event: Any) -> None:
        self._open(event, NodeKind.MAPPING)

    def _on_sequencestart(self, event: Any) -> None:
        self._open(event, NodeKind.SEQUENCE)

    def _on_mappingend(self, event: Any) -> None:
        frame = self._stack.pop()
        if frame.tag == "set":
            keys = tuple(key for _, key, _ in frame.entries)
            self._close(frame, self._sequence(keys, frame))
        else:
            self._close(frame, self._mapping(frame))

    def _on_sequenceend(self, event: Any) -> None:
        frame = self._stack.pop()
        self._close(frame, self._sequence(tuple(frame.items), frame))

    def _open(self, event: Any, kind: NodeKind) -> None:
        origin = self._tracker.origin_of(event)
        tag = self._policy.resolve_collection(event_tag(event), kind, origin)
        self._check_depth(1)
        frame = _Frame(kind=kind, tag=tag, anchor=event.anchor, origin=origin)
        if event.anchor:
            # Aliases met before the end event refer back into this node.
            self._anchors[event.anchor] = RecursiveRef(anchor=event.anchor, origin=origin)
        self._stack.append(frame)

    def _close(self, frame: _Frame, node: Node) -> None:
        if frame.anchor:
            self._anchors[frame.anchor] = node
        self._attach(node)

    def _sequence(self, items: tuple[Node, ...], frame: _Frame) -> SequenceNode:
        return SequenceNode(
            items=items,
            origin=frame.origin,
            tag=frame.tag,
            size=1 + sum(item.size for item in items),
            depth=1 + max((item.depth for item in items), default=0),
        )

    def _mapping(self, frame: _Frame) -> MappingNode:
        entries: dict[str, Node] = {}
        for segment, _key, value in frame.entries:
            if segment is not None:
                entries[segment] = value
                continue
            for source in self._merge_sources(value):
                for merged_segment, merged in source.entries.items():
                    entries.setdefault(merged_segment, merged)
        size = 1 + sum(node.size for node in entries.values())
        if size > self._max_nodes:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum node count ({self._max_nodes:,})",
                frame.origin,
            )
        return MappingNode(
            entries=entries,
            origin=frame.origin,
            tag=frame.tag,
            size=size,
            depth=1 + max((node.depth for node in entries.values()), default=0),
        )

    @staticmethod
    def _merge_sources(value: Node) -> list[MappingNode]:
        items = value.items if isinstance(value, SequenceNode) else (value,)
        for item in items:
            if isinstance(item, RecursiveRef):
                raise StructuralError(
                    f"recursive alias '*{item.anchor}' cannot be merged", item.origin
                )
        if isinstance(value, MappingNode):
            return [value]
        if isinstance(value, SequenceNode) and all(
            isinstance(item, MappingNode) for item in value.items
        ):
            return list(value.items)  # type: ignore[arg-type]
        raise ConstructionError(
            "expected a mapping or list of mappings for merging",
            value.origin,
        )

    # -- tree assembly -------------------------------------------------------

    def _attach(self, node: Node) -> None:
        if not self._stack:
            self._root = node
            return
        frame = self._stack[-1]
        if frame.kind is NodeKind.MAPPING and frame.pending_key is _NO_KEY:
            frame.pending_key = node
            if not isinstance(node, ScalarNode):
                # Collection keys are rendered into the path in full.
                frame.size += node.size
                self._check_size(frame, node)
            return
        if frame.kind is NodeKind.SEQUENCE:
            frame.items.append(node)
        else:
            self._add_entry(frame, frame.pending_key, node)
            frame.pending_key = _NO_KEY
        frame.size += node.size
        frame.depth = max(frame.depth, node.depth + 1)
        self._check_size(frame, node)

    def _check_size(self, frame: _Frame, node: Node) -> None:
        if frame.size > self._max_nodes:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum node count ({self._max_nodes:,})",
                node.origin,
            )

    @staticmethod
    def _add_entry(frame: _Frame, key: Node, value: Node) -> None:
        if frame.tag != "set" and isinstance(key, ScalarNode) and key.is_merge_key:
            frame.entries.append((None, key, value))
            return
        segment = key_segment(key)
        if segment in frame.seen:
            raise DuplicateKeyError(f"found duplicate key '{segment}'", key.origin)
        frame.seen.add(segment)
        frame.entries.append((segment, key, value))

    def _check_depth(self, depth: int) -> None:
        if len(self._stack) + depth > self._max_depth:
            origin = self._stack[-1].origin if self._stack else None
            raise YAMLSafetyError(
                f"YAML document exceeds maximum nesting depth ({self._max_depth})",
                origin,
            )
