"""Flatten resolved YAML trees into dotted/indexed property keys.

Mapping keys are joined with ``.`` and sequence indices are rendered as
``[i]``, so ``{a: {b: [x, {c: y}]}}`` becomes ``a.b[0]`` and ``a.b[1].c``.
Keys that themselves contain ``.`` are not escaped; ``{"a.b": 1}`` and
``{a: {b: 1}}`` both flatten to ``a.b``.
"""

from __future__ import annotations

from typing import Any

from yamlorigin.models.errors import StructuralError
from yamlorigin.models.origin import EMPTY_LIST, EMPTY_MAP, OriginTrackedValue
from yamlorigin.parser.nodes import MappingNode, Node, RecursiveRef, ScalarNode, SequenceNode

# Key under which a document whose root is not a mapping is exposed.
DOCUMENT_KEY = "document"


def join_path(prefix: str, segment: str) -> str:
    if not prefix:
        return segment
    if segment.startswith("["):
        return prefix + segment
    return f"{prefix}.{segment}"


def render_key(node: Node) -> str:
    """Compact flow-style text for a node used as a mapping key."""
    if isinstance(node, ScalarNode):
        return node.text
    if isinstance(node, RecursiveRef):
        return f"*{node.anchor}"
    if isinstance(node, MappingNode):
        body = ", ".join(f"{seg}: {render_key(child)}" for seg, child in node.entries.items())
        return "{" + body + "}"
    return "[" + ", ".join(render_key(child) for child in node.items) + "]"


def key_segment(node: Node) -> str:
    """Path segment contributed by a mapping key."""
    if isinstance(node, ScalarNode) and isinstance(node.value, str):
        return node.value
    return f"[{render_key(node)}]"


def flatten(root: Node) -> dict[str, Any]:
    """Flatten one document tree into an ordered ``key -> value`` dict."""
    result: dict[str, Any] = {}
    if isinstance(root, MappingNode):
        for segment, child in root.entries.items():
            _build(child, segment, result)
    else:
        _build(root, DOCUMENT_KEY, result)
    return result


def _build(node: Node, path: str, result: dict[str, Any]) -> None:
    if isinstance(node, ScalarNode):
        result[path] = OriginTrackedValue.of(node.value, node.origin)
    elif isinstance(node, MappingNode):
        if not node.entries:
            result[path] = EMPTY_MAP
        for segment, child in node.entries.items():
            _build(child, join_path(path, segment), result)
    elif isinstance(node, SequenceNode):
        if not node.items:
            result[path] = EMPTY_LIST
        for index, child in enumerate(node.items):
            _build(child, f"{path}[{index}]", result)
    else:
        raise StructuralError(
            f"recursive alias '*{node.anchor}' cannot be flattened at '{path}'",
            node.origin,
        )


def path_segments(key: str) -> list[str | int]:
    """Split a flattened key back into its segments.

    ``"a.b[0].c"`` gives ``["a", "b", 0, "c"]``. Index segments come back as
    ints, other bracketed segments keep their brackets, so
    ``join_segments(path_segments(key)) == key``.
    """
    segments: list[str | int] = []
    current: list[str] = []
    depth = 0
    for ch in key:
        if depth == 0 and ch == ".":
            if current:
                segments.append("".join(current))
            current = []
            continue
        if depth == 0 and ch == "[" and current:
            segments.append("".join(current))
            current = []
        current.append(ch)
        if ch == "[":
            depth += 1
        elif ch == "]" and depth:
            depth -= 1
            if depth == 0:
                segments.append(_bracketed("".join(current)))
                current = []
    if current:
        segments.append("".join(current))
    return segments


def _bracketed(segment: str) -> str | int:
    inner = segment[1:-1]
    if inner.isdigit() and str(int(inner)) == inner:
        return int(inner)
    return segment


def join_segments(segments: list[str | int]) -> str:
    path = ""
    for segment in segments:
        path = join_path(path, f"[{segment}]" if isinstance(segment, int) else segment)
    return path
