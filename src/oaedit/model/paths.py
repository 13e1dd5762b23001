"""
Node addressing.

A NodePath is an immutable sequence of segments rendered as an RFC 6901 JSON
Pointer:

    /paths/~1pets/get/responses/200
    /components/schemas/Pet/properties/name

Maps and lists take two segments (container name, then key or index); keyed
items (paths, responses) and single children take one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from oaedit.model.nodes import Node


def _escape(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


@dataclass(frozen=True)
class NodePath:
    """Ordered, hashable locator of a node in the document tree."""

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, pointer: str) -> NodePath:
        if pointer in ("", "/"):
            return cls()
        if not pointer.startswith("/"):
            raise ValueError(f"Invalid node path (must start with '/'): {pointer!r}")
        return cls(tuple(_unescape(part) for part in pointer[1:].split("/")))

    @classmethod
    def of(cls, *segments: Union[str, int]) -> NodePath:
        return cls(tuple(str(s) for s in segments))

    def __str__(self) -> str:
        if not self.segments:
            return "/"
        return "".join("/" + _escape(s) for s in self.segments)

    def __truediv__(self, segment: Union[str, int]) -> NodePath:
        return NodePath(self.segments + (str(segment),))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    @property
    def parent(self) -> Optional[NodePath]:
        if not self.segments:
            return None
        return NodePath(self.segments[:-1])

    def startswith(self, other: NodePath) -> bool:
        return self.segments[: len(other.segments)] == other.segments


PathLike = Union[NodePath, str]


def as_path(path: PathLike) -> NodePath:
    if isinstance(path, NodePath):
        return path
    return NodePath.parse(path)


def walk_path(path: PathLike, root: Node) -> Iterator[Node]:
    """Yield each node resolved on the way down `path`, starting at root.

    Stops silently at the first segment that does not resolve, so the last
    yielded node is the nearest existing one.
    """
    segments = as_path(path).segments
    node = root
    yield node
    i = 0
    while i < len(segments):
        segment = segments[i]
        if node.is_container(segment):
            if i + 1 >= len(segments):
                return
            nxt = node.resolve_pair(segment, segments[i + 1])
            i += 2
        else:
            nxt = node.child(segment)
            i += 1
        if nxt is None:
            return
        node = nxt
        yield node


def resolve_node_path(path: PathLike, root: Node) -> Optional[Node]:
    """Exact resolution: the node at `path`, or None if any step is missing."""
    segments = as_path(path).segments
    node = root
    i = 0
    while i < len(segments):
        segment = segments[i]
        if node.is_container(segment):
            if i + 1 >= len(segments):
                return None
            node = node.resolve_pair(segment, segments[i + 1])
            i += 2
        else:
            node = node.child(segment)
            i += 1
        if node is None:
            return None
    return node


def create_node_path(node: Node) -> Optional[NodePath]:
    """Reverse addressing: the path of `node` from its root.

    Returns None for a node that is no longer attached to its parent.
    """
    segments: list[str] = []
    current = node
    while current.parent is not None:
        parent = current.parent
        located = parent.locate(current)
        if located is None:
            return None
        segments[:0] = located
        current = parent
    return NodePath(tuple(segments))
