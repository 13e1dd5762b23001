"""
Navigation resolution.

Maps a fine-grained selection to:
- the coarse "navigation object" that owns it (path item, schema, response),
  found by walking parent links upward; the nearest match wins
- the nearest existing node along a path that may not fully exist yet,
  found by walking the path downward from the root

Both are visitors dispatched on node kind (see oaedit.model.visitors).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from oaedit.model.nodes import Node
from oaedit.model.paths import PathLike
from oaedit.model.visitors import Visitor, visit_path, visit_upward

ROOT_NAVIGATION_TYPE = "info"

# node kind -> navigation type reported to the UI
_NAVIGABLE_KINDS: dict[str, str] = {
    "pathItem": "pathItem",
    "schema": "schema",
    "response": "response",
}


def register_navigable_kind(kind: str, navigation_type: Optional[str] = None) -> None:
    """Make nodes of `kind` navigation objects in their own right."""
    _NAVIGABLE_KINDS[kind] = navigation_type or kind


def navigable_kinds() -> dict[str, str]:
    return dict(_NAVIGABLE_KINDS)


@dataclass(frozen=True)
class NavigationTarget:
    object: Node
    type: str


# =============================================================================
# Visitors
# =============================================================================

class NavigationObjectResolver(Visitor):
    """Upward visitor: remembers the first navigable node it meets."""

    def __init__(self) -> None:
        super().__init__()
        self.node: Optional[Node] = None
        self.node_type: Optional[str] = None
        for kind, navigation_type in _NAVIGABLE_KINDS.items():
            self.register(kind, self._found(navigation_type))

    def _found(self, navigation_type: str):
        def handler(node: Node) -> None:
            self.node = node
            self.node_type = navigation_type
            self.done = True

        return handler

    def is_found(self) -> bool:
        return self.node is not None


class NearestNodeVisitor(Visitor):
    """Downward visitor: the last node visited is the nearest existing one."""

    def __init__(self) -> None:
        super().__init__()
        self.found: Optional[Node] = None

    def visit_node(self, node: Node) -> None:
        self.found = node


class NearestOperationVisitor(Visitor):
    """Downward visitor: the first operation passed on the way."""

    def __init__(self) -> None:
        super().__init__()
        self.found: Optional[Node] = None
        self.register("operation", self.visit_operation)

    def visit_operation(self, node: Node) -> None:
        self.found = node
        self.done = True


# =============================================================================
# Entry points
# =============================================================================

def resolve_navigation_object(node: Node, root: Node) -> NavigationTarget:
    if node is root:
        return NavigationTarget(root, ROOT_NAVIGATION_TYPE)
    visitor = NavigationObjectResolver()
    visit_upward(node, visitor, stop_at=root)
    if visitor.is_found():
        return NavigationTarget(visitor.node, visitor.node_type)
    return NavigationTarget(root, ROOT_NAVIGATION_TYPE)


def resolve_nearest_existing(path: PathLike, root: Node) -> Optional[Node]:
    visitor = NearestNodeVisitor()
    visit_path(root, path, visitor)
    return visitor.found


def resolve_nearest_operation(path: PathLike, root: Node) -> Optional[Node]:
    visitor = NearestOperationVisitor()
    visit_path(root, path, visitor)
    return visitor.found
