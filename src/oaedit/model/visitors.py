"""Kind-keyed visitor dispatch.

A Visitor maps node kinds to handlers. Traversals call visitor.visit(node)
for each node they pass; visit() looks the handler up by node.kind and
falls back to visit_node. Setting `done` stops the traversal.
"""

from __future__ import annotations

from typing import Callable, Optional

from oaedit.model.nodes import Node
from oaedit.model.paths import PathLike, walk_path

Handler = Callable[[Node], None]


class Visitor:
    """Base visitor. Subclasses fill `handlers` (kind -> handler)."""

    def __init__(self) -> None:
        self.handlers: dict[str, Handler] = {}
        self.done = False

    def register(self, kind: str, handler: Handler) -> None:
        """Register a handler for a node kind."""
        self.handlers[kind] = handler

    def visit(self, node: Node) -> None:
        handler = self.handlers.get(node.kind, self.visit_node)
        handler(node)

    def visit_node(self, node: Node) -> None:
        pass


def visit_path(root: Node, path: PathLike, visitor: Visitor) -> None:
    """Visit every existing node along `path`, top-down."""
    for node in walk_path(path, root):
        visitor.visit(node)
        if visitor.done:
            return


def visit_upward(node: Node, visitor: Visitor, stop_at: Optional[Node] = None) -> None:
    """Visit `node` and then each ancestor, bottom-up.

    The walk ends after `stop_at` (usually the document root) has been visited.
    """
    for current in node.ancestors():
        visitor.visit(current)
        if visitor.done or current is stop_at:
            return
