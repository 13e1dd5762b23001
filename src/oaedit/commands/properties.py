"""Property-level commands: change a value, ensure a child, replace content."""

from __future__ import annotations

import logging
from typing import Any, Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.io import read_node, write_node
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import PathLike, resolve_node_path

logger = logging.getLogger(__name__)


class ChangePropertyCommand(Command):
    """Set a property on a node; undo restores the previous value."""

    def __init__(self, target: Node | PathLike, property_name: str, value: Any) -> None:
        super().__init__()
        self.path = target_path(target)
        self.property_name = property_name
        self.value = value
        self._old_value: Any = None

    def execute(self, document: Document) -> None:
        node = require_node(document, self.path)
        self._old_value = node.get_property(self.property_name)
        node.set_property(self.property_name, self.value)

    def undo(self, document: Document) -> None:
        node = require_node(document, self.path)
        node.set_property(self.property_name, self._old_value)


class EnsureChildNodeCommand(Command):
    """Create a single child node (info, contact, license, ...) if it is missing.

    Undo removes the child only if this command created it.
    """

    def __init__(self, parent: Node | PathLike, child_name: str) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.child_name = child_name
        self._parent_existed = False
        self._child_existed = False

    def execute(self, document: Document) -> None:
        parent = resolve_node_path(self.parent_path, document)
        if parent is None:
            self._parent_existed = False
            return
        if self.child_name not in parent.CHILDREN:
            logger.warning("%s has no child '%s' (%s)", parent.kind, self.child_name, self.parent_path)
            self._parent_existed = False
            return

        self._parent_existed = True
        if parent.get_child(self.child_name) is not None:
            self._child_existed = True
            return

        self._child_existed = False
        parent.set_child(self.child_name, parent.create_child(self.child_name))

    def undo(self, document: Document) -> None:
        if not self._parent_existed or self._child_existed:
            return
        parent = resolve_node_path(self.parent_path, document)
        if parent is not None:
            parent.set_child(self.child_name, None)


class UpdateNodeCommand(Command):
    """Replace a node's whole content, e.g. after editing its source."""

    def __init__(self, target: Node | PathLike, content: dict[str, Any]) -> None:
        super().__init__()
        self.path = target_path(target)
        self.content = content
        self._old_content: Optional[dict[str, Any]] = None

    def execute(self, document: Document) -> None:
        node = require_node(document, self.path)
        # first execution only: a redo must not overwrite the original
        if self._old_content is None:
            self._old_content = write_node(node)
        node.clear()
        read_node(self.content, node)

    def undo(self, document: Document) -> None:
        node = resolve_node_path(self.path, document)
        if node is None or self._old_content is None:
            return
        node.clear()
        read_node(self._old_content, node)
