"""
Reversible document commands.

Every mutation of a Document is wrapped in a Command and run through the
CommandEngine, which records it for undo/redo.

Contract: execute → undo → execute leaves the document as a single execute
would. Commands address their targets by NodePath and resolve them on every
execution, so a redo replays against the current tree.
"""

from __future__ import annotations

import abc
from typing import Optional, Sequence

from oaedit.editor.state import SelectionEvent
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import NodePath, PathLike, as_path, create_node_path, resolve_node_path


class Command(abc.ABC):
    """A reversible document operation with the selection it was created in."""

    def __init__(self) -> None:
        self.selection_event: Optional[SelectionEvent] = None

    @property
    def description(self) -> str:
        return type(self).__name__

    @abc.abstractmethod
    def execute(self, document: Document) -> None:
        """Apply the operation to the document."""

    @abc.abstractmethod
    def undo(self, document: Document) -> None:
        """Reverse the operation, restoring previous state."""

    def set_selection(self, path: Optional[NodePath], property_name: Optional[str] = None) -> None:
        if path is None:
            self.selection_event = None
            return
        self.selection_event = SelectionEvent(path=path, property_name=property_name)

    def __repr__(self) -> str:
        return f"<{self.description}>"


class CompositeCommand(Command):
    """Several commands executed, undone and redone as one unit.

    Sub-commands run in order and are undone in reverse order, so a later
    command that depends on structure created by an earlier one is reversed
    first.
    """

    def __init__(self, commands: Sequence[Command], description: Optional[str] = None) -> None:
        super().__init__()
        self.commands: list[Command] = list(commands)
        self._description = description or "CompositeCommand"

    @property
    def description(self) -> str:
        return self._description

    def execute(self, document: Document) -> None:
        for command in self.commands:
            command.execute(document)

    def undo(self, document: Document) -> None:
        for command in reversed(self.commands):
            command.undo(document)

    def __len__(self) -> int:
        return len(self.commands)


def target_path(target: Node | PathLike) -> NodePath:
    """Normalize a command target (node, path or pointer string) to a NodePath."""
    if isinstance(target, Node):
        path = create_node_path(target)
        if path is None:
            raise ValueError(f"{target!r} is not attached to a document")
        return path
    return as_path(target)


def require_node(document: Document, path: NodePath) -> Node:
    node = resolve_node_path(path, document)
    if node is None:
        raise LookupError(f"Node not found: {path}")
    return node
