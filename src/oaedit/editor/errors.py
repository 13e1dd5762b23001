"""Editor error taxonomy.

Empty undo/redo stacks are not errors: undo() and redo() return False.
"""

from __future__ import annotations

from typing import Any


class EditorError(RuntimeError):
    pass


class NoDocumentError(EditorError):
    """An operation needs a loaded document and none is loaded."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no document loaded")


class DocumentLoadError(EditorError):
    """Content could not be read into a document."""


class CommandExecutionError(EditorError):
    """A command raised while executing, undoing or redoing.

    The original exception is chained as __cause__.
    """

    def __init__(self, command: Any, phase: str, description: str):
        self.command = command
        self.phase = phase
        self.description = description
        super().__init__(f"Failed to {phase} command: {description}")


class UnresolvableSelectionError(EditorError, LookupError):
    """A selection target does not resolve to a node or path."""

    def __init__(self, target: Any, reason: str = "not found in document"):
        self.target = target
        super().__init__(f"Cannot select {target}: {reason}")


class ReentrantCommandError(EditorError):
    """The engine was called again while an operation was in progress."""
