"""Commands for vendor extensions (x-* properties)."""

from __future__ import annotations

from typing import Any

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node, is_extension
from oaedit.model.paths import PathLike

_MISSING = object()


def _check_name(name: str) -> str:
    if not is_extension(name):
        raise ValueError(f"Extension names must start with 'x-': {name}")
    return name


class _ExtensionCommand(Command):
    def __init__(self, parent: Node | PathLike, name: str) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.name = _check_name(name)
        self._old_value: Any = _MISSING

    def _restore(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        if self._old_value is _MISSING:
            parent.extensions.pop(self.name, None)
        else:
            parent.extensions[self.name] = self._old_value


class AddExtensionCommand(_ExtensionCommand):
    """Add (or overwrite) an extension; undo restores or removes it."""

    def __init__(self, parent: Node | PathLike, name: str, value: Any) -> None:
        super().__init__(parent, name)
        self.value = value

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        self._old_value = parent.extensions.get(self.name, _MISSING)
        parent.extensions[self.name] = self.value

    def undo(self, document: Document) -> None:
        self._restore(document)


class ChangeExtensionCommand(AddExtensionCommand):
    """Change the value of an extension. Same semantics as adding one."""


class DeleteExtensionCommand(_ExtensionCommand):
    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        self._old_value = parent.extensions.pop(self.name, _MISSING)

    def undo(self, document: Document) -> None:
        self._restore(document)


class DeleteAllExtensionsCommand(Command):
    def __init__(self, parent: Node | PathLike) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self._old_extensions: dict[str, Any] = {}

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        self._old_extensions = parent.extensions
        parent.extensions = {}

    def undo(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        parent.extensions = self._old_extensions
