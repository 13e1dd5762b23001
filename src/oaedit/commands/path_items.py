"""Commands for path items and their operations."""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command
from oaedit.model.nodes import HTTP_METHODS, Document, Node


def _normalize(path_name: str) -> str:
    return path_name if path_name.startswith("/") else f"/{path_name}"


def _path_item(document: Document, path_name: str) -> Optional[Node]:
    if document.paths is None:
        return None
    return document.paths.entries.get(path_name)


class CreatePathCommand(Command):
    """Create a path item such as /pets or /users/{id}."""

    def __init__(self, path_name: str) -> None:
        super().__init__()
        self.path_name = _normalize(path_name)
        self._created = False
        self._paths_created = False

    def execute(self, document: Document) -> None:
        self._paths_created = False
        paths = document.paths
        if paths is None:
            paths = document.create_child("paths")
            document.set_child("paths", paths)
            self._paths_created = True

        if self.path_name in paths.entries:
            self._created = False
            return

        paths.insert_item(self.path_name, paths.create_item())
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created or document.paths is None:
            return
        document.paths.remove_item(self.path_name)
        if self._paths_created and not document.paths.entries:
            document.set_child("paths", None)


class DeletePathCommand(Command):
    """Remove a path item; undo puts it back at its original position."""

    def __init__(self, path_name: str) -> None:
        super().__init__()
        self.path_name = _normalize(path_name)
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        paths = document.paths
        if paths is None or self.path_name not in paths.entries:
            return
        self._index = list(paths.entries).index(self.path_name)
        self._removed = paths.remove_item(self.path_name)

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        paths = document.paths
        if paths is None:
            paths = document.create_child("paths")
            document.set_child("paths", paths)
        paths.insert_item(self.path_name, self._removed, self._index)


class CreateOperationCommand(Command):
    """Add an operation (get, post, ...) to an existing path item."""

    def __init__(self, path_name: str, method: str) -> None:
        super().__init__()
        method = method.lower()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unknown HTTP method: {method}")
        self.path_name = _normalize(path_name)
        self.method = method
        self._created = False

    def execute(self, document: Document) -> None:
        path_item = _path_item(document, self.path_name)
        if path_item is None:
            raise LookupError(f"Path item not found: {self.path_name}")
        if path_item.get_child(self.method) is not None:
            self._created = False
            return
        path_item.set_child(self.method, path_item.create_child(self.method))
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        path_item = _path_item(document, self.path_name)
        if path_item is not None:
            path_item.set_child(self.method, None)


class DeleteOperationCommand(Command):
    """Remove an operation from a path item."""

    def __init__(self, path_name: str, method: str) -> None:
        super().__init__()
        method = method.lower()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unknown HTTP method: {method}")
        self.path_name = _normalize(path_name)
        self.method = method
        self._removed: Optional[Node] = None

    def execute(self, document: Document) -> None:
        self._removed = None
        path_item = _path_item(document, self.path_name)
        if path_item is None:
            return
        self._removed = path_item.get_child(self.method)
        if self._removed is not None:
            path_item.set_child(self.method, None)

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        path_item = _path_item(document, self.path_name)
        if path_item is not None:
            path_item.set_child(self.method, self._removed)
