"""Commands for operation request bodies."""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import PathLike


class AddRequestBodyCommand(Command):
    """Give an operation an empty request body if it has none."""

    def __init__(self, operation: Node | PathLike, description: Optional[str] = None) -> None:
        super().__init__()
        self.operation_path = target_path(operation)
        self.body_description = description
        self._created = False

    def execute(self, document: Document) -> None:
        operation = require_node(document, self.operation_path)
        if operation.get_child("requestBody") is not None:
            self._created = False
            return
        body = operation.create_child("requestBody")
        if self.body_description:
            body.description = self.body_description
        operation.set_child("requestBody", body)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        operation = require_node(document, self.operation_path)
        operation.set_child("requestBody", None)


class DeleteRequestBodyCommand(Command):
    def __init__(self, operation: Node | PathLike) -> None:
        super().__init__()
        self.operation_path = target_path(operation)
        self._removed: Optional[Node] = None

    def execute(self, document: Document) -> None:
        operation = require_node(document, self.operation_path)
        self._removed = operation.get_child("requestBody")
        if self._removed is not None:
            operation.set_child("requestBody", None)

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        operation = require_node(document, self.operation_path)
        operation.set_child("requestBody", self._removed)
