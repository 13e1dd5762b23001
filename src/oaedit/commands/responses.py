"""Commands for operation responses and their headers."""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import PathLike


class AddResponseCommand(Command):
    """Add a response (by status code) to an operation."""

    def __init__(self, operation: Node | PathLike, status_code: str, description: str) -> None:
        super().__init__()
        self.operation_path = target_path(operation)
        self.status_code = str(status_code)
        self.response_description = description
        self._created = False
        self._responses_created = False

    def execute(self, document: Document) -> None:
        operation = require_node(document, self.operation_path)
        self._responses_created = False
        responses = operation.get_child("responses")
        if responses is None:
            responses = operation.create_child("responses")
            operation.set_child("responses", responses)
            self._responses_created = True

        if self.status_code in responses.entries:
            self._created = False
            return

        response = responses.create_item()
        response.set_property("description", self.response_description)
        responses.insert_item(self.status_code, response)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        operation = require_node(document, self.operation_path)
        responses = operation.get_child("responses")
        if responses is None:
            return
        responses.remove_item(self.status_code)
        if self._responses_created and not responses.entries:
            operation.set_child("responses", None)


class DeleteResponseCommand(Command):
    """Remove a response from an operation."""

    def __init__(self, operation: Node | PathLike, status_code: str) -> None:
        super().__init__()
        self.operation_path = target_path(operation)
        self.status_code = str(status_code)
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        operation = require_node(document, self.operation_path)
        responses = operation.get_child("responses")
        if responses is None or self.status_code not in responses.entries:
            return
        self._index = list(responses.entries).index(self.status_code)
        self._removed = responses.remove_item(self.status_code)

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        operation = require_node(document, self.operation_path)
        responses = operation.get_child("responses")
        if responses is None:
            responses = operation.create_child("responses")
            operation.set_child("responses", responses)
        responses.insert_item(self.status_code, self._removed, self._index)


class AddResponseHeaderCommand(Command):
    """Add a named header to a response, optionally with a typed or $ref schema."""

    def __init__(
        self,
        response: Node | PathLike,
        name: str,
        description: str = "",
        schema_type: Optional[str] = None,
        schema_ref: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.response_path = target_path(response)
        self.name = name
        self.header_description = description
        self.schema_type = schema_type
        self.schema_ref = schema_ref
        self._created = False
        self._headers_created = False

    def execute(self, document: Document) -> None:
        response = require_node(document, self.response_path)
        if self.name in (response.get_map("headers") or {}):
            self._created = False
            return

        header = response.create_node("header")
        header.description = self.header_description
        if self.schema_ref or self.schema_type:
            schema = header.create_child("schema")
            if self.schema_ref:
                schema.set_property("$ref", self.schema_ref)
            else:
                schema.type = self.schema_type
            header.set_child("schema", schema)

        self._headers_created = response.headers is None
        response.insert_map_item("headers", self.name, header)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        response = require_node(document, self.response_path)
        response.remove_map_item("headers", self.name)
        if self._headers_created:
            response.drop_if_empty("headers")


class DeleteResponseHeaderCommand(Command):
    def __init__(self, response: Node | PathLike, name: str) -> None:
        super().__init__()
        self.response_path = target_path(response)
        self.name = name
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        response = require_node(document, self.response_path)
        headers = response.get_map("headers")
        if not headers or self.name not in headers:
            return
        self._index = list(headers).index(self.name)
        self._removed = response.remove_map_item("headers", self.name)
        response.drop_if_empty("headers")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        response = require_node(document, self.response_path)
        response.insert_map_item("headers", self.name, self._removed, self._index)
