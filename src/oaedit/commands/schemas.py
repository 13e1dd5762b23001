"""Commands for component schemas."""

from __future__ import annotations

from typing import Any, Optional

from oaedit.commands.base import Command
from oaedit.model.io import read_node
from oaedit.model.nodes import Document, Node


class CreateSchemaCommand(Command):
    """Add a named schema under components/schemas (an empty object schema by default)."""

    def __init__(self, name: str, content: Optional[dict[str, Any]] = None) -> None:
        super().__init__()
        self.name = name
        self.content = content if content is not None else {"type": "object"}
        self._created = False
        self._components_created = False
        self._schemas_created = False

    def execute(self, document: Document) -> None:
        self._components_created = False
        components = document.components
        if components is None:
            components = document.create_child("components")
            document.set_child("components", components)
            self._components_created = True

        if self.name in (components.get_map("schemas") or {}):
            self._created = False
            return

        schema = components.create_node("schema")
        read_node(self.content, schema)
        self._schemas_created = components.schemas is None
        components.insert_map_item("schemas", self.name, schema)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created or document.components is None:
            return
        document.components.remove_map_item("schemas", self.name)
        if self._schemas_created:
            document.components.drop_if_empty("schemas")
        if self._components_created:
            document.set_child("components", None)


class DeleteSchemaCommand(Command):
    """Remove a named schema; undo restores it at its original position."""

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        components = document.components
        schemas = components.get_map("schemas") if components is not None else None
        if not schemas or self.name not in schemas:
            return
        self._index = list(schemas).index(self.name)
        self._removed = components.remove_map_item("schemas", self.name)
        components.drop_if_empty("schemas")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        components = document.components
        if components is None:
            components = document.create_child("components")
            document.set_child("components", components)
        components.insert_map_item("schemas", self.name, self._removed, self._index)
