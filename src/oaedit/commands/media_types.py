"""Commands for media types in a request body's or response's content map."""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import PathLike


class AddMediaTypeCommand(Command):
    """Add an empty media type entry such as application/json."""

    def __init__(self, parent: Node | PathLike, media_type: str) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.media_type = media_type
        self._created = False
        self._content_created = False

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        if self.media_type in (parent.get_map("content") or {}):
            self._created = False
            return
        self._content_created = parent.content is None
        parent.insert_map_item("content", self.media_type, parent.create_node("mediaType"))
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        parent = require_node(document, self.parent_path)
        parent.remove_map_item("content", self.media_type)
        if self._content_created:
            parent.drop_if_empty("content")


class DeleteMediaTypeCommand(Command):
    """Remove a media type; undo restores it at its original position."""

    def __init__(self, parent: Node | PathLike, media_type: str) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.media_type = media_type
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        parent = require_node(document, self.parent_path)
        content = parent.get_map("content")
        if not content or self.media_type not in content:
            return
        self._index = list(content).index(self.media_type)
        self._removed = parent.remove_map_item("content", self.media_type)
        parent.drop_if_empty("content")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        parent = require_node(document, self.parent_path)
        parent.insert_map_item("content", self.media_type, self._removed, self._index)


class ChangeMediaTypeSchemaCommand(Command):
    """Point a media type at a schema: a $ref, an inline type, or nothing.

    A reference wins over a type; with neither the schema is removed.
    """

    def __init__(
        self,
        media_type: Node | PathLike,
        schema_ref: Optional[str] = None,
        schema_type: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.path = target_path(media_type)
        self.schema_ref = schema_ref
        self.schema_type = schema_type
        self._old_schema: Optional[Node] = None

    def execute(self, document: Document) -> None:
        media_type = require_node(document, self.path)
        self._old_schema = media_type.get_child("schema")
        if not self.schema_ref and not self.schema_type:
            media_type.set_child("schema", None)
            return
        schema = media_type.create_child("schema")
        if self.schema_ref:
            schema.set_property("$ref", self.schema_ref)
        else:
            schema.type = self.schema_type
        media_type.set_child("schema", schema)

    def undo(self, document: Document) -> None:
        media_type = require_node(document, self.path)
        media_type.set_child("schema", self._old_schema)
