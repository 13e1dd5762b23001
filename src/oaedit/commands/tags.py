"""Commands for document tags.

Renaming a tag also rewrites it in every operation's tag list, so links
between operations and their tag definition survive.
"""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command
from oaedit.model.nodes import Document, Node


class AddTagCommand(Command):
    def __init__(self, name: str, description: Optional[str] = None) -> None:
        super().__init__()
        self.name = name
        self.tag_description = description
        self._created = False
        self._list_created = False

    def execute(self, document: Document) -> None:
        if document.find_tag(self.name) is not None:
            self._created = False
            return
        tag = document.create_node("tag")
        tag.name = self.name
        if self.tag_description:
            tag.description = self.tag_description
        self._list_created = document.tags is None
        document.get_list("tags", create=True).append(tag)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        tag = document.find_tag(self.name)
        if tag is not None:
            document.tags.remove(tag)
        if self._list_created:
            document.drop_if_empty("tags")


class DeleteTagCommand(Command):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        tag = document.find_tag(self.name)
        if tag is None:
            return
        self._index = document.tags.index(tag)
        self._removed = tag
        document.tags.remove(tag)
        document.drop_if_empty("tags")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        document.get_list("tags", create=True).insert(self._index, self._removed)


class DeleteAllTagsCommand(Command):
    """Remove every tag definition. Operation tag lists are left alone."""

    def __init__(self) -> None:
        super().__init__()
        self._old_tags: Optional[list[Node]] = None

    def execute(self, document: Document) -> None:
        self._old_tags = document.tags
        document.tags = None

    def undo(self, document: Document) -> None:
        document.tags = self._old_tags


class RenameTagCommand(Command):
    def __init__(self, old_name: str, new_name: str) -> None:
        super().__init__()
        self.old_name = old_name
        self.new_name = new_name
        self._renamed = False
        # operation -> its tag list before the rename
        self._old_lists: list[tuple[Node, list[str]]] = []

    def execute(self, document: Document) -> None:
        self._renamed = False
        self._old_lists = []
        tag = document.find_tag(self.old_name)
        if tag is None:
            return
        existing = document.find_tag(self.new_name)
        if existing is not None and existing is not tag:
            return

        tag.name = self.new_name
        for _, _, operation in document.operations():
            if operation.tags and self.old_name in operation.tags:
                self._old_lists.append((operation, operation.tags))
                operation.tags = [self.new_name if t == self.old_name else t for t in operation.tags]
        self._renamed = True

    def undo(self, document: Document) -> None:
        if not self._renamed:
            return
        tag = document.find_tag(self.new_name)
        if tag is not None:
            tag.name = self.old_name
        for operation, tags in self._old_lists:
            operation.tags = tags
