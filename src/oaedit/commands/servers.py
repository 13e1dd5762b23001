"""Commands for server entries (on the document, a path item or an operation)."""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import NodePath, PathLike


class AddServerCommand(Command):
    def __init__(self, url: str, description: Optional[str] = None, parent: Node | PathLike = NodePath()) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.url = url
        self.server_description = description
        self._created = False
        self._list_created = False

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        servers = parent.get_list("servers") or []
        if any(server.url == self.url for server in servers):
            self._created = False
            return
        server = parent.create_node("server")
        server.url = self.url
        server.description = self.server_description
        self._list_created = parent.servers is None
        parent.get_list("servers", create=True).append(server)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        parent = require_node(document, self.parent_path)
        servers = parent.get_list("servers") or []
        for server in servers:
            if server.url == self.url:
                servers.remove(server)
                break
        if self._list_created:
            parent.drop_if_empty("servers")


class DeleteServerCommand(Command):
    """Remove the server with the given URL; undo restores it at its index."""

    def __init__(self, url: str, parent: Node | PathLike = NodePath()) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.url = url
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        parent = require_node(document, self.parent_path)
        servers = parent.get_list("servers") or []
        for index, server in enumerate(servers):
            if server.url == self.url:
                self._index = index
                self._removed = servers.pop(index)
                parent.drop_if_empty("servers")
                return

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        parent = require_node(document, self.parent_path)
        parent.get_list("servers", create=True).insert(self._index, self._removed)


class DeleteAllServersCommand(Command):
    def __init__(self, parent: Node | PathLike = NodePath()) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self._old_servers: Optional[list[Node]] = None

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        self._old_servers = parent.get_list("servers")
        parent.servers = None

    def undo(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        parent.servers = self._old_servers
