"""Commands for path item and operation parameters.

A parameter is identified by its name together with its location (query,
path, header, cookie); the same name may appear once per location.
"""

from __future__ import annotations

from typing import Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import PathLike

PARAMETER_LOCATIONS = ("query", "header", "path", "cookie")


def _find(parameters: list[Node], name: str, location: str) -> Optional[Node]:
    for parameter in parameters:
        if parameter.get_property("name") == name and parameter.get_property("in") == location:
            return parameter
    return None


def _check_location(location: str) -> str:
    if location not in PARAMETER_LOCATIONS:
        raise ValueError(f"Unknown parameter location: {location}")
    return location


class AddParameterCommand(Command):
    """Add a parameter with a simple typed schema to a path item or operation."""

    def __init__(
        self,
        parent: Node | PathLike,
        name: str,
        location: str,
        description: Optional[str] = None,
        required: bool = False,
        schema_type: str = "string",
    ) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.name = name
        self.location = _check_location(location)
        self.parameter_description = description
        # path parameters are always required
        self.required = required or location == "path"
        self.schema_type = schema_type
        self._created = False
        self._list_created = False

    def execute(self, document: Document) -> None:
        parent = require_node(document, self.parent_path)
        if _find(parent.get_list("parameters") or [], self.name, self.location) is not None:
            self._created = False
            return

        parameter = parent.create_node("parameter")
        parameter.set_property("name", self.name)
        parameter.set_property("in", self.location)
        if self.parameter_description:
            parameter.set_property("description", self.parameter_description)
        parameter.set_property("required", self.required)
        schema = parameter.create_child("schema")
        schema.type = self.schema_type
        parameter.set_child("schema", schema)

        self._list_created = parent.parameters is None
        parent.get_list("parameters", create=True).append(parameter)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created:
            return
        parent = require_node(document, self.parent_path)
        parameters = parent.get_list("parameters") or []
        parameter = _find(parameters, self.name, self.location)
        if parameter is not None:
            parameters.remove(parameter)
        if self._list_created:
            parent.drop_if_empty("parameters")


class DeleteParameterCommand(Command):
    """Remove a parameter; undo restores it at its original index."""

    def __init__(self, parent: Node | PathLike, name: str, location: str) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self.name = name
        self.location = _check_location(location)
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        parent = require_node(document, self.parent_path)
        parameters = parent.get_list("parameters") or []
        parameter = _find(parameters, self.name, self.location)
        if parameter is None:
            return
        self._index = parameters.index(parameter)
        self._removed = parameters.pop(self._index)
        parent.drop_if_empty("parameters")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        parent = require_node(document, self.parent_path)
        parent.get_list("parameters", create=True).insert(self._index, self._removed)
