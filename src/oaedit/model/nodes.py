"""
Typed node tree for OpenAPI 3.x documents.

Every node class declares its structure by wire name (the key used in the
serialized document):

- PROPERTIES: scalar values (strings, numbers, lists of strings, ...)
- CHILDREN:   a single child node per name (info, requestBody, schema, ...)
- MAPS:       named child maps (components/schemas, content, properties, ...)
- LISTS:      ordered child lists (servers, tags, parameters, ...)
- ITEMS:      keyed children addressed directly (paths, responses)

Parents are held through weakref: the tree owns its children, a child only
points back for navigation.
"""

from __future__ import annotations

import re
import weakref
from typing import Any, ClassVar, Iterator, Literal, Optional


NodeKind = Literal[
    "node",
    "document",
    "info",
    "contact",
    "license",
    "server",
    "tag",
    "paths",
    "pathItem",
    "operation",
    "parameter",
    "requestBody",
    "mediaType",
    "responses",
    "response",
    "header",
    "components",
    "schema",
    "securityScheme",
]

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def attr_name(wire_name: str) -> str:
    """Map a wire name to its Python attribute (operationId -> operation_id)."""
    return _CAMEL.sub("_", wire_name.lstrip("$")).lower()


def is_extension(name: str) -> bool:
    return name.startswith("x-")


class Node:
    """Base class for all document nodes."""

    kind: ClassVar[NodeKind] = "node"

    PROPERTIES: ClassVar[tuple[str, ...]] = ()
    CHILDREN: ClassVar[dict[str, str]] = {}
    MAPS: ClassVar[dict[str, str]] = {}
    LISTS: ClassVar[dict[str, str]] = {}
    ITEMS: ClassVar[Optional[str]] = None

    def __init__(self, parent: Optional[Node] = None) -> None:
        self._parent: Optional[weakref.ref[Node]] = None
        self.parent = parent
        for name in self.PROPERTIES:
            setattr(self, attr_name(name), None)
        for name in (*self.CHILDREN, *self.MAPS, *self.LISTS):
            setattr(self, attr_name(name), None)
        self.entries: dict[str, Node] = {}
        self.extensions: dict[str, Any] = {}
        # keys this model does not know, kept so writing back loses nothing
        self.unknown: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} at {id(self):#x}>"

    # -------------------------------------------------------------------------
    # Parent link
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> Optional[Node]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def ancestors(self) -> Iterator[Node]:
        """Yield this node, then each parent up to the root."""
        node: Optional[Node] = self
        while node is not None:
            yield node
            node = node.parent

    @property
    def root(self) -> Node:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def get_property(self, name: str) -> Any:
        if is_extension(name):
            return self.extensions.get(name)
        if name not in self.PROPERTIES:
            raise AttributeError(f"{self.kind} has no property '{name}'")
        return getattr(self, attr_name(name))

    def set_property(self, name: str, value: Any) -> None:
        if is_extension(name):
            if value is None:
                self.extensions.pop(name, None)
            else:
                self.extensions[name] = value
            return
        if name not in self.PROPERTIES:
            raise AttributeError(f"{self.kind} has no property '{name}'")
        setattr(self, attr_name(name), value)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def create_node(self, kind_name: str) -> Node:
        """Create a detached node whose parent is this node."""
        return node_class(kind_name)(parent=self)

    def create_child(self, name: str) -> Node:
        """Create (but do not attach) the single child stored under `name`."""
        if name not in self.CHILDREN:
            raise AttributeError(f"{self.kind} has no child '{name}'")
        return self.create_node(self.CHILDREN[name])

    def get_child(self, name: str) -> Optional[Node]:
        if name not in self.CHILDREN:
            raise AttributeError(f"{self.kind} has no child '{name}'")
        return getattr(self, attr_name(name))

    def set_child(self, name: str, node: Optional[Node]) -> None:
        if name not in self.CHILDREN:
            raise AttributeError(f"{self.kind} has no child '{name}'")
        if node is not None:
            node.parent = self
        setattr(self, attr_name(name), node)

    def get_map(self, name: str, create: bool = False) -> Optional[dict[str, Node]]:
        if name not in self.MAPS:
            raise AttributeError(f"{self.kind} has no map '{name}'")
        value = getattr(self, attr_name(name))
        if value is None and create:
            value = {}
            setattr(self, attr_name(name), value)
        return value

    def get_list(self, name: str, create: bool = False) -> Optional[list[Node]]:
        if name not in self.LISTS:
            raise AttributeError(f"{self.kind} has no list '{name}'")
        value = getattr(self, attr_name(name))
        if value is None and create:
            value = []
            setattr(self, attr_name(name), value)
        return value

    def create_item(self) -> Node:
        if self.ITEMS is None:
            raise AttributeError(f"{self.kind} has no keyed items")
        return self.create_node(self.ITEMS)

    def insert_item(self, key: str, node: Node, index: int = -1) -> None:
        """Add a keyed item, at `index` when given (keeps document order on undo)."""
        node.parent = self
        self.entries = _insert_ordered(self.entries, key, node, index)

    def remove_item(self, key: str) -> Optional[Node]:
        return self.entries.pop(key, None)

    def insert_map_item(self, map_name: str, key: str, node: Node, index: int = -1) -> None:
        node.parent = self
        current = self.get_map(map_name, create=True)
        setattr(self, attr_name(map_name), _insert_ordered(current, key, node, index))

    def remove_map_item(self, map_name: str, key: str) -> Optional[Node]:
        current = self.get_map(map_name)
        if not current:
            return None
        return current.pop(key, None)

    def drop_if_empty(self, name: str) -> None:
        """Unset an empty map or list so it is not written back as {} or []."""
        if name not in self.MAPS and name not in self.LISTS:
            raise AttributeError(f"{self.kind} has no map or list '{name}'")
        value = getattr(self, attr_name(name))
        if value is not None and not value:
            setattr(self, attr_name(name), None)

    def child(self, segment: str) -> Optional[Node]:
        """Resolve one structural step below this node.

        Keyed items (paths, responses) and single children are addressed by one
        segment; maps and lists need two (see resolve_pair).
        """
        if self.ITEMS is not None and segment in self.entries:
            return self.entries[segment]
        if segment in self.CHILDREN:
            return getattr(self, attr_name(segment))
        return None

    def resolve_pair(self, container: str, key: str) -> Optional[Node]:
        """Resolve a map entry or list element: (schemas, Pet) or (servers, 0)."""
        if container in self.MAPS:
            entries = getattr(self, attr_name(container)) or {}
            return entries.get(key)
        if container in self.LISTS:
            entries = getattr(self, attr_name(container)) or []
            if not key.isdigit():
                return None
            index = int(key)
            if index < len(entries):
                return entries[index]
        return None

    def is_container(self, segment: str) -> bool:
        return segment in self.MAPS or segment in self.LISTS

    def locate(self, node: Node) -> Optional[tuple[str, ...]]:
        """Return the segments addressing `node` as a direct child of this node."""
        for key, item in self.entries.items():
            if item is node:
                return (key,)
        for name in self.CHILDREN:
            if getattr(self, attr_name(name)) is node:
                return (name,)
        for name in self.MAPS:
            for key, item in (getattr(self, attr_name(name)) or {}).items():
                if item is node:
                    return (name, key)
        for name in self.LISTS:
            for index, item in enumerate(getattr(self, attr_name(name)) or []):
                if item is node:
                    return (name, str(index))
        return None

    def clear(self) -> None:
        """Drop every property, child and extension of this node."""
        for name in self.PROPERTIES:
            setattr(self, attr_name(name), None)
        for name in (*self.CHILDREN, *self.MAPS, *self.LISTS):
            setattr(self, attr_name(name), None)
        self.entries = {}
        self.extensions = {}
        self.unknown = {}


def _insert_ordered(entries: dict[str, Node], key: str, node: Node, index: int) -> dict[str, Node]:
    pairs = [(k, v) for k, v in entries.items() if k != key]
    if index < 0 or index > len(pairs):
        index = len(pairs)
    pairs.insert(index, (key, node))
    entries.clear()
    entries.update(pairs)
    return entries


# =============================================================================
# Node classes
# =============================================================================

class Contact(Node):
    kind = "contact"
    PROPERTIES = ("name", "url", "email")


class License(Node):
    kind = "license"
    PROPERTIES = ("name", "url")


class Info(Node):
    kind = "info"
    PROPERTIES = ("title", "version", "description", "termsOfService")
    CHILDREN = {"contact": "contact", "license": "license"}


class Server(Node):
    kind = "server"
    PROPERTIES = ("url", "description")


class Tag(Node):
    kind = "tag"
    PROPERTIES = ("name", "description")


class Schema(Node):
    kind = "schema"
    PROPERTIES = (
        "$ref",
        "title",
        "type",
        "format",
        "description",
        "required",
        "enum",
        "default",
        "nullable",
        "readOnly",
        "writeOnly",
        "deprecated",
        "example",
        "minimum",
        "maximum",
        "minLength",
        "maxLength",
        "pattern",
        "additionalProperties",
    )
    CHILDREN = {"items": "schema", "not": "schema"}
    MAPS = {"properties": "schema"}
    LISTS = {"allOf": "schema", "oneOf": "schema", "anyOf": "schema"}


class Header(Node):
    kind = "header"
    PROPERTIES = ("$ref", "description", "required", "deprecated")
    CHILDREN = {"schema": "schema"}


class MediaType(Node):
    kind = "mediaType"
    PROPERTIES = ("example",)
    CHILDREN = {"schema": "schema"}


class Parameter(Node):
    kind = "parameter"
    PROPERTIES = ("$ref", "name", "in", "description", "required", "deprecated", "example")
    CHILDREN = {"schema": "schema"}


class RequestBody(Node):
    kind = "requestBody"
    PROPERTIES = ("$ref", "description", "required")
    MAPS = {"content": "mediaType"}


class Response(Node):
    kind = "response"
    PROPERTIES = ("$ref", "description")
    MAPS = {"headers": "header", "content": "mediaType"}


class Responses(Node):
    kind = "responses"
    ITEMS = "response"


class Operation(Node):
    kind = "operation"
    PROPERTIES = ("operationId", "summary", "description", "tags", "deprecated", "security")
    CHILDREN = {"requestBody": "requestBody", "responses": "responses"}
    LISTS = {"parameters": "parameter", "servers": "server"}


class PathItem(Node):
    kind = "pathItem"
    PROPERTIES = ("$ref", "summary", "description")
    CHILDREN = {method: "operation" for method in HTTP_METHODS}
    LISTS = {"parameters": "parameter", "servers": "server"}

    def operations(self) -> Iterator[tuple[str, Node]]:
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class Paths(Node):
    kind = "paths"
    ITEMS = "pathItem"


class SecurityScheme(Node):
    kind = "securityScheme"
    PROPERTIES = ("$ref", "type", "description", "name", "in", "scheme", "bearerFormat", "openIdConnectUrl", "flows")


class Components(Node):
    kind = "components"
    MAPS = {
        "schemas": "schema",
        "responses": "response",
        "parameters": "parameter",
        "requestBodies": "requestBody",
        "headers": "header",
        "securitySchemes": "securityScheme",
    }


class Document(Node):
    kind = "document"
    PROPERTIES = ("openapi", "security")
    CHILDREN = {"info": "info", "paths": "paths", "components": "components"}
    LISTS = {"servers": "server", "tags": "tag"}

    def find_tag(self, name: str) -> Optional[Tag]:
        for tag in self.tags or []:
            if tag.name == name:
                return tag
        return None

    def operations(self) -> Iterator[tuple[str, str, Node]]:
        """Yield (path name, method, operation) for every operation."""
        if self.paths is None:
            return
        for path_name, path_item in self.paths.entries.items():
            for method, operation in path_item.operations():
                yield path_name, method, operation


_NODE_CLASSES: dict[str, type[Node]] = {
    cls.kind: cls
    for cls in (
        Contact,
        License,
        Info,
        Server,
        Tag,
        Schema,
        Header,
        MediaType,
        Parameter,
        RequestBody,
        Response,
        Responses,
        Operation,
        PathItem,
        Paths,
        SecurityScheme,
        Components,
        Document,
    )
}


def node_class(kind: str) -> type[Node]:
    try:
        return _NODE_CLASSES[kind]
    except KeyError:
        raise ValueError(f"Unknown node kind: {kind}") from None
