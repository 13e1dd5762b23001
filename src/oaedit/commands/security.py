"""Commands for security schemes and security requirements.

Schemes live under components/securitySchemes. Requirements are plain
`{scheme name: [scopes]}` mappings held in the `security` list of the
document or of a single operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from oaedit.commands.base import Command, require_node, target_path
from oaedit.model.io import read_node
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import NodePath, PathLike

SCHEME_TYPES = ("apiKey", "http", "oauth2", "openIdConnect", "mutualTLS")
OAUTH_FLOWS = ("implicit", "password", "clientCredentials", "authorizationCode")


@dataclass(frozen=True)
class SecuritySchemeData:
    """The fields of a security scheme, as entered by the user."""
    name: str
    type: str
    description: Optional[str] = None
    parameter_name: Optional[str] = None
    location: Optional[str] = None
    scheme: Optional[str] = None
    bearer_format: Optional[str] = None
    flow: Optional[str] = None
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    open_id_connect_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in SCHEME_TYPES:
            raise ValueError(f"Unknown security scheme type: {self.type}")
        if self.flow is not None and self.flow not in OAUTH_FLOWS:
            raise ValueError(f"Unknown OAuth flow: {self.flow}")

    def to_wire(self) -> dict[str, Any]:
        """Wire-named properties; only those relevant to the scheme type."""
        out: dict[str, Any] = {"type": self.type}
        if self.description is not None:
            out["description"] = self.description
        if self.type == "apiKey":
            if self.parameter_name:
                out["name"] = self.parameter_name
            if self.location:
                out["in"] = self.location
        elif self.type == "http":
            if self.scheme:
                out["scheme"] = self.scheme
            if self.bearer_format is not None:
                out["bearerFormat"] = self.bearer_format
        elif self.type == "oauth2" and self.flow:
            flow: dict[str, Any] = {}
            if self.authorization_url and self.flow in ("implicit", "authorizationCode"):
                flow["authorizationUrl"] = self.authorization_url
            if self.token_url and self.flow != "implicit":
                flow["tokenUrl"] = self.token_url
            flow["scopes"] = {}
            out["flows"] = {self.flow: flow}
        elif self.type == "openIdConnect" and self.open_id_connect_url:
            out["openIdConnectUrl"] = self.open_id_connect_url
        return out


def _scheme(document: Document, name: str) -> Optional[Node]:
    if document.components is None:
        return None
    return (document.components.get_map("securitySchemes") or {}).get(name)


# =============================================================================
# Security schemes
# =============================================================================

class AddSecuritySchemeCommand(Command):
    def __init__(self, data: SecuritySchemeData) -> None:
        super().__init__()
        self.data = data
        self._created = False
        self._components_created = False
        self._map_created = False

    def execute(self, document: Document) -> None:
        self._created = False
        self._components_created = False
        if _scheme(document, self.data.name) is not None:
            return

        components = document.components
        if components is None:
            components = document.create_child("components")
            document.set_child("components", components)
            self._components_created = True

        scheme = components.create_node("securityScheme")
        read_node(self.data.to_wire(), scheme)
        self._map_created = components.security_schemes is None
        components.insert_map_item("securitySchemes", self.data.name, scheme)
        self._created = True

    def undo(self, document: Document) -> None:
        if not self._created or document.components is None:
            return
        document.components.remove_map_item("securitySchemes", self.data.name)
        if self._map_created:
            document.components.drop_if_empty("securitySchemes")
        if self._components_created:
            document.set_child("components", None)


class UpdateSecuritySchemeCommand(Command):
    """Overwrite the fields given in `data`; the scheme's type is left alone."""

    def __init__(self, data: SecuritySchemeData) -> None:
        super().__init__()
        self.data = data
        self._old_values: dict[str, Any] = {}

    def execute(self, document: Document) -> None:
        self._old_values = {}
        scheme = _scheme(document, self.data.name)
        if scheme is None:
            return
        for key, value in self.data.to_wire().items():
            if key == "type":
                continue
            self._old_values[key] = scheme.get_property(key)
            scheme.set_property(key, value)

    def undo(self, document: Document) -> None:
        scheme = _scheme(document, self.data.name)
        if scheme is None:
            return
        for key, value in self._old_values.items():
            scheme.set_property(key, value)


class DeleteSecuritySchemeCommand(Command):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self._removed: Optional[Node] = None
        self._index = -1

    def execute(self, document: Document) -> None:
        self._removed = None
        scheme = _scheme(document, self.name)
        if scheme is None:
            return
        components = document.components
        self._index = list(components.security_schemes).index(self.name)
        self._removed = components.remove_map_item("securitySchemes", self.name)
        components.drop_if_empty("securitySchemes")

    def undo(self, document: Document) -> None:
        if self._removed is None:
            return
        components = document.components
        if components is None:
            components = document.create_child("components")
            document.set_child("components", components)
        components.insert_map_item("securitySchemes", self.name, self._removed, self._index)


class DeleteAllSecuritySchemesCommand(Command):
    def __init__(self) -> None:
        super().__init__()
        self._old_schemes: Optional[dict[str, Node]] = None

    def execute(self, document: Document) -> None:
        self._old_schemes = None
        if document.components is None:
            return
        self._old_schemes = document.components.security_schemes
        document.components.security_schemes = None

    def undo(self, document: Document) -> None:
        if self._old_schemes is None or document.components is None:
            return
        document.components.security_schemes = self._old_schemes


# =============================================================================
# Security requirements (document or operation)
# =============================================================================

class _RequirementsCommand(Command):
    """Base for commands that rewrite a `security` list as a whole.

    Each execution swaps in a new list and keeps the previous one, so undo
    puts back exactly what was there (including no list at all).
    """

    def __init__(self, parent: Node | PathLike = NodePath()) -> None:
        super().__init__()
        self.parent_path = target_path(parent)
        self._old: Optional[list[dict[str, list[str]]]] = None
        self._changed = False

    def _swap(self, document: Document, requirements: list[dict[str, list[str]]]) -> None:
        parent = require_node(document, self.parent_path)
        self._old = parent.get_property("security")
        parent.set_property("security", requirements)
        self._changed = True

    def _current(self, document: Document) -> list[dict[str, list[str]]]:
        parent = require_node(document, self.parent_path)
        return list(parent.get_property("security") or [])

    def undo(self, document: Document) -> None:
        if not self._changed:
            return
        parent = require_node(document, self.parent_path)
        parent.set_property("security", self._old)


class AddSecurityRequirementCommand(_RequirementsCommand):
    """Add a requirement, at `index` when given, otherwise at the end."""

    def __init__(
        self,
        schemes: dict[str, list[str]],
        index: Optional[int] = None,
        parent: Node | PathLike = NodePath(),
    ) -> None:
        super().__init__(parent)
        self.schemes = {name: list(scopes or []) for name, scopes in schemes.items()}
        self.index = index

    def execute(self, document: Document) -> None:
        requirements = self._current(document)
        requirement = {name: list(scopes) for name, scopes in self.schemes.items()}
        if self.index is not None and 0 <= self.index < len(requirements):
            requirements.insert(self.index, requirement)
        else:
            requirements.append(requirement)
        self._swap(document, requirements)


class DeleteSecurityRequirementCommand(_RequirementsCommand):
    """Remove the requirement at `index`; an index out of range is a no-op."""

    def __init__(self, index: int, parent: Node | PathLike = NodePath()) -> None:
        super().__init__(parent)
        self.index = index

    def execute(self, document: Document) -> None:
        self._changed = False
        requirements = self._current(document)
        if not 0 <= self.index < len(requirements):
            return
        del requirements[self.index]
        self._swap(document, requirements)


class DeleteAllSecurityRequirementsCommand(_RequirementsCommand):
    """Clear the requirement list.

    The list is left in place but empty; on an operation an empty list
    means "no security" rather than "inherit the document's".
    """

    def execute(self, document: Document) -> None:
        self._changed = False
        if not self._current(document):
            return
        self._swap(document, [])
