"""Navigation resolution: owning navigation object, nearest existing node/operation."""

import oaedit.editor.navigation as navigation
from oaedit.editor.navigation import (
    ROOT_NAVIGATION_TYPE,
    NavigationObjectResolver,
    navigable_kinds,
    register_navigable_kind,
    resolve_navigation_object,
    resolve_nearest_existing,
    resolve_nearest_operation,
)
from oaedit.model.paths import resolve_node_path
from oaedit.model.visitors import visit_upward

RESPONSE_SCHEMA = "/paths/~1pets~1{petId}/get/responses/200/content/application~1json/schema"


class TestNavigationObject:
    def test_root_is_its_own_navigation_object(self, document):
        target = resolve_navigation_object(document, document)
        assert target.object is document
        assert target.type == ROOT_NAVIGATION_TYPE == "info"

    def test_nearest_navigable_ancestor_wins(self, document):
        """A schema inside a response resolves to the schema, not the response."""
        schema = resolve_node_path(RESPONSE_SCHEMA, document)
        target = resolve_navigation_object(schema, document)
        assert target.object is schema
        assert target.type == "schema"

        inner = resolve_node_path(RESPONSE_SCHEMA + "/properties/name", document)
        assert resolve_navigation_object(inner, document).object is inner

    def test_media_type_resolves_to_response(self, document):
        media = resolve_node_path("/paths/~1pets~1{petId}/get/responses/200/content/application~1json", document)
        target = resolve_navigation_object(media, document)
        assert target.object is resolve_node_path("/paths/~1pets~1{petId}/get/responses/200", document)
        assert target.type == "response"

    def test_operation_resolves_to_path_item(self, document):
        operation = resolve_node_path("/paths/~1pets/get", document)
        target = resolve_navigation_object(operation, document)
        assert target.object is document.paths.entries["/pets"]
        assert target.type == "pathItem"

    def test_falls_back_to_root(self, document):
        for pointer in ("/info", "/servers/0", "/components"):
            target = resolve_navigation_object(resolve_node_path(pointer, document), document)
            assert target.object is document
            assert target.type == "info"

    def test_traversal_stops_at_first_match(self, document):
        visited = []
        resolver = NavigationObjectResolver()
        original = resolver.visit

        def visit(node):
            visited.append(node.kind)
            original(node)

        resolver.visit = visit
        visit_upward(resolve_node_path(RESPONSE_SCHEMA + "/properties/name", document), resolver, document)
        assert visited == ["schema"]

    def test_registered_kind_becomes_navigable(self, document, monkeypatch):
        monkeypatch.setattr(navigation, "_NAVIGABLE_KINDS", navigable_kinds())
        register_navigable_kind("operation")
        assert navigable_kinds()["operation"] == "operation"

        operation = resolve_node_path("/paths/~1pets/get", document)
        assert resolve_navigation_object(operation, document).type == "operation"


class TestNearestExisting:
    def test_existing_path_resolves_exactly(self, document):
        pointer = "/components/schemas/Pet/properties/id"
        assert resolve_nearest_existing(pointer, document) is resolve_node_path(pointer, document)

    def test_missing_tail_returns_deepest_existing(self, document):
        node = resolve_nearest_existing("/paths/~1pets/delete/responses/204", document)
        assert node is document.paths.entries["/pets"]

    def test_missing_map_entry(self, document):
        node = resolve_nearest_existing("/components/schemas/Order/properties/id", document)
        assert node is document.components

    def test_root(self, document):
        assert resolve_nearest_existing("/", document) is document
        assert resolve_nearest_existing("/webhooks/newPet", document) is document


class TestNearestOperation:
    def test_path_through_operation(self, document):
        node = resolve_nearest_operation("/paths/~1pets~1{petId}/get/responses/404/headers/X-Rate", document)
        assert node is document.paths.entries["/pets/{petId}"].get

    def test_path_without_operation(self, document):
        assert resolve_nearest_operation("/components/schemas/Pet", document) is None
        assert resolve_nearest_operation("/paths/~1pets", document) is None

    def test_missing_operation(self, document):
        assert resolve_nearest_operation("/paths/~1pets/delete/responses", document) is None
