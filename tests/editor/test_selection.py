"""Selection controller: resolving targets, highlight flag, focus restoration."""

import pytest

from oaedit.commands.path_items import DeletePathCommand
from oaedit.commands.properties import ChangePropertyCommand
from oaedit.editor.errors import NoDocumentError, UnresolvableSelectionError
from oaedit.editor.session import EditorSession
from oaedit.editor.state import SelectionState
from oaedit.model.paths import NodePath


class TestSelect:
    """select() accepts a node, a NodePath or a pointer string."""

    def test_select_by_pointer(self, session):
        session.select("/components/schemas/Pet/properties/name", "type")
        state = session.selection

        assert state.selected_path == NodePath.of("components", "schemas", "Pet", "properties", "name")
        assert state.selected_node is session.document.components.schemas["Pet"].properties["name"]
        assert state.selected_property_name == "type"
        assert state.navigation_object_type == "schema"
        assert state.highlight_selection is False

    def test_select_by_node(self, session):
        param = session.document.paths.entries["/pets/{petId}"].get.parameters[0]
        session.select(param)
        assert str(session.selection.selected_path) == "/paths/~1pets~1{petId}/get/parameters/0"
        assert session.selection.navigation_object is session.document.paths.entries["/pets/{petId}"]
        assert session.selection.navigation_object_type == "pathItem"

    def test_unresolvable_pointer(self, session):
        before = session.selection
        with pytest.raises(UnresolvableSelectionError) as excinfo:
            session.select("/paths/~1orders")
        assert excinfo.value.target == NodePath.of("paths", "/orders")
        assert session.selection == before

    def test_malformed_pointer(self, session):
        """A pointer without a leading slash is rejected like any other bad target."""
        before = session.selection
        with pytest.raises(UnresolvableSelectionError, match="invalid pointer") as excinfo:
            session.select("info")
        assert excinfo.value.target == "info"
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert session.selection == before

    def test_unresolvable_is_a_lookup_error(self, session):
        with pytest.raises(LookupError):
            session.select("/components/schemas/Nope")

    def test_detached_node_rejected(self, session):
        pets = session.document.paths.entries["/pets"]
        session.execute_command(DeletePathCommand("/pets"))
        with pytest.raises(UnresolvableSelectionError):
            session.select(pets)

    def test_select_without_document(self):
        with pytest.raises(NoDocumentError):
            EditorSession().select("/info")

    def test_select_root(self, session):
        session.select_root()
        state = session.selection
        assert state.selected_path == NodePath()
        assert state.selected_node is session.document
        assert state.navigation_object is session.document
        assert state.navigation_object_type == "info"

    def test_clear_selection(self, session):
        session.select("/info", highlight=True)
        session.clear_selection()
        assert session.selection == SelectionState()
        assert not session.selection.has_selection


class TestHighlight:
    def test_highlight_is_a_second_update(self, session):
        states = []
        session.subscribe_selection(states.append)
        session.select("/info", highlight=True)

        assert [s.highlight_selection for s in states] == [False, True]
        assert states[0].selected_path == states[1].selected_path

    def test_new_selection_starts_unhighlighted(self, session):
        session.select("/info", highlight=True)
        session.select("/servers/0")
        assert session.selection.highlight_selection is False

    def test_highlight_current(self, session):
        session.select("/info")
        session.highlight_current()
        assert session.selection.highlight_selection is True

    def test_highlight_current_without_selection(self, session):
        session.highlight_current()
        assert session.selection == SelectionState()


class TestFocusRestoration:
    def test_undo_restores_pre_execute_selection(self, session):
        session.select("/info", "title")
        session.execute_command(ChangePropertyCommand("/info", "title", "A"))
        session.select("/components/schemas/Pet")

        session.undo()
        assert session.selection.selected_path == NodePath.of("info")
        assert session.selection.selected_property_name == "title"
        assert session.selection.highlight_selection is True

    def test_stale_path_falls_back_to_nearest_node(self, session):
        session.execute_command(DeletePathCommand("/pets"))
        command = ChangePropertyCommand("/info", "title", "A")
        command.set_selection(NodePath.parse("/paths/~1pets/get"))
        session.execute_command(command)
        session.undo()

        state = session.selection
        assert state.selected_path == NodePath.parse("/paths/~1pets/get")
        assert state.selected_node is session.document.paths
        assert state.navigation_object_type == "info"

    def test_load_resets_selection(self, session, petstore):
        session.select("/info")
        session.load_document(petstore)
        assert session.selection == SelectionState()
