"""Selection controller: the single source of truth for what is selected.

A selection always records the navigation object that owns the selected node,
so a panel can be chosen for any fine-grained selection. The highlight flag
is raised by a separate state update, which lets observers animate exactly
once per request and lower it afterwards.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from oaedit.editor.decorators import require_document
from oaedit.editor.errors import UnresolvableSelectionError
from oaedit.editor.navigation import resolve_navigation_object, resolve_nearest_existing
from oaedit.editor.state import (
    ClearSelection,
    DocumentState,
    SelectionEvent,
    SelectionState,
    SelectNode,
    SetHighlight,
    Store,
    reduce_selection,
)
from oaedit.model.nodes import Document, Node
from oaedit.model.paths import NodePath, as_path, create_node_path, resolve_node_path

logger = logging.getLogger(__name__)

SelectionTarget = Union[Node, NodePath, str]


class SelectionController:
    def __init__(self, documents: Store[DocumentState]) -> None:
        self._documents = documents
        self.store: Store[SelectionState] = Store(SelectionState(), reduce_selection)

    @property
    def document(self) -> Optional[Document]:
        return self._documents.state.document

    @property
    def state(self) -> SelectionState:
        return self.store.state

    def subscribe(self, observer: Callable[[SelectionState], None]) -> Callable[[], None]:
        return self.store.subscribe(observer)

    # -------------------------------------------------------------------------
    # Selecting
    # -------------------------------------------------------------------------

    @require_document("select")
    def select(
        self,
        target: SelectionTarget,
        property_name: Optional[str] = None,
        highlight: bool = False,
    ) -> None:
        """Select a node, or the node at a path.

        Raises UnresolvableSelectionError when the path does not resolve or the
        node is not part of the loaded document.
        """
        doc = self.document
        if isinstance(target, Node):
            node = target
            path = create_node_path(node)
            if path is None or resolve_node_path(path, doc) is not node:
                raise UnresolvableSelectionError(target, "node is not part of the loaded document")
        else:
            try:
                path = as_path(target)
            except ValueError as e:
                raise UnresolvableSelectionError(target, "invalid pointer") from e
            node = resolve_node_path(path, doc)
            if node is None:
                raise UnresolvableSelectionError(path)

        self._commit(path, node, property_name, highlight)

    @require_document("restore selection")
    def select_from_event(self, event: SelectionEvent, highlight: bool = False) -> None:
        """Restore a recorded selection.

        The recorded path is kept even if it no longer resolves exactly; the
        nearest existing node stands in for it.
        """
        node = resolve_node_path(event.path, self.document)
        if node is None:
            node = resolve_nearest_existing(event.path, self.document)
            logger.debug("Selection %s no longer exists, using nearest node", event.path)
        self._commit(event.path, node, event.property_name, highlight)

    @require_document("select root")
    def select_root(self) -> None:
        self.select(self.document)

    def clear_selection(self) -> None:
        self.store.dispatch(ClearSelection())

    def highlight_current(self) -> None:
        if self.state.has_selection:
            self.store.dispatch(SetHighlight(True))

    def set_highlight(self, highlight: bool) -> None:
        self.store.dispatch(SetHighlight(highlight))

    def create_selection_event(self) -> Optional[SelectionEvent]:
        """Snapshot the current selection, or None when nothing is selected."""
        state = self.state
        if state.selected_path is None:
            return None
        return SelectionEvent(
            path=state.selected_path,
            node=state.selected_node,
            property_name=state.selected_property_name,
        )

    def reset(self) -> None:
        self.store.reset()

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _commit(
        self,
        path: NodePath,
        node: Optional[Node],
        property_name: Optional[str],
        highlight: bool,
    ) -> None:
        target = resolve_navigation_object(node or self.document, self.document)
        self.store.dispatch(
            SelectNode(
                path=path,
                node=node,
                property_name=property_name,
                navigation_object=target.object,
                navigation_object_type=target.type,
            )
        )
        if highlight:
            self.store.dispatch(SetHighlight(True))
        logger.debug("Selected %s (%s) -> %s", path, property_name, target.type)
