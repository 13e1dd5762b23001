"""
Editor state and the actions that change it.

Architecture:
- State values are frozen dataclasses; observers compare snapshots by equality
- Actions are frozen dataclasses representing state transitions
- reduce_*(state, action) is a pure function that returns updated state
- Store.dispatch(action) swaps in the reduced state and notifies observers
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from oaedit.model.nodes import Document, Node
from oaedit.model.paths import NodePath


# =============================================================================
# Data Types
# =============================================================================

@dataclass(frozen=True)
class SelectionEvent:
    """Where the user was when a command was created."""
    path: NodePath
    node: Optional[Node] = None
    property_name: Optional[str] = None


@dataclass(frozen=True)
class SelectionState:
    """What is selected, and the coarse object that owns it."""
    selected_path: Optional[NodePath] = None
    selected_node: Optional[Node] = None
    selected_property_name: Optional[str] = None
    navigation_object: Optional[Node] = None
    navigation_object_type: Optional[str] = None
    highlight_selection: bool = False

    @property
    def has_selection(self) -> bool:
        return self.selected_path is not None


@dataclass(frozen=True)
class DocumentState:
    """The loaded document. `version` bumps on every change."""
    document: Optional[Document] = None
    version: int = 0
    is_dirty: bool = False
    error: Optional[str] = None


# =============================================================================
# Selection Actions
# =============================================================================

@dataclass(frozen=True)
class SelectNode:
    """Select a node (or a not-yet-existing location) by path."""
    path: NodePath
    node: Optional[Node]
    property_name: Optional[str]
    navigation_object: Optional[Node]
    navigation_object_type: Optional[str]


@dataclass(frozen=True)
class ClearSelection:
    """Clear the current selection."""
    pass


@dataclass(frozen=True)
class SetHighlight:
    """Raise or lower the highlight flag on the current selection."""
    highlight: bool


SelectionAction = Union[SelectNode, ClearSelection, SetHighlight]


# =============================================================================
# Document Actions
# =============================================================================

@dataclass(frozen=True)
class DocumentLoaded:
    """A new document replaced the current one."""
    document: Document


@dataclass(frozen=True)
class DocumentChanged:
    """The current document was mutated in place."""
    pass


@dataclass(frozen=True)
class MarkClean:
    """The document was saved."""
    pass


@dataclass(frozen=True)
class LoadFailed:
    """Loading new content failed; the previous document is kept."""
    error: str


@dataclass(frozen=True)
class UnloadDocument:
    """Drop the current document."""
    pass


DocumentAction = Union[DocumentLoaded, DocumentChanged, MarkClean, LoadFailed, UnloadDocument]


# =============================================================================
# Reducers
# =============================================================================

def reduce_selection(state: SelectionState, action: SelectionAction) -> SelectionState:
    """Apply a selection action. A new selection always starts unhighlighted."""
    match action:
        case SelectNode(
            path=path,
            node=node,
            property_name=property_name,
            navigation_object=navigation_object,
            navigation_object_type=navigation_object_type,
        ):
            return SelectionState(
                selected_path=path,
                selected_node=node,
                selected_property_name=property_name,
                navigation_object=navigation_object,
                navigation_object_type=navigation_object_type,
                highlight_selection=False,
            )

        case ClearSelection():
            return SelectionState()

        case SetHighlight(highlight=highlight):
            return replace(state, highlight_selection=highlight)

    raise TypeError(f"Unknown selection action: {action!r}")


def reduce_document(state: DocumentState, action: DocumentAction) -> DocumentState:
    """Apply a document action."""
    match action:
        case DocumentLoaded(document=document):
            return DocumentState(document=document, version=state.version + 1)

        case DocumentChanged():
            return replace(state, version=state.version + 1, is_dirty=True)

        case MarkClean():
            return replace(state, is_dirty=False)

        case LoadFailed(error=error):
            return replace(state, error=error)

        case UnloadDocument():
            return DocumentState(version=state.version + 1)

    raise TypeError(f"Unknown document action: {action!r}")


# =============================================================================
# Store
# =============================================================================

S = TypeVar("S")
Observer = Callable[[Any], None]


class Store(Generic[S]):
    """Holds one state value; dispatch() reduces and fans out synchronously."""

    def __init__(self, initial: S, reducer: Callable[[S, Any], S]) -> None:
        self._initial = initial
        self._reducer = reducer
        self.state: S = initial
        self._observers: list[Observer] = []

    def dispatch(self, action: Any) -> None:
        """Apply an action to update state."""
        self.state = self._reducer(self.state, action)
        for observer in list(self._observers):
            observer(self.state)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer. Returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def reset(self) -> None:
        self.state = self._initial
        for observer in list(self._observers):
            observer(self.state)
