"""Editor session: one loaded document with its history and selection.

The session is the object an embedding application holds on to. It wires
the document store, the selection controller and the command engine
together and exposes the operations a UI needs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import yaml

from oaedit.commands.base import Command
from oaedit.config import EditorConfig
from oaedit.editor.engine import CommandEngine
from oaedit.editor.errors import DocumentLoadError, NoDocumentError
from oaedit.editor.selection import SelectionController, SelectionTarget
from oaedit.editor.state import (
    DocumentLoaded,
    DocumentState,
    LoadFailed,
    MarkClean,
    SelectionState,
    Store,
    UnloadDocument,
    reduce_document,
)
from oaedit.editor.undo import HistoryStore
from oaedit.model.io import dump_document_file, read_document, write_node
from oaedit.model.nodes import Document

logger = logging.getLogger(__name__)

DocumentContent = Union[Document, Mapping[str, Any], str, Path]


class EditorSession:
    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self.config = config or EditorConfig()
        self.documents: Store[DocumentState] = Store(DocumentState(), reduce_document)
        self.selection_controller = SelectionController(self.documents)
        self.engine = CommandEngine(
            self.documents,
            self.selection_controller,
            HistoryStore(self.config.max_undo_size),
        )

    # =====================
    # Document lifecycle
    # =====================

    def load_document(self, content: DocumentContent) -> Document:
        """Replace the current document.

        `content` may be a Document, a parsed mapping, YAML/JSON text or a
        file path. History and selection are reset. On failure the previous
        document stays loaded and DocumentLoadError is raised.
        """
        try:
            document = _to_document(content)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.exception("Failed to load document")
            self.documents.dispatch(LoadFailed(str(e)))
            raise DocumentLoadError(f"Failed to load document: {e}") from e

        self.documents.dispatch(DocumentLoaded(document))
        self.engine.reset()
        self.selection_controller.reset()
        logger.debug("Loaded document (openapi %s)", document.openapi)
        return document

    def unload_document(self) -> None:
        self.documents.dispatch(UnloadDocument())
        self.engine.reset()
        self.selection_controller.reset()

    def save(self, path: Path) -> None:
        doc = self._require_document("save")
        dump_document_file(doc, path)
        self.mark_clean()

    def to_dict(self) -> dict[str, Any]:
        return write_node(self._require_document("serialize"))

    def mark_clean(self) -> None:
        self.documents.dispatch(MarkClean())

    @property
    def document(self) -> Optional[Document]:
        return self.documents.state.document

    @property
    def version(self) -> int:
        return self.documents.state.version

    @property
    def is_dirty(self) -> bool:
        return self.documents.state.is_dirty

    @property
    def load_error(self) -> Optional[str]:
        return self.documents.state.error

    # =====================
    # Commands
    # =====================

    def execute_command(self, command: Command, description: Optional[str] = None) -> None:
        self.engine.execute(command, description)

    def undo(self) -> bool:
        return self.engine.undo()

    def redo(self) -> bool:
        return self.engine.redo()

    def can_undo(self) -> bool:
        return self.engine.can_undo()

    def can_redo(self) -> bool:
        return self.engine.can_redo()

    # =====================
    # Selection
    # =====================

    @property
    def selection(self) -> SelectionState:
        return self.selection_controller.state

    def select(self, target: SelectionTarget, property_name: Optional[str] = None, highlight: bool = False) -> None:
        self.selection_controller.select(target, property_name, highlight)

    def select_root(self) -> None:
        self.selection_controller.select_root()

    def clear_selection(self) -> None:
        self.selection_controller.clear_selection()

    def highlight_current(self) -> None:
        self.selection_controller.highlight_current()

    # =====================
    # Observers
    # =====================

    def subscribe_document(self, observer: Callable[[DocumentState], None]) -> Callable[[], None]:
        return self.documents.subscribe(observer)

    def subscribe_selection(self, observer: Callable[[SelectionState], None]) -> Callable[[], None]:
        return self.selection_controller.subscribe(observer)

    def _require_document(self, operation: str) -> Document:
        doc = self.document
        if doc is None:
            raise NoDocumentError(operation)
        return doc


def _to_document(content: DocumentContent) -> Document:
    if isinstance(content, Document):
        return content
    if isinstance(content, Path):
        content = content.read_text()
    if isinstance(content, str):
        # JSON text parses as YAML
        return read_document(yaml.safe_load(content))
    return read_document(dict(content))
