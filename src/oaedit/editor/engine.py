"""Command engine: execute, undo and redo commands against the loaded document.

- execute() snapshots the current selection into the command, runs it, then
  records it (clearing redo history) and bumps the document version
- undo()/redo() return False on an empty stack; otherwise they reverse or
  replay the command and restore the selection recorded at execute time
- the three entry points are serialised by one lock; calling back into the
  engine while it is busy (e.g. from an observer) raises ReentrantCommandError
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from oaedit.commands.base import Command
from oaedit.editor.decorators import require_document
from oaedit.editor.errors import CommandExecutionError, NoDocumentError, ReentrantCommandError
from oaedit.editor.selection import SelectionController
from oaedit.editor.state import DocumentChanged, DocumentState, Store
from oaedit.editor.undo import CommandHistoryEntry, HistoryStore
from oaedit.model.nodes import Document

logger = logging.getLogger(__name__)


class CommandEngine:
    def __init__(
        self,
        documents: Store[DocumentState],
        selection: SelectionController,
        history: Optional[HistoryStore] = None,
    ) -> None:
        self._documents = documents
        self._selection = selection
        self.history = history if history is not None else HistoryStore()
        self._lock = threading.Lock()
        self._owner: Optional[int] = None

    @property
    def document(self) -> Optional[Document]:
        return self._documents.state.document

    # =====================
    # Entry points
    # =====================

    @require_document("execute command")
    def execute(self, command: Command, description: Optional[str] = None) -> None:
        """Run a new command and record it for undo.

        On failure the history is left untouched. The command's exception is
        not re-raised as is: it is wrapped in CommandExecutionError (with the
        original as `__cause__`) so callers can tell which command and phase
        failed.
        """
        with self._exclusive("execute"):
            if command.selection_event is None:
                command.selection_event = self._selection.create_selection_event()
            description = description or command.description

            try:
                command.execute(self.document)
            except Exception as e:
                logger.exception("Failed to execute command: %s", description)
                raise CommandExecutionError(command, "execute", description) from e

            self.history.push(CommandHistoryEntry(command=command, description=description))
            logger.debug("Executed %s (undo depth %d)", description, len(self.history))
            self._documents.dispatch(DocumentChanged())

    def undo(self) -> bool:
        """Undo the most recent command. Returns False if there is nothing to undo."""
        with self._exclusive("undo"):
            if not self.history.can_undo():
                return False
            doc = self._require_document("undo")
            entry = self.history.pop_undo()

            try:
                entry.command.undo(doc)
            except Exception as e:
                # keep the entry undoable; the document may be partially reverted
                self.history.push_undo_without_clearing_redo(entry)
                logger.exception("Failed to undo command: %s", entry.description)
                raise CommandExecutionError(entry.command, "undo", entry.description) from e

            self._restore_selection(entry)
            self.history.push_redo(entry)
            logger.debug("Undid %s", entry.description)
            self._documents.dispatch(DocumentChanged())
            return True

    def redo(self) -> bool:
        """Re-execute the most recently undone command. Returns False if there is none."""
        with self._exclusive("redo"):
            if not self.history.can_redo():
                return False
            doc = self._require_document("redo")
            entry = self.history.pop_redo()

            try:
                entry.command.execute(doc)
            except Exception as e:
                self.history.push_redo(entry)
                logger.exception("Failed to redo command: %s", entry.description)
                raise CommandExecutionError(entry.command, "redo", entry.description) from e

            self._restore_selection(entry)
            self.history.push_undo_without_clearing_redo(entry)
            logger.debug("Redid %s", entry.description)
            self._documents.dispatch(DocumentChanged())
            return True

    def reset(self) -> None:
        """Discard all history (a new document was loaded)."""
        with self._exclusive("reset"):
            self.history.clear()

    # =====================
    # Queries
    # =====================

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    @property
    def undo_count(self) -> int:
        return len(self.history)

    @property
    def redo_count(self) -> int:
        return self.history.redo_len()

    def peek_undo(self) -> Optional[CommandHistoryEntry]:
        return self.history.peek_undo()

    def peek_redo(self) -> Optional[CommandHistoryEntry]:
        return self.history.peek_redo()

    # =====================
    # Internal helpers
    # =====================

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        if self._owner == threading.get_ident():
            raise ReentrantCommandError(f"Cannot {operation} while another command operation is running")
        with self._lock:
            self._owner = threading.get_ident()
            try:
                yield
            finally:
                self._owner = None

    def _require_document(self, operation: str) -> Document:
        doc = self.document
        if doc is None:
            raise NoDocumentError(operation)
        return doc

    def _restore_selection(self, entry: CommandHistoryEntry) -> None:
        # both undo and redo go back to where the user was before the command
        event = entry.command.selection_event
        if event is not None:
            self._selection.select_from_event(event, highlight=True)
