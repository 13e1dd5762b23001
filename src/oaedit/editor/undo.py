"""Bounded undo/redo history.

- Each entry holds: command, description, timestamp (ms since epoch)
- push() is for new executions only: it clears the redo stack
- Redo stack only grows while performing undo
- The undo stack drops its oldest entries beyond max_undo_size
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from oaedit.commands.base import Command

# Maximum number of undo entries to retain
DEFAULT_MAX_UNDO_SIZE = 100


def now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class CommandHistoryEntry:
    command: Command
    description: str
    timestamp: int = field(default_factory=now_ms)


class HistoryStore:
    """Undo and redo stacks for executed commands."""

    def __init__(self, max_undo_size: int = DEFAULT_MAX_UNDO_SIZE) -> None:
        if max_undo_size < 1:
            raise ValueError(f"max_undo_size must be at least 1, got {max_undo_size}")
        self.max_undo_size = max_undo_size
        self._undo: List[CommandHistoryEntry] = []
        self._redo: List[CommandHistoryEntry] = []

    def push(self, entry: CommandHistoryEntry) -> None:
        """Record a newly executed command and clear redo history."""
        self._undo.append(entry)
        if len(self._undo) > self.max_undo_size:
            del self._undo[: len(self._undo) - self.max_undo_size]
        self._redo.clear()

    def push_undo_without_clearing_redo(self, entry: CommandHistoryEntry) -> None:
        """Put a redone (or failed-to-undo) entry back on the undo stack."""
        self._undo.append(entry)
        if len(self._undo) > self.max_undo_size:
            del self._undo[: len(self._undo) - self.max_undo_size]

    def push_redo(self, entry: CommandHistoryEntry) -> None:
        self._redo.append(entry)

    def pop_undo(self) -> Optional[CommandHistoryEntry]:
        if not self._undo:
            return None
        return self._undo.pop()

    def pop_redo(self) -> Optional[CommandHistoryEntry]:
        if not self._redo:
            return None
        return self._redo.pop()

    def peek_undo(self) -> Optional[CommandHistoryEntry]:
        return self._undo[-1] if self._undo else None

    def peek_redo(self) -> Optional[CommandHistoryEntry]:
        return self._redo[-1] if self._redo else None

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_entries(self) -> tuple[CommandHistoryEntry, ...]:
        """Undo stack, oldest first."""
        return tuple(self._undo)

    @property
    def redo_entries(self) -> tuple[CommandHistoryEntry, ...]:
        """Redo stack, oldest first."""
        return tuple(self._redo)

    def clear(self) -> None:
        """Clear all history (called when a new document is loaded)."""
        self._undo.clear()
        self._redo.clear()

    def __len__(self) -> int:
        """Number of undoable entries."""
        return len(self._undo)

    def redo_len(self) -> int:
        """Number of redoable entries."""
        return len(self._redo)
