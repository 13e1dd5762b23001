"""History store: bounded undo stack, redo invalidation."""

import pytest

from oaedit.editor.undo import CommandHistoryEntry, HistoryStore


def entry(name, recording):
    return CommandHistoryEntry(command=recording(name, []), description=name)


def names(entries):
    return [e.description for e in entries]


def test_empty_store(recording):
    store = HistoryStore()
    assert not store.can_undo()
    assert not store.can_redo()
    assert store.pop_undo() is None
    assert store.pop_redo() is None
    assert store.peek_undo() is None
    assert len(store) == 0


def test_push_clears_redo(recording):
    store = HistoryStore()
    store.push(entry("a", recording))
    store.push_redo(store.pop_undo())
    assert store.can_redo()

    store.push(entry("b", recording))
    assert not store.can_redo()
    assert names(store.undo_entries) == ["b"]


def test_push_undo_without_clearing_redo(recording):
    store = HistoryStore()
    store.push(entry("a", recording))
    store.push(entry("b", recording))
    store.push_redo(store.pop_undo())
    store.push_redo(store.pop_undo())

    store.push_undo_without_clearing_redo(store.pop_redo())
    assert names(store.undo_entries) == ["a"]
    assert names(store.redo_entries) == ["b"]


def test_oldest_entries_evicted_first(recording):
    store = HistoryStore(max_undo_size=3)
    for name in "abcde":
        store.push(entry(name, recording))

    assert len(store) == 3
    assert names(store.undo_entries) == ["c", "d", "e"]
    assert [store.pop_undo().description for _ in range(3)] == ["e", "d", "c"]
    assert store.pop_undo() is None


def test_redo_push_respects_bound(recording):
    store = HistoryStore(max_undo_size=2)
    for name in "ab":
        store.push(entry(name, recording))
    store.push_undo_without_clearing_redo(entry("c", recording))
    assert names(store.undo_entries) == ["b", "c"]


def test_clear(recording):
    store = HistoryStore()
    store.push(entry("a", recording))
    store.push_redo(entry("b", recording))
    store.clear()
    assert len(store) == 0
    assert store.redo_len() == 0


def test_entries_are_timestamped(recording):
    e = entry("a", recording)
    assert e.timestamp > 0


@pytest.mark.parametrize("size", [0, -1])
def test_invalid_size(size):
    with pytest.raises(ValueError):
        HistoryStore(max_undo_size=size)
