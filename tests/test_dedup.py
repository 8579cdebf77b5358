from __future__ import annotations

import json

import pytest

from core.dedup import CorruptStateError, DeduplicationStore, StorageError


def test_missing_file_loads_empty(tmp_path) -> None:
    store = DeduplicationStore.load(tmp_path / "cache" / "likes.json")
    assert store.size == 0
    assert not store.dirty


def test_persist_then_load_yields_same_ids(tmp_path) -> None:
    path = tmp_path / "cache" / "likes.json"
    store = DeduplicationStore.load(path)
    for item_id in (9, 1, 18446744073709551615, 5):
        store.insert(item_id)
    store.persist()

    reloaded = DeduplicationStore.load(path)
    assert reloaded.snapshot() == {1, 5, 9, 18446744073709551615}
    assert json.loads(path.read_text()) == [1, 5, 9, 18446744073709551615]


def test_insert_is_idempotent_and_tracks_dirty(tmp_path) -> None:
    store = DeduplicationStore(tmp_path / "likes.json")
    assert store.insert(7) is True
    assert store.insert(7) is False
    assert store.contains(7)
    assert store.size == 1
    assert store.dirty

    store.persist()
    assert not store.dirty
    assert store.insert(7) is False
    assert not store.dirty


def test_persist_leaves_no_temp_files(tmp_path) -> None:
    store = DeduplicationStore(tmp_path / "likes.json", {3})
    store.persist()
    store.insert(4)
    store.persist()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["likes.json"]


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        '{"seen": [1, 2]}',
        '[1, "2"]',
        "[1, -2]",
        "[true]",
        "[1.5]",
        "[18446744073709551616]",
    ],
)
def test_corrupt_state_is_rejected(tmp_path, content) -> None:
    path = tmp_path / "likes.json"
    path.write_text(content)
    with pytest.raises(CorruptStateError):
        DeduplicationStore.load(path)


def test_persist_failure_raises_storage_error(tmp_path) -> None:
    # A directory in place of the target file makes os.replace fail.
    target = tmp_path / "likes.json"
    target.mkdir()
    store = DeduplicationStore(target, {1})
    store.insert(2)

    with pytest.raises(StorageError):
        store.persist()
    assert store.dirty


def test_relayed_feed_ids_survive_a_restart(tmp_path) -> None:
    path = tmp_path / "likes.json"
    store = DeduplicationStore.load(path)
    store.insert(0)
    store.insert(2**64 - 1)
    store.persist()

    assert DeduplicationStore.load(path).snapshot() == {0, 2**64 - 1}
