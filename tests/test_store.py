"""Tests for the JSON-backed string store."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from src.analysis.properties import build_record
from src.storage.store import (
    DuplicateStringError,
    StoreError,
    StringNotFoundError,
    StringStore,
)


def test_load_missing_file_starts_empty_and_creates_it(tmp_path: Path) -> None:
    path = tmp_path / "data" / "strings.json"
    store = StringStore(path)
    store.load()

    assert len(store) == 0
    assert path.exists()


def test_records_survive_reload(tmp_path: Path) -> None:
    path = tmp_path / "strings.json"
    store = StringStore(path)
    store.load()
    first = store.add(build_record("racecar"))
    second = store.add(build_record("hello world"))

    reloaded = StringStore(path)
    reloaded.load()

    assert reloaded.all() == [first, second]
    assert reloaded.get_by_value("racecar") == first


def test_duplicate_is_rejected() -> None:
    store = StringStore()
    store.add(build_record("noon"))
    with pytest.raises(DuplicateStringError):
        store.add(build_record("noon"))
    assert len(store) == 1


def test_lookup_is_exact() -> None:
    store = StringStore()
    record = store.add(build_record("Noon"))

    assert store.get_by_id(record.id) == record
    assert store.get_by_value("Noon") == record
    assert store.get_by_value("noon") is None


def test_delete_by_value(tmp_path: Path) -> None:
    path = tmp_path / "strings.json"
    store = StringStore(path)
    store.add(build_record("level"))

    deleted = store.delete_by_value("level")
    assert deleted.value == "level"
    assert store.get_by_value("level") is None

    reloaded = StringStore(path)
    reloaded.load()
    assert len(reloaded) == 0


def test_delete_missing_value() -> None:
    with pytest.raises(StringNotFoundError):
        StringStore().delete_by_value("missing")


def test_all_returns_a_snapshot() -> None:
    store = StringStore()
    store.add(build_record("a"))

    snapshot = store.all()
    snapshot.clear()

    assert len(store) == 1


def test_invalid_file_is_not_overwritten(tmp_path: Path) -> None:
    path = tmp_path / "strings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        StringStore(path).load()
    assert path.read_text(encoding="utf-8") == "{not json"


def test_in_memory_store_does_not_touch_disk(
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    store = StringStore()
    store.load()
    store.add(build_record("kayak"))

    assert list(tmp_path.iterdir()) == []


def test_concurrent_adds_are_all_persisted(tmp_path: Path) -> None:
    path = tmp_path / "strings.json"
    store = StringStore(path)
    store.load()
    values = [f"value {idx}" for idx in range(20)]

    threads = [threading.Thread(target=store.add, args=(build_record(v),)) for v in values]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    reloaded = StringStore(path)
    reloaded.load()
    assert sorted(record.value for record in reloaded.all()) == sorted(values)
