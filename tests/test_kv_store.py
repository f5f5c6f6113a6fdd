# tests/test_kv_store.py

from __future__ import annotations

from pathlib import Path

from flow_todo.storage.kv_store import SQLiteKeyValueStore


def test_get_set_overwrite(tmp_path: Path) -> None:
    kv = SQLiteKeyValueStore(tmp_path / "kv.sqlite3")

    assert kv.get("k") is None
    kv.set("k", b"one")
    assert kv.get("k") == b"one"
    kv.set("k", b"two")
    assert kv.get("k") == b"two"


def test_values_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "kv.sqlite3"
    SQLiteKeyValueStore(db).set("k", b"\x00\x01binary")

    reopened = SQLiteKeyValueStore(db)
    assert reopened.get("k") == b"\x00\x01binary"
    assert reopened.path == db


def test_remove_deletes_key_and_ignores_missing(tmp_path: Path) -> None:
    kv = SQLiteKeyValueStore(tmp_path / "kv.sqlite3")
    kv.set("a", b"1")
    kv.set("b", b"2")

    kv.remove("a")
    kv.remove("never-set")

    assert kv.get("a") is None
    assert kv.get("b") == b"2"
    assert SQLiteKeyValueStore(kv.path).get("a") is None
