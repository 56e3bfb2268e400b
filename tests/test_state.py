"""Tests for state backends (JSON file and Memory)."""

import json
import os
from datetime import date

import pytest

from earningsalert.errors import PersistenceError
from earningsalert.models.notification import NotificationRecord, NotificationState
from earningsalert.state import JsonStateStore, MemoryStateStore


def _state(*keys):
    return NotificationState(NotificationRecord(s, date.fromisoformat(d)) for s, d in keys)


class TestMemoryStateStore:
    def test_empty_by_default(self):
        assert len(MemoryStateStore().load()) == 0

    def test_save_then_load(self):
        store = MemoryStateStore()
        store.save(_state(("AAPL", "2024-01-15")))
        loaded = store.load()
        assert loaded.contains("AAPL", date(2024, 1, 15))
        assert store.save_count == 1

    def test_load_returns_independent_copy(self):
        store = MemoryStateStore([NotificationRecord("AAPL", date(2024, 1, 15))])
        state = store.load()
        state.add(NotificationRecord("MSFT", date(2024, 1, 16)))
        assert len(store.load()) == 1


class TestJsonStateStore:
    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "earnings" / "state.json"

    def test_missing_file_is_empty(self, path):
        assert len(JsonStateStore(path).load()) == 0

    def test_save_and_load(self, path):
        store = JsonStateStore(path)
        original = _state(("MSFT", "2024-01-17"), ("AAPL", "2024-01-15"))
        store.save(original)
        loaded = store.load()
        assert [r.key for r in loaded] == [r.key for r in original]

    def test_layout_is_readable_json_list(self, path):
        JsonStateStore(path).save(_state(("AAPL", "2024-01-15")))
        assert json.loads(path.read_text(encoding="utf-8")) == [
            {"symbol": "AAPL", "date": "2024-01-15"}
        ]
        assert "\n  " in path.read_text(encoding="utf-8")

    def test_no_temp_file_left_behind(self, path):
        JsonStateStore(path).save(_state(("AAPL", "2024-01-15")))
        assert sorted(p.name for p in path.parent.iterdir()) == ["state.json"]

    def test_overwrites_previous(self, path):
        store = JsonStateStore(path)
        store.save(_state(("AAPL", "2024-01-15")))
        store.save(_state(("AAPL", "2024-01-15"), ("MSFT", "2024-01-16")))
        assert len(store.load()) == 2

    def test_reads_legacy_file(self, path):
        path.parent.mkdir(parents=True)
        path.write_text(
            '[\n  {"symbol": "AAPL", "date": "2024-01-15"},\n  {"symbol": "TSLA", "date": "2024-01-24"}\n]',
            encoding="utf-8",
        )
        state = JsonStateStore(path).load()
        assert state.contains("TSLA", date(2024, 1, 24))

    def test_corrupt_file_is_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("[{not json", encoding="utf-8")
        assert len(JsonStateStore(path).load()) == 0

    def test_wrong_shape_is_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text('{"symbol": "AAPL"}', encoding="utf-8")
        assert len(JsonStateStore(path).load()) == 0

    def test_bad_entries_skipped_and_duplicates_collapsed(self, path):
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps(
                [
                    {"symbol": "AAPL", "date": "2024-01-15"},
                    {"symbol": "AAPL", "date": "2024-01-15"},
                    {"symbol": "MSFT"},
                    {"symbol": "GOOG", "date": "yesterday"},
                    "IBM",
                ]
            ),
            encoding="utf-8",
        )
        state = JsonStateStore(path).load()
        assert [r.key for r in state] == [("AAPL", date(2024, 1, 15))]

    def test_save_failure_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        store = JsonStateStore(blocker / "state.json")
        with pytest.raises(PersistenceError, match="Could not write state"):
            store.save(_state(("AAPL", "2024-01-15")))

    def test_failed_replace_keeps_old_file(self, path, monkeypatch):
        store = JsonStateStore(path)
        store.save(_state(("AAPL", "2024-01-15")))

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(PersistenceError):
            store.save(_state(("AAPL", "2024-01-15"), ("MSFT", "2024-01-16")))
        monkeypatch.undo()
        assert [r.symbol for r in store.load()] == ["AAPL"]
        assert not path.with_name("state.json.tmp").exists()
