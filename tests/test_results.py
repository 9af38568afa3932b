"""Tests for recent-result persistence."""

import json

import pytest

from classic_snake.results import JsonFileStorage, MemoryStorage, ResultStore


class _FailingStorage(MemoryStorage):
    def set_item(self, key, value):
        raise OSError("disk full")


class TestResultStore:
    def test_empty(self):
        assert ResultStore().load_recent() == []

    def test_fifo_capped_at_three(self):
        store = ResultStore(MemoryStorage())
        for score in [5, 6, 7, 8]:
            store.save_recent(score)
        assert store.load_recent() == [6, 7, 8]

    def test_save_returns_stored_list(self):
        store = ResultStore()
        assert store.save_recent(4) == [4]
        assert store.save_recent(2) == [4, 2]

    def test_persisted_as_json_list_under_key(self):
        storage = MemoryStorage()
        store = ResultStore(storage)
        store.save_recent(3)
        store.save_recent(1)
        assert json.loads(storage.get_item("gameResults")) == [3, 1]

    def test_custom_key_and_limit(self):
        storage = MemoryStorage()
        store = ResultStore(storage, key="scores", limit=2)
        for score in [1, 2, 3]:
            store.save_recent(score)
        assert store.load_recent() == [2, 3]
        assert storage.get_item("gameResults") is None

    def test_invalid_limit(self):
        with pytest.raises(ValueError, match="at least 1"):
            ResultStore(limit=0)

    def test_malformed_data_loads_empty(self):
        storage = MemoryStorage()
        storage.set_item("gameResults", "not json")
        assert ResultStore(storage).load_recent() == []
        storage.set_item("gameResults", '{"a": 1}')
        assert ResultStore(storage).load_recent() == []

    def test_longer_stored_list_is_trimmed(self):
        storage = MemoryStorage()
        storage.set_item("gameResults", "[1, 2, 3, 4, 5]")
        assert ResultStore(storage).load_recent() == [3, 4, 5]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("[1, NaN]", [1]),
            ("[Infinity]", []),
            ("[-Infinity, 2]", [2]),
            ("[true, 3]", [3]),
            ("[2.0, 4]", [2, 4]),
        ],
    )
    def test_non_finite_and_bool_entries_skipped(self, raw, expected):
        storage = MemoryStorage()
        storage.set_item("gameResults", raw)
        assert ResultStore(storage).load_recent() == expected

    def test_save_after_non_finite_entry(self):
        storage = MemoryStorage()
        storage.set_item("gameResults", "[NaN, 4]")
        assert ResultStore(storage).save_recent(5) == [4, 5]

    def test_storage_fault_is_not_raised(self):
        store = ResultStore(_FailingStorage())
        assert store.save_recent(9) == [9]


class TestJsonFileStorage:
    def test_missing_file(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "store.json")
        assert storage.get_item("gameResults") is None

    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        ResultStore(JsonFileStorage(path)).save_recent(12)
        assert ResultStore(JsonFileStorage(path)).load_recent() == [12]

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "store.json"
        storage = JsonFileStorage(path)
        storage.set_item("theme", "dark")
        storage.set_item("gameResults", "[1]")
        assert storage.get_item("theme") == "dark"
        assert json.loads(path.read_text()) == {
            "theme": "dark", "gameResults": "[1]",
        }

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{broken")
        assert JsonFileStorage(path).get_item("gameResults") is None

    def test_non_utf8_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_bytes(b"\xff\xfe{")
        assert JsonFileStorage(path).get_item("gameResults") is None
        assert ResultStore(JsonFileStorage(path)).load_recent() == []

    def test_non_utf8_file_is_overwritten_on_save(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_bytes(b"\xff\xfe{")
        store = ResultStore(JsonFileStorage(path))
        assert store.save_recent(7) == [7]
        assert store.load_recent() == [7]
