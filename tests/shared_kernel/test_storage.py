"""Tests for the key-value storage adapters."""

import json

import pytest
from shared.errors import StorageError
from shared.storage import InMemoryStore, JsonFileStore, KeyValueStore


class TestInMemoryStore:
    def test_get_missing_key(self):
        assert InMemoryStore().get("nope") is None

    def test_set_and_get(self):
        store = InMemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_remove_missing_key_is_harmless(self):
        InMemoryStore().remove("nope")

    def test_initial_data_is_copied(self):
        initial = {"k": "v"}
        store = InMemoryStore(initial)
        store.set("k", "changed")
        assert initial["k"] == "v"

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryStore(), KeyValueStore)


class TestJsonFileStore:
    def test_missing_file_reads_as_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "absent.json").get("k") is None

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_remove(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_empty_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("", encoding="utf-8")
        assert JsonFileStore(path).get("k") is None

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(path).get("k")

    def test_invalid_utf8_raises_storage_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_bytes(b'{"strongwill-currency": "EUR\xff"}')
        with pytest.raises(StorageError):
            JsonFileStore(path).get("strongwill-currency")

    def test_non_object_document_raises_storage_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(path).get("k")

    def test_non_string_values_come_back_as_json(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"prefs": {"searchTerms": ["cap"]}}), encoding="utf-8")
        assert json.loads(JsonFileStore(path).get("prefs")) == {"searchTerms": ["cap"]}

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "store.json")
        store.set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_unwritable_location_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(blocker / "store.json").set("k", "v")
