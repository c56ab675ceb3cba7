"""Unit tests for the durable client record adapters."""

import json
from unittest.mock import create_autospec

import pytest

from navigation.infrastructure.durable_store import (
    InMemoryDurableStore,
    JsonFileDurableStore,
)
from navigation.infrastructure.observability import DurableStoreProbe
from navigation.ports import DurableStoreError, IDurableStore


@pytest.fixture
def mock_probe():
    return create_autospec(DurableStoreProbe, instance=True)


class TestInMemoryDurableStore:
    def test_get_set_remove(self):
        store = InMemoryDurableStore({"user": "{}"})

        store.set_item("currentTenant", "{}")
        store.remove_item("user")
        store.remove_item("missing")

        assert store.keys() == ["currentTenant"]
        assert store.get_item("user") is None

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryDurableStore(), IDurableStore)


class TestJsonFileDurableStore:
    def test_missing_file_reads_empty(self, tmp_path, mock_probe):
        store = JsonFileDurableStore(tmp_path / "record.json", probe=mock_probe)

        assert store.get_item("user") is None
        mock_probe.durable_record_unreadable.assert_not_called()

    def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "record.json"
        JsonFileDurableStore(path).set_item("currentTenant", '{"id": "t1"}')

        reopened = JsonFileDurableStore(path)

        assert reopened.get_item("currentTenant") == '{"id": "t1"}'
        assert json.loads(path.read_text()) == {"currentTenant": '{"id": "t1"}'}

    def test_no_temporary_files_left_behind(self, tmp_path):
        store = JsonFileDurableStore(tmp_path / "record.json")

        store.set_item("a", "1")
        store.set_item("b", "2")

        assert [p.name for p in tmp_path.iterdir()] == ["record.json"]

    def test_remove_item(self, tmp_path):
        store = JsonFileDurableStore(tmp_path / "record.json")
        store.set_item("a", "1")

        store.remove_item("a")
        store.remove_item("a")

        assert store.get_item("a") is None

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_malformed_file_reads_empty(self, tmp_path, mock_probe, content):
        path = tmp_path / "record.json"
        path.write_text(content)
        store = JsonFileDurableStore(path, probe=mock_probe)

        assert store.get_item("user") is None
        mock_probe.durable_record_unreadable.assert_called_once()

    def test_non_string_values_are_ignored(self, tmp_path):
        path = tmp_path / "record.json"
        path.write_text(json.dumps({"user": 42, "currentTenant": "{}"}))

        store = JsonFileDurableStore(path)

        assert store.get_item("user") is None
        assert store.get_item("currentTenant") == "{}"

    def test_write_failure_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = JsonFileDurableStore(blocker / "record.json")

        with pytest.raises(DurableStoreError):
            store.set_item("a", "1")
