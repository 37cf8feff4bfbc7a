import json

import pytest

from momentum.core.storage import (
    REMINDERS_KEY,
    JsonFileStorage,
    MemoryStorage,
    StorageCorruptionError,
    StorageError,
)


def test_memory_storage_round_trip():
    storage = MemoryStorage()

    assert storage.read("missing") is None

    storage.write("key", {"a": [1, 2]})
    assert storage.read("key") == {"a": [1, 2]}
    assert storage.write_count == 1

    storage.delete("key")
    storage.delete("key")
    assert storage.read("key") is None


def test_memory_storage_reports_corrupt_values():
    storage = MemoryStorage({"key": "{not json"})
    with pytest.raises(StorageCorruptionError):
        storage.read("key")


def test_json_file_storage_writes_one_file_per_key(tmp_path):
    storage = JsonFileStorage(tmp_path / "data")

    storage.write(REMINDERS_KEY, [{"id": "a"}])
    storage.write("momentum-points", 30)

    assert json.loads((tmp_path / "data" / "momentum-reminders.json").read_text(encoding="utf-8")) == [{"id": "a"}]
    assert storage.read("momentum-points") == 30
    assert not list((tmp_path / "data").glob("*.tmp"))


def test_json_file_storage_missing_key(tmp_path):
    storage = JsonFileStorage(tmp_path)
    assert storage.read("nothing") is None
    storage.delete("nothing")


def test_json_file_storage_quarantines_corrupt_file(tmp_path):
    path = tmp_path / "momentum-points.json"
    path.write_text("12abc", encoding="utf-8")
    storage = JsonFileStorage(tmp_path)

    with pytest.raises(StorageCorruptionError):
        storage.read("momentum-points")

    assert not path.exists()
    assert len(list(tmp_path.glob("momentum-points.corrupted-*.json"))) == 1
    assert storage.read("momentum-points") is None


def test_json_file_storage_wraps_unserializable_values(tmp_path):
    storage = JsonFileStorage(tmp_path)

    with pytest.raises(StorageError):
        storage.write("key", {"bad": object()})

    assert not (tmp_path / "key.tmp").exists()
    assert storage.read("key") is None
