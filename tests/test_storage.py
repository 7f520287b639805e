from pathlib import Path

import pytest

from questtown.data.errors import StorageError
from questtown.data.storage import FileBlobStore, MemoryBlobStore


def test_memory_store_reads_back_writes() -> None:
    store = MemoryBlobStore()

    assert store.read("gameState") is None
    store.write("gameState", "{}")

    assert store.read("gameState") == "{}"
    assert store.keys() == ["gameState"]


def test_file_store_round_trips_text(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path / "saves")

    assert store.read("gameState") is None
    store.write("gameState", '{"xp": 1}')

    assert store.read("gameState") == '{"xp": 1}'
    assert (tmp_path / "saves" / "gameState.json").exists()
    assert not (tmp_path / "saves" / "gameState.json.tmp").exists()


def test_file_store_overwrites_existing_blob(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path)
    store.write("gameState", "first")
    store.write("gameState", "second")

    assert store.read("gameState") == "second"


def test_file_store_rejects_path_like_keys(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path)

    with pytest.raises(ValueError):
        store.write("../escape", "x")


def test_file_store_wraps_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file", encoding="utf-8")
    store = FileBlobStore(blocker)

    with pytest.raises(StorageError):
        store.write("gameState", "x")


def test_file_store_wraps_undecodable_blob(tmp_path: Path) -> None:
    (tmp_path / "gameState.json").write_bytes(b"\xff\xfe{bad")
    store = FileBlobStore(tmp_path)

    with pytest.raises(StorageError):
        store.read("gameState")


def test_file_store_removes_temp_file_when_replace_fails(tmp_path: Path) -> None:
    (tmp_path / "gameState.json").mkdir()
    store = FileBlobStore(tmp_path)

    with pytest.raises(StorageError):
        store.write("gameState", '{"xp": 1}')

    assert not (tmp_path / "gameState.json.tmp").exists()
