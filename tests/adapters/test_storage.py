from __future__ import annotations

from pathlib import Path

import pytest

from config_sh.adapters.storage.default import FileStorage, MemoryStorage, ensure_file
from config_sh.domain.errors import NotFound, StorageError


def test_file_storage_round_trip(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "config.json")
    storage.write('{"a": 1}')
    assert storage.read() == '{"a": 1}'
    assert storage.path == tmp_path / "config.json"


def test_file_storage_missing_file_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        FileStorage(tmp_path / "missing.json").read()


def test_file_storage_write_failure_is_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "config.json"
    blocker.mkdir()
    with pytest.raises(StorageError) as excinfo:
        FileStorage(blocker).write("{}")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_memory_storage_keeps_text() -> None:
    storage = MemoryStorage("first")
    storage.write("second")
    assert storage.read() == "second"
    assert storage.path is None


def test_ensure_file_creates_parents_and_seeds_empty_object(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / ".config-sh.json"
    assert ensure_file(target) is True
    assert target.read_text(encoding="utf-8") == "{}"
    assert ensure_file(target) is False


def test_ensure_file_keeps_existing_content(tmp_path: Path) -> None:
    target = tmp_path / ".config-sh.json"
    target.write_text('{"keep": true}', encoding="utf-8")
    ensure_file(target)
    assert target.read_text(encoding="utf-8") == '{"keep": true}'


def test_ensure_file_failure_is_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StorageError):
        ensure_file(blocker / ".config-sh.json")
