"""JSONDocument tests covering load/parse failures, null handling, dirty tracking and saving."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from config_sh.adapters.file_loaders.json_document import JSONDocument
from config_sh.adapters.storage.default import FileStorage, MemoryStorage
from config_sh.domain.errors import NotFound, ParseError, WriteForbidden
from tests.support import writable_document


def test_from_data_is_loaded_synced_and_read_only() -> None:
    document = JSONDocument.from_data('{ "key": "value" }')
    assert document.is_loaded
    assert document.is_synced
    assert not document.can_write
    assert document.get_raw("key") == "value"


def test_load_fails_when_file_is_missing(tmp_path: Path) -> None:
    document = JSONDocument(FileStorage(tmp_path / "missing.json"), can_write=True)
    with pytest.raises(NotFound):
        document.load()
    assert not document.is_loaded


def test_load_fails_on_invalid_json() -> None:
    document = JSONDocument(MemoryStorage(""), can_write=True)
    with pytest.raises(ParseError):
        document.load()
    assert not document.is_loaded


def test_load_rejects_non_object_root() -> None:
    with pytest.raises(ParseError):
        JSONDocument.from_data("[1, 2, 3]")


def test_failed_reload_keeps_previous_tree() -> None:
    document, storage = writable_document('{"key": "value"}')
    storage.text = "{broken"
    with pytest.raises(ParseError):
        document.load()
    assert document.get_raw("key") == "value"


def test_missing_key_and_null_read_alike() -> None:
    document = JSONDocument.from_data('{ "key": null }')
    assert document.get_raw("key") is None
    assert document.get_raw("other") is None
    assert document.get("key", str) is None
    assert document.get("other", str) is None


def test_typed_get_returns_none_on_mismatch() -> None:
    document = JSONDocument.from_data('{ "key": "value", "count": 10 }')
    assert document.get("key", int) is None
    assert document.get("count", int) == 10


def test_set_creates_object_when_nothing_was_loaded() -> None:
    document = JSONDocument(MemoryStorage(""), can_write=True)
    document.set_raw("key", "value")
    assert document.is_loaded
    assert document.get_raw("key") == "value"
    assert not document.is_synced


def test_set_overwrites_and_marks_unsynced() -> None:
    document = JSONDocument.from_data('{ "key": "value" }')
    document.set_raw("key", "new_value")
    assert document.get_raw("key") == "new_value"
    assert not document.is_synced


def test_typed_set_normalises_paths() -> None:
    document, _ = writable_document()
    document.set("core.repo.path", Path("..") / "repo")
    assert document.get_raw("core.repo.path") == str(Path("..") / "repo")
    assert document.get("core.repo.path", Path) == Path("..") / "repo"


def test_save_fails_when_document_is_read_only() -> None:
    document = JSONDocument.from_data('{ "key": "value" }')
    document.set_raw("key", "changed")
    with pytest.raises(WriteForbidden):
        document.save()
    assert not document.is_synced


def test_make_read_only_downgrades_writable_document() -> None:
    document, storage = writable_document('{"key": "value"}')
    document.make_read_only()
    with pytest.raises(WriteForbidden):
        document.save()
    assert storage.writes == 0


def test_save_without_data_is_a_no_op() -> None:
    storage = MemoryStorage("")
    document = JSONDocument(storage, can_write=True)
    document.save()
    assert storage.text == ""
    assert document.is_synced


def test_save_writes_pretty_json_in_insertion_order() -> None:
    storage = MemoryStorage("")
    document = JSONDocument(storage, can_write=True)
    document.set_raw("key", "value")
    document.set_raw("another", {"nested": [1, 2]})
    document.save()
    assert document.is_synced
    assert storage.read() == '{\n  "key": "value",\n  "another": {\n    "nested": [\n      1,\n      2\n    ]\n  }\n}'


def test_save_keeps_non_ascii_text(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    document = JSONDocument.from_file(path)
    document.set_raw("git.user.name", "Zoë")
    document.save()
    assert "Zoë" in path.read_text(encoding="utf-8")
    assert json.loads(path.read_text(encoding="utf-8")) == {"git.user.name": "Zoë"}


def test_save_rejects_unserialisable_values() -> None:
    document, storage = writable_document()
    document.set_raw("key", object())
    with pytest.raises(ParseError):
        document.save()
    assert storage.writes == 0
    assert not document.is_synced


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_save_rejects_non_finite_numbers(number: float) -> None:
    document, storage = writable_document()
    document.set("ratio", number)
    with pytest.raises(ParseError):
        document.save()
    assert storage.writes == 0
    assert storage.text == "{}"


def test_typed_get_with_parameterised_containers() -> None:
    document = JSONDocument.from_data('{"names": ["a", "b"], "mixed": ["a", 1], "ports": {"http": 80}, "labels": {"x": "y"}}')
    assert document.get("names", list[str]) == ["a", "b"]
    assert document.get("mixed", list[str]) is None
    assert document.get("ports", dict[str, int]) == {"http": 80}
    assert document.get("labels", dict[str, int]) is None
    assert document.get("names", dict[str, int]) is None


def test_from_file_is_writable_and_synced(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"a": 1}', encoding="utf-8")
    document = JSONDocument.from_file(path)
    assert document.can_write
    assert document.is_synced
    assert document.path == path
