"""Shared fixtures for the configuration test-suite.

``ScopeSandbox`` lays out a fake home directory (holding the machine file), a
working directory and a project directory under ``tmp_path`` so scenarios can
shape each scope independently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from config_sh.adapters.file_loaders.json_document import JSONDocument
from config_sh.adapters.storage.default import MemoryStorage
from config_sh.domain.errors import StorageError

CONFIG_NAME = ".config-sh.json"


@dataclass
class ScopeSandbox:
    root: Path
    home: Path
    cwd: Path
    project: Path
    env: dict[str, str] = field(default_factory=dict)

    @property
    def machine_file(self) -> Path:
        return self.home / CONFIG_NAME

    @property
    def cwd_file(self) -> Path:
        return self.cwd / CONFIG_NAME

    @property
    def project_file(self) -> Path:
        return self.project / CONFIG_NAME

    def write_machine(self, data: dict[str, Any]) -> Path:
        return write_json(self.machine_file, data)

    def write_cwd(self, data: dict[str, Any]) -> Path:
        return write_json(self.cwd_file, data)

    def write_project(self, data: dict[str, Any]) -> Path:
        return write_json(self.project_file, data)


def create_scope_sandbox(tmp_path: Path) -> ScopeSandbox:
    """Create ``home/``, ``work/`` and ``repos/project/`` under *tmp_path*."""

    root = tmp_path.resolve()
    home = root / "home"
    cwd = root / "work"
    project = root / "repos" / "project"
    for directory in (home, cwd):
        directory.mkdir(parents=True, exist_ok=True)
    return ScopeSandbox(root=root, home=home, cwd=cwd, project=project)


def write_json(path: Path, data: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


class FailingStorage(MemoryStorage):
    """In-memory store whose writes fail once :attr:`broken` is set."""

    def __init__(self, text: str = "{}") -> None:
        super().__init__(text)
        self.broken = False
        self.writes = 0

    def write(self, text: str) -> None:
        if self.broken:
            raise StorageError("disk is read-only")
        self.writes += 1
        super().write(text)


def writable_document(text: str = "{}") -> tuple[JSONDocument, FailingStorage]:
    """Return a loaded, writable in-memory document and its store."""

    storage = FailingStorage(text)
    document = JSONDocument(storage, can_write=True)
    document.load()
    return document, storage
