"""The three configuration source variants.

Purpose
-------
Give the resolver one uniform object per scope. The set of variants is closed:

* :class:`JSONSource` – wraps a :class:`JSONDocument`; the only mutable kind.
* :class:`EnvSource` – wraps an environment reader; read-only.
* :class:`AbsentSource` – a scope that could not be located; answers nothing.

Writes against read-only or absent sources return ``False`` ("not
applicable") instead of raising. ``save`` and ``load`` on them are no-ops.

System Role
-----------
Created by :class:`config_sh.core.AppConfig` and stored in the resolver's
:class:`~config_sh.domain.priority.PriorityCollection`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..adapters.env.default import DefaultEnvReader
    from ..adapters.file_loaders.json_document import JSONDocument

V = TypeVar("V")


class JSONSource:
    """Source backed by a :class:`JSONDocument`."""

    kind = "json"

    def __init__(self, document: JSONDocument, *, scope: str = "json") -> None:
        self.document = document
        self.scope = scope

    @property
    def is_mutable(self) -> bool:
        return True

    @property
    def path(self) -> Path | None:
        return self.document.path

    @property
    def is_synced(self) -> bool:
        return self.document.is_synced

    @property
    def can_write(self) -> bool:
        return self.document.can_write

    def get(self, key: str, target: type[V]) -> V | None:
        return self.document.get(key, target)

    def get_raw(self, key: str) -> Any | None:
        return self.document.get_raw(key)

    def set(self, key: str, value: Any) -> bool:
        self.document.set(key, value)
        return True

    def set_raw(self, key: str, value: Any) -> bool:
        self.document.set_raw(key, value)
        return True

    def needs_save(self) -> bool:
        return self.document.can_write and not self.document.is_synced

    def save(self) -> None:
        self.document.save()

    def load(self) -> None:
        self.document.load()

    def __repr__(self) -> str:
        return f"JSONSource(scope={self.scope!r}, document={self.document!r})"


class EnvSource:
    """Read-only source backed by the process environment."""

    kind = "env"
    path = None

    def __init__(self, reader: DefaultEnvReader, *, scope: str = "env") -> None:
        self.reader = reader
        self.scope = scope

    @property
    def is_mutable(self) -> bool:
        return False

    @property
    def prefix(self) -> str | None:
        return self.reader.prefix

    def get(self, key: str, target: type[V]) -> V | None:
        return self.reader.get(key, target)

    def get_raw(self, key: str) -> Any | None:
        return self.reader.get_value(key)

    def set(self, key: str, value: Any) -> bool:
        return False

    def set_raw(self, key: str, value: Any) -> bool:
        return False

    def needs_save(self) -> bool:
        return False

    def save(self) -> None:
        return None

    def load(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"EnvSource(scope={self.scope!r}, prefix={self.reader.prefix!r})"


class AbsentSource:
    """Placeholder for a scope that does not exist on this machine."""

    kind = "absent"
    path = None

    def __init__(self, *, scope: str = "absent") -> None:
        self.scope = scope

    @property
    def is_mutable(self) -> bool:
        return False

    def get(self, key: str, target: type[V]) -> V | None:
        return None

    def get_raw(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any) -> bool:
        return False

    def set_raw(self, key: str, value: Any) -> bool:
        return False

    def needs_save(self) -> bool:
        return False

    def save(self) -> None:
        return None

    def load(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"AbsentSource(scope={self.scope!r})"
