"""Mutable JSON configuration document.

Purpose
-------
Hold one scope's JSON object in memory, answer raw and typed lookups, accept
writes, and persist the tree through an injected
:class:`~config_sh.application.ports.Storage`. The document tracks whether its
in-memory state still equals what the store last held.

Contents
--------
* :class:`JSONDocument` – the document with ``from_file`` / ``from_data``
  constructors.

System Role
-----------
Wrapped by :class:`config_sh.application.sources.JSONSource`; created by the
bootstrap for the machine, cwd and project scopes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from ...application.ports import Storage
from ...domain.errors import ParseError, TypeMismatch, WriteForbidden
from ...domain.values import coerce_json, to_json_value
from ...observability import log_debug, log_error
from ..storage.default import FileStorage, MemoryStorage

V = TypeVar("V")


class JSONDocument:
    """A JSON object backed by a file or an in-memory buffer.

    Invariants
    ----------
    * ``is_synced`` turns ``False`` on every successful set and ``True`` after a
      successful :meth:`load` or :meth:`save`.
    * A key holding JSON ``null`` reads exactly like a missing key.
    * :meth:`save` on a document with ``can_write == False`` raises
      :class:`WriteForbidden` and leaves ``is_synced`` untouched.

    Examples
    --------
    >>> doc = JSONDocument.from_data('{"editor": "vim", "gone": null}')
    >>> doc.get_raw("editor"), doc.get_raw("gone")
    ('vim', None)
    >>> doc.set_raw("editor", "nano")
    >>> doc.is_synced
    False
    """

    def __init__(self, storage: Storage, *, can_write: bool) -> None:
        self._storage = storage
        self._data: dict[str, Any] | None = None
        self._can_write = can_write
        self._synced = False

    @classmethod
    def from_file(cls, path: Path | str) -> JSONDocument:
        """Load a writable document from *path*.

        Raises :class:`~config_sh.domain.errors.NotFound` or
        :class:`~config_sh.domain.errors.StorageError` when the file cannot be
        read, and :class:`ParseError` when it is not a JSON object.
        """

        document = cls(FileStorage(path), can_write=True)
        document.load()
        return document

    @classmethod
    def from_data(cls, text: str) -> JSONDocument:
        """Load a read-only document from *text*; it starts out synced."""

        document = cls(MemoryStorage(text), can_write=False)
        document.load()
        return document

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def path(self) -> Path | None:
        return self._storage.path

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    @property
    def is_synced(self) -> bool:
        return self._synced

    @property
    def can_write(self) -> bool:
        return self._can_write

    def make_read_only(self) -> None:
        """Downgrade the document so later :meth:`save` calls are refused."""

        self._can_write = False

    def load(self) -> None:
        """Replace the in-memory tree with the parsed contents of the store.

        On failure the previous tree (possibly none) is kept.
        """

        text = self._storage.read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            log_error("document_invalid", scope="json", path=self._path_text(), error=str(exc))
            raise ParseError(f"Invalid JSON in {self._describe()}: {exc}") from exc
        if not isinstance(data, Mapping):
            log_error("document_invalid", scope="json", path=self._path_text(), error="root is not an object")
            raise ParseError(f"{self._describe()} does not contain a JSON object")
        self._data = dict(data)
        self._synced = True
        log_debug("document_loaded", scope="json", path=self._path_text(), keys=len(self._data))

    def get_raw(self, key: str) -> Any | None:
        """Return the value stored at *key*, treating JSON ``null`` as absent."""

        if self._data is None:
            return None
        return self._data.get(key)

    def get(self, key: str, target: type[V]) -> V | None:
        """Return the value at *key* converted to *target*, or ``None`` on mismatch."""

        value = self.get_raw(key)
        if value is None:
            return None
        try:
            return coerce_json(value, target)
        except TypeMismatch:
            return None

    def set_raw(self, key: str, value: Any) -> None:
        """Store *value* at *key*, creating the top-level object if needed."""

        if self._data is None:
            self._data = {}
        self._data[key] = value
        self._synced = False

    def set(self, key: str, value: Any) -> None:
        """Store *value* at *key* after normalising paths and tuples."""

        self.set_raw(key, to_json_value(value))

    def save(self) -> None:
        """Serialise the tree (2-space indent, insertion order) and write it.

        Raises :class:`WriteForbidden` for read-only documents and
        :class:`ParseError` for values JSON cannot represent (including NaN and
        infinities). A document that never held data saves as a successful no-op
        and is marked synced.
        """

        if not self._can_write:
            raise WriteForbidden(f"Cannot write to {self._describe()}")
        if self._data is None:
            self._synced = True
            return
        try:
            text = json.dumps(self._data, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            log_error("document_invalid", scope="json", path=self._path_text(), error=str(exc))
            raise ParseError(f"Cannot serialise {self._describe()}: {exc}") from exc
        self._storage.write(text)
        self._synced = True
        log_debug("document_saved", scope="json", path=self._path_text(), keys=len(self._data))

    def _path_text(self) -> str | None:
        path = self._storage.path
        return str(path) if path is not None else None

    def _describe(self) -> str:
        path = self._storage.path
        return str(path) if path is not None else "in-memory document"

    def __repr__(self) -> str:
        return f"JSONDocument({self._storage!r}, can_write={self._can_write}, synced={self._synced})"
