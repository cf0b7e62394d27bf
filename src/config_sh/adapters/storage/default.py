"""Backing stores for JSON documents.

Purpose
-------
Implement the :class:`config_sh.application.ports.Storage` protocol twice: a
file on disk and an in-memory text buffer. Documents read and write through
this seam, so tests can run the whole document lifecycle without a filesystem.

Contents
--------
* :class:`FileStorage` – UTF-8 file; ``OSError`` becomes :class:`StorageError`.
* :class:`MemoryStorage` – string buffer; never fails.
* :func:`ensure_file` – create a file (and its parents) seeded with ``{}``.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import NotFound, StorageError
from ...observability import log_debug, log_error

EMPTY_DOCUMENT = "{}"


class FileStorage:
    """Read and write a single UTF-8 text file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        """Return the file contents, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> target = Path(tmp.name) / "config.json"
        >>> _ = target.write_text('{"a": 1}', encoding="utf-8")
        >>> FileStorage(target).read()
        '{"a": 1}'
        >>> tmp.cleanup()
        """

        if not self._path.is_file():
            log_error("storage_error", scope="file", path=str(self._path), error="missing")
            raise NotFound(f"Configuration file not found: {self._path}")
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log_error("storage_error", scope="file", path=str(self._path), error=str(exc))
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc
        log_debug("storage_read", scope="file", path=str(self._path), size=len(text))
        return text

    def write(self, text: str) -> None:
        """Replace the file contents with *text*."""

        try:
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:
            log_error("storage_error", scope="file", path=str(self._path), error=str(exc))
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc
        log_debug("storage_written", scope="file", path=str(self._path), size=len(text))

    def __repr__(self) -> str:
        return f"FileStorage({str(self._path)!r})"


class MemoryStorage:
    """Keep the document text in memory."""

    path = None

    def __init__(self, text: str = "") -> None:
        self.text = text

    def read(self) -> str:
        return self.text

    def write(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"MemoryStorage(size={len(self.text)})"


def ensure_file(path: Path, *, seed: str = EMPTY_DOCUMENT) -> bool:
    """Create *path* (and its parent directories) containing *seed* when missing.

    Returns ``True`` when the file was created. Filesystem failures surface as
    :class:`StorageError`.
    """

    if path.is_file():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(seed, encoding="utf-8")
    except OSError as exc:
        log_error("storage_error", scope="file", path=str(path), error=str(exc))
        raise StorageError(f"Cannot create {path}: {exc}") from exc
    log_debug("storage_written", scope="file", path=str(path), size=len(seed))
    return True
