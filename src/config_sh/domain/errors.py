"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the resolver, the bootstrap,
and the CLI. The hierarchy lives in the domain layer so every outer layer can
depend on it without pulling in I/O.

Contents
--------
* :class:`ConfigError` – umbrella base class for all package failures.
* :class:`StorageError` / :class:`NotFound` – backing-store read/write failures.
* :class:`ParseError` – malformed JSON on load or an unserialisable tree on save.
* :class:`WriteForbidden` – save attempted on a read-only document.
* :class:`TypeMismatch` – a value cannot be converted to the requested type.
* :class:`RepositoryError` – the repository-information lookup failed.
* :class:`BootstrapError` – the source stack could not be assembled at startup.

System Role
-----------
Reads never raise: :class:`TypeMismatch` is caught by typed accessors and
reported as "no value". :meth:`ConfigResolver.sync` collects per-source errors
instead of raising them. Everything else propagates to the caller.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``config_sh``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class StorageError(ConfigError):
    """Raised when a backing store cannot be read or written.

    Typical Sources
    ---------------
    :class:`config_sh.adapters.storage.default.FileStorage` wrapping an
    :class:`OSError` (permission denied, directory in place of a file, ...).
    """


class NotFound(StorageError):
    """The backing file does not exist."""


class ParseError(ConfigError):
    """Raised when stored text is not a JSON object, or a value tree cannot be serialised.

    The document that raised it keeps its previous in-memory state.
    """


class WriteForbidden(ConfigError):
    """Raised by ``save()`` on a document that was created (or downgraded) read-only."""


class TypeMismatch(ConfigError):
    """A stored value cannot be converted to the requested Python type.

    Current Usage
    -------------
    Raised by :mod:`config_sh.domain.values` and caught by every typed read,
    which then reports the key as absent.
    """


class RepositoryError(ConfigError):
    """The repository-information lookup failed.

    Covers paths that are not a working copy, a missing remote, missing
    committer identity, and a missing ``git`` executable.
    """


class BootstrapError(ConfigError):
    """Startup could not create or load one of the configuration scopes."""
