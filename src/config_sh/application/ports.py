"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the resolver and the bootstrap depend on so
concrete adapters (files, in-memory buffers, the process environment, git) can
be swapped in tests.

Contents
--------
* :class:`Storage` – minimal read/write capability behind a JSON document.
* :class:`ConfigSource` – the operations every source variant answers.
* :class:`RepoInspector` – the repository-information collaborator.

System Role
-----------
These protocols enforce Dependency Inversion. The three source variants in
:mod:`config_sh.application.sources` implement :class:`ConfigSource`; the
storage and git adapters implement the other two.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from ..domain.repo import RepoInfo

V = TypeVar("V")


@runtime_checkable
class Storage(Protocol):
    """Backing store for the text of one JSON document.

    Why
    ----
    Documents must load from disk in production and from a string buffer in
    tests or for read-only defaults, without knowing which.
    """

    @property
    def path(self) -> Path | None:
        """Filesystem location, or ``None`` for in-memory stores."""

    def read(self) -> str:
        """Return the stored text or raise :class:`~config_sh.domain.errors.StorageError`."""

    def write(self, text: str) -> None:
        """Replace the stored text or raise :class:`~config_sh.domain.errors.StorageError`."""


@runtime_checkable
class ConfigSource(Protocol):
    """One scope's view of configuration values.

    Why
    ----
    The resolver treats every scope alike: it asks each source in precedence
    order and routes writes to the first mutable one.

    Attributes
    ----------
    scope:
        Name of the scope (``machine``, ``cwd``, ``project``, ``env``).
    kind:
        Variant tag: ``json``, ``env`` or ``absent``.
    is_mutable:
        ``True`` only for JSON documents; write routing selects on it.
    """

    scope: str
    kind: str

    @property
    def is_mutable(self) -> bool:
        ...

    @property
    def path(self) -> Path | None:
        ...

    def get(self, key: str, target: type[V]) -> V | None:
        """Return the value at *key* converted to *target*, or ``None``."""

    def get_raw(self, key: str) -> Any | None:
        """Return the stored value at *key* unconverted, or ``None``."""

    def set(self, key: str, value: Any) -> bool:
        """Store *value* after normalisation; ``False`` means not applicable."""

    def set_raw(self, key: str, value: Any) -> bool:
        """Store *value* as given; ``False`` means not applicable."""

    def needs_save(self) -> bool:
        """Return ``True`` when the source is writable and holds unsaved changes."""

    def save(self) -> None:
        """Persist pending changes; read-only variants do nothing."""

    def load(self) -> None:
        """Re-read the backing store; variants without one do nothing."""


class RepoInspector(Protocol):
    """Read identity and remote details from a version-control working copy."""

    def inspect(self, path: Path) -> RepoInfo:
        """Return :class:`RepoInfo` or raise :class:`~config_sh.domain.errors.RepositoryError`."""
