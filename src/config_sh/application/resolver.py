"""Priority-ordered configuration resolver.

Purpose
-------
Compose configuration sources into one logical view. Reads return the value of
the first source (ascending slot) that has one; writes land in the first
mutable source; :meth:`ConfigResolver.sync` persists every writable source with
unsaved changes and reports one outcome per attempt.

Contents
--------
* :class:`SyncOutcome` – result of persisting one source.
* :class:`ConfigResolver` – the composition and routing layer.

System Role
-----------
The resolver never creates sources; :class:`config_sh.core.AppConfig` registers
them. ``register_default`` appends below everything registered so far and
``register_top`` places a source above everything registered so far.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, TypeVar

from ..domain.errors import ConfigError
from ..domain.priority import PriorityCollection
from ..observability import log_debug, log_error, log_info, log_trace
from .ports import ConfigSource

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Outcome of saving one source during :meth:`ConfigResolver.sync`.

    ``error`` is ``None`` when the save succeeded.
    """

    scope: str
    path: Path | None
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConfigResolver:
    """Route reads and writes across a :class:`PriorityCollection` of sources.

    Examples
    --------
    >>> from config_sh.adapters.file_loaders.json_document import JSONDocument
    >>> from config_sh.application.sources import JSONSource
    >>> resolver = ConfigResolver()
    >>> _ = resolver.register_default(JSONSource(JSONDocument.from_data('{"key": "low"}')))
    >>> _ = resolver.register_top(JSONSource(JSONDocument.from_data('{"key": "high"}')))
    >>> resolver.read("key", str)
    'high'
    """

    def __init__(self) -> None:
        self._sources: PriorityCollection[ConfigSource] = PriorityCollection()

    @property
    def sources(self) -> PriorityCollection[ConfigSource]:
        return self._sources

    def __iter__(self) -> Iterator[ConfigSource]:
        """Yield sources from highest to lowest precedence."""

        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def register_default(self, source: ConfigSource) -> int:
        """Register *source* below every source registered so far; return its slot."""

        slot = self._sources.add(source)
        log_debug("source_registered", scope=source.scope, path=_path_text(source), tier="default", slot=slot)
        return slot

    def register_top(self, source: ConfigSource) -> int:
        """Register *source* above every source registered so far; return its slot."""

        slot = self._sources.add_top(source)
        log_debug("source_registered", scope=source.scope, path=_path_text(source), tier="top", slot=slot)
        return slot

    def read(self, key: str, target: type[V]) -> V | None:
        """Return the first value for *key* convertible to *target*, or ``None``.

        A source whose value does not fit *target* is skipped and the search
        continues with the next one.
        """

        value = self._sources.map_first(lambda source: source.get(key, target))
        _log_lookup(key, value)
        return value

    def read_raw(self, key: str) -> Any | None:
        """Return the first stored value for *key*, unconverted, or ``None``."""

        value = self._sources.map_first(lambda source: source.get_raw(key))
        _log_lookup(key, value)
        return value

    def origin(self, key: str) -> ConfigSource | None:
        """Return the source whose raw value for *key* wins, or ``None``."""

        return self._sources.first(lambda source: source.get_raw(key) is not None)

    def write(self, key: str, value: Any) -> bool:
        """Store *value* in the first mutable source; ``False`` when there is none."""

        target = self._first_mutable()
        if target is None:
            log_debug("write_dropped", scope=None, path=None, key=key)
            return False
        applied = target.set(key, value)
        log_debug("write_routed", scope=target.scope, path=_path_text(target), key=key)
        return applied

    def write_raw(self, key: str, value: Any) -> bool:
        """Store *value* unnormalised in the first mutable source."""

        target = self._first_mutable()
        if target is None:
            log_debug("write_dropped", scope=None, path=None, key=key)
            return False
        applied = target.set_raw(key, value)
        log_debug("write_routed", scope=target.scope, path=_path_text(target), key=key)
        return applied

    def sync(self) -> list[SyncOutcome]:
        """Save every writable source with unsaved changes.

        Sync is not atomic: each source is attempted independently and a
        failure is recorded in its outcome instead of being raised. Sources that
        are synced, read-only or not JSON documents contribute no outcome.
        """

        log_trace("sync_started", scope=None, path=None, sources=len(self._sources))
        outcomes = self._sources.map_all(_save_if_dirty)
        failed = sum(1 for outcome in outcomes if not outcome.ok)
        log_info("sync_finished", scope=None, path=None, saved=len(outcomes) - failed, failed=failed)
        return outcomes

    def _first_mutable(self) -> ConfigSource | None:
        return self._sources.first(lambda source: source.is_mutable)


def _save_if_dirty(source: ConfigSource) -> SyncOutcome | None:
    if not source.needs_save():
        return None
    try:
        source.save()
    except ConfigError as exc:
        log_error("sync_failed", scope=source.scope, path=_path_text(source), error=str(exc))
        return SyncOutcome(source.scope, source.path, exc)
    return SyncOutcome(source.scope, source.path)


def _log_lookup(key: str, value: Any) -> None:
    if value is None:
        log_trace("value_missing", scope=None, path=None, key=key)
    else:
        log_trace("value_resolved", scope=None, path=None, key=key)


def _path_text(source: ConfigSource) -> str | None:
    path = source.path
    return str(path) if path is not None else None
