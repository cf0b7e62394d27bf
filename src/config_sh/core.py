"""Composition root for ``config_sh``.

Purpose
-------
Build the concrete source stack for one process: the machine-scope document,
the working-directory document, the project-scope document reached through
the redirect pointer, and (on request) the environment overlay.

Contents
--------
* :class:`AppConfig` – the bootstrap; owns the resolver and the canonical
  machine file path.

System Role
-----------
Effective precedence after :meth:`AppConfig.from_json` and
:meth:`AppConfig.use_env` is ``env > machine > cwd > project``. Defaults are
appended in the order machine, cwd, project, and the environment is placed on
top. Startup failures are raised as :class:`BootstrapError` chained to the
underlying storage or parse error.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, TypeVar

from .adapters.env.default import ENV_PREFIX, DefaultEnvReader
from .adapters.file_loaders.json_document import JSONDocument
from .adapters.git.default import GitRepoInspector
from .adapters.path_resolvers.default import CONFIG_FILENAME, DefaultPathResolver, default_machine_config_path
from .adapters.storage.default import ensure_file
from .application.ports import ConfigSource, RepoInspector
from .application.resolver import ConfigResolver, SyncOutcome
from .application.sources import AbsentSource, EnvSource, JSONSource
from .domain.errors import BootstrapError, ConfigError, RepositoryError
from .domain.keys import KnownKey
from .domain.repo import RepoInfo
from .observability import bind_trace_id, log_debug, log_info, make_event

V = TypeVar("V")


class AppConfig:
    """Process-wide configuration built from one machine config file.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> machine = Path(tmp.name) / "home" / ".config-sh.json"
    >>> config = AppConfig.from_json(machine, cwd=Path(tmp.name))
    >>> config.set(KnownKey.LOG_LEVEL, "debug")
    True
    >>> [outcome.ok for outcome in config.sync()]
    [True]
    >>> config.get(KnownKey.LOG_LEVEL)
    'debug'
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        root: Path,
        resolver: ConfigResolver | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        inspector: RepoInspector | None = None,
    ) -> None:
        self.root = root
        self.resolver = resolver or ConfigResolver()
        self.project_dir: Path | None = None
        self._environ = environ
        self._inspector = inspector or GitRepoInspector()

    @classmethod
    def from_json(
        cls,
        path: Path | str | None = None,
        *,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
        inspector: RepoInspector | None = None,
    ) -> AppConfig:
        """Assemble the default source tier from the machine file at *path*.

        Parameters
        ----------
        path:
            Machine-scope config file. Created (with parents) containing ``{}``
            when missing. Defaults to :func:`default_machine_config_path`.
        cwd:
            Directory searched for the cwd-scope file. Defaults to the process
            working directory.
        environ:
            Mapping used later by :meth:`use_env`. Defaults to ``os.environ``.
        inspector:
            Repository-information collaborator. Defaults to
            :class:`GitRepoInspector`.

        Raises
        ------
        BootstrapError
            When a scope file cannot be created, read or parsed.
        """

        bind_trace_id(None)
        machine_path = Path(path).expanduser() if path is not None else default_machine_config_path()
        _ensure_scope_file("machine", machine_path)
        paths = DefaultPathResolver(machine_path, cwd=cwd)
        config = cls(paths.machine(), environ=environ, inspector=inspector)

        machine = _load_scope("machine", config.root)
        config.resolver.register_default(JSONSource(machine, scope="machine"))
        config._register_cwd(paths)
        config._register_project(paths, machine)
        log_info("configuration_ready", **make_event("machine", str(config.root), {"sources": len(config.resolver)}))
        return config

    def use_env(self, prefix: str | None = ENV_PREFIX) -> int:
        """Place an environment overlay above every registered source; return its slot."""

        reader = DefaultEnvReader(prefix, environ=self._environ)
        return self.resolver.register_top(EnvSource(reader, scope="env"))

    def get(self, key: KnownKey, target: type[V] = str) -> V | None:  # type: ignore[assignment]
        """Return the resolved value of *key* converted to *target*."""

        return self.resolver.read(_require_known(key).key, target)

    def get_raw(self, key: KnownKey) -> Any | None:
        return self.resolver.read_raw(_require_known(key).key)

    def set(self, key: KnownKey, value: Any) -> bool:
        """Write *value* for *key* into the highest-precedence mutable source."""

        return self.resolver.write(_require_known(key).key, value)

    def origin(self, key: KnownKey) -> ConfigSource | None:
        return self.resolver.origin(_require_known(key).key)

    def sync(self) -> list[SyncOutcome]:
        return self.resolver.sync()

    def repo_info(self) -> RepoInfo:
        """Inspect the working copy that the project scope points at.

        Raises
        ------
        RepositoryError
            When no project path is configured or the lookup fails.
        """

        if self.project_dir is None:
            raise RepositoryError(f"{KnownKey.REPO_PATH.key} is not configured in {self.root}")
        return self._inspector.inspect(self.project_dir)

    def describe(self) -> list[dict[str, Any]]:
        """Return one row per source in precedence order."""

        rows: list[dict[str, Any]] = []
        for source in self.resolver:
            path = source.path
            rows.append(
                {
                    "scope": source.scope,
                    "kind": source.kind,
                    "path": str(path) if path is not None else None,
                    "writable": bool(getattr(source, "can_write", False)),
                    "synced": getattr(source, "is_synced", None),
                }
            )
        return rows

    def _register_cwd(self, paths: DefaultPathResolver) -> None:
        found = paths.cwd_config()
        if found is None or self._already_registered(found):
            log_debug("scope_absent", **make_event("cwd", str(paths.cwd / CONFIG_FILENAME)))
            self.resolver.register_default(AbsentSource(scope="cwd"))
            return
        document = _load_scope("cwd", found)
        self.resolver.register_default(JSONSource(document, scope="cwd"))

    def _register_project(self, paths: DefaultPathResolver, machine: JSONDocument) -> None:
        stored = machine.get(KnownKey.REPO_PATH.key, str)
        if stored is None:
            log_debug("scope_absent", **make_event("project", None))
            self.resolver.register_default(AbsentSource(scope="project"))
            return
        self.project_dir = paths.project_dir(stored)
        project_file = paths.project_config(stored)
        log_debug("project_redirected", **make_event("project", str(project_file), {"pointer": stored}))
        if self._already_registered(project_file):
            self.resolver.register_default(AbsentSource(scope="project"))
            return
        _ensure_scope_file("project", project_file)
        document = _load_scope("project", project_file)
        self.resolver.register_default(JSONSource(document, scope="project"))

    def _already_registered(self, path: Path) -> bool:
        target = _canonical(path)
        return any(source.path is not None and _canonical(source.path) == target for source in self.resolver)


def _require_known(key: KnownKey) -> KnownKey:
    if not isinstance(key, KnownKey):
        raise TypeError(f"expected a KnownKey member, got {key!r}")
    return key


def _ensure_scope_file(scope: str, path: Path) -> None:
    try:
        created = ensure_file(path)
    except ConfigError as exc:
        raise BootstrapError(f"Cannot create {scope} configuration {path}: {exc}") from exc
    if created:
        log_info("scope_created", **make_event(scope, str(path)))


def _load_scope(scope: str, path: Path) -> JSONDocument:
    try:
        return JSONDocument.from_file(path)
    except ConfigError as exc:
        raise BootstrapError(f"Cannot load {scope} configuration {path}: {exc}") from exc


def _canonical(path: Path) -> str:
    return os.path.normcase(str(Path(path).resolve()))


__all__ = ["AppConfig"]
