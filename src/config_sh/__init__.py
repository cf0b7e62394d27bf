"""Public package surface of ``config_sh``.

Layered configuration for a command-line tool: JSON files scoped to the
machine, the working directory and a redirected project directory, plus an
environment overlay, resolved with a fixed precedence and written back to
exactly one file. The stable entry points are re-exported here so callers can
``from config_sh import AppConfig, KnownKey``.
"""

from __future__ import annotations

from .adapters.env.default import ENV_PREFIX, DefaultEnvReader
from .adapters.file_loaders.json_document import JSONDocument
from .adapters.path_resolvers.default import CONFIG_FILENAME, default_machine_config_path
from .application.resolver import ConfigResolver, SyncOutcome
from .application.sources import AbsentSource, EnvSource, JSONSource
from .core import AppConfig
from .domain.errors import (
    BootstrapError,
    ConfigError,
    NotFound,
    ParseError,
    RepositoryError,
    StorageError,
    TypeMismatch,
    WriteForbidden,
)
from .domain.keys import KnownKey
from .domain.priority import PriorityCollection
from .domain.repo import RepoInfo
from .observability import bind_trace_id, configure_logging, get_logger

__all__ = [
    "AbsentSource",
    "AppConfig",
    "BootstrapError",
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigResolver",
    "DefaultEnvReader",
    "ENV_PREFIX",
    "EnvSource",
    "JSONDocument",
    "JSONSource",
    "KnownKey",
    "NotFound",
    "ParseError",
    "PriorityCollection",
    "RepoInfo",
    "RepositoryError",
    "StorageError",
    "SyncOutcome",
    "TypeMismatch",
    "WriteForbidden",
    "bind_trace_id",
    "configure_logging",
    "default_machine_config_path",
    "get_logger",
]
