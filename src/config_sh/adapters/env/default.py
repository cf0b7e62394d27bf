"""Environment variable adapter.

Purpose
-------
Look configuration keys up in the process environment. Each dotted key is read
verbatim behind a prefix (``SH_core.log.level``); nothing is case-folded or
nested. The adapter is read-only.

Key behaviours
--------------
* ``prefix + "_" + key`` when a prefix is configured, the bare key otherwise.
* The environment mapping is injectable so tests never touch ``os.environ``.
* Typed reads parse the text and report ``None`` when it does not fit.
* A disabled reader answers nothing.
"""

from __future__ import annotations

import os
from typing import Mapping, TypeVar

from ...domain.errors import TypeMismatch
from ...domain.values import parse_text
from ...observability import log_trace

V = TypeVar("V")

ENV_PREFIX = "SH"


def env_key(prefix: str | None, key: str) -> str:
    """Return the environment variable name that holds *key*.

    Examples
    --------
    >>> env_key("SH", "core.log.level")
    'SH_core.log.level'
    >>> env_key(None, "core.log.level")
    'core.log.level'
    """

    return f"{prefix}_{key}" if prefix else key


class DefaultEnvReader:
    """Read prefixed configuration keys from an environment mapping."""

    def __init__(
        self,
        prefix: str | None = ENV_PREFIX,
        *,
        environ: Mapping[str, str] | None = None,
        enabled: bool = True,
    ) -> None:
        """Initialise the reader.

        Parameters
        ----------
        prefix:
            Prefix joined to every key with ``_``; ``None`` reads bare keys.
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        enabled:
            ``False`` makes every lookup report nothing.
        """

        self.prefix = prefix
        self.enabled = enabled
        self._environ = environ if environ is not None else os.environ

    def key_for(self, key: str) -> str:
        return env_key(self.prefix, key)

    def get_value(self, key: str) -> str | None:
        """Return the raw text stored for *key*, or ``None``.

        Examples
        --------
        >>> reader = DefaultEnvReader(environ={"SH_core.log.level": "trace"})
        >>> reader.get_value("core.log.level")
        'trace'
        >>> DefaultEnvReader(environ={"SH_a": "1"}, enabled=False).get_value("a") is None
        True
        """

        if not self.enabled:
            return None
        name = self.key_for(key)
        value = self._environ.get(name)
        log_trace("env_lookup", scope="env", path=None, variable=name, found=value is not None)
        return value

    def get(self, key: str, target: type[V]) -> V | None:
        """Return the value for *key* parsed as *target*; unparsable text is ``None``."""

        text = self.get_value(key)
        if text is None:
            return None
        try:
            return parse_text(text, target)
        except TypeMismatch:
            return None
