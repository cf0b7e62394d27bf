"""Closed set of configuration keys the application understands."""

from __future__ import annotations

from enum import Enum


class KnownKey(str, Enum):
    """Recognized configuration keys mapped to their stable dotted names.

    Typed accessors on :class:`config_sh.core.AppConfig` accept members of this
    enumeration instead of raw strings.

    Examples
    --------
    >>> KnownKey.LOG_LEVEL.key
    'core.log.level'
    >>> KnownKey.from_str("core.repo.path") is KnownKey.REPO_PATH
    True
    >>> KnownKey.from_str("core.unknown") is None
    True
    """

    REPO_PATH = "core.repo.path"
    GIT_USER = "git.user.name"
    GIT_EMAIL = "git.user.email"
    LOG_LEVEL = "core.log.level"

    @property
    def key(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> KnownKey | None:
        """Return the member whose dotted name is *value*, or ``None``."""

        for member in cls:
            if member.value == value:
                return member
        return None

    @classmethod
    def list(cls) -> list[str]:
        """Return every dotted key in declaration order."""

        return [member.value for member in cls]

    def __str__(self) -> str:
        return self.value
