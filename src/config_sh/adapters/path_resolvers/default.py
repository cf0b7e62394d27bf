"""Filesystem locations of the configuration scopes.

Purpose
-------
Encapsulate every filesystem convention the bootstrap relies on: where the
machine file lives by default, which file marks the cwd scope, and how the
project-scope directory is derived from the redirect pointer stored in the
machine file.

Contents
--------
* :data:`CONFIG_FILENAME` – conventional hidden filename for cwd/project scopes.
* :func:`default_machine_config_path` – ``~/.config-sh.json`` with a cwd fallback.
* :func:`resolve_project_dir` – relative pointers resolve against the machine
  file's directory, never the process working directory.
* :class:`DefaultPathResolver` – bundles the above for one machine file.
"""

from __future__ import annotations

import os
from pathlib import Path

from ...observability import log_debug

CONFIG_FILENAME = ".config-sh.json"


def default_machine_config_path(home: Path | None = None) -> Path:
    """Return the machine config path used when none is supplied.

    Examples
    --------
    >>> default_machine_config_path(Path("/home/u")).as_posix()
    '/home/u/.config-sh.json'
    """

    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            return Path(CONFIG_FILENAME)
    return home / CONFIG_FILENAME


def resolve_project_dir(machine_file: Path, stored: str | os.PathLike[str]) -> Path:
    """Resolve the project directory named by the redirect pointer *stored*.

    Absolute pointers are used as-is. Relative ones are joined to the machine
    file's parent directory. ``..`` segments are collapsed lexically so the
    result does not depend on the directory existing yet.

    Examples
    --------
    >>> resolve_project_dir(Path("/home/u/.config-sh.json"), "../myrepo").as_posix()
    '/home/myrepo'
    >>> resolve_project_dir(Path("/home/u/.config-sh.json"), "/srv/app").as_posix()
    '/srv/app'
    """

    pointer = Path(stored).expanduser()
    if not pointer.is_absolute():
        pointer = machine_file.parent / pointer
    return Path(os.path.normpath(pointer))


class DefaultPathResolver:
    """Resolve scope locations relative to one machine config file.

    Why
    ----
    Centralise path discovery so the bootstrap stays free of filesystem rules
    and tests can inject the working directory.
    """

    def __init__(self, machine_file: Path | str, *, cwd: Path | None = None) -> None:
        """Store the canonical machine file and the working directory.

        Parameters
        ----------
        machine_file:
            Path of the machine-scope file. It is made absolute here; symlinks
            are resolved when the file already exists.
        cwd:
            Working directory used for the cwd scope. Defaults to
            :meth:`Path.cwd`.
        """

        self.machine_file = Path(machine_file).expanduser().resolve()
        self.cwd = (cwd or Path.cwd()).resolve()

    def machine(self) -> Path:
        return self.machine_file

    def cwd_config(self) -> Path | None:
        """Return the cwd-scope file when it exists, otherwise ``None``."""

        candidate = self.cwd / CONFIG_FILENAME
        found = candidate.is_file()
        log_debug("path_candidate", scope="cwd", path=str(candidate), exists=found)
        return candidate if found else None

    def project_dir(self, stored: str | os.PathLike[str]) -> Path:
        return resolve_project_dir(self.machine_file, stored)

    def project_config(self, stored: str | os.PathLike[str]) -> Path:
        """Return the project-scope file inside the redirected directory."""

        path = self.project_dir(stored) / CONFIG_FILENAME
        log_debug("path_candidate", scope="project", path=str(path), pointer=str(stored))
        return path
