"""Repository-information adapter backed by the ``git`` executable.

Purpose
-------
Implement :class:`config_sh.application.ports.RepoInspector`: given a path that
should be a working copy, report its top-level directory, the URL of one
remote, and the committer identity configured for it.

System Role
-----------
Used by :meth:`config_sh.core.AppConfig.repo_info` and the ``repo`` CLI
command. The adapter only reads; it never fetches or changes the repository.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Sequence

from ...domain.errors import RepositoryError
from ...domain.repo import RepoInfo
from ...observability import log_debug, log_error

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

DEFAULT_REMOTE = "origin"


class GitRepoInspector:
    """Query a working copy through ``git -C <path> ...`` subprocess calls."""

    def __init__(self, remote: str = DEFAULT_REMOTE, *, git: str = "git", runner: Runner | None = None) -> None:
        """Configure the inspector.

        Parameters
        ----------
        remote:
            Name of the remote whose URL is reported.
        git:
            Executable to invoke.
        runner:
            Replacement for :func:`subprocess.run`, used by tests.
        """

        self.remote = remote
        self._git = git
        self._run = runner or subprocess.run

    def inspect(self, path: Path) -> RepoInfo:
        """Return :class:`RepoInfo` for the working copy at *path*.

        Raises
        ------
        RepositoryError
            When *path* is not a working copy, the remote is missing, the
            committer identity is not configured, or ``git`` cannot be run.
        """

        toplevel = self._query(path, ["rev-parse", "--show-toplevel"], f"{path} is not a git working copy")
        remote_url = self._query(path, ["remote", "get-url", self.remote], f"remote {self.remote!r} not found in {path}")
        user = self._query(path, ["config", "--get", "user.name"], f"user.name is not configured for {path}")
        email = self._query(path, ["config", "--get", "user.email"], f"user.email is not configured for {path}")
        info = RepoInfo(path=Path(toplevel), remote=self.remote, remote_url=remote_url, user=user, email=email)
        log_debug("repo_inspected", scope="project", path=str(info.path), remote=self.remote)
        return info

    def _query(self, path: Path, args: Sequence[str], failure: str) -> str:
        command = [self._git, "-C", str(path), *args]
        try:
            proc = self._run(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            log_error("repo_error", scope="project", path=str(path), error=str(exc))
            raise RepositoryError(f"Cannot run {self._git}: {exc}") from exc
        candidate = (proc.stdout or "").strip()
        if proc.returncode != 0 or not candidate:
            detail = (proc.stderr or "").strip()
            log_error("repo_error", scope="project", path=str(path), error=detail or failure)
            raise RepositoryError(f"{failure}: {detail}" if detail else failure)
        return candidate
