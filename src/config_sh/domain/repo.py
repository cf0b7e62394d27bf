"""Repository-information value object returned by the git collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """Identity and remote details of a version-control working copy.

    Attributes
    ----------
    path:
        Top-level directory of the working copy.
    remote / remote_url:
        Remote name that was inspected (``origin`` by default) and its URL.
    user / email:
        Committer identity configured for the working copy.
    """

    path: Path
    remote: str
    remote_url: str
    user: str
    email: str
