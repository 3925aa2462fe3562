"""Attach ``last_modified_at`` to posts that were edited after their first commit.

Only two facts are read from the version history of a post's source file:
how many commits touched it and when the latest one happened.  A file with a
single commit has never been modified, so it gets no ``last_modified_at``.
Anything going wrong while asking git simply means the fact is unknown.

Builds on CI need the full history (``fetch-depth: 0``); a shallow clone
reports one commit per file and no post gets the field.
"""

from __future__ import annotations

import logging
import pathlib
import subprocess
from typing import Protocol

from .dates import iso8601_utc
from .models import Document

__all__ = ["GitHistory", "RevisionHistory", "attach_last_modified", "relative_source_path"]

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 30


class RevisionHistory(Protocol):
    def commit_count(self, rel_path: str) -> int: ...

    def last_commit_epoch(self, rel_path: str) -> int | None: ...


class GitHistory:
    """Answer revision questions by shelling out to ``git`` in ``repo_root``."""

    def __init__(self, repo_root: pathlib.Path | str, *, git: str = "git") -> None:
        self.repo_root = pathlib.Path(repo_root)
        self.git = git

    def _run(self, *args: str) -> str | None:
        command = [self.git, "-C", str(self.repo_root), *args]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=GIT_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("git failed for %s: %s", " ".join(command), exc)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def commit_count(self, rel_path: str) -> int:
        output = self._run("rev-list", "--count", "HEAD", "--", rel_path)
        try:
            return int(output or "")
        except ValueError:
            return 0

    def last_commit_epoch(self, rel_path: str) -> int | None:
        output = self._run("log", "-1", "--format=%ct", "--", rel_path)
        try:
            epoch = int(output or "")
        except ValueError:
            return None
        return epoch if epoch > 0 else None


def relative_source_path(doc: Document, repo_root: pathlib.Path | str | None) -> str:
    """``doc.path`` relative to ``repo_root`` when it lives under it."""

    path = pathlib.PurePath(doc.path)
    if repo_root is not None and path.is_absolute():
        try:
            return path.relative_to(pathlib.PurePath(repo_root)).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def attach_last_modified(doc: Document, history: RevisionHistory | None) -> str | None:
    """Set ``data["last_modified_at"]`` when the file has more than one revision."""

    if history is None:
        return None

    rel_path = relative_source_path(doc, getattr(history, "repo_root", None))
    try:
        if history.commit_count(rel_path) <= 1:
            return None
        epoch = history.last_commit_epoch(rel_path)
    except Exception as exc:  # backend failures leave the field unset
        logger.warning("Revision history unavailable for %s: %s", rel_path, exc)
        return None
    if epoch is None:
        return None

    stamp = iso8601_utc(epoch)
    doc.data["last_modified_at"] = stamp
    return stamp
