"""Storage key generation: static keys and keys derived from the git commit graph."""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_COMMITS = 300
"""How many first-parent commits are explored when looking for a base commit."""


class GitError(Exception):
    """Raised when a git operation fails."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"git error: {self.detail}"


class RepoNotFoundError(GitError):
    """Raised when the repository path does not exist or is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"repository not found at: {self.path}"


class NoBaseCommitError(GitError):
    """Raised when no suitable base commit can be found."""

    def __init__(self) -> None:
        super().__init__("no suitable base commit found")

    def __str__(self) -> str:
        return "no suitable base commit found"


class KeyGenerator(ABC):
    """Produces the storage keys for baseline and current images."""

    @abstractmethod
    def get_expected_key(self) -> str | None:
        """Return the key of the expected (baseline) images, or None if there is none."""

    @abstractmethod
    def get_actual_key(self) -> str:
        """Return the key of the actual (current) images."""


@dataclass
class SimpleKeygen(KeyGenerator):
    """A key generator that always returns one fixed key."""

    expected_key: str

    def get_expected_key(self) -> str | None:
        return self.expected_key or None

    def get_actual_key(self) -> str:
        return self.expected_key


class GitHashKeygen(KeyGenerator):
    """Keys from commit hashes, compatible with reg-keygen-git-hash-plugin.

    The actual key is the HEAD commit; the expected key is the nearest commit on
    HEAD's first-parent history that is the tip of another local branch.
    """

    def __init__(self, repo_path: str | PathLike[str]) -> None:
        path = Path(repo_path)
        if not (path / ".git").exists() and not path.is_dir():
            raise RepoNotFoundError(str(path))
        self._repo_path = path

    @property
    def repo_path(self) -> Path:
        """The repository directory this generator reads from."""
        return self._repo_path

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        env = dict(os.environ)
        env["GIT_CEILING_DIRECTORIES"] = str(self._repo_path.resolve().parent)
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self._repo_path,
                env=env,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise GitError(str(exc)) from exc

    def _git(self, *args: str) -> str:
        proc = self._run(*args)
        if proc.returncode != 0:
            message = proc.stderr.strip() or f"git {' '.join(args)} exited with {proc.returncode}"
            raise GitError(message)
        return proc.stdout.strip()

    def _head_hash(self) -> str:
        proc = self._run("rev-parse", "--verify", "--quiet", "HEAD^{commit}")
        if proc.returncode != 0:
            raise GitError(proc.stderr.strip() or "HEAD does not point to a commit")
        return proc.stdout.strip()

    def _current_branch(self) -> str | None:
        proc = self._run("symbolic-ref", "-q", "HEAD")
        if proc.returncode == 1:
            return None
        if proc.returncode != 0:
            raise GitError(proc.stderr.strip() or "cannot read HEAD")
        return proc.stdout.strip() or None

    def _other_branch_tips(self, current_branch: str | None) -> set[str]:
        output = self._git("for-each-ref", "--format=%(refname) %(objectname)", "refs/heads")
        tips = set()
        for line in output.splitlines():
            name, _, object_id = line.partition(" ")
            if object_id and name != current_branch:
                tips.add(object_id)
        return tips

    def _find_base_commit(self) -> str | None:
        head = self._head_hash()
        current_branch = self._current_branch()
        logger.debug("exploring commit graph: branch=%s head=%s", current_branch, head)

        tips = self._other_branch_tips(current_branch)
        walk = self._git("rev-list", "--first-parent", f"--max-count={MAX_COMMITS}", head)
        return next((commit for commit in walk.split() if commit in tips), None)

    def get_expected_key(self) -> str | None:
        return self._find_base_commit()

    def get_actual_key(self) -> str:
        return self._head_hash()