"""Git operations - branch inspection, first unmerged commit, push."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from csa.config import GitConfig
from csa.errors import GitError

logger = logging.getLogger("csa.git")


@dataclass(frozen=True)
class CommitInfo:
    """A commit's hash, summary line and body."""

    hash: str
    summary: str
    body: str


class GitTools:
    """Git operations needed to open a pull request for the current branch."""

    def __init__(self, repo_path: Path, config: GitConfig):
        self.repo_path = Path(repo_path)
        self.config = config

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitError(cmd, 127, str(e)) from e
        if check and result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr)
        return result

    def current_branch(self) -> str:
        result = self._run("branch", "--show-current")
        return result.stdout.strip() or "HEAD"

    def default_branch(self) -> str:
        """Branch the remote HEAD points at, or the configured base branch."""
        remote = self.config.remote
        result = self._run("symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD", check=False)
        ref = result.stdout.strip()
        if result.returncode == 0 and ref.startswith(f"{remote}/"):
            return ref[len(remote) + 1:]
        logger.debug("No %s/HEAD, using base branch %s", remote, self.config.base_branch)
        return self.config.base_branch

    def _base_ref(self, base: str) -> str:
        remote_ref = f"refs/remotes/{self.config.remote}/{base}"
        result = self._run("rev-parse", "--verify", "--quiet", remote_ref, check=False)
        return remote_ref if result.returncode == 0 else base

    def first_unmerged(self, base: str) -> CommitInfo | None:
        """Oldest commit on HEAD that is not on ``base``, or None."""
        result = self._run("rev-list", "--reverse", f"{self._base_ref(base)}..HEAD")
        hashes = result.stdout.split()
        if not hashes:
            return None

        commit = hashes[0]
        summary = self._run("log", "-1", "--format=%s", commit).stdout.strip()
        body = self._run("log", "-1", "--format=%b", commit).stdout.rstrip("\n")
        return CommitInfo(hash=commit, summary=summary, body=body)

    def has_uncommitted_files(self) -> bool:
        result = self._run("status", "--porcelain")
        return bool(result.stdout.strip())

    def push(self, branch: str) -> None:
        """Push ``branch`` to the same-named ref and set upstream."""
        self._run("push", "-u", self.config.remote, f"{branch}:{branch}")
        logger.info("Pushed %s to %s", branch, self.config.remote)

    def origin_url(self) -> str:
        return self._run("remote", "get-url", self.config.remote).stdout.strip()


def find_repo_root(start: Path) -> Path | None:
    """Find git repo root from start path."""
    p = start.resolve()
    for _ in range(20):
        if (p / ".git").exists():
            return p
        parent = p.parent
        if parent == p:
            break
        p = parent
    return None
