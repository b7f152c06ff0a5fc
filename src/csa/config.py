"""Configuration for git-csa commands."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_REPOSITORY = "cybozu/csa"


class GitConfig(BaseModel):
    """Git configuration."""

    remote: str = "origin"
    base_branch: str = Field(
        default="main",
        description="Fallback when the remote HEAD symbolic ref is not set",
    )


class GitHubConfig(BaseModel):
    """GitHub API configuration."""

    token: str = Field(default="", description="GitHub personal access token")
    api_url: str = Field(default="https://api.github.com", description="GitHub API base URL")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")

    @property
    def token_resolved(self) -> str:
        return self.token or os.environ.get("GITHUB_TOKEN", "")


class CsaConfig(BaseModel):
    """Full git-csa configuration."""

    default_repository: str = Field(
        default=DEFAULT_REPOSITORY,
        description="Repository used for bare issue numbers (owner/name, URL or SSH form)",
    )
    git: GitConfig = Field(default_factory=GitConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @classmethod
    def from_file(cls, path: Path) -> CsaConfig:
        """Load config from YAML file."""
        if not path.exists():
            return cls()
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    @classmethod
    def discover(cls, repo_root: Path) -> CsaConfig:
        """Discover config from repo or default locations."""
        for p in config_candidates(repo_root):
            if p.exists():
                return cls.from_file(p)
        return cls()


def config_candidates(repo_root: Path) -> list[Path]:
    return [
        repo_root / ".csa" / "config.yaml",
        repo_root / "csa.yaml",
        Path.home() / ".csa" / "config.yaml",
    ]


EXAMPLE_CONFIG = """\
# git-csa configuration

# Repository that bare issue numbers (e.g. `git-csa draft 42`) refer to.
default_repository: cybozu/csa

github:
  # token: ghp_...  (or set GITHUB_TOKEN env var)
  api_url: https://api.github.com
  timeout_seconds: 30

git:
  remote: origin
  # Used only when refs/remotes/<remote>/HEAD is not set.
  base_branch: main
"""
