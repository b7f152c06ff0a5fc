"""Capability interfaces the pull request workflow depends on.

``GitTools``, ``GitHubClient`` and ``ConsolePrompter`` are the production
implementations; tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from csa.integrations.github_client import PRInfo, RepositoryInfo, UserInfo
from csa.tools.git_tools import CommitInfo


class VCS(Protocol):
    def current_branch(self) -> str: ...

    def default_branch(self) -> str: ...

    def first_unmerged(self, base: str) -> CommitInfo | None: ...

    def has_uncommitted_files(self) -> bool: ...

    def push(self, branch: str) -> None: ...

    def origin_url(self) -> str: ...


class HostingAPI(Protocol):
    async def get_repository(self, owner: str, name: str) -> RepositoryInfo: ...

    async def get_issue_title(self, repo: RepositoryInfo, issue_number: int) -> str: ...

    async def create_pull_request(
        self,
        repo_id: str,
        base: str,
        head: str,
        title: str,
        body: str,
        draft: bool,
    ) -> PRInfo: ...

    async def get_viewer(self) -> UserInfo: ...

    async def add_assignee(self, user_id: str, pr_id: str) -> None: ...


class Prompter(Protocol):
    def ask(self, prompt_text: str, default: str) -> str: ...
