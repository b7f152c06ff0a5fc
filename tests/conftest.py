from __future__ import annotations

import io
from dataclasses import dataclass, field

import pytest
from rich.console import Console

from csa.display import CSA_THEME
from csa.integrations.github_client import PRInfo, RepositoryInfo, UserInfo
from csa.tools.git_tools import CommitInfo


@dataclass
class FakeGit:
    branch: str = "feature"
    default: str = "main"
    commit: CommitInfo | None = field(
        default_factory=lambda: CommitInfo(hash="abc123", summary="Add widget", body="Body text\n\nSigned-off-by: dev")
    )
    dirty: bool = False
    origin: str = "git@github.com:me/project.git"
    push_error: Exception | None = None
    pushed: list[str] = field(default_factory=list)

    def current_branch(self) -> str:
        return self.branch

    def default_branch(self) -> str:
        return self.default

    def first_unmerged(self, base: str) -> CommitInfo | None:
        return self.commit

    def has_uncommitted_files(self) -> bool:
        return self.dirty

    def push(self, branch: str) -> None:
        if self.push_error:
            raise self.push_error
        self.pushed.append(branch)

    def origin_url(self) -> str:
        return self.origin


@dataclass
class FakeGitHub:
    issues: dict[tuple[str, str, int], str] = field(default_factory=dict)
    calls: list[tuple] = field(default_factory=list)
    fail_on: str = ""

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name == self.fail_on:
            from csa.errors import GitHubError

            raise GitHubError(f"{name} failed")

    async def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        self._record("get_repository", owner, name)
        return RepositoryInfo(id=f"R_{owner}_{name}", owner=owner, name=name)

    async def get_issue_title(self, repo: RepositoryInfo, issue_number: int) -> str:
        self._record("get_issue_title", repo.owner, repo.name, issue_number)
        return self.issues.get((repo.owner, repo.name, issue_number), "Some issue")

    async def create_pull_request(self, repo_id, base, head, title, body, draft) -> PRInfo:
        self._record("create_pull_request", repo_id, base, head, title, body, draft)
        return PRInfo(id="PR_1", number=1, permalink="https://github.com/me/project/pull/1")

    async def get_viewer(self) -> UserInfo:
        self._record("get_viewer")
        return UserInfo(id="U_me", login="me")

    async def add_assignee(self, user_id: str, pr_id: str) -> None:
        self._record("add_assignee", user_id, pr_id)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakePrompter:
    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: list[tuple[str, str]] = []

    def ask(self, prompt_text: str, default: str) -> str:
        self.prompts.append((prompt_text, default))
        return self.answers.pop(0) if self.answers else default


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, theme=CSA_THEME, width=200, color_system=None)
