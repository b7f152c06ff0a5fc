"""
GitHub integration for git-csa.

GraphQL v4 API via httpx (no heavy PyGithub dep):
  - Look up repositories and their node IDs
  - Read issue titles for confirmation
  - Create (draft) pull requests
  - Assign the authenticated user to a pull request
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from csa.config import GitHubConfig
from csa.errors import ConfigError, GitHubError

logger = logging.getLogger("csa.github")


@dataclass(frozen=True)
class RepositoryInfo:
    """Repository identity resolved through the API."""

    id: str
    owner: str
    name: str


@dataclass(frozen=True)
class PRInfo:
    """Created pull request."""

    id: str
    number: int
    permalink: str


@dataclass(frozen=True)
class UserInfo:
    """Authenticated user."""

    id: str
    login: str


_REPOSITORY_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
    name
    owner { login }
  }
}
"""

_ISSUE_TITLE_QUERY = """
query($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) { title }
  }
}
"""

_CREATE_PR_MUTATION = """
mutation($input: CreatePullRequestInput!) {
  createPullRequest(input: $input) {
    pullRequest { id number permalink }
  }
}
"""

_VIEWER_QUERY = """
query { viewer { id login } }
"""

_ADD_ASSIGNEES_MUTATION = """
mutation($input: AddAssigneesToAssignableInput!) {
  addAssigneesToAssignable(input: $input) {
    clientMutationId
  }
}
"""


class GitHubClient:
    """Async GitHub GraphQL client using httpx."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: GitHubConfig, token: str = "") -> GitHubClient:
        token = token or config.token_resolved
        return cls(token=token, api_url=config.api_url, timeout=config.timeout_seconds)

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.token:
            raise ConfigError("GitHub token required: set GITHUB_TOKEN, github.token or pass --token")
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        client = await self._ensure_client()
        try:
            resp = await client.post("/graphql", json={"query": query, "variables": variables or {}})
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub API request failed: {e}") from e
        except ValueError as e:
            raise GitHubError(f"GitHub API returned invalid JSON: {e}") from e

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(err.get("message", "unknown error") for err in errors)
            raise GitHubError(f"GitHub API error: {messages}")
        return payload.get("data") or {}

    # ── Repository ─────────────────────────────────────────────

    async def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        data = await self._graphql(_REPOSITORY_QUERY, {"owner": owner, "name": name})
        repo = data.get("repository")
        if not repo:
            raise GitHubError(f"repository not found: {owner}/{name}")
        logger.debug("Resolved %s/%s to %s", owner, name, repo["id"])
        return RepositoryInfo(id=repo["id"], owner=repo["owner"]["login"], name=repo["name"])

    # ── Issues ─────────────────────────────────────────────────

    async def get_issue_title(self, repo: RepositoryInfo, issue_number: int) -> str:
        data = await self._graphql(
            _ISSUE_TITLE_QUERY,
            {"owner": repo.owner, "name": repo.name, "number": issue_number},
        )
        issue = (data.get("repository") or {}).get("issue")
        if not issue:
            raise GitHubError(f"issue not found: {repo.owner}/{repo.name}#{issue_number}")
        return issue["title"]

    # ── Pull Requests ──────────────────────────────────────────

    async def create_pull_request(
        self,
        repo_id: str,
        base: str,
        head: str,
        title: str,
        body: str,
        draft: bool,
    ) -> PRInfo:
        """Create a pull request from ``head`` into ``base``."""
        data = await self._graphql(
            _CREATE_PR_MUTATION,
            {
                "input": {
                    "repositoryId": repo_id,
                    "baseRefName": base,
                    "headRefName": head,
                    "title": title,
                    "body": body,
                    "draft": draft,
                },
            },
        )
        pr = data["createPullRequest"]["pullRequest"]
        logger.info("Created PR #%d: %s", pr["number"], pr["permalink"])
        return PRInfo(id=pr["id"], number=pr["number"], permalink=pr["permalink"])

    async def get_viewer(self) -> UserInfo:
        data = await self._graphql(_VIEWER_QUERY)
        viewer = data["viewer"]
        return UserInfo(id=viewer["id"], login=viewer["login"])

    async def add_assignee(self, user_id: str, pr_id: str) -> None:
        await self._graphql(
            _ADD_ASSIGNEES_MUTATION,
            {"input": {"assignableId": pr_id, "assigneeIds": [user_id]}},
        )
