from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from csa.config import GitHubConfig
from csa.errors import ConfigError, GitHubError
from csa.integrations.github_client import GitHubClient, RepositoryInfo


def _client(handler) -> tuple[GitHubClient, list[dict]]:
    requests: list[dict] = []

    def _handle(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        payload["_auth"] = request.headers.get("Authorization")
        payload["_path"] = request.url.path
        requests.append(payload)
        return handler(payload)

    return GitHubClient(token="t0ken", transport=httpx.MockTransport(_handle)), requests


def _call(client: GitHubClient, coro):
    async def _run():
        try:
            return await coro
        finally:
            await client.close()

    return asyncio.run(_run())


def test_get_repository() -> None:
    client, requests = _client(
        lambda p: httpx.Response(
            200, json={"data": {"repository": {"id": "R_1", "name": "widgets", "owner": {"login": "acme"}}}}
        )
    )

    repo = _call(client, client.get_repository("acme", "widgets"))

    assert repo == RepositoryInfo(id="R_1", owner="acme", name="widgets")
    assert requests[0]["variables"] == {"owner": "acme", "name": "widgets"}
    assert requests[0]["_auth"] == "Bearer t0ken"
    assert requests[0]["_path"] == "/graphql"


def test_missing_repository() -> None:
    client, _ = _client(lambda p: httpx.Response(200, json={"data": {"repository": None}}))
    with pytest.raises(GitHubError, match="repository not found: acme/nope"):
        _call(client, client.get_repository("acme", "nope"))


def test_get_issue_title() -> None:
    client, requests = _client(
        lambda p: httpx.Response(200, json={"data": {"repository": {"issue": {"title": "Broken"}}}})
    )
    repo = RepositoryInfo(id="R_1", owner="acme", name="widgets")

    assert _call(client, client.get_issue_title(repo, 7)) == "Broken"
    assert requests[0]["variables"]["number"] == 7


def test_create_pull_request_sends_draft_flag() -> None:
    client, requests = _client(
        lambda p: httpx.Response(
            200,
            json={"data": {"createPullRequest": {"pullRequest": {
                "id": "PR_1", "number": 12, "permalink": "https://github.com/acme/widgets/pull/12",
            }}}},
        )
    )

    pr = _call(client, client.create_pull_request("R_1", "main", "feature", "Title", "Body", True))

    assert pr.id == "PR_1"
    assert pr.permalink.endswith("/pull/12")
    assert requests[0]["variables"]["input"] == {
        "repositoryId": "R_1",
        "baseRefName": "main",
        "headRefName": "feature",
        "title": "Title",
        "body": "Body",
        "draft": True,
    }


def test_viewer_and_assignee() -> None:
    def handler(p: dict) -> httpx.Response:
        if "viewer" in p["query"]:
            return httpx.Response(200, json={"data": {"viewer": {"id": "U_1", "login": "me"}}})
        return httpx.Response(200, json={"data": {"addAssigneesToAssignable": {"clientMutationId": None}}})

    client, requests = _client(handler)

    async def _flow():
        try:
            viewer = await client.get_viewer()
            await client.add_assignee(viewer.id, "PR_1")
            return viewer
        finally:
            await client.close()

    viewer = asyncio.run(_flow())
    assert viewer.login == "me"
    assert requests[1]["variables"]["input"] == {"assignableId": "PR_1", "assigneeIds": ["U_1"]}


def test_graphql_errors_raise() -> None:
    client, _ = _client(lambda p: httpx.Response(200, json={"errors": [{"message": "Bad credentials"}]}))
    with pytest.raises(GitHubError, match="Bad credentials"):
        _call(client, client.get_viewer())


def test_http_errors_raise() -> None:
    client, _ = _client(lambda p: httpx.Response(401, json={"message": "Unauthorized"}))
    with pytest.raises(GitHubError) as excinfo:
        _call(client, client.get_viewer())
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


def test_missing_token_fails_on_first_request(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    client = GitHubClient.from_config(GitHubConfig())
    with pytest.raises(ConfigError, match="GitHub token required"):
        _call(client, client.get_viewer())


def test_from_config_token_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "env")
    config = GitHubConfig(api_url="https://ghe.example.com/api/", timeout_seconds=5)

    assert GitHubClient.from_config(config).token == "env"
    client = GitHubClient.from_config(config, token="flag")
    assert client.token == "flag"
    assert client.api_url == "https://ghe.example.com/api"
    assert client.timeout == 5
