"""
Pull request workflow - from the current branch to an assigned (draft) PR.

Flow:
1. Refuse to run on the default branch
2. Take title/body from the first commit not on the default branch
3. Confirm uncommitted files
4. Resolve the current repository and the issue repository
5. Confirm the linked issue
6. Push the branch
7. Create the PR (issue link inserted into the body) and assign the viewer

Nothing is rolled back: a failure after the push leaves the pushed branch,
and a failure while assigning leaves the created PR.
"""

from __future__ import annotations

import logging

from rich.console import Console

from csa.config import CsaConfig
from csa.errors import PreconditionError
from csa.gates import issue_gate, run_gates, uncommitted_files_gate
from csa.integrations.github_client import PRInfo, RepositoryInfo
from csa.issue_ref import DraftOptions, extract_repository_name
from csa.message import insert_issue_link
from csa.protocols import VCS, HostingAPI, Prompter

logger = logging.getLogger("csa.workflow")


class DraftWorkflow:
    """Creates a pull request for the current branch."""

    def __init__(
        self,
        config: CsaConfig,
        git: VCS,
        github: HostingAPI,
        prompter: Prompter,
        console: Console,
    ):
        self.config = config
        self.git = git
        self.github = github
        self.prompter = prompter
        self.console = console

    async def run(self, options: DraftOptions, draft: bool = True) -> PRInfo | None:
        """Run the workflow. Returns None when the user declined a confirmation."""
        branch = self.git.current_branch()
        if branch == "HEAD":
            raise PreconditionError("not on a branch (detached HEAD)")
        default_branch = self.git.default_branch()
        if branch == default_branch:
            raise PreconditionError(f"direct push to {default_branch} is prohibited")

        commit = self.git.first_unmerged(default_branch)
        if commit is None:
            raise PreconditionError(f"no commits on {branch} that are not in {default_branch}")
        logger.debug("Using commit %s: %s", commit.hash, commit.summary)

        if not await run_gates([uncommitted_files_gate(self.git, self.prompter, self.console)]):
            return None

        current_repo = await self.resolve_repository(self.git.origin_url())
        issue_repo = await self.resolve_repository(
            options.repository_spec or self.config.default_repository
        )

        gate = issue_gate(self.github, issue_repo, options.issue_number, self.prompter, self.console)
        if not await run_gates([gate]):
            return None

        self.git.push(branch)

        title = options.title or commit.summary
        body = commit.body
        if options.issue_number:
            body = insert_issue_link(body, issue_repo.owner, issue_repo.name, options.issue_number)

        pr = await self.github.create_pull_request(
            current_repo.id, default_branch, branch, title, body, draft
        )

        viewer = await self.github.get_viewer()
        await self.github.add_assignee(viewer.id, pr.id)
        logger.debug("Assigned %s to PR #%d", viewer.login, pr.number)

        self.console.print(f"\nCreated a pull request: {pr.permalink}")
        return pr

    async def resolve_repository(self, spec: str) -> RepositoryInfo:
        owner, name = extract_repository_name(spec)
        return await self.github.get_repository(owner, name)
