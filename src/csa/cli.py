"""CLI entry point for git-csa."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from csa.config import EXAMPLE_CONFIG, CsaConfig
from csa.display import ConsolePrompter, console, print_error, print_success, setup_logging
from csa.errors import CsaError
from csa.integrations.github_client import GitHubClient, PRInfo
from csa.issue_ref import DraftOptions, parse_issue_reference
from csa.tools.git_tools import GitTools, find_repo_root
from csa.workflow import DraftWorkflow

app = typer.Typer(
    name="git-csa",
    help="Open pull requests for the current branch, linked to an issue.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

ISSUE_HELP = (
    "Issue to link: <number>, <owner>/<repo>#<number>, "
    "https://github.com/<owner>/<repo>#<number> or git@github.com:<owner>/<repo>#<number>"
)


def _open_pull_request(
    issue: list[str] | None,
    title: str,
    repo: Path | None,
    token: str,
    verbose: bool,
    draft: bool,
) -> None:
    setup_logging(verbose)
    try:
        ref = parse_issue_reference(issue or [])
    except CsaError as e:
        print_error(str(e))
        raise typer.Exit(1)

    root = find_repo_root(repo or Path.cwd())
    if not root:
        print_error("Not a git repository", "Run from inside a repo or pass --repo.")
        raise typer.Exit(1)

    config = CsaConfig.discover(root)
    options = DraftOptions.build(title, ref)

    async def _run() -> PRInfo | None:
        github = GitHubClient.from_config(config.github, token)
        try:
            workflow = DraftWorkflow(
                config,
                GitTools(root, config.git),
                github,
                ConsolePrompter(console),
                console,
            )
            return await workflow.run(options, draft=draft)
        finally:
            await github.close()

    try:
        pr = asyncio.run(_run())
    except CsaError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if pr is None:
        console.print("Aborted.", style="csa.muted")


# ── Main Commands ──────────────────────────────────────────


@app.command()
def draft(
    issue: Optional[List[str]] = typer.Argument(None, metavar="[ISSUE]", help=ISSUE_HELP, show_default=False),
    title: str = typer.Option("", "--title", help="Title of the pull request (default: first commit summary)"),
    repo: Optional[Path] = typer.Option(None, "--repo", "-r", help="Repository path (default: current directory)"),
    token: str = typer.Option("", "--token", envvar="GITHUB_TOKEN", help="GitHub token for the API"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """
    Create a draft pull request for the current branch.

    If ISSUE is given, the pull request is linked to the issue by an
    [bold]issue: owner/repo#N[/] line in its description.
    """
    _open_pull_request(issue, title, repo, token, verbose, draft=True)


@app.command()
def pr(
    issue: Optional[List[str]] = typer.Argument(None, metavar="[ISSUE]", help=ISSUE_HELP, show_default=False),
    title: str = typer.Option("", "--title", help="Title of the pull request (default: first commit summary)"),
    repo: Optional[Path] = typer.Option(None, "--repo", "-r", help="Repository path (default: current directory)"),
    token: str = typer.Option("", "--token", envvar="GITHUB_TOKEN", help="GitHub token for the API"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Create a pull request that is ready for review for the current branch."""
    _open_pull_request(issue, title, repo, token, verbose, draft=False)


@app.command()
def init(
    repo: Optional[Path] = typer.Option(None, "--repo", "-r", help="Repository path (default: current directory)"),
):
    """Initialize git-csa config in the repo."""
    root = (repo or Path.cwd()).resolve()
    config_dir = root / ".csa"
    config_dir.mkdir(exist_ok=True)
    config_file = config_dir / "config.yaml"

    if config_file.exists():
        console.print(f"  Config already exists at {config_file}")
        return

    config_file.write_text(EXAMPLE_CONFIG)
    print_success(f"Created {config_file}")
    console.print("  Edit to set the default issue repository and GitHub token.")


def main():
    app()


if __name__ == "__main__":
    main()
