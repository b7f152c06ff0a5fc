"""Confirmation gates asked before anything is pushed or created."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from rich.console import Console
from rich.markup import escape

from csa.integrations.github_client import RepositoryInfo
from csa.protocols import VCS, HostingAPI, Prompter

logger = logging.getLogger("csa.gates")

_YES = ("y", "yes")


def ask_yes_no(prompter: Prompter, query: str) -> bool:
    """Ask ``query [y/N]``; only y/yes (any case) counts as yes."""
    answer = prompter.ask(f"{query} [y/N]", "N")
    return answer.strip().lower() in _YES


@dataclass
class Gate:
    """A confirmation step: ``confirm`` runs only when ``applies`` is true."""

    name: str
    applies: Callable[[], bool]
    confirm: Callable[[], Awaitable[bool]]


async def run_gates(gates: list[Gate]) -> bool:
    """Run gates in order. Returns False at the first declined gate."""
    for gate in gates:
        if not gate.applies():
            logger.debug("Gate %s skipped", gate.name)
            continue
        if not await gate.confirm():
            logger.debug("Gate %s declined", gate.name)
            return False
    return True


def uncommitted_files_gate(vcs: VCS, prompter: Prompter, console: Console) -> Gate:
    async def confirm() -> bool:
        console.print("[bold yellow]WARNING:[/] you have uncommitted files.")
        return ask_yes_no(prompter, "Continue?")

    return Gate(name="uncommitted-files", applies=vcs.has_uncommitted_files, confirm=confirm)


def issue_gate(
    github: HostingAPI,
    repo: RepositoryInfo,
    issue_number: int,
    prompter: Prompter,
    console: Console,
) -> Gate:
    async def confirm() -> bool:
        title = await github.get_issue_title(repo, issue_number)
        console.print(escape(f"{repo.owner}/{repo.name}#{issue_number}: {title}"))
        return ask_yes_no(prompter, "Is this ok?")

    return Gate(name="issue", applies=lambda: issue_number != 0, confirm=confirm)
