"""
Rich display layer - console, logging and prompts for git-csa commands.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text
from rich.theme import Theme

# ── Theme ──────────────────────────────────────────────────

CSA_THEME = Theme({
    "csa.success": "bold green",
    "csa.error": "bold red",
    "csa.warn": "bold yellow",
    "csa.muted": "dim white",
})

console = Console(theme=CSA_THEME)


def setup_logging(verbose: bool = False) -> None:
    """Configure rich-powered logging for the entire application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
                show_path=verbose,
            )
        ],
        force=True,
    )


# ── Prompts ────────────────────────────────────────────────


class ConsolePrompter:
    """Reads answers from the terminal through rich's Prompt."""

    def __init__(self, console: Console = console):
        self.console = console

    def ask(self, prompt_text: str, default: str) -> str:
        return Prompt.ask(escape(prompt_text), console=self.console, default=default, show_default=False)


# ── Messages ───────────────────────────────────────────────


def print_error(message: str, detail: str = "") -> None:
    """Print a formatted error."""
    err = Text()
    err.append("ERROR: ", style="csa.error")
    err.append(message)
    if detail:
        err.append(f"\n{detail}", style="csa.muted")
    console.print(Panel(err, border_style="red"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"  {message}", style="csa.success"))
