"""Exception hierarchy for git-csa commands."""

from __future__ import annotations


class CsaError(Exception):
    """Base class for every error reported to the user."""


class ConfigError(CsaError):
    """Missing or invalid configuration (e.g. no GitHub token)."""


class ArgumentError(CsaError):
    """Malformed command-line argument or repository spec."""


class ParseError(ArgumentError):
    """Issue number is not a base-10 integer."""


class PreconditionError(CsaError):
    """Local repository state does not allow opening a pull request."""


class CollaboratorError(CsaError):
    """Failure reported by git or the GitHub API."""


class GitError(CollaboratorError):
    """A git subprocess exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{' '.join(command)}: {detail}")


class GitHubError(CollaboratorError):
    """HTTP or GraphQL error from the GitHub API."""
