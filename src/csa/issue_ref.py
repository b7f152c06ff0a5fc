"""Issue reference and repository spec parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

from csa.errors import ArgumentError, ParseError

# owner/name, https://host/owner/name[...], git@host:owner/name[...]
_REPO_PATTERNS = (
    re.compile(r"^https?://[^/]+/(?P<owner>[^/?#]+)/(?P<name>[^/?#]+)"),
    re.compile(r"^[^@/\s]+@[^:/\s]+:(?P<owner>[^/?#]+)/(?P<name>[^/?#]+)"),
    re.compile(r"^(?P<owner>[^/:@\s]+)/(?P<name>[^/?#\s]+)$"),
)

# ASCII digits only, no whitespace or underscores
_ISSUE_NUMBER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class IssueReference:
    """Issue given on the command line. ``issue_number == 0`` means none."""

    repository_spec: str = ""
    issue_number: int = 0


@dataclass(frozen=True)
class DraftOptions:
    """Per-invocation options for the pull request workflow."""

    title: str = ""
    repository_spec: str = ""
    issue_number: int = 0

    @classmethod
    def build(cls, title: str, ref: IssueReference) -> DraftOptions:
        return cls(
            title=title,
            repository_spec=ref.repository_spec,
            issue_number=ref.issue_number,
        )


def parse_issue_reference(args: list[str]) -> IssueReference:
    """
    Parse the optional ISSUE positional argument.

    Accepted forms: ``<n>``, ``<owner>/<repo>#<n>``,
    ``https://github.com/<owner>/<repo>#<n>`` and
    ``git@github.com:<owner>/<repo>#<n>``. The repository part is kept as
    opaque text; it is resolved later by :func:`extract_repository_name`.
    """
    if not args:
        return IssueReference()
    if len(args) != 1:
        raise ArgumentError("too many arguments")

    number = args[0]
    repository_spec = ""
    parts = args[0].split("#")
    if len(parts) > 2:
        raise ArgumentError("too many '#' in issue number")
    if len(parts) == 2:
        repository_spec, number = parts

    try:
        if not _ISSUE_NUMBER.fullmatch(number):
            raise ValueError(f"invalid literal for int() with base 10: {number!r}")
        issue_number = int(number, 10)
    except ValueError as e:
        raise ParseError(f"invalid issue number {number!r}: {e}") from e
    if issue_number <= 0:
        raise ArgumentError(f"issue number must be positive: {issue_number}")

    return IssueReference(repository_spec=repository_spec, issue_number=issue_number)


def extract_repository_name(spec: str) -> tuple[str, str]:
    """Return ``(owner, name)`` from a bare, URL or SSH repository spec."""
    spec = spec.strip()
    for pattern in _REPO_PATTERNS:
        m = pattern.match(spec)
        if m:
            name = m.group("name")
            if name.endswith(".git"):
                name = name[: -len(".git")]
            if name:
                return m.group("owner"), name
    raise ArgumentError(f"invalid repository: {spec}")
