"""Commit message helpers."""

from __future__ import annotations

SIGNED_OFF_BY = "Signed-off-by:"


def format_issue_link(owner: str, name: str, issue_number: int) -> str:
    return f"issue: {owner}/{name}#{issue_number}"


def insert_issue_link(message: str, owner: str, name: str, issue_number: int) -> str:
    """Insert the issue link before ``Signed-off-by:`` in a commit message."""
    issue_link = format_issue_link(owner, name, issue_number)
    if issue_link in message:
        return message

    head, trailer = message, ""
    index = message.find(SIGNED_OFF_BY)
    if index != -1:
        head, trailer = message[:index], message[index:]

    parts = [head]
    if head and not head.endswith("\n"):
        parts.append("\n")
    parts.append(issue_link)
    if trailer:
        parts.append("\n" + trailer)
    return "".join(parts)
