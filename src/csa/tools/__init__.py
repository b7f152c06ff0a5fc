"""Deterministic tools: git."""

from csa.tools.git_tools import CommitInfo, GitTools

__all__ = ["CommitInfo", "GitTools"]
