"""Code forge (GitHub) access for gdrivesync."""

from __future__ import annotations

from .github import DEFAULT_API_URL, GitHubForge, PullRequest

__all__ = ["GitHubForge", "PullRequest", "DEFAULT_API_URL"]
