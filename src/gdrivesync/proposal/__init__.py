"""Proposal branch and pull request emission for the check direction."""

from __future__ import annotations

from .body import commit_message, folder_url, pull_request_body, pull_request_title
from .emitter import ListingProvider, ProposalEmitter

__all__ = [
    "ProposalEmitter",
    "ListingProvider",
    "commit_message",
    "folder_url",
    "pull_request_body",
    "pull_request_title",
]
