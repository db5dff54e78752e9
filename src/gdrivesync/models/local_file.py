"""Data model for files found in the local working tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LocalFileRecord:
    """
    A file in the pinned local snapshot.

    Notes:
        - relative_path is posix-normalized and relative to the repository root.
        - content_hash uses the same algorithm Drive reports (md5 hex).
    """

    relative_path: str
    content_hash: str
    absolute_path: str
