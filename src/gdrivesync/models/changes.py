"""Change-set model produced by the classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .remote_item import RemoteItem


class Direction(str, Enum):
    """Which way a run moves changes."""

    PUSH = "push"
    CHECK = "check"


@dataclass(slots=True)
class ChangeEntry:
    """A remote item that must be materialized locally, with its reasons."""

    remote_path: str
    item: RemoteItem
    reasons: tuple[str, ...] = ()
    refresh_content: bool = False
    refresh_shortcut: bool = False

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


@dataclass(slots=True)
class ChangeSet:
    """
    Classified differences between the remote listing and the local snapshot.

    new, modified and deleted are disjoint. Deletions distinguish files from
    folders (a folder is removed recursively).
    """

    new: list[ChangeEntry] = field(default_factory=list)
    modified: list[ChangeEntry] = field(default_factory=list)
    deleted_files: list[str] = field(default_factory=list)
    deleted_folders: list[str] = field(default_factory=list)

    @property
    def deleted(self) -> list[str]:
        return sorted(set(self.deleted_files) | set(self.deleted_folders))

    @property
    def updates(self) -> list[ChangeEntry]:
        return [*self.new, *self.modified]

    def is_empty(self) -> bool:
        return not (self.new or self.modified or self.deleted_files or self.deleted_folders)
