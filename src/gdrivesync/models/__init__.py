"""Public model exports for gdrivesync."""

from __future__ import annotations

from .changes import ChangeEntry, ChangeSet, Direction
from .local_file import LocalFileRecord
from .remote_item import Permission, RemoteItem, RemoteKind
from .results import (
    OutgoingReport,
    ProposalResult,
    ProposalStatus,
    RunReport,
    TargetResult,
    TargetStatus,
    UntrackedReport,
)
from .shortcut import ShortcutRecord

__all__ = [
    "LocalFileRecord",
    "RemoteKind",
    "RemoteItem",
    "Permission",
    "ShortcutRecord",
    "Direction",
    "ChangeEntry",
    "ChangeSet",
    "OutgoingReport",
    "UntrackedReport",
    "ProposalStatus",
    "ProposalResult",
    "TargetStatus",
    "TargetResult",
    "RunReport",
]
