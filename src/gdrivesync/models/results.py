"""Result models for sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .changes import Direction

TargetStatus = Literal["success", "failed"]
ProposalStatus = Literal["clean", "proposed", "committed", "failed"]


@dataclass(slots=True)
class OutgoingReport:
    """Outcome of uploading local files to a Drive target."""

    touched_paths: set[str] = field(default_factory=set)
    required_folders: set[str] = field(default_factory=set)
    uploaded: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass(slots=True)
class UntrackedReport:
    """Outcome of applying the on_untrack policy."""

    trashed: list[str] = field(default_factory=list)
    transfer_requested: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ProposalResult:
    """Outcome of the check direction for one target."""

    status: ProposalStatus
    branch: Optional[str] = None
    base: Optional[str] = None
    pull_request_url: Optional[str] = None
    added_or_updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


@dataclass(slots=True)
class TargetResult:
    """Result for a single Drive target."""

    folder_id: str
    status: TargetStatus
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    outgoing: Optional[OutgoingReport] = None
    untracked: Optional[UntrackedReport] = None
    proposal: Optional[ProposalResult] = None
    transfers_accepted: int = 0


@dataclass(slots=True)
class RunReport:
    """Aggregate result across all configured targets."""

    direction: Direction
    run_id: str
    targets: list[TargetResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(t.status == "success" for t in self.targets)

    def summary(self) -> dict[str, int]:
        summary: dict[str, int] = {"success": 0, "failed": 0}
        for t in self.targets:
            summary[t.status] = summary.get(t.status, 0) + 1
        return summary
