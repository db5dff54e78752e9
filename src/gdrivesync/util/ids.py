from __future__ import annotations

import re
import uuid

_UNSAFE_REF_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def new_run_id() -> str:
    """Generate a run id for runs that were not given one externally."""
    return uuid.uuid4().hex[:12]


def sanitize_ref_component(value: str) -> str:
    """Replace characters that are unsafe in a git branch name with '_'."""
    return _UNSAFE_REF_CHARS.sub("_", value)


def proposal_branch_name(folder_id: str) -> str:
    """Deterministic proposal branch for a Drive folder (stable across runs)."""
    return f"sync-from-drive-{sanitize_ref_component(folder_id)}"


def snapshot_branch_name(folder_id: str, run_id: str) -> str:
    """Throwaway branch pinned at the run's starting commit."""
    return (
        f"sync-snapshot-{sanitize_ref_component(folder_id)}"
        f"-{sanitize_ref_component(run_id)}"
    )
