"""Reconciliation engine: identity mapping, classification and untracked handling."""

from __future__ import annotations

from .classifier import (
    STRATEGIES,
    BinaryFileStrategy,
    ChangeClassifier,
    ClassificationStrategy,
    ExportableDocumentStrategy,
    OpaqueDocumentStrategy,
    Outcome,
    check_shortcut_timestamp,
)
from .identity import ExpectedPaths, LocalIndex, expected_paths, stray_shortcut_paths
from .outgoing import DEFAULT_BATCH_SIZE, OutgoingUploader, shortcut_remote_path
from .untracked import (
    ReconcileContext,
    UntrackedReconciler,
    accept_pending_transfers,
    find_untracked,
    request_ownership_transfer,
)

__all__ = [
    "ExpectedPaths",
    "expected_paths",
    "stray_shortcut_paths",
    "LocalIndex",
    "Outcome",
    "ClassificationStrategy",
    "OpaqueDocumentStrategy",
    "ExportableDocumentStrategy",
    "BinaryFileStrategy",
    "STRATEGIES",
    "check_shortcut_timestamp",
    "ChangeClassifier",
    "ReconcileContext",
    "UntrackedReconciler",
    "find_untracked",
    "request_ownership_transfer",
    "accept_pending_transfers",
    "OutgoingUploader",
    "shortcut_remote_path",
    "DEFAULT_BATCH_SIZE",
]
