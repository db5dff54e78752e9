"""gdrivesync public API."""

from __future__ import annotations

from gdrivesync.auth import AuthInfo, OAuthClient, ServiceAccountClient
from gdrivesync.config import DriveTarget, SyncConfig, load_config
from gdrivesync.controller import GoogleDriveController
from gdrivesync.errors import (
    ApiError,
    AuthError,
    BaseRefError,
    ConfigError,
    ConflictError,
    ForgeError,
    GDriveSyncError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteListingError,
    ShortcutFormatError,
    VcsError,
    map_http_error,
)
from gdrivesync.forge import GitHubForge
from gdrivesync.local import LocalTreeScanner
from gdrivesync.logging_setup import setup_logging
from gdrivesync.manager import SyncManager
from gdrivesync.models import (
    ChangeEntry,
    ChangeSet,
    Direction,
    LocalFileRecord,
    Permission,
    ProposalResult,
    RemoteItem,
    RemoteKind,
    RunReport,
    ShortcutRecord,
    TargetResult,
)
from gdrivesync.proposal import ProposalEmitter
from gdrivesync.reconcile import (
    ChangeClassifier,
    LocalIndex,
    ReconcileContext,
    UntrackedReconciler,
    accept_pending_transfers,
    expected_paths,
)
from gdrivesync.remote import RemoteListing, RemoteTreeScanner
from gdrivesync.vcs import GitRepo

__all__ = [
    # High-level
    "SyncManager",
    "SyncConfig",
    "DriveTarget",
    "load_config",
    "setup_logging",
    # Collaborators
    "AuthInfo",
    "OAuthClient",
    "ServiceAccountClient",
    "GoogleDriveController",
    "GitRepo",
    "GitHubForge",
    # Engine
    "LocalTreeScanner",
    "RemoteTreeScanner",
    "RemoteListing",
    "LocalIndex",
    "expected_paths",
    "ChangeClassifier",
    "ReconcileContext",
    "UntrackedReconciler",
    "accept_pending_transfers",
    "ProposalEmitter",
    # Models
    "Direction",
    "LocalFileRecord",
    "RemoteKind",
    "RemoteItem",
    "Permission",
    "ShortcutRecord",
    "ChangeEntry",
    "ChangeSet",
    "ProposalResult",
    "TargetResult",
    "RunReport",
    # Errors
    "GDriveSyncError",
    "ConfigError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "RemoteListingError",
    "ShortcutFormatError",
    "VcsError",
    "BaseRefError",
    "ForgeError",
    "HttpErrorInfo",
    "map_http_error",
]
