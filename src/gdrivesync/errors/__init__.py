"""Public error exports for gdrivesync."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
