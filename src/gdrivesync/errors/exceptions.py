"""Exception hierarchy and HTTP error mapping for gdrivesync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveSyncError(Exception):
    """
    Base exception for gdrivesync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigError(GDriveSyncError):
    """Raised when sync.json (or another config source) is missing or invalid."""


class AuthError(GDriveSyncError):
    """Raised when loading or refreshing credentials fails."""


class PermissionError(GDriveSyncError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(GDriveSyncError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(GDriveSyncError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(GDriveSyncError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(GDriveSyncError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveSyncError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveSyncError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(GDriveSyncError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


class RemoteListingError(GDriveSyncError):
    """Raised when the root folder of a target cannot be listed."""


class ShortcutFormatError(GDriveSyncError):
    """Raised when a shortcut sidecar file is not valid JSON or misses fields."""


class VcsError(GDriveSyncError):
    """Raised when a git command fails."""


class BaseRefError(VcsError):
    """Raised when the branch a run started on cannot be determined."""


class ForgeError(GDriveSyncError):
    """Raised when a pull request cannot be created or updated."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivesync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)

# Drive reports per-user rate limiting as 403 with these reasons.
_RATE_LIMIT_REASONS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def _is_rate_limit_reason(reason: str | None) -> bool:
    return bool(reason) and reason in _RATE_LIMIT_REASONS


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveSyncError:
    """
    Map an HTTP error to a gdrivesync exception.

    Policy:
        - 401 -> AuthError
        - 403 -> PermissionError (default), RateLimitError for rate-limit
          reasons, QuotaExceededError for quota reasons
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx -> ApiError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_rate_limit_reason(info.reason):
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
