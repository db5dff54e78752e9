"""Drive controller exports for gdrivesync."""

from __future__ import annotations

from .drive_controller import DEFAULT_MAX_PAGES, GoogleDriveController

__all__ = ["GoogleDriveController", "DEFAULT_MAX_PAGES"]
