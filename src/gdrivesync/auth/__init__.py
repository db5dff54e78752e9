"""Public auth exports for gdrivesync."""

from __future__ import annotations

from .auth_info import AuthInfo
from .credentials import build_drive_service, load_credentials
from .oauth_client import OAuthClient
from .service_account import ServiceAccountClient

__all__ = [
    "AuthInfo",
    "OAuthClient",
    "ServiceAccountClient",
    "load_credentials",
    "build_drive_service",
]
