"""Credential loading and Drive service construction."""

from __future__ import annotations

from typing import Any, Sequence

from gdrivesync.errors import AuthError

from .auth_info import AuthInfo
from .oauth_client import OAuthClient
from .service_account import ServiceAccountClient


def load_credentials(auth_info: AuthInfo, scopes: Sequence[str]) -> Any:
    """Return google-auth credentials for either supported AuthInfo kind."""
    if auth_info.kind == "service_account":
        return ServiceAccountClient(auth_info).get_credentials(scopes)
    return OAuthClient(auth_info).get_credentials(scopes, ensure_valid=True)


def build_drive_service(credentials: Any) -> Any:
    """
    Build a Drive v3 service resource.

    Returns:
        googleapiclient.discovery.Resource
    """
    try:
        from googleapiclient.discovery import build
    except Exception as exc:  # pragma: no cover
        raise AuthError(
            "google-api-python-client is not available",
            details={"hint": "Install google-api-python-client"},
            cause=exc,
        ) from exc

    try:
        return build("drive", "v3", credentials=credentials, cache_discovery=False)
    except Exception as exc:
        raise AuthError("Failed to build Drive service", cause=exc) from exc
