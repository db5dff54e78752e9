"""Service account credentials for gdrivesync."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Optional, Sequence

from gdrivesync.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo


class ServiceAccountClient:
    """Load service account credentials from a key file or a base64 secret."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "service_account":
            raise InvalidArgumentError(
                "ServiceAccountClient requires AuthInfo(kind='service_account')"
            )
        self._auth_info = auth_info
        self._info: Optional[dict[str, Any]] = None

    @property
    def service_email(self) -> str:
        """The client_email of the service account (the sync identity)."""
        email = self._load_info().get("client_email")
        if not isinstance(email, str) or not email:
            raise AuthError("Service account key has no client_email")
        return email

    def get_credentials(self, scopes: Sequence[str]):
        """
        Return service account credentials for the given scopes.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            AuthError: when the key cannot be loaded.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        try:
            from google.oauth2 import service_account
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        info = self._load_info()
        try:
            return service_account.Credentials.from_service_account_info(
                info,
                scopes=list(scopes),
            )
        except Exception as exc:
            raise AuthError("Invalid service account key", cause=exc) from exc

    def _load_info(self) -> dict[str, Any]:
        if self._info is not None:
            return self._info

        if self._auth_info.credentials_b64:
            try:
                raw = base64.b64decode(self._auth_info.credentials_b64, validate=True)
                info = json.loads(raw.decode("utf-8"))
            except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise AuthError("Failed to decode credentials_b64", cause=exc) from exc
        else:
            path = self._auth_info.credentials_file
            try:
                with open(path, "r", encoding="utf-8") as f:  # type: ignore[arg-type]
                    info = json.load(f)
            except (OSError, json.JSONDecodeError) as exc:
                raise AuthError(
                    "Failed to load credentials_file",
                    details={"credentials_file": path},
                    cause=exc,
                ) from exc

        if not isinstance(info, dict):
            raise AuthError("Service account key must be a JSON object")
        self._info = info
        return info
