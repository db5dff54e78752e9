"""Authentication information for gdrivesync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_KINDS: tuple[str, ...] = ("service_account", "oauth")


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Supported kinds:
        kind = "service_account"
            data must include one of:
                - credentials_file: path to the service account key JSON
                - credentials_b64: base64 encoded key JSON (CI secrets)
        kind = "oauth"
            data must include:
                - client_secrets_file
                - token_file
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"AuthInfo.kind must be one of {_KINDS}")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        if self.kind == "service_account":
            if not any(_non_empty(self.data.get(k)) for k in ("credentials_file", "credentials_b64")):
                raise ValueError(
                    "AuthInfo.data must include 'credentials_file' or 'credentials_b64'"
                )
            return

        for key in ("client_secrets_file", "token_file"):
            if not _non_empty(self.data.get(key)):
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @classmethod
    def service_account(
        cls,
        *,
        credentials_file: Optional[str] = None,
        credentials_b64: Optional[str] = None,
    ) -> "AuthInfo":
        data: dict[str, Any] = {}
        if credentials_file:
            data["credentials_file"] = credentials_file
        if credentials_b64:
            data["credentials_b64"] = credentials_b64
        return cls(kind="service_account", data=data)

    @property
    def credentials_file(self) -> Optional[str]:
        value = self.data.get("credentials_file")
        return str(value) if _non_empty(value) else None

    @property
    def credentials_b64(self) -> Optional[str]:
        value = self.data.get("credentials_b64")
        return str(value) if _non_empty(value) else None

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
