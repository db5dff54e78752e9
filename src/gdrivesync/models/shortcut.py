"""Shortcut sidecar record: the local placeholder for a Drive document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from gdrivesync.errors import ShortcutFormatError

_REQUIRED_KEYS: tuple[str, ...] = ("id", "name", "mimeType", "modifiedTime")


@dataclass(slots=True, frozen=True)
class ShortcutRecord:
    """
    On-disk JSON sidecar contract.

    Serialized keys: id, name, mimeType, modifiedTime and (optional)
    webViewLink. Downstream tools parse this schema to locate the document.
    """

    id: str
    name: str
    mime_type: str
    modified_time: str
    web_view_link: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        data = {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "modifiedTime": self.modified_time,
        }
        if self.web_view_link:
            data["webViewLink"] = self.web_view_link
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "ShortcutRecord":
        if not isinstance(data, dict):
            raise ShortcutFormatError("Shortcut content must be a JSON object")

        for key in _REQUIRED_KEYS:
            if not isinstance(data.get(key), str):
                raise ShortcutFormatError(
                    f"Shortcut field '{key}' must be a string",
                    details={"field": key},
                )

        link = data.get("webViewLink")
        if link is not None and not isinstance(link, str):
            raise ShortcutFormatError(
                "Shortcut field 'webViewLink' must be a string",
                details={"field": "webViewLink"},
            )

        return cls(
            id=data["id"],
            name=data["name"],
            mime_type=data["mimeType"],
            modified_time=data["modifiedTime"],
            web_view_link=link,
        )
