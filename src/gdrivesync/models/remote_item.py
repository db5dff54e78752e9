"""Data model for Drive items listed under a sync target."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gdrivesync.util.mime import is_exportable, is_folder, is_google_app


class RemoteKind(str, Enum):
    """How a Drive item is represented in the local tree."""

    FOLDER = "folder"
    OPAQUE_DOCUMENT = "opaque_document"
    EXPORTABLE_DOCUMENT = "exportable_document"
    BINARY_FILE = "binary_file"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "RemoteKind":
        if is_folder(mime_type):
            return cls.FOLDER
        if is_google_app(mime_type):
            return cls.OPAQUE_DOCUMENT
        if is_exportable(mime_type):
            return cls.EXPORTABLE_DOCUMENT
        return cls.BINARY_FILE


@dataclass(slots=True, frozen=True)
class Permission:
    """A Drive permission entry (only the fields the sync engine reads)."""

    id: str
    role: str
    email_address: Optional[str] = None
    pending_owner: bool = False


@dataclass(slots=True)
class RemoteItem:
    """
    A file or folder listed under a Drive sync target.

    Notes:
        - path is posix and relative to the target root folder.
        - modified_time is kept as the raw string Drive reported; shortcut
          staleness is decided by exact string comparison.
    """

    id: str
    name: str
    mime_type: str
    parent_path: str = ""
    content_hash: Optional[str] = None
    modified_time: Optional[str] = None
    owned: bool = False
    owners: list[str] = field(default_factory=list)
    permissions: list[Permission] = field(default_factory=list)
    web_view_link: Optional[str] = None

    @property
    def kind(self) -> RemoteKind:
        return RemoteKind.from_mime_type(self.mime_type)

    @property
    def path(self) -> str:
        if not self.parent_path:
            return self.name
        return f"{self.parent_path}/{self.name}"

    @property
    def is_folder(self) -> bool:
        return self.kind is RemoteKind.FOLDER

    def current_owner_email(self) -> Optional[str]:
        """Owner email from permissions, falling back to the listed owners."""
        for perm in self.permissions:
            if perm.role == "owner" and perm.email_address:
                return perm.email_address
        return self.owners[0] if self.owners else None
