"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "trashed,"
    "modifiedTime,"
    "md5Checksum,"
    "owners(emailAddress),"
    "webViewLink"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

PERMISSION_FIELDS: str = "id,role,emailAddress,pendingOwner"

PERMISSION_LIST_FIELDS: str = f"nextPageToken,permissions({PERMISSION_FIELDS})"

ABOUT_FIELDS: str = "user(emailAddress)"
