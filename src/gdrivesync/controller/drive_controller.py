"""Google Drive API controller used by the scanners, uploader and emitter."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from gdrivesync.auth import AuthInfo, build_drive_service, load_credentials
from gdrivesync.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdrivesync.models import Permission, RemoteItem
from gdrivesync.util.mime import FOLDER_MIME, is_google_app

from .fields import (
    ABOUT_FIELDS,
    FILE_FIELDS,
    LIST_FIELDS,
    PERMISSION_FIELDS,
    PERMISSION_LIST_FIELDS,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_PAGES = 1000


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive API controller.

    Notes:
        - The Drive `service` object is NOT exposed.
        - A service object is built per thread; httplib2 transports must not be
          shared across threads.
        - `supports_all_drives` is applied to all requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        credentials = load_credentials(auth_info, use_scopes)
        self._init(
            lambda: build_drive_service(credentials),
            supports_all_drives=supports_all_drives,
            max_pages=max_pages,
        )

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        max_pages: int = DEFAULT_MAX_PAGES,
        retry_delay_sec: float = 1.0,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init(
            lambda: service,
            supports_all_drives=supports_all_drives,
            max_pages=max_pages,
        )
        obj._retry_policy = _RetryPolicy(initial_delay_sec=retry_delay_sec)
        return obj

    def _init(
        self,
        service_factory: Callable[[], Any],
        *,
        supports_all_drives: bool,
        max_pages: int,
    ) -> None:
        if max_pages < 1:
            raise InvalidArgumentError("max_pages must be >= 1")
        self._service_factory = service_factory
        self._thread_local = threading.local()
        self._supports_all_drives = supports_all_drives
        self._max_pages = max_pages
        self._retry_policy = _RetryPolicy()

    @property
    def _service(self) -> Any:
        service = getattr(self._thread_local, "service", None)
        if service is None:
            service = self._service_factory()
            self._thread_local.service = service
        return service

    # ----------------------------
    # Reads
    # ----------------------------
    def get(self, file_id: str) -> RemoteItem:
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_item(data)

    def get_user_email(self) -> Optional[str]:
        """Email address of the authenticated identity."""
        req = self._service.about().get(fields=ABOUT_FIELDS)
        data = self._execute(req.execute)
        email = (data.get("user") or {}).get("emailAddress")
        return email if isinstance(email, str) else None

    def list_children(
        self,
        parent_id: str,
        *,
        max_pages: Optional[int] = None,
    ) -> list[RemoteItem]:
        """
        List the non-trashed direct children of parent_id.

        All pages are drained. Raises ApiError when more than max_pages pages
        would be needed.
        """
        q = _build_parent_query(parent_id)
        return self._find_by_query(q, max_pages=max_pages or self._max_pages)

    def find_child_folder(self, parent_id: str, name: str) -> Optional[RemoteItem]:
        """Return the child folder whose name matches case-insensitively."""
        q = f"{_build_parent_query(parent_id)} and mimeType='{FOLDER_MIME}'"
        wanted = name.lower()
        for item in self._find_by_query(q, max_pages=self._max_pages):
            if item.name.lower() == wanted:
                return item
        return None

    def list_permissions(self, file_id: str) -> list[Permission]:
        permissions: list[Permission] = []
        page_token: Optional[str] = None
        pages = 0

        while True:
            pages += 1
            if pages > self._max_pages:
                raise ApiError(
                    "Permission listing exceeded page limit",
                    details={"file_id": file_id, "max_pages": self._max_pages},
                )
            req = self._service.permissions().list(
                fileId=file_id,
                fields=PERMISSION_LIST_FIELDS,
                pageToken=page_token,
                **self._common_get_kwargs(),
            )
            data = self._execute(req.execute)
            for p in data.get("permissions", []) or []:
                perm = _permission_dict_to_permission(p)
                if perm is not None:
                    permissions.append(perm)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return permissions

    # ----------------------------
    # Writes
    # ----------------------------
    def create_folder(self, name: str, parent_id: str) -> RemoteItem:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_item(data)

    def upload_file(
        self,
        local_path: str,
        parent_id: str,
        *,
        name: Optional[str] = None,
    ) -> RemoteItem:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        filename = name if name is not None else os.path.basename(local_path)
        body = {"name": filename, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            media_body=_media_upload(local_path),
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_item(data)

    def update_file(self, file_id: str, local_path: str) -> RemoteItem:
        """Replace the content of an existing binary file."""
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        req = self._service.files().update(
            fileId=file_id,
            media_body=_media_upload(local_path),
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_item(data)

    def rename(self, file_id: str, new_name: str) -> RemoteItem:
        req = self._service.files().update(
            fileId=file_id,
            body={"name": new_name},
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_item(data)

    def trash(self, file_id: str) -> None:
        req = self._service.files().update(
            fileId=file_id,
            body={"trashed": True},
            fields="id",
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def download_file(
        self,
        file_id: str,
        local_path: str,
        *,
        mime_type: Optional[str] = None,
        overwrite: bool = True,
    ) -> None:
        """Download binary content of file_id to local_path."""
        if not overwrite and os.path.exists(local_path):
            raise InvalidArgumentError(
                "Destination file exists and overwrite is False",
                details={"local_path": local_path},
            )

        if mime_type is None:
            mime_type = self.get(file_id).mime_type
        if is_google_app(mime_type):
            raise InvalidArgumentError(
                "Google Workspace documents have no downloadable content",
                details={"mime_type": mime_type, "file_id": file_id},
            )

        try:
            from googleapiclient.http import MediaIoBaseDownload
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )

        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)

        # chunks go to a sibling temp file; local_path only changes on success
        fd, tmp_path = tempfile.mkstemp(
            dir=parent_dir or ".",
            prefix=f".{os.path.basename(local_path)}.",
            suffix=".part",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                downloader = MediaIoBaseDownload(f, req)
                done = False
                while not done:
                    _status, done = self._execute(downloader.next_chunk)
            os.replace(tmp_path, local_path)
        except Exception:
            logger.debug("Download of %s failed; discarding %s", file_id, tmp_path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def create_permission(
        self,
        file_id: str,
        body: dict[str, Any],
        *,
        transfer_ownership: bool = False,
        send_notification_email: Optional[bool] = None,
        email_message: Optional[str] = None,
    ) -> Permission:
        kwargs: dict[str, Any] = dict(self._common_write_kwargs())
        if transfer_ownership:
            kwargs["transferOwnership"] = True
        if send_notification_email is not None:
            kwargs["sendNotificationEmail"] = send_notification_email
        if email_message:
            kwargs["emailMessage"] = email_message

        req = self._service.permissions().create(
            fileId=file_id,
            body=body,
            fields=PERMISSION_FIELDS,
            **kwargs,
        )
        data = self._execute(req.execute)
        return _permission_dict_to_permission(data) or Permission(id="", role=body.get("role", ""))

    def update_permission(
        self,
        file_id: str,
        permission_id: str,
        body: dict[str, Any],
        *,
        transfer_ownership: bool = False,
    ) -> Permission:
        kwargs: dict[str, Any] = dict(self._common_write_kwargs())
        if transfer_ownership:
            kwargs["transferOwnership"] = True

        req = self._service.permissions().update(
            fileId=file_id,
            permissionId=permission_id,
            body=body,
            fields=PERMISSION_FIELDS,
            **kwargs,
        )
        data = self._execute(req.execute)
        return _permission_dict_to_permission(data) or Permission(id=permission_id, role="")

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _find_by_query(self, q: str, *, max_pages: int) -> list[RemoteItem]:
        items: list[RemoteItem] = []
        page_token: Optional[str] = None
        pages = 0

        while True:
            pages += 1
            if pages > max_pages:
                raise ApiError(
                    "Listing exceeded page limit",
                    details={"query": q, "max_pages": max_pages},
                )
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []) or []:
                items.append(_file_dict_to_remote_item(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return items

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug(
                        "Retrying Drive request in %.1fs after %s (attempt %d)",
                        delay,
                        mapped.__class__.__name__,
                        attempt + 1,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _media_upload(local_path: str) -> Any:
    try:
        from googleapiclient.http import MediaFileUpload
    except Exception as exc:  # pragma: no cover
        raise AuthError(
            "google-api-python-client is not available",
            cause=exc,
        ) from exc
    return MediaFileUpload(local_path, resumable=True)


def _build_parent_query(parent_id: str) -> str:
    return f"'{parent_id}' in parents and trashed=false"


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _file_dict_to_remote_item(data: dict[str, Any]) -> RemoteItem:
    owners: list[str] = []
    for owner in data.get("owners", []) or []:
        email = owner.get("emailAddress") if isinstance(owner, dict) else None
        if isinstance(email, str) and email:
            owners.append(email)

    name = data.get("name")
    mime_type = data.get("mimeType")
    return RemoteItem(
        id=data.get("id") if isinstance(data.get("id"), str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        content_hash=_str_or_none(data.get("md5Checksum")),
        modified_time=_str_or_none(data.get("modifiedTime")),
        owners=owners,
        web_view_link=_str_or_none(data.get("webViewLink")),
    )


def _permission_dict_to_permission(data: Any) -> Optional[Permission]:
    if not isinstance(data, dict) or not isinstance(data.get("id"), str):
        return None
    return Permission(
        id=data["id"],
        role=data.get("role") if isinstance(data.get("role"), str) else "",
        email_address=_str_or_none(data.get("emailAddress")),
        pending_owner=bool(data.get("pendingOwner", False)),
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            payload = None
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if isinstance(status_code, str) and status_code.isdigit():
        status_code = int(status_code)
    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
