"""Remote Tree Scanner: flat listing of a Drive folder subtree."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Optional, Protocol

from gdrivesync.errors import GDriveSyncError, RemoteListingError
from gdrivesync.models import Permission, RemoteItem
from gdrivesync.util.paths import join_posix

logger = logging.getLogger(__name__)


class ListingController(Protocol):
    def list_children(self, parent_id: str, *, max_pages: Optional[int] = None) -> list[RemoteItem]: ...

    def list_permissions(self, file_id: str) -> list[Permission]: ...


@dataclass(slots=True)
class RemoteListing:
    """
    Everything found under a target root.

    files and folders are keyed by posix path relative to the root; the root
    itself is not included.
    """

    root_id: str
    files: dict[str, RemoteItem] = field(default_factory=dict)
    folders: dict[str, RemoteItem] = field(default_factory=dict)
    failed_folders: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_folders

    def paths(self) -> set[str]:
        return set(self.files) | set(self.folders)


class RemoteTreeScanner:
    """
    Walk a Drive folder with an explicit FIFO work queue.

    Each folder's pages are drained by the controller before its subfolders
    are enqueued. A failure listing the root raises RemoteListingError; a
    failure below the root only skips that subtree.
    """

    def __init__(
        self,
        controller: ListingController,
        service_email: Optional[str],
        *,
        max_pages: Optional[int] = None,
        fetch_permissions: bool = True,
    ) -> None:
        self._controller = controller
        self._service_email = service_email.lower() if service_email else None
        self._max_pages = max_pages
        self._fetch_permissions = fetch_permissions

    def scan(self, root_id: str) -> RemoteListing:
        listing = RemoteListing(root_id=root_id)
        queue: deque[tuple[str, str]] = deque([(root_id, "")])
        visited: set[str] = set()

        while queue:
            folder_id, folder_path = queue.popleft()
            if folder_id in visited:
                logger.debug("Folder %s already visited, skipping", folder_id)
                continue
            visited.add(folder_id)

            try:
                children = self._controller.list_children(folder_id, max_pages=self._max_pages)
            except GDriveSyncError as exc:
                if folder_id == root_id:
                    raise RemoteListingError(
                        "Failed to list target root folder",
                        details={"folder_id": root_id},
                        cause=exc,
                    ) from exc
                logger.warning(
                    "Skipping subtree %r (%s): %s", folder_path, folder_id, exc
                )
                listing.failed_folders.append(folder_path)
                continue

            for child in children:
                if not child.id or not child.name:
                    logger.warning("Skipping Drive item without id or name under %r", folder_path)
                    continue

                child.parent_path = folder_path
                path = join_posix(folder_path, child.name)
                if path in listing.files or path in listing.folders:
                    logger.warning("Duplicate Drive path %r (id %s) ignored", path, child.id)
                    continue

                self._annotate(child)
                if child.is_folder:
                    listing.folders[path] = child
                    queue.append((child.id, path))
                else:
                    listing.files[path] = child

        logger.info(
            "Listed %d file(s) and %d folder(s) under %s",
            len(listing.files),
            len(listing.folders),
            root_id,
        )
        return listing

    def _annotate(self, item: RemoteItem) -> None:
        if self._service_email:
            item.owned = any(o.lower() == self._service_email for o in item.owners)

        if not self._fetch_permissions:
            return
        try:
            item.permissions = self._controller.list_permissions(item.id)
        except GDriveSyncError as exc:
            logger.warning("Could not list permissions for %s: %s", item.id, exc)
            item.permissions = []
