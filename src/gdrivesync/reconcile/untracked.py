"""Untracked/Ownership Reconciler.

Drive items with no local counterpart are handled by the target's
``on_untrack`` policy:

* ``ignore``: leave them alone.
* ``remove``: trash them, but only when the sync identity owns them.
* ``request``: ask the current owner to transfer ownership to the sync
  identity (at most once per item per run).

Pending transfers addressed to the sync identity are accepted by
:func:`accept_pending_transfers` on every run, independent of direction.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional

from gdrivesync.errors import GDriveSyncError, NotFoundError, PermissionError
from gdrivesync.models import Permission, RemoteItem, UntrackedReport
from gdrivesync.remote.scanner import RemoteListing
from gdrivesync.util.mime import FOLDER_MIME

logger = logging.getLogger(__name__)

POLICIES: tuple[str, ...] = ("ignore", "remove", "request")


@dataclass(slots=True)
class ReconcileContext:
    """Per-run state shared by the untracked pass and the accept walk."""

    service_email: str
    requested_transfer_ids: set[str] = field(default_factory=set)

    def is_service_identity(self, email: Optional[str]) -> bool:
        return bool(email) and email.lower() == self.service_email.lower()  # type: ignore[union-attr]


def find_untracked(
    listing: RemoteListing,
    touched_paths: Iterable[str],
    required_folders: Iterable[str],
) -> list[tuple[str, RemoteItem]]:
    """Listing entries not backed by a local file (files) or local directory (folders)."""
    touched = {p.lower() for p in touched_paths}
    required = {p.lower() for p in required_folders}

    untracked: list[tuple[str, RemoteItem]] = []
    for path in sorted(listing.files):
        if path.lower() not in touched:
            untracked.append((path, listing.files[path]))
    for path in sorted(listing.folders):
        if path.lower() not in required:
            untracked.append((path, listing.folders[path]))
    return untracked


class UntrackedReconciler:
    """Apply an on_untrack policy to untracked Drive items."""

    def __init__(self, controller, context: ReconcileContext) -> None:
        self._controller = controller
        self._context = context

    def reconcile(
        self,
        listing: RemoteListing,
        touched_paths: Iterable[str],
        required_folders: Iterable[str],
        policy: str,
    ) -> UntrackedReport:
        if policy not in POLICIES:
            raise ValueError(f"Unknown on_untrack policy: {policy!r}")

        report = UntrackedReport()
        untracked = find_untracked(listing, touched_paths, required_folders)
        if not untracked:
            logger.info("No untracked Drive items")
            return report

        logger.info("Found %d untracked Drive item(s), policy=%s", len(untracked), policy)
        if policy == "ignore":
            for path, _item in untracked:
                logger.info("Ignoring untracked item %s", path)
                report.skipped.append(path)
            return report

        # deepest paths first so children are handled before their folders
        for path, item in sorted(untracked, key=lambda pi: pi[0].count("/"), reverse=True):
            if policy == "remove":
                self._remove(path, item, report)
            else:
                self._request(path, item, report)
        return report

    def _remove(self, path: str, item: RemoteItem, report: UntrackedReport) -> None:
        if not item.owned:
            logger.warning(
                "Not trashing untracked %s: owned by %s, not the sync identity",
                path,
                item.current_owner_email() or "unknown",
            )
            report.skipped.append(path)
            return

        try:
            self._controller.trash(item.id)
        except NotFoundError:
            logger.info("Untracked %s already gone", path)
            report.trashed.append(path)
            return
        except PermissionError as exc:
            logger.warning("Permission denied trashing %s: %s", path, exc)
            report.skipped.append(path)
            return
        except GDriveSyncError as exc:
            logger.error("Failed to trash %s: %s", path, exc)
            report.failed.append(path)
            return

        logger.info("Trashed untracked item %s", path)
        report.trashed.append(path)

    def _request(self, path: str, item: RemoteItem, report: UntrackedReport) -> None:
        if item.owned:
            logger.debug("Untracked %s already owned by the sync identity", path)
            report.skipped.append(path)
            return

        owner = item.current_owner_email()
        if not owner or self._context.is_service_identity(owner):
            logger.warning("Cannot request ownership of %s: current owner unknown", path)
            report.skipped.append(path)
            return

        if item.id in self._context.requested_transfer_ids:
            logger.info("Ownership transfer already requested for %s", path)
            report.skipped.append(path)
            return

        try:
            request_ownership_transfer(self._controller, item, self._context)
        except GDriveSyncError as exc:
            logger.warning("Failed to request ownership transfer for %s: %s", path, exc)
            report.failed.append(path)
            return

        logger.info("Requested ownership transfer of %s from %s", path, owner)
        report.transfer_requested.append(path)


def request_ownership_transfer(controller, item: RemoteItem, context: ReconcileContext) -> None:
    """
    Ask the current owner of item to hand ownership to the sync identity.

    An existing permission of the sync identity is upgraded; otherwise a new
    owner permission is created and the owner notified by email.
    """
    existing = _service_permission(controller, item, context)
    if existing is not None:
        controller.update_permission(
            item.id,
            existing.id,
            {"role": "owner"},
            transfer_ownership=True,
        )
    else:
        controller.create_permission(
            item.id,
            {"role": "owner", "type": "user", "emailAddress": context.service_email},
            transfer_ownership=True,
            send_notification_email=True,
            email_message=(
                "Automated sync: please approve the ownership transfer of this item "
                f"to the sync service ({context.service_email}). Item ID: {item.id}"
            ),
        )
    context.requested_transfer_ids.add(item.id)


def _service_permission(controller, item: RemoteItem, context: ReconcileContext) -> Optional[Permission]:
    permissions = item.permissions
    if not permissions:
        try:
            permissions = controller.list_permissions(item.id)
        except GDriveSyncError as exc:
            logger.debug("Could not pre-check permissions for %s: %s", item.id, exc)
            return None
    for perm in permissions:
        if context.is_service_identity(perm.email_address):
            return perm
    return None


def accept_pending_transfers(controller, root_id: str, context: ReconcileContext) -> int:
    """
    Accept every pending ownership transfer to the sync identity under root_id.

    Walks the root and all descendants with a work queue. Items that vanish or
    deny access are skipped. Returns the number of transfers accepted.
    """
    accepted = 0
    queue: deque[tuple[str, str]] = deque([(root_id, FOLDER_MIME)])
    visited: set[str] = set()

    while queue:
        file_id, mime_type = queue.popleft()
        if file_id in visited:
            continue
        visited.add(file_id)

        try:
            permissions = controller.list_permissions(file_id)
            for perm in permissions:
                if not (perm.pending_owner and context.is_service_identity(perm.email_address)):
                    continue
                try:
                    controller.update_permission(file_id, perm.id, {}, transfer_ownership=True)
                except GDriveSyncError as exc:
                    logger.warning(
                        "Failed to accept ownership of %s (permission %s): %s", file_id, perm.id, exc
                    )
                    continue
                logger.info("Accepted ownership transfer for %s", file_id)
                context.requested_transfer_ids.discard(file_id)
                accepted += 1

            if mime_type == FOLDER_MIME:
                for child in controller.list_children(file_id):
                    if child.id:
                        queue.append((child.id, child.mime_type))
        except (NotFoundError, PermissionError) as exc:
            logger.debug("Skipping ownership check for %s: %s", file_id, exc)
        except GDriveSyncError as exc:
            logger.warning("Failed to process ownership transfers for %s: %s", file_id, exc)

    if accepted:
        logger.info("Accepted %d ownership transfer(s) under %s", accepted, root_id)
    return accepted
