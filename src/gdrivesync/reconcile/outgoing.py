"""Outgoing uploader: push local files into a Drive target."""

from __future__ import annotations

import logging
import posixpath
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

from gdrivesync.errors import GDriveSyncError, ShortcutFormatError
from gdrivesync.local.shortcuts import read_shortcut
from gdrivesync.models import LocalFileRecord, OutgoingReport, RemoteItem
from gdrivesync.remote.scanner import RemoteListing
from gdrivesync.util.mime import is_google_app, is_shortcut_path, strip_shortcut_suffix
from gdrivesync.util.paths import join_posix, parent_dirs

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


@dataclass(slots=True, frozen=True)
class _FileResult:
    path: str
    action: str
    error: Optional[str] = None


def shortcut_remote_path(record: LocalFileRecord) -> str:
    """Drive path a shortcut sidecar stands for: its stored name, else the stripped path."""
    try:
        name = read_shortcut(record.absolute_path).name
    except ShortcutFormatError as exc:
        logger.debug("Unreadable shortcut %s: %s", record.relative_path, exc)
        return strip_shortcut_suffix(record.relative_path)
    if not name or "/" in name:
        return strip_shortcut_suffix(record.relative_path)
    return join_posix(posixpath.dirname(record.relative_path), name)


class OutgoingUploader:
    """
    Mirror local files into a Drive folder.

    New files are uploaded, files whose Drive md5 differs (or is missing) are
    updated in place and items whose name differs only in case are renamed.
    Shortcut sidecars are never uploaded; they mark their document as touched.
    """

    def __init__(self, controller, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._controller = controller
        self._batch_size = batch_size

    def sync(
        self,
        root_id: str,
        local_records: Sequence[LocalFileRecord],
        listing: RemoteListing,
    ) -> OutgoingReport:
        report = OutgoingReport()
        folder_ids = self.build_folder_structure(root_id, local_records, listing)
        report.required_folders.update(p for p in folder_ids if p)

        drive_files = {p.lower(): item for p, item in listing.files.items()}
        work: list[tuple[LocalFileRecord, str]] = []

        for record in local_records:
            if is_shortcut_path(record.relative_path):
                report.touched_paths.add(shortcut_remote_path(record))
                continue
            report.touched_paths.add(record.relative_path)

            parent = posixpath.dirname(record.relative_path)
            parent_id = folder_ids.get(parent)
            if parent_id is None:
                logger.warning("No Drive folder for %r, skipping %s", parent, record.relative_path)
                report.failed.append(record.relative_path)
                continue
            work.append((record, parent_id))

        with ThreadPoolExecutor(max_workers=self._batch_size) as pool:
            for start in range(0, len(work), self._batch_size):
                batch = work[start : start + self._batch_size]
                futures = [
                    pool.submit(self._process_one, record, parent_id, drive_files)
                    for record, parent_id in batch
                ]
                # barrier: the whole batch finishes before results are merged
                results = [f.result() for f in futures]
                for result in results:
                    _merge(report, result)

        logger.info(
            "Outgoing: %d uploaded, %d updated, %d renamed, %d failed",
            len(report.uploaded),
            len(report.updated),
            len(report.renamed),
            len(report.failed),
        )
        return report

    def build_folder_structure(
        self,
        root_id: str,
        local_records: Sequence[LocalFileRecord],
        listing: RemoteListing,
    ) -> dict[str, str]:
        """Return posix folder path -> Drive folder id, creating missing folders."""
        folder_ids: dict[str, str] = {"": root_id}
        listed = {p.lower(): item for p, item in listing.folders.items()}

        wanted: set[str] = set()
        for record in local_records:
            wanted.update(parent_dirs(record.relative_path))

        for folder in sorted(wanted, key=lambda d: (d.count("/"), d)):
            parent, name = posixpath.split(folder)
            parent_id = folder_ids.get(parent)
            if parent_id is None:
                continue

            existing = listed.get(folder.lower())
            if existing is not None:
                folder_ids[folder] = existing.id
                continue

            try:
                found = self._controller.find_child_folder(parent_id, name)
                if found is None:
                    found = self._controller.create_folder(name, parent_id)
                    logger.info("Created Drive folder %s", folder)
            except GDriveSyncError as exc:
                logger.error("Failed to ensure Drive folder %s: %s", folder, exc)
                continue
            folder_ids[folder] = found.id

        return folder_ids

    def _process_one(
        self,
        record: LocalFileRecord,
        parent_id: str,
        drive_files: dict[str, RemoteItem],
    ) -> _FileResult:
        path = record.relative_path
        target_name = posixpath.basename(path)
        existing = drive_files.get(path.lower())

        try:
            if existing is None:
                self._controller.upload_file(record.absolute_path, parent_id, name=target_name)
                logger.info("Uploaded %s", path)
                return _FileResult(path, "uploaded")

            if is_google_app(existing.mime_type):
                if existing.name != target_name:
                    self._controller.rename(existing.id, target_name)
                    logger.info("Renamed %r to %r", existing.name, target_name)
                    return _FileResult(path, "renamed")
                return _FileResult(path, "unchanged")

            if not existing.content_hash or existing.content_hash != record.content_hash:
                self._controller.update_file(existing.id, record.absolute_path)
                logger.info("Updated %s", path)
                return _FileResult(path, "updated")

            if existing.name != target_name:
                self._controller.rename(existing.id, target_name)
                logger.info("Renamed %r to %r", existing.name, target_name)
                return _FileResult(path, "renamed")
        except (GDriveSyncError, OSError) as exc:
            logger.error("Failed processing outgoing file %s: %s", path, exc)
            return _FileResult(path, "failed", str(exc))

        logger.debug("Unchanged %s", path)
        return _FileResult(path, "unchanged")


def _merge(report: OutgoingReport, result: _FileResult) -> None:
    if result.action == "uploaded":
        report.uploaded.append(result.path)
    elif result.action == "updated":
        report.updated.append(result.path)
    elif result.action == "renamed":
        report.renamed.append(result.path)
    elif result.action == "failed":
        report.failed.append(result.path)
