"""Change Classifier: diff a remote listing against the pinned local snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from gdrivesync.errors import ShortcutFormatError
from gdrivesync.local.shortcuts import read_shortcut
from gdrivesync.models import (
    ChangeEntry,
    ChangeSet,
    Direction,
    LocalFileRecord,
    RemoteItem,
    RemoteKind,
    ShortcutRecord,
)
from gdrivesync.remote.scanner import RemoteListing
from gdrivesync.util.mime import is_shortcut_path, strip_shortcut_suffix
from gdrivesync.util.paths import is_under, parent_dirs
from gdrivesync.util.time import is_zulu_timestamp

from .identity import LocalIndex, expected_paths, stray_shortcut_paths

logger = logging.getLogger(__name__)

ShortcutReader = Callable[[str], ShortcutRecord]

REASON_MISSING_SHORTCUT = "missing shortcut"
REASON_PARSE_FAILED = "failed to parse shortcut"
REASON_INVALID_TIME = "invalid modifiedTime format"
REASON_MISSING_TIME = "missing modifiedTime data"
REASON_MISSING_CONTENT = "missing content file"
REASON_HASH_MISMATCH = "content hash mismatch"
REASON_MISSING_HASH = "remote item missing hash"
REASON_UNEXPECTED_CONTENT = "unexpected content file"


def check_shortcut_timestamp(
    record: Optional[LocalFileRecord],
    item: RemoteItem,
    reader: ShortcutReader,
) -> Optional[str]:
    """
    Return why the shortcut for item is stale, or None when it is up to date.

    Timestamps are compared as exact strings once the remote value has a
    Zulu RFC3339 shape; malformed data counts as stale, never as an error.
    """
    if record is None:
        return REASON_MISSING_SHORTCUT

    try:
        shortcut = reader(record.absolute_path)
    except ShortcutFormatError as exc:
        logger.warning("Could not parse shortcut %s: %s", record.relative_path, exc)
        return REASON_PARSE_FAILED

    remote_time = item.modified_time
    local_time = shortcut.modified_time
    if not remote_time or not local_time:
        return REASON_MISSING_TIME
    if not is_zulu_timestamp(remote_time):
        return REASON_INVALID_TIME
    if remote_time != local_time:
        return f"modifiedTime mismatch (remote: {remote_time}, local: {local_time})"
    return None


@dataclass(slots=True)
class Outcome:
    """What a strategy found for one remote item."""

    matched: list[str] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)
    refresh_content: bool = False
    refresh_shortcut: bool = False
    extra_deletions: list[str] = field(default_factory=list)
    found_any: bool = False

    def add_reason(self, reason: str) -> None:
        if reason not in self.reasons:
            self.reasons.append(reason)

    def match(self, record: LocalFileRecord) -> None:
        self.matched.append(record.relative_path)
        self.found_any = True


class ClassificationStrategy:
    kind: RemoteKind

    def classify(
        self,
        index: LocalIndex,
        item: RemoteItem,
        remote_path: str,
        shortcut_reader: ShortcutReader,
    ) -> Outcome:
        raise NotImplementedError


class OpaqueDocumentStrategy(ClassificationStrategy):
    """Documents with no byte content: only a shortcut may exist locally."""

    kind = RemoteKind.OPAQUE_DOCUMENT

    def classify(self, index, item, remote_path, shortcut_reader):
        out = Outcome()
        paths = expected_paths(self.kind, remote_path, item.mime_type)

        shortcut = index.lookup(paths.shortcut_path)  # type: ignore[arg-type]
        if shortcut is not None:
            out.match(shortcut)
        stale = check_shortcut_timestamp(shortcut, item, shortcut_reader)
        if stale:
            out.add_reason(stale)
            out.refresh_shortcut = True

        drift = index.lookup(remote_path)
        if drift is not None:
            out.found_any = True
            out.add_reason(REASON_UNEXPECTED_CONTENT)
            out.extra_deletions.append(drift.relative_path)

        return out


class ExportableDocumentStrategy(ClassificationStrategy):
    """Documents with downloadable content plus a shortcut carrying the link."""

    kind = RemoteKind.EXPORTABLE_DOCUMENT

    def classify(self, index, item, remote_path, shortcut_reader):
        out = Outcome()
        paths = expected_paths(self.kind, remote_path, item.mime_type)

        shortcut = index.lookup(paths.shortcut_path)  # type: ignore[arg-type]
        if shortcut is not None:
            out.match(shortcut)
        stale = check_shortcut_timestamp(shortcut, item, shortcut_reader)
        if stale:
            out.refresh_shortcut = True

        content = index.lookup(paths.content_path)  # type: ignore[arg-type]
        if content is None:
            out.add_reason(REASON_MISSING_CONTENT)
            out.refresh_content = True
        else:
            out.match(content)
            if item.content_hash:
                if content.content_hash != item.content_hash:
                    out.add_reason(REASON_HASH_MISMATCH)
                    out.refresh_content = True
            elif stale:
                # no remote hash: the shortcut timestamp is the only staleness signal
                out.refresh_content = True

        if stale:
            out.add_reason(stale)
        return out


class BinaryFileStrategy(ClassificationStrategy):
    """Plain files compared by content hash."""

    kind = RemoteKind.BINARY_FILE

    def classify(self, index, item, remote_path, shortcut_reader):
        out = Outcome()
        paths = expected_paths(self.kind, remote_path, item.mime_type)

        content = index.lookup(paths.content_path)  # type: ignore[arg-type]
        if content is None:
            out.add_reason(REASON_MISSING_CONTENT)
            out.refresh_content = True
        else:
            out.match(content)
            if not item.content_hash:
                out.add_reason(REASON_MISSING_HASH)
                out.refresh_content = True
            elif content.content_hash != item.content_hash:
                out.add_reason(REASON_HASH_MISMATCH)
                out.refresh_content = True

        for candidate in stray_shortcut_paths(remote_path, item.mime_type):
            stray = index.lookup(candidate)
            if stray is not None and stray.relative_path not in out.extra_deletions:
                logger.info("Stray shortcut %s next to binary %s", stray.relative_path, remote_path)
                out.extra_deletions.append(stray.relative_path)

        return out


STRATEGIES: dict[RemoteKind, ClassificationStrategy] = {
    RemoteKind.OPAQUE_DOCUMENT: OpaqueDocumentStrategy(),
    RemoteKind.EXPORTABLE_DOCUMENT: ExportableDocumentStrategy(),
    RemoteKind.BINARY_FILE: BinaryFileStrategy(),
}


class ChangeClassifier:
    """
    Produce a ChangeSet from a remote listing and a local snapshot.

    Deletions are only computed for Direction.CHECK; a PUSH run never
    yields deletions.
    """

    def __init__(self, direction: Direction) -> None:
        self._direction = direction

    @property
    def direction(self) -> Direction:
        return self._direction

    def classify(
        self,
        local_records: Iterable[LocalFileRecord],
        listing: RemoteListing,
        shortcut_reader: ShortcutReader = read_shortcut,
    ) -> ChangeSet:
        index = LocalIndex(local_records)
        changes = ChangeSet()
        matched: set[str] = set()
        extra_deletions: list[str] = []

        for remote_path in sorted(listing.files):
            item = listing.files[remote_path]
            strategy = STRATEGIES.get(item.kind)
            if strategy is None:
                logger.debug("No strategy for %s (%s), skipping", remote_path, item.kind.value)
                continue

            outcome = strategy.classify(index, item, remote_path, shortcut_reader)
            matched.update(p.lower() for p in outcome.matched)
            extra_deletions.extend(outcome.extra_deletions)

            if not outcome.reasons:
                logger.debug("Up to date: %s", remote_path)
                continue

            entry = ChangeEntry(
                remote_path=remote_path,
                item=item,
                reasons=tuple(outcome.reasons),
                refresh_content=outcome.refresh_content,
                refresh_shortcut=outcome.refresh_shortcut,
            )
            if outcome.found_any:
                changes.modified.append(entry)
                logger.info("Modified: %s (%s)", remote_path, entry.reason)
            else:
                changes.new.append(entry)
                logger.info("New: %s (%s)", remote_path, entry.reason)

        if self._direction is Direction.CHECK:
            self._deletion_pass(index, listing, matched, extra_deletions, changes)

        return changes

    def _deletion_pass(
        self,
        index: LocalIndex,
        listing: RemoteListing,
        matched: set[str],
        extra_deletions: list[str],
        changes: ChangeSet,
    ) -> None:
        extra_lower = {p.lower() for p in extra_deletions}
        file_candidates: set[str] = set(extra_deletions)

        # local paths under a subtree that failed to list are never removed
        unlisted = [f.lower() for f in listing.failed_folders]

        def is_unlisted(path: str) -> bool:
            lower = path.lower()
            return any(is_under(lower, f) for f in unlisted)

        for path in index.paths:
            lower = path.lower()
            if lower in matched or is_unlisted(path):
                continue
            if (
                lower not in extra_lower
                and is_shortcut_path(path)
                and strip_shortcut_suffix(lower) in matched
            ):
                continue
            file_candidates.add(path)

        remote_lower = [p.lower() for p in listing.paths()]
        local_dirs: set[str] = set()
        for path in index.paths:
            local_dirs.update(parent_dirs(path))
            if is_shortcut_path(path):
                local_dirs.update(parent_dirs(strip_shortcut_suffix(path)))

        folder_candidates: list[str] = []
        for folder in sorted(local_dirs, key=lambda d: (d.count("/"), d)):
            folder_lower = folder.lower()
            if any(is_under(folder_lower, f.lower()) for f in folder_candidates):
                continue
            if is_unlisted(folder):
                continue
            if any(is_under(p, folder_lower) for p in remote_lower):
                continue
            folder_candidates.append(folder)

        changes.deleted_folders = sorted(folder_candidates)
        changes.deleted_files = sorted(
            p
            for p in file_candidates
            if not any(is_under(p.lower(), f.lower()) for f in folder_candidates)
        )
        for path in changes.deleted:
            logger.info("Deleted remotely: %s", path)
