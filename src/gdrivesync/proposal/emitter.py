"""Snapshot/Branch/Proposal Emitter for the check direction.

Runs one linear workflow per target::

    determine_base_ref -> create_pinned_snapshot -> scan_local -> scan_remote
    -> classify -> apply -> commit_if_dirty -> prepare_proposal_branch
    -> force_push -> create_or_update_proposal -> cleanup

``cleanup`` always runs once a base ref is known and never raises.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional, Sequence

from gdrivesync.config import DriveTarget, GitIdentityConfig
from gdrivesync.errors import BaseRefError, ForgeError, GDriveSyncError, VcsError
from gdrivesync.local import LocalTreeScanner, read_shortcut, write_shortcut
from gdrivesync.models import ChangeEntry, ChangeSet, Direction, ProposalResult, ShortcutRecord
from gdrivesync.reconcile.classifier import ChangeClassifier, ShortcutReader
from gdrivesync.reconcile.identity import expected_paths
from gdrivesync.remote.scanner import RemoteListing
from gdrivesync.util.ids import proposal_branch_name, snapshot_branch_name

from .body import commit_message, pull_request_body, pull_request_title

logger = logging.getLogger(__name__)

ListingProvider = Callable[[str], RemoteListing]

_HEADS_PREFIX = "refs/heads/"


class ProposalEmitter:
    """Materialize remote-originated changes on a proposal branch."""

    def __init__(
        self,
        git,
        forge,
        drive_controller,
        repo_root: str,
        *,
        run_id: str,
        ignore_patterns: Sequence[str] = (),
        identity: Optional[GitIdentityConfig] = None,
        github_ref: Optional[str] = None,
        shortcut_reader: ShortcutReader = read_shortcut,
    ) -> None:
        self._git = git
        self._forge = forge
        self._drive = drive_controller
        self._repo_root = os.path.abspath(repo_root)
        self._run_id = run_id
        self._ignore_patterns = tuple(ignore_patterns)
        self._identity = identity or GitIdentityConfig()
        self._github_ref = github_ref
        self._shortcut_reader = shortcut_reader

    def run(
        self,
        target: DriveTarget,
        listing_provider: ListingProvider,
        direction: Direction = Direction.CHECK,
    ) -> ProposalResult:
        """
        Propose the remote state of target as a pull request.

        A push run proposes additions and updates only; deletions come from
        check runs.
        """
        folder_id = target.drive_folder_id
        base = self.determine_base_ref()
        snapshot = snapshot_branch_name(folder_id, self._run_id)
        logger.info("Checking Drive folder %s against %s", folder_id, base)

        try:
            self.create_pinned_snapshot(snapshot)

            records = LocalTreeScanner(self._repo_root, self._ignore_patterns).scan()
            listing = listing_provider(folder_id)
            if listing.failed_folders:
                logger.warning(
                    "Listing of %s is partial; nothing under %s will be removed",
                    folder_id,
                    ", ".join(listing.failed_folders),
                )

            changes = ChangeClassifier(direction).classify(
                records, listing, self._shortcut_reader
            )
            applied, removed = self.apply(changes, target.on_untrack)

            if not self._git.has_staged_changes():
                logger.info("No staged changes after applying remote state; nothing to propose")
                return ProposalResult(status="clean", base=base)

            self._git.configure_identity(self._identity.user_name, self._identity.user_email)
            added_paths = [e.remote_path for e in applied]
            sync_commit = self._git.commit(
                commit_message(folder_id, self._run_id, added_paths, removed)
            )
            logger.info("Created sync commit %s", sync_commit)

            branch = proposal_branch_name(folder_id)
            self.prepare_proposal_branch(branch, sync_commit)
            self._git.force_push(branch)

            result = ProposalResult(
                status="committed",
                branch=branch,
                base=base,
                added_or_updated=sorted(added_paths),
                removed=sorted(removed),
            )
            if self._forge is None:
                logger.info("No forge configured; pushed %s without a pull request", branch)
                return result

            pr = self._forge.create_or_update_pull_request(
                branch,
                base,
                pull_request_title(folder_id),
                pull_request_body(
                    folder_id, self._run_id, applied, removed, drive_url=target.drive_url
                ),
            )
            if pr is not None:
                result.status = "proposed"
                result.pull_request_url = pr.url
            return result
        finally:
            self.cleanup(base, snapshot)

    # ----------------------------
    # Steps
    # ----------------------------
    def determine_base_ref(self) -> str:
        """
        Branch the run started on.

        Order: checked-out branch, then a refs/heads/ ref from the CI
        environment, then the forge's default branch.
        """
        try:
            branch = self._git.current_branch()
        except VcsError as exc:
            logger.debug("git rev-parse failed: %s", exc)
            branch = None
        if branch:
            return branch

        if self._github_ref and self._github_ref.startswith(_HEADS_PREFIX):
            return self._github_ref[len(_HEADS_PREFIX) :]

        if self._forge is not None:
            try:
                return self._forge.get_default_branch()
            except ForgeError as exc:
                raise BaseRefError("Could not determine the base branch", cause=exc) from exc

        raise BaseRefError("Could not determine the base branch")

    def create_pinned_snapshot(self, snapshot: str) -> str:
        head = self._git.resolve_head()
        self._git.create_branch_at(snapshot, head)
        logger.debug("Pinned snapshot %s at %s", snapshot, head)
        return head

    def apply(self, changes: ChangeSet, on_untrack: str) -> tuple[list[ChangeEntry], list[str]]:
        """Apply deletions, then write new/modified entries. Returns (applied, removed)."""
        removed: list[str] = []
        if changes.deleted:
            if on_untrack == "remove":
                removed = self._apply_deletions(changes.deleted)
            else:
                logger.info(
                    "Skipping removal of %d path(s) because on_untrack is %r",
                    len(changes.deleted),
                    on_untrack,
                )

        applied: list[ChangeEntry] = []
        for entry in changes.updates:
            written = self._apply_entry(entry)
            if not written:
                continue
            applied.append(entry)
            for path in written:
                if path in removed:
                    removed.remove(path)
        return applied, removed

    def _apply_deletions(self, paths: Sequence[str]) -> list[str]:
        removed: list[str] = []
        for path in sorted(paths, key=len, reverse=True):
            if not os.path.lexists(os.path.join(self._repo_root, path)):
                logger.debug("%s already absent", path)
                continue
            try:
                self._git.remove_path(path)
            except VcsError as exc:
                logger.error("Failed to remove %s: %s", path, exc)
                continue
            logger.info("Removed %s", path)
            removed.append(path)
        return removed

    def _apply_entry(self, entry: ChangeEntry) -> Optional[list[str]]:
        item = entry.item
        paths = expected_paths(item.kind, entry.remote_path, item.mime_type)
        written: list[str] = []
        try:
            if entry.refresh_content and paths.content_path:
                self._drive.download_file(
                    item.id,
                    os.path.join(self._repo_root, paths.content_path),
                    mime_type=item.mime_type,
                )
                written.append(paths.content_path)
            if entry.refresh_shortcut and paths.shortcut_path:
                write_shortcut(
                    os.path.join(self._repo_root, paths.shortcut_path),
                    ShortcutRecord(
                        id=item.id,
                        name=item.name,
                        mime_type=item.mime_type,
                        modified_time=item.modified_time or "",
                        web_view_link=item.web_view_link,
                    ),
                )
                written.append(paths.shortcut_path)
            for path in written:
                self._git.stage_path(path)
        except (GDriveSyncError, OSError) as exc:
            logger.error("Failed to materialize %s: %s", entry.remote_path, exc)
            return None

        logger.info("Wrote %s (%s)", ", ".join(written) or entry.remote_path, entry.reason)
        return written

    def prepare_proposal_branch(self, branch: str, sync_commit: str) -> None:
        if self._git.branch_exists_local(branch):
            self._git.checkout(branch)
        elif self._git.branch_exists_remote(branch):
            try:
                self._git.fetch_branch(branch)
                self._git.checkout(branch)
            except VcsError as exc:
                logger.warning("Could not fetch %s (%s); creating it locally", branch, exc)
                self._git.create_branch_at(branch, sync_commit)
        else:
            self._git.create_branch_at(branch, sync_commit)
        self._git.reset_hard(sync_commit)

    def cleanup(self, base: str, snapshot: str) -> None:
        try:
            if self._git.current_branch() != base:
                self._git.checkout(base, force=True)
        except VcsError as exc:
            logger.warning("Could not return to %s: %s", base, exc)
        try:
            if self._git.branch_exists_local(snapshot):
                self._git.delete_branch(snapshot)
        except VcsError as exc:
            logger.warning("Could not delete snapshot branch %s: %s", snapshot, exc)
