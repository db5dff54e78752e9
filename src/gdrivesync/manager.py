"""SyncManager: runs one direction over every configured Drive target."""

from __future__ import annotations

import logging
import os
from typing import Optional

from gdrivesync.auth import AuthInfo
from gdrivesync.config import DriveTarget, SyncConfig
from gdrivesync.controller import GoogleDriveController
from gdrivesync.errors import AuthError
from gdrivesync.forge import GitHubForge
from gdrivesync.local import LocalTreeScanner
from gdrivesync.logging_setup import setup_logging
from gdrivesync.models import Direction, RunReport, TargetResult
from gdrivesync.proposal import ProposalEmitter
from gdrivesync.reconcile import (
    OutgoingUploader,
    ReconcileContext,
    UntrackedReconciler,
    accept_pending_transfers,
)
from gdrivesync.remote import RemoteListing, RemoteTreeScanner
from gdrivesync.util.ids import new_run_id
from gdrivesync.vcs import GitRepo

logger = logging.getLogger(__name__)


class SyncManager:
    """
    High-level orchestration for a run.

    Per target, in order:
        - push: scan remote, upload local files, apply the on_untrack policy
        - always: accept pending ownership transfers
        - always: propose remote-originated changes as a pull request
          (deletions only in the check direction)

    A failing target is recorded and the remaining targets still run.
    """

    def __init__(
        self,
        config: SyncConfig,
        controller,
        git,
        forge,
        *,
        direction: Direction,
        service_email: str,
        run_id: Optional[str] = None,
        repo_root: Optional[str] = None,
        github_ref: Optional[str] = None,
    ) -> None:
        self._config = config
        self._controller = controller
        self._git = git
        self._forge = forge
        self._direction = direction
        self._service_email = service_email
        self._run_id = run_id or new_run_id()
        self._repo_root = os.path.abspath(repo_root or os.getcwd())
        self._github_ref = github_ref

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        auth_info: AuthInfo,
        *,
        direction: Direction,
        repo_root: Optional[str] = None,
        github_token: Optional[str] = None,
        github_ref: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> "SyncManager":
        """
        Build a manager with real collaborators from sync.json settings.

        Configures logging from ``config.logging``, resolves the sync identity
        from the Drive credentials and pushes to ``config.git.remote``.

        Raises:
            AuthError: if the authenticated identity has no email address.
        """
        setup_logging(config.logging.level, config.logging.file, config.logging.format)

        controller = GoogleDriveController(auth_info)
        service_email = controller.get_user_email()
        if not service_email:
            raise AuthError("Could not determine the email of the sync identity")
        logger.info("Syncing as %s", service_email)

        root = os.path.abspath(repo_root or os.getcwd())
        return cls(
            config,
            controller,
            GitRepo(root, remote=config.git.remote),
            GitHubForge(config.source.repo, github_token),
            direction=direction,
            service_email=service_email,
            run_id=run_id,
            repo_root=root,
            github_ref=github_ref,
        )

    @property
    def run_id(self) -> str:
        return self._run_id

    def run(self) -> RunReport:
        report = RunReport(direction=self._direction, run_id=self._run_id)
        context = ReconcileContext(service_email=self._service_email)

        targets = self._config.drive_targets
        if not targets:
            logger.warning("No Drive targets configured")

        for target in targets:
            logger.info(
                "Processing Drive folder %s (on_untrack=%s, direction=%s)",
                target.drive_folder_id,
                target.on_untrack,
                self._direction.value,
            )
            result = TargetResult(folder_id=target.drive_folder_id, status="success")
            try:
                self._run_target(target, result, context)
            except Exception as exc:
                logger.error("Target %s failed: %s", target.drive_folder_id, exc)
                result.status = "failed"
                result.error_type = exc.__class__.__name__
                result.error_message = str(exc)
            report.targets.append(result)

        summary = report.summary()
        logger.info(
            "Run %s finished: %d succeeded, %d failed",
            self._run_id,
            summary["success"],
            summary["failed"],
        )
        return report

    def scan_remote(self, folder_id: str) -> RemoteListing:
        scanner = RemoteTreeScanner(self._controller, self._service_email)
        return scanner.scan(folder_id)

    def _run_target(self, target: DriveTarget, result: TargetResult, context: ReconcileContext) -> None:
        folder_id = target.drive_folder_id

        if self._direction is Direction.PUSH:
            listing = self.scan_remote(folder_id)
            records = LocalTreeScanner(self._repo_root, self._config.ignore).scan()

            uploader = OutgoingUploader(
                self._controller, batch_size=self._config.upload_concurrency
            )
            outgoing = uploader.sync(folder_id, records, listing)
            result.outgoing = outgoing

            if listing.failed_folders:
                logger.warning(
                    "Skipping untracked handling for %s: listing is partial", folder_id
                )
            else:
                result.untracked = UntrackedReconciler(self._controller, context).reconcile(
                    listing,
                    outgoing.touched_paths,
                    outgoing.required_folders,
                    target.on_untrack,
                )

        result.transfers_accepted = accept_pending_transfers(self._controller, folder_id, context)

        emitter = ProposalEmitter(
            self._git,
            self._forge,
            self._controller,
            self._repo_root,
            run_id=self._run_id,
            ignore_patterns=self._config.ignore,
            identity=self._config.git,
            github_ref=self._github_ref,
        )
        result.proposal = emitter.run(target, self.scan_remote, self._direction)
