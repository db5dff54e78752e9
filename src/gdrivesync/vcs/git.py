"""Git command surface used by the proposal emitter."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from gdrivesync.errors import VcsError

logger = logging.getLogger(__name__)


class GitRepo:
    """Run git commands against one working tree (strictly sequentially)."""

    def __init__(self, root: Path | str, *, remote: str = "origin") -> None:
        self.root = Path(root).resolve()
        self.remote = remote

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = ["git", "-C", str(self.root), *args]
        logger.debug("git %s", " ".join(args))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise VcsError("Git executable not found", cause=e) from e
        if check and result.returncode != 0:
            raise VcsError(
                f"git {args[0]} failed: {result.stderr.strip()}",
                details={"args": list(args), "returncode": result.returncode},
            )
        return result

    def _out(self, *args: str) -> str:
        return self._run(*args).stdout.strip()

    # ----------------------------
    # Queries
    # ----------------------------
    def current_branch(self) -> Optional[str]:
        """Checked-out branch name, or None on a detached HEAD."""
        name = self._out("rev-parse", "--abbrev-ref", "HEAD")
        if not name or name == "HEAD":
            return None
        return name

    def resolve_head(self) -> str:
        return self._out("rev-parse", "HEAD")

    def status_porcelain(self) -> str:
        return self._out("status", "--porcelain")

    def has_staged_changes(self) -> bool:
        """True when the index differs from HEAD; untracked files do not count."""
        result = self._run("diff", "--cached", "--quiet", check=False)
        if result.returncode not in (0, 1):
            raise VcsError(
                f"git diff failed: {result.stderr.strip()}",
                details={"args": ["diff", "--cached", "--quiet"], "returncode": result.returncode},
            )
        return result.returncode == 1

    def branch_exists_local(self, branch: str) -> bool:
        result = self._run("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", check=False)
        return result.returncode == 0

    def branch_exists_remote(self, branch: str) -> bool:
        result = self._run("ls-remote", "--exit-code", "--heads", self.remote, branch, check=False)
        return result.returncode == 0

    # ----------------------------
    # Mutations
    # ----------------------------
    def configure_identity(self, user_name: str, user_email: str) -> None:
        self._run("config", "--local", "user.name", user_name)
        self._run("config", "--local", "user.email", user_email)

    def create_branch_at(self, branch: str, commit: str) -> None:
        """Create branch at commit and check it out."""
        self._run("checkout", "-b", branch, commit)

    def checkout(self, ref: str, *, force: bool = False) -> None:
        args = ["checkout"]
        if force:
            args.append("--force")
        self._run(*args, ref)

    def stage_path(self, path: str) -> None:
        self._run("add", "--", path)

    def remove_path(self, path: str) -> None:
        """Remove path (recursively) from index and working tree."""
        self._run("rm", "-r", "-f", "--ignore-unmatch", "--", path)

    def commit(self, message: str) -> str:
        """Commit staged changes and return the new HEAD sha."""
        self._run("commit", "-m", message)
        return self.resolve_head()

    def fetch_branch(self, branch: str) -> None:
        """Fetch remote branch into a local branch of the same name."""
        self._run("fetch", self.remote, f"{branch}:{branch}")

    def reset_hard(self, commit: str) -> None:
        self._run("reset", "--hard", commit)

    def force_push(self, branch: str) -> None:
        self._run("push", "--force", self.remote, branch)

    def delete_branch(self, branch: str) -> None:
        self._run("branch", "-D", branch)
