"""Local Tree Scanner: snapshot of the working tree with content hashes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

import pathspec

from gdrivesync.models import LocalFileRecord
from gdrivesync.util.paths import to_posix

from .hashing import file_md5

logger = logging.getLogger(__name__)

ALWAYS_EXCLUDED_DIRS: frozenset[str] = frozenset({".git"})


def build_ignore_spec(
    root: str | Path,
    patterns: Iterable[str] = (),
    *,
    use_gitignore: bool = True,
) -> pathspec.PathSpec:
    """Combine configured globs with the root .gitignore (gitignore semantics)."""
    lines: list[str] = list(patterns)
    gitignore = Path(root) / ".gitignore"
    if use_gitignore and gitignore.is_file():
        try:
            lines.extend(gitignore.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", gitignore, exc)
    return pathspec.GitIgnoreSpec.from_lines(lines)


class LocalTreeScanner:
    """
    Walk a directory and return one LocalFileRecord per non-ignored file.

    Notes:
        - Symlinked directories are not followed.
        - `.git/` is always skipped; ignored directories are pruned.
        - Files that cannot be read are logged and left out.
    """

    def __init__(
        self,
        root: str | Path,
        ignore_patterns: Sequence[str] = (),
        *,
        use_gitignore: bool = True,
    ) -> None:
        self._root = os.path.abspath(str(root))
        self._spec = build_ignore_spec(self._root, ignore_patterns, use_gitignore=use_gitignore)

    @property
    def root(self) -> str:
        return self._root

    def is_ignored(self, relative_path: str, *, is_dir: bool = False) -> bool:
        candidate = relative_path + "/" if is_dir else relative_path
        return self._spec.match_file(candidate)

    def scan(self) -> list[LocalFileRecord]:
        records: list[LocalFileRecord] = []

        for dirpath, dirnames, filenames in os.walk(self._root):
            rel_dir = to_posix(os.path.relpath(dirpath, self._root))
            if rel_dir == ".":
                rel_dir = ""

            kept_dirs = []
            for d in dirnames:
                rel = f"{rel_dir}/{d}" if rel_dir else d
                if d in ALWAYS_EXCLUDED_DIRS or self.is_ignored(rel, is_dir=True):
                    continue
                kept_dirs.append(d)
            dirnames[:] = sorted(kept_dirs)

            for name in filenames:
                rel = f"{rel_dir}/{name}" if rel_dir else name
                if self.is_ignored(rel):
                    continue
                abs_path = os.path.join(dirpath, name)
                if os.path.islink(abs_path):
                    logger.debug("Skipping symlink %s", rel)
                    continue
                if not os.path.isfile(abs_path):
                    continue
                try:
                    digest = file_md5(abs_path)
                except OSError as exc:
                    logger.warning("Skipping unreadable file %s: %s", rel, exc)
                    continue
                records.append(
                    LocalFileRecord(
                        relative_path=rel,
                        content_hash=digest,
                        absolute_path=abs_path,
                    )
                )

        records.sort(key=lambda r: r.relative_path)
        logger.debug("Scanned %d local file(s) under %s", len(records), self._root)
        return records
