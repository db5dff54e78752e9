"""Identity Mapper: where a remote item lives in the local tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gdrivesync.models import LocalFileRecord, RemoteKind
from gdrivesync.util.mime import SHORTCUT_SUFFIX, shortcut_suffix


@dataclass(slots=True, frozen=True)
class ExpectedPaths:
    content_path: Optional[str] = None
    shortcut_path: Optional[str] = None

    def all(self) -> list[str]:
        return [p for p in (self.content_path, self.shortcut_path) if p]


def expected_paths(kind: RemoteKind, remote_path: str, mime_type: Optional[str]) -> ExpectedPaths:
    """
    Map a remote item to its local representation.

    Raises:
        ValueError: for folders, which have no file representation.
    """
    if kind is RemoteKind.BINARY_FILE:
        return ExpectedPaths(content_path=remote_path)
    if kind is RemoteKind.OPAQUE_DOCUMENT:
        return ExpectedPaths(shortcut_path=remote_path + shortcut_suffix(mime_type))
    if kind is RemoteKind.EXPORTABLE_DOCUMENT:
        return ExpectedPaths(
            content_path=remote_path,
            shortcut_path=remote_path + shortcut_suffix(mime_type),
        )
    raise ValueError(f"{kind.value} items have no local file representation")


def stray_shortcut_paths(remote_path: str, mime_type: Optional[str]) -> list[str]:
    """Shortcut paths that must not exist next to a binary file."""
    candidates = [remote_path + shortcut_suffix(mime_type), remote_path + SHORTCUT_SUFFIX]
    return list(dict.fromkeys(candidates))


class LocalIndex:
    """Case-insensitive lookup over the local snapshot, built once per run."""

    def __init__(self, records: Iterable[LocalFileRecord]) -> None:
        self._by_lower: dict[str, LocalFileRecord] = {}
        for record in records:
            self._by_lower.setdefault(record.relative_path.lower(), record)

    def __len__(self) -> int:
        return len(self._by_lower)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path.lower() in self._by_lower

    def lookup(self, path: str) -> Optional[LocalFileRecord]:
        return self._by_lower.get(path.lower())

    @property
    def paths(self) -> list[str]:
        """Canonical (original case) paths, sorted."""
        return sorted(r.relative_path for r in self._by_lower.values())
