"""Read and write shortcut sidecar files."""

from __future__ import annotations

import json
import os

from gdrivesync.errors import ShortcutFormatError
from gdrivesync.models import ShortcutRecord


def dump_shortcut(record: ShortcutRecord) -> str:
    """Serialize a record exactly as it is stored on disk."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"


def load_shortcut(text: str) -> ShortcutRecord:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ShortcutFormatError("Shortcut is not valid JSON", cause=exc) from exc
    return ShortcutRecord.from_dict(data)


def read_shortcut(path: str) -> ShortcutRecord:
    """
    Parse the shortcut file at path.

    Raises:
        ShortcutFormatError: unreadable file, invalid JSON or schema mismatch.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ShortcutFormatError(
            "Shortcut file could not be read",
            details={"path": path},
            cause=exc,
        ) from exc
    return load_shortcut(text)


def write_shortcut(path: str, record: ShortcutRecord) -> None:
    parent_dir = os.path.dirname(path)
    if parent_dir:
        os.makedirs(parent_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(dump_shortcut(record))
