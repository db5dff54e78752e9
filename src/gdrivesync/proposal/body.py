"""Deterministic text for sync commits and pull requests."""

from __future__ import annotations

from typing import Iterable, Sequence

from gdrivesync.models import ChangeEntry
from gdrivesync.util.mime import MIME_TYPE_TO_EXTENSION


def folder_url(folder_id: str) -> str:
    return f"https://drive.google.com/drive/folders/{folder_id}"


def pull_request_title(folder_id: str) -> str:
    return f"Sync changes from Google Drive ({folder_id})"


def commit_message(
    folder_id: str,
    run_id: str,
    added_or_updated: Sequence[str],
    removed: Sequence[str],
) -> str:
    lines = [pull_request_title(folder_id)]
    if added_or_updated:
        lines.append("- Add/Update: " + ", ".join(f"'{p}'" for p in sorted(added_or_updated)))
    if removed:
        lines.append("- Remove: " + ", ".join(f"'{p}'" for p in sorted(removed)))
    lines.append("")
    lines.append(f"Source Drive Folder ID: {folder_id}")
    lines.append(f"Run ID: {run_id}")
    return "\n".join(lines)


def _entry_line(entry: ChangeEntry) -> str:
    extension = MIME_TYPE_TO_EXTENSION.get(entry.item.mime_type)
    label = f"[{extension}] {entry.remote_path}" if extension else entry.remote_path
    display = f"`{label}`"
    if entry.item.web_view_link:
        return f"*   [{display}]({entry.item.web_view_link})"
    return f"*   {display}"


def pull_request_body(
    folder_id: str,
    run_id: str,
    entries: Iterable[ChangeEntry],
    removed: Iterable[str],
    *,
    drive_url: str | None = None,
) -> str:
    """
    Render the proposal body.

    Additions/updates are sorted by remote path and removals by local path so
    repeated runs over the same state render identical text.
    """
    url = drive_url or folder_url(folder_id)
    lines = [
        f"This PR syncs changes detected in Google Drive folder [{folder_id}]({url}).",
        f"Based on the state fetched during run `{run_id}`.",
    ]

    sorted_entries = sorted(entries, key=lambda e: e.remote_path)
    if sorted_entries:
        lines.append("")
        lines.append("**Added/Updated:**")
        lines.extend(_entry_line(e) for e in sorted_entries)

    sorted_removed = sorted(set(removed))
    if sorted_removed:
        lines.append("")
        lines.append("**Removed:**")
        lines.extend(f"*   `{p}`" for p in sorted_removed)

    lines.append("")
    lines.append(f"*Source Drive Folder ID: `{folder_id}`*")
    lines.append(f"*Run ID: `{run_id}`*")
    return "\n".join(lines)
