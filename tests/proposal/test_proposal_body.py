import unittest

from gdrivesync.models import ChangeEntry, RemoteItem
from gdrivesync.proposal import commit_message, pull_request_body, pull_request_title

SHEET = "application/vnd.google-apps.spreadsheet"


def _entry(path: str, mime_type: str, link=None) -> ChangeEntry:
    return ChangeEntry(
        remote_path=path,
        item=RemoteItem(id=path, name=path, mime_type=mime_type, web_view_link=link),
        reasons=("missing shortcut",),
    )


class TestProposalBody(unittest.TestCase):
    def test_title(self) -> None:
        self.assertEqual(pull_request_title("F1"), "Sync changes from Google Drive (F1)")

    def test_body_is_sorted_and_deterministic(self) -> None:
        entries = [
            _entry("z.csv", "text/csv"),
            _entry("Budget", SHEET, link="https://docs.google.com/spreadsheets/d/X"),
        ]
        removed = ["old/b.txt", "old/a.txt", "old/b.txt"]

        body = pull_request_body("F1", "run-9", entries, removed)

        self.assertEqual(body, pull_request_body("F1", "run-9", list(reversed(entries)), sorted(removed)))
        lines = body.splitlines()
        self.assertEqual(
            lines[0],
            "This PR syncs changes detected in Google Drive folder "
            "[F1](https://drive.google.com/drive/folders/F1).",
        )
        added = lines.index("**Added/Updated:**")
        self.assertEqual(
            lines[added + 1], "*   [`[sheet] Budget`](https://docs.google.com/spreadsheets/d/X)"
        )
        self.assertEqual(lines[added + 2], "*   `z.csv`")
        removed_at = lines.index("**Removed:**")
        self.assertEqual(lines[removed_at + 1 : removed_at + 3], ["*   `old/a.txt`", "*   `old/b.txt`"])
        self.assertEqual(lines[-2:], ["*Source Drive Folder ID: `F1`*", "*Run ID: `run-9`*"])

    def test_body_uses_configured_drive_url(self) -> None:
        body = pull_request_body("F1", "r", [], [], drive_url="https://drive.example/F1")
        self.assertIn("[F1](https://drive.example/F1)", body)
        self.assertNotIn("**Removed:**", body)

    def test_commit_message(self) -> None:
        message = commit_message("F1", "r1", ["b.txt", "a.txt"], ["gone.txt"])
        self.assertEqual(
            message.splitlines(),
            [
                "Sync changes from Google Drive (F1)",
                "- Add/Update: 'a.txt', 'b.txt'",
                "- Remove: 'gone.txt'",
                "",
                "Source Drive Folder ID: F1",
                "Run ID: r1",
            ],
        )


if __name__ == "__main__":
    unittest.main()
