import unittest

from gdrivesync.models import ChangeEntry, ChangeSet, RemoteItem


def _entry(path: str) -> ChangeEntry:
    return ChangeEntry(
        remote_path=path,
        item=RemoteItem(id=path, name=path, mime_type="text/plain"),
        reasons=("missing content file", "content hash mismatch"),
    )


class TestChangeSet(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertTrue(ChangeSet().is_empty())

    def test_reason_joins_reasons(self) -> None:
        self.assertEqual(_entry("a").reason, "missing content file, content hash mismatch")

    def test_updates_and_deleted(self) -> None:
        changes = ChangeSet(
            new=[_entry("a")],
            modified=[_entry("b")],
            deleted_files=["z.txt", "old"],
            deleted_folders=["old"],
        )
        self.assertFalse(changes.is_empty())
        self.assertEqual([e.remote_path for e in changes.updates], ["a", "b"])
        self.assertEqual(changes.deleted, ["old", "z.txt"])


if __name__ == "__main__":
    unittest.main()
