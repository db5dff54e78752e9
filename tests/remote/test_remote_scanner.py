import unittest

from gdrivesync.errors import ApiError, PermissionError, RemoteListingError
from gdrivesync.models import Permission, RemoteItem
from gdrivesync.remote import RemoteTreeScanner
from gdrivesync.util.mime import FOLDER_MIME

SERVICE = "sync@p.iam.gserviceaccount.com"


def _folder(id_: str, name: str) -> RemoteItem:
    return RemoteItem(id=id_, name=name, mime_type=FOLDER_MIME, owners=[SERVICE])


def _file(id_: str, name: str, owner: str = SERVICE) -> RemoteItem:
    return RemoteItem(id=id_, name=name, mime_type="text/plain", content_hash="h", owners=[owner])


class FakeListingController:
    def __init__(self, tree, failing=(), permission_failures=()) -> None:
        self.tree = tree
        self.failing = set(failing)
        self.permission_failures = set(permission_failures)
        self.listed: list[str] = []

    def list_children(self, parent_id, *, max_pages=None):
        self.listed.append(parent_id)
        if parent_id in self.failing:
            raise ApiError("boom")
        return list(self.tree.get(parent_id, []))

    def list_permissions(self, file_id):
        if file_id in self.permission_failures:
            raise PermissionError("denied")
        return [Permission(id=f"p-{file_id}", role="owner", email_address=SERVICE)]


class TestRemoteTreeScanner(unittest.TestCase):
    def test_walks_breadth_first_with_paths(self) -> None:
        ctrl = FakeListingController(
            {
                "root": [_folder("A", "a"), _file("1", "top.txt"), _folder("B", "b")],
                "A": [_folder("AA", "deep"), _file("2", "one.txt")],
                "B": [_file("3", "two.txt")],
                "AA": [_file("4", "three.txt")],
            }
        )

        listing = RemoteTreeScanner(ctrl, SERVICE).scan("root")

        self.assertEqual(ctrl.listed, ["root", "A", "B", "AA"])
        self.assertEqual(set(listing.folders), {"a", "b", "a/deep"})
        self.assertEqual(
            set(listing.files), {"top.txt", "a/one.txt", "b/two.txt", "a/deep/three.txt"}
        )
        self.assertEqual(listing.files["a/deep/three.txt"].parent_path, "a/deep")
        self.assertTrue(listing.complete)
        self.assertEqual(listing.paths(), set(listing.files) | set(listing.folders))

    def test_root_failure_raises(self) -> None:
        ctrl = FakeListingController({}, failing={"root"})
        with self.assertRaises(RemoteListingError) as ctx:
            RemoteTreeScanner(ctrl, SERVICE).scan("root")
        self.assertIsInstance(ctx.exception.cause, ApiError)

    def test_subtree_failure_is_recorded_and_skipped(self) -> None:
        ctrl = FakeListingController(
            {
                "root": [_folder("A", "a"), _folder("B", "b")],
                "B": [_file("3", "two.txt")],
            },
            failing={"A"},
        )

        listing = RemoteTreeScanner(ctrl, SERVICE).scan("root")

        self.assertEqual(listing.failed_folders, ["a"])
        self.assertFalse(listing.complete)
        self.assertIn("b/two.txt", listing.files)

    def test_duplicates_and_nameless_items_are_skipped(self) -> None:
        ctrl = FakeListingController(
            {
                "root": [
                    _file("1", "same.txt"),
                    _file("2", "same.txt"),
                    RemoteItem(id="", name="ghost", mime_type="text/plain"),
                    RemoteItem(id="9", name="", mime_type="text/plain"),
                ]
            }
        )

        listing = RemoteTreeScanner(ctrl, SERVICE).scan("root")

        self.assertEqual(list(listing.files), ["same.txt"])
        self.assertEqual(listing.files["same.txt"].id, "1")

    def test_folder_cycle_is_visited_once(self) -> None:
        ctrl = FakeListingController(
            {
                "root": [_folder("A", "a")],
                "A": [_folder("root", "back")],
            }
        )

        RemoteTreeScanner(ctrl, SERVICE).scan("root")

        self.assertEqual(ctrl.listed, ["root", "A"])

    def test_ownership_and_permissions_are_annotated(self) -> None:
        ctrl = FakeListingController(
            {"root": [_file("1", "mine.txt"), _file("2", "theirs.txt", owner="alice@example.com")]},
            permission_failures={"2"},
        )

        listing = RemoteTreeScanner(ctrl, SERVICE.upper()).scan("root")

        mine = listing.files["mine.txt"]
        theirs = listing.files["theirs.txt"]
        self.assertTrue(mine.owned)
        self.assertEqual(mine.permissions[0].id, "p-1")
        self.assertFalse(theirs.owned)
        self.assertEqual(theirs.permissions, [])

    def test_permissions_can_be_skipped(self) -> None:
        ctrl = FakeListingController({"root": [_file("1", "mine.txt")]})
        listing = RemoteTreeScanner(ctrl, SERVICE, fetch_permissions=False).scan("root")
        self.assertEqual(listing.files["mine.txt"].permissions, [])


if __name__ == "__main__":
    unittest.main()
