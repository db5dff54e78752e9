import os
import tempfile
import unittest

from gdrivesync.errors import ShortcutFormatError
from gdrivesync.local import dump_shortcut, load_shortcut, read_shortcut, write_shortcut
from gdrivesync.models import ShortcutRecord

_RECORD = ShortcutRecord(
    id="X",
    name="Budget",
    mime_type="application/vnd.google-apps.spreadsheet",
    modified_time="2025-03-01T10:00:00.000Z",
    web_view_link="https://docs.google.com/spreadsheets/d/X/edit",
)


class TestShortcuts(unittest.TestCase):
    def test_dump_is_stable_and_newline_terminated(self) -> None:
        text = dump_shortcut(_RECORD)
        self.assertTrue(text.endswith("}\n"))
        self.assertEqual(text, dump_shortcut(_RECORD))
        self.assertIn('"mimeType": "application/vnd.google-apps.spreadsheet"', text)

    def test_write_then_read_is_field_for_field_equal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sub", "Budget.sheet.gdrive.json")
            write_shortcut(path, _RECORD)
            self.assertEqual(read_shortcut(path), _RECORD)

    def test_invalid_json(self) -> None:
        with self.assertRaises(ShortcutFormatError):
            load_shortcut("{broken")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ShortcutFormatError) as ctx:
                read_shortcut(os.path.join(tmp, "nope.gdrive.json"))
        self.assertEqual(ctx.exception.details["path"], os.path.join(tmp, "nope.gdrive.json"))


if __name__ == "__main__":
    unittest.main()
