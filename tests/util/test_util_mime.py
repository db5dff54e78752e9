import unittest

from gdrivesync.util.mime import (
    FOLDER_MIME,
    PDF_MIME,
    SHORTCUT_SUFFIX,
    is_exportable,
    is_folder,
    is_google_app,
    is_shortcut_path,
    shortcut_suffix,
    strip_shortcut_suffix,
)


class TestUtilMime(unittest.TestCase):
    def test_is_folder(self) -> None:
        self.assertTrue(is_folder(FOLDER_MIME))
        self.assertFalse(is_folder("text/plain"))

    def test_is_google_app(self) -> None:
        self.assertTrue(is_google_app("application/vnd.google-apps.document"))
        self.assertTrue(is_google_app("application/vnd.google-apps.spreadsheet"))

        # Prefix-based detection for unlisted Google apps types.
        self.assertTrue(is_google_app("application/vnd.google-apps.some-new-type"))

        self.assertFalse(is_google_app(FOLDER_MIME))
        self.assertFalse(is_google_app(PDF_MIME))

    def test_is_exportable(self) -> None:
        self.assertTrue(is_exportable(PDF_MIME))
        self.assertFalse(is_exportable("image/png"))

    def test_shortcut_suffix(self) -> None:
        self.assertEqual(
            shortcut_suffix("application/vnd.google-apps.spreadsheet"), ".sheet.gdrive.json"
        )
        self.assertEqual(shortcut_suffix(PDF_MIME), ".pdf.gdrive.json")
        self.assertEqual(shortcut_suffix("image/png"), SHORTCUT_SUFFIX)
        self.assertEqual(shortcut_suffix(None), SHORTCUT_SUFFIX)

    def test_is_shortcut_path(self) -> None:
        self.assertTrue(is_shortcut_path("a/Budget.sheet.gdrive.json"))
        self.assertTrue(is_shortcut_path("a/Budget.SHEET.GDRIVE.JSON"))
        self.assertFalse(is_shortcut_path("a/data.json"))

    def test_strip_shortcut_suffix(self) -> None:
        self.assertEqual(strip_shortcut_suffix("docs/Budget.sheet.gdrive.json"), "docs/Budget")
        self.assertEqual(strip_shortcut_suffix("docs/report.pdf.pdf.gdrive.json"), "docs/report.pdf")
        self.assertEqual(strip_shortcut_suffix("photo.png.gdrive.json"), "photo.png")
        self.assertEqual(strip_shortcut_suffix("plain.txt"), "plain.txt")


if __name__ == "__main__":
    unittest.main()
