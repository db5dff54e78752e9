from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"
PDF_MIME: str = "application/pdf"

# Google Workspace types: no byte content, represented locally by a shortcut only.
GOOGLE_APP_MIMES: set[str] = {
    "application/vnd.google-apps.document",
    "application/vnd.google-apps.spreadsheet",
    "application/vnd.google-apps.presentation",
    "application/vnd.google-apps.drawing",
    "application/vnd.google-apps.script",
    "application/vnd.google-apps.form",
    "application/vnd.google-apps.fusiontable",
    "application/vnd.google-apps.site",
    "application/vnd.google-apps.map",
}

# Downloadable types that also get a shortcut next to their content file.
EXPORTABLE_MIMES: set[str] = {PDF_MIME}

MIME_TYPE_TO_EXTENSION: dict[str, str] = {
    "application/vnd.google-apps.document": "doc",
    "application/vnd.google-apps.spreadsheet": "sheet",
    "application/vnd.google-apps.presentation": "slides",
    "application/vnd.google-apps.form": "form",
    "application/vnd.google-apps.drawing": "drawing",
    "application/vnd.google-apps.script": "script",
    "application/vnd.google-apps.fusiontable": "fusiontable",
    "application/vnd.google-apps.site": "site",
    "application/vnd.google-apps.map": "map",
    PDF_MIME: "pdf",
}

SHORTCUT_SUFFIX: str = ".gdrive.json"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """
    Returns True if the MIME type is a Google 'apps' type (folders excluded).

    Unlisted Google apps types are detected by their
    'application/vnd.google-apps.' prefix.
    """
    if is_folder(mime_type):
        return False
    if mime_type in GOOGLE_APP_MIMES:
        return True
    return mime_type.startswith("application/vnd.google-apps.")


def is_exportable(mime_type: str) -> bool:
    return mime_type in EXPORTABLE_MIMES


def shortcut_suffix(mime_type: str | None) -> str:
    """
    Return the sidecar suffix for a MIME type, e.g. ".sheet.gdrive.json".

    Unmapped or missing types fall back to ".gdrive.json".
    """
    if not mime_type:
        return SHORTCUT_SUFFIX
    extension = MIME_TYPE_TO_EXTENSION.get(mime_type)
    if extension:
        return f".{extension}{SHORTCUT_SUFFIX}"
    return SHORTCUT_SUFFIX


def is_shortcut_path(path: str) -> bool:
    return path.lower().endswith(SHORTCUT_SUFFIX)


def strip_shortcut_suffix(path: str) -> str:
    """
    Strip the sidecar suffix (including a known type extension) from a path.

    "docs/Budget.sheet.gdrive.json" -> "docs/Budget"
    "docs/report.pdf.pdf.gdrive.json" -> "docs/report.pdf"
    """
    if not is_shortcut_path(path):
        return path
    base = path[: -len(SHORTCUT_SUFFIX)]
    head, dot, ext = base.rpartition(".")
    if dot and ext in MIME_TYPE_TO_EXTENSION.values():
        return head
    return base
