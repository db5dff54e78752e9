from .ids import (
    new_run_id,
    proposal_branch_name,
    sanitize_ref_component,
    snapshot_branch_name,
)
from .mime import (
    FOLDER_MIME,
    GOOGLE_APP_MIMES,
    MIME_TYPE_TO_EXTENSION,
    PDF_MIME,
    SHORTCUT_SUFFIX,
    is_exportable,
    is_folder,
    is_google_app,
    is_shortcut_path,
    shortcut_suffix,
    strip_shortcut_suffix,
)
from .paths import is_under, join_posix, parent_dirs, to_posix
from .time import is_zulu_timestamp

__all__ = [
    "new_run_id",
    "sanitize_ref_component",
    "proposal_branch_name",
    "snapshot_branch_name",
    "FOLDER_MIME",
    "PDF_MIME",
    "GOOGLE_APP_MIMES",
    "MIME_TYPE_TO_EXTENSION",
    "SHORTCUT_SUFFIX",
    "is_folder",
    "is_google_app",
    "is_exportable",
    "is_shortcut_path",
    "shortcut_suffix",
    "strip_shortcut_suffix",
    "to_posix",
    "join_posix",
    "parent_dirs",
    "is_under",
    "is_zulu_timestamp",
]
