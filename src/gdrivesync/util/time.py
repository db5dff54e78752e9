from __future__ import annotations

import re

# Drive always reports modifiedTime in UTC with a trailing 'Z'.
_ZULU_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}.*Z$")


def is_zulu_timestamp(value: object) -> bool:
    """Return True if value looks like an RFC3339 UTC ('Z') timestamp string."""
    return isinstance(value, str) and bool(_ZULU_PATTERN.match(value))
