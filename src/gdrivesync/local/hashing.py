"""Content hashing compatible with Drive's md5Checksum."""

from __future__ import annotations

import hashlib

_CHUNK_SIZE = 1024 * 1024


def file_md5(path: str) -> str:
    """Return the md5 hex digest of the file at path, read in chunks."""
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
