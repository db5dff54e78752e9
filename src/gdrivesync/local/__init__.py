"""Local working-tree access for gdrivesync."""

from __future__ import annotations

from .hashing import file_md5
from .scanner import LocalTreeScanner, build_ignore_spec
from .shortcuts import dump_shortcut, load_shortcut, read_shortcut, write_shortcut

__all__ = [
    "LocalTreeScanner",
    "build_ignore_spec",
    "file_md5",
    "dump_shortcut",
    "load_shortcut",
    "read_shortcut",
    "write_shortcut",
]
