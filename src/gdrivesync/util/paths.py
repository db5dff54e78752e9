from __future__ import annotations

import posixpath


def to_posix(path: str) -> str:
    """Normalize separators to '/' and drop a leading './'."""
    p = path.replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p


def join_posix(parent: str, name: str) -> str:
    if not parent:
        return name
    return posixpath.join(parent, name)


def parent_dirs(path: str) -> list[str]:
    """
    Return all ancestor directories of a relative posix path, deepest first.

    "a/b/c.txt" -> ["a/b", "a"]
    """
    dirs: list[str] = []
    cur = posixpath.dirname(path)
    while cur and cur != ".":
        dirs.append(cur)
        cur = posixpath.dirname(cur)
    return dirs


def is_under(path: str, prefix: str) -> bool:
    """True if path equals prefix or lies below it."""
    return path == prefix or path.startswith(prefix + "/")
