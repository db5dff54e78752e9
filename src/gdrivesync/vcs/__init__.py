"""Version control access for gdrivesync."""

from __future__ import annotations

from .git import GitRepo

__all__ = ["GitRepo"]
