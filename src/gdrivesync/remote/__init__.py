"""Remote (Drive) listing for gdrivesync."""

from __future__ import annotations

from .scanner import RemoteListing, RemoteTreeScanner

__all__ = ["RemoteListing", "RemoteTreeScanner"]
