"""Configuration models and loader for gdrivesync."""

from __future__ import annotations

from .loader import DEFAULT_CONFIG_PATH, build_config, load_config
from .models import (
    DriveTarget,
    GitIdentityConfig,
    LoggingConfig,
    SourceConfig,
    SyncConfig,
    TargetsConfig,
    UntrackPolicy,
)

__all__ = [
    "DriveTarget",
    "TargetsConfig",
    "SourceConfig",
    "GitIdentityConfig",
    "LoggingConfig",
    "SyncConfig",
    "UntrackPolicy",
    "DEFAULT_CONFIG_PATH",
    "build_config",
    "load_config",
]
