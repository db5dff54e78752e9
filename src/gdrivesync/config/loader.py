"""Load and validate sync.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gdrivesync.errors import ConfigError

from .models import SyncConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".github") / "sync.json"


def build_config(raw_data: Any) -> SyncConfig:
    """Validate a raw dict into a ``SyncConfig``.

    Raises:
        ConfigError: when the data does not match the schema.
    """
    if not isinstance(raw_data, dict):
        raise ConfigError("Config root must be a JSON object")
    try:
        return SyncConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(
            "Invalid sync configuration",
            details={"errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> SyncConfig:
    """Read sync.json from *path*.

    Raises:
        ConfigError: missing file, invalid JSON or schema violation.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            "Config file not found",
            details={"path": str(config_path)},
            cause=exc,
        ) from exc
    except OSError as exc:
        raise ConfigError(
            "Config file could not be read",
            details={"path": str(config_path)},
            cause=exc,
        ) from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(
            "Config file is not valid JSON",
            details={"path": str(config_path), "line": exc.lineno},
            cause=exc,
        ) from exc

    config = build_config(raw)
    logger.debug(
        "Loaded config from %s (%d target(s))", config_path, len(config.targets.forks)
    )
    return config
