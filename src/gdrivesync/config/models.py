"""Pydantic models for sync.json.

Layout::

    {
      "source": {"repo": "owner/name"},
      "ignore": ["*.tmp", "build/**"],
      "targets": {
        "forks": [
          {"drive_folder_id": "...", "drive_url": "...", "on_untrack": "remove"}
        ]
      }
    }

Every section other than ``source`` and ``targets`` is optional.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

UntrackPolicy = Literal["ignore", "remove", "request"]


class DriveTarget(BaseModel):
    """One Drive folder kept in sync with the repository."""

    drive_folder_id: str = Field(min_length=1, description="Drive folder id")
    drive_url: str | None = Field(default=None, description="Browser URL of the folder")
    on_untrack: UntrackPolicy = Field(
        default="ignore",
        description="What to do with Drive items that have no local counterpart",
    )

    model_config = {"frozen": True}

    @field_validator("drive_folder_id")
    @classmethod
    def _strip_folder_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("drive_folder_id must not be blank")
        return value

    @property
    def folder_url(self) -> str:
        if self.drive_url:
            return self.drive_url
        return f"https://drive.google.com/drive/folders/{self.drive_folder_id}"


class TargetsConfig(BaseModel):
    forks: list[DriveTarget] = Field(default_factory=list)

    model_config = {"frozen": True}


class SourceConfig(BaseModel):
    repo: str = Field(description="GitHub repository in owner/name form")

    model_config = {"frozen": True}

    @field_validator("repo")
    @classmethod
    def _check_repo(cls, value: str) -> str:
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError("repo must look like 'owner/name'")
        return f"{owner}/{name}"

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repo.split("/", 1)[1]


class GitIdentityConfig(BaseModel):
    """Commit identity and remote used for sync commits."""

    user_name: str = Field(default="github-actions[bot]")
    user_email: str = Field(
        default="41898282+github-actions[bot]@users.noreply.github.com"
    )
    remote: str = Field(default="origin")

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
        format: "text" or "json".
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    format: Literal["text", "json"] = Field(default="text")

    model_config = {"frozen": True}


class SyncConfig(BaseModel):
    """Top-level sync.json configuration."""

    source: SourceConfig
    ignore: list[str] = Field(default_factory=list)
    targets: TargetsConfig = Field(default_factory=TargetsConfig)
    git: GitIdentityConfig = Field(default_factory=GitIdentityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    upload_concurrency: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Uploads per batch in the push direction (1-50)",
    )

    model_config = {"frozen": True}

    @property
    def drive_targets(self) -> list[DriveTarget]:
        return list(self.targets.forks)
