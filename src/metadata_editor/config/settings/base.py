"""Config settings – Settings base class and the service's AppSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from metadata_editor.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AppSettings(Settings):
    """Runtime configuration of the metadata editor service.

    Fields map to unprefixed environment variables (``MONGODB_URI``,
    ``PORT``, ...).
    """

    mongodb_uri: str = "mongodb://localhost:27017/metadata-editor"
    database_name: str = "metadata-editor"
    collection_name: str = "metadata"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    options_dir: str = ""
    cors_allow_origins: list[str] = dataclasses.field(default_factory=list)
    search_timeout_seconds: float = 0.0

    def _validate(self) -> None:
        if not 0 < self.port < 65536:
            raise InvalidSettingValueError("port", self.port, "must be between 1 and 65535")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        if self.search_timeout_seconds < 0:
            raise InvalidSettingValueError(
                "search_timeout_seconds", self.search_timeout_seconds, "must not be negative"
            )
        if not self.collection_name:
            raise InvalidSettingValueError("collection_name", self.collection_name, "must not be empty")


__all__ = ["AppSettings", "Settings"]
