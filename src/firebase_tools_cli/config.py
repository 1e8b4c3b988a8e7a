"""
Persisted CLI configuration.

Stored as JSON in ``~/.firebase-tools-cli/config.json``; the directory can be
moved with ``FIREBASE_TOOLS_CLI_HOME``. Command-line flags and environment
variables take precedence over anything saved here.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger("firebase_tools_cli.config")

HOME_ENV = "FIREBASE_TOOLS_CLI_HOME"
CONFIG_FILENAME = "config.json"

_DATABASE_URL_RE = re.compile(
    r"^https://[A-Za-z0-9-]+(\.firebaseio\.com|\.[a-z0-9-]+\.firebasedatabase\.app)/?$"
)


def validate_database_url(url: str) -> str:
    """Return *url* without its trailing slash.

    Raises:
        ConfigurationError: If *url* is not a Realtime Database URL.
    """
    candidate = url.strip()
    if not _DATABASE_URL_RE.match(candidate):
        raise ConfigurationError(
            f"Invalid Realtime Database URL: {url!r} (expected e.g. "
            "https://your-project-default-rtdb.firebaseio.com/)"
        )
    return candidate.rstrip("/")


def config_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".firebase-tools-cli"


def config_file() -> Path:
    return config_dir() / CONFIG_FILENAME


class CliConfig(BaseModel):
    """Defaults remembered between invocations."""

    model_config = ConfigDict(extra="ignore")

    default_project: str | None = None
    database_url: str | None = None
    service_account_path: str | None = None

    @field_validator("database_url")
    @classmethod
    def _check_database_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return validate_database_url(value)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def load(cls, path: Path | None = None) -> CliConfig:
        """Load from *path*; a missing file yields an empty config."""
        path = path or config_file()
        if not path.exists():
            return cls()
        try:
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not load config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must hold a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e

    def save(self, path: Path | None = None) -> Path:
        path = path or config_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Saved configuration to %s", path)
        return path

    def merged(self, **updates: Any) -> CliConfig:
        """Return a copy with every non-``None`` update applied and validated."""
        data = self.model_dump()
        data.update({k: v for k, v in updates.items() if v is not None})
        try:
            return CliConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e
