"""User preferences for branchdeck.

Loads settings from ~/.branchdeck/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger


def branchdeck_home() -> Path:
    """Base directory for preferences, storage and logs."""
    override = os.environ.get("BRANCHDECK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".branchdeck"


PREFS_FILENAME = "preferences.yaml"

_DEFAULT_YAML = """\
# branchdeck preferences
# Delete this file to reset to defaults.

storage:
  path: ""                       # storage file (empty = <home>/storage.json)
  quota_bytes: 5242880           # refuse writes past this size (5 MiB)

notifications:
  max_items: 100                 # oldest notifications are pruned past this

logging:
  level: INFO                    # DEBUG, INFO, WARNING, ERROR
"""


@dataclass
class StoragePreferences:
    """Where and how much the stores may persist."""

    path: str = ""  # Empty means <home>/storage.json
    quota_bytes: int | None = 5 * 1024 * 1024

    def resolved_path(self, home: Path | None = None) -> Path:
        if self.path:
            return Path(self.path).expanduser()
        return (home or branchdeck_home()) / "storage.json"


@dataclass
class NotificationPreferences:
    max_items: int = 100


@dataclass
class LoggingPreferences:
    level: str = "INFO"


@dataclass
class Preferences:
    """Top-level preferences."""

    storage: StoragePreferences = field(default_factory=StoragePreferences)
    notifications: NotificationPreferences = field(
        default_factory=NotificationPreferences
    )
    logging: LoggingPreferences = field(default_factory=LoggingPreferences)


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or branchdeck_home() / PREFS_FILENAME
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(data, dict):
                raise ValueError("preferences root must be a mapping")
            if isinstance(data.get("storage"), dict):
                sdata = data["storage"]
                if "path" in sdata:
                    prefs.storage.path = str(sdata["path"] or "")
                if "quota_bytes" in sdata:
                    quota = sdata["quota_bytes"]
                    prefs.storage.quota_bytes = int(quota) if quota else None
            if isinstance(data.get("notifications"), dict):
                ndata = data["notifications"]
                if "max_items" in ndata:
                    prefs.notifications.max_items = max(1, int(ndata["max_items"]))
            if isinstance(data.get("logging"), dict):
                ldata = data["logging"]
                if "level" in ldata:
                    prefs.logging.level = str(ldata["level"]).upper()
        except (OSError, ValueError, TypeError, yaml.YAMLError):
            logger.warning("invalid preferences file %s, using defaults", path, exc_info=True)
            return Preferences()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default preferences to %s", path, exc_info=True)

    return prefs
