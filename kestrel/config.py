"""Display options and their persistence.

Options are stored as JSON in the user's config directory and survive
application restarts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import platformdirs

from .autosave import atomic_write

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Togglable display options. They have no effect on editing."""
    display_line_numbers: bool = False
    display_stats: bool = False

    def toggle(self, name: str) -> bool:
        """Flip the boolean option ``name`` and return its new value."""
        value = not getattr(self, name)
        setattr(self, name, value)
        return value


class ConfigStore:
    """Loads and saves a Config in the platform config directory."""

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            path = Path(platformdirs.user_config_dir("kestrel")) / "config.json"
        self._config_file = Path(path)

    @property
    def path(self) -> Path:
        return self._config_file

    def load(self) -> Config:
        """Read the stored options.

        Missing, unreadable or malformed files yield the defaults. Unknown
        keys and non-boolean values are ignored.
        """
        if not self._config_file.exists():
            return Config()
        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load config from {self._config_file}: {e}")
            return Config()

        if not isinstance(data, dict):
            logger.warning("Config file has invalid format (not a dict), ignoring")
            return Config()

        config = Config()
        for field in fields(Config):
            value = data.get(field.name)
            if isinstance(value, bool):
                setattr(config, field.name, value)
        return config

    def save(self, config: Config) -> bool:
        """Write the options atomically. Returns False on failure."""
        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(str(self._config_file), json.dumps(asdict(config), indent=2))
        except OSError as e:
            logger.warning(f"Could not save config to {self._config_file}: {e}")
            return False
        return True
