"""
Configuration management for the Procrastinot dashboard engine
Handles loading and saving connection settings and dashboard preferences
"""

import json
import logging
import os
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Dict, Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from procrastinot.core.windows import local_now

logger = logging.getLogger(__name__)

# Environment variables that take precedence over settings.json
ENV_OVERRIDES = {
    "PROCRASTINOT_API_URL": "api_base_url",
    "PROCRASTINOT_API_TOKEN": "api_token",
    "PROCRASTINOT_TIMEZONE": "timezone",
}


class Config:
    """Configuration manager for the dashboard engine"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory (defaults to ./config)
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"
        self.preferences_file = self.config_dir / "preferences.json"

        # Load configurations
        self.settings = self._load_json(self.settings_file, self._default_settings())
        self.preferences = self._load_json(self.preferences_file, self._default_preferences())

    def _load_json(self, file_path: Path, default: Dict[str, Any]) -> Dict[str, Any]:
        """Load JSON file or return default if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r') as f:
                loaded = json.load(f)
            # Keys added in newer versions fall back to their defaults
            return {**default, **loaded}
        else:
            # Create file with defaults
            self._save_json(file_path, default)
            return default

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default connection settings"""
        return {
            "api_base_url": "http://localhost:8080/api",
            "api_token": None,
            "api_timeout": 30.0,
            "timezone": None,
        }

    def _default_preferences(self) -> Dict[str, Any]:
        """Default dashboard preferences"""
        return {
            "activity_feed_limit": 10,
            "streak_max_days": 365,
            "default_timeframe": "today",
        }

    def get(self, key: str, section: str = "settings", default: Any = None) -> Any:
        """
        Get configuration value

        Environment overrides win over the settings file.

        Args:
            key: Configuration key
            section: Configuration section ('settings', 'preferences')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if section == "settings":
            for env_name, setting_key in ENV_OVERRIDES.items():
                if setting_key == key and os.environ.get(env_name):
                    return os.environ[env_name]

        section_map = {
            "settings": self.settings,
            "preferences": self.preferences
        }

        value = section_map.get(section, {}).get(key, default)
        return default if value is None else value

    def set(self, key: str, value: Any, section: str = "settings") -> None:
        """
        Set configuration value and save to disk

        Args:
            key: Configuration key
            value: Value to set
            section: Configuration section ('settings', 'preferences')
        """
        section_map = {
            "settings": (self.settings, self.settings_file),
            "preferences": (self.preferences, self.preferences_file)
        }

        if section in section_map:
            config_dict, file_path = section_map[section]
            config_dict[key] = value
            self._save_json(file_path, config_dict)

    def get_timezone(self) -> Optional[tzinfo]:
        """
        Get the configured timezone.

        Returns None when no timezone is configured (or the name is unknown),
        meaning "use the system local timezone".
        """
        name = self.get("timezone")
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, using the system timezone", name)
            return None

    def now(self) -> datetime:
        """Current time in the configured timezone (system timezone when unset)"""
        tz = self.get_timezone()
        if tz is None:
            return local_now()
        return datetime.now(tz)
