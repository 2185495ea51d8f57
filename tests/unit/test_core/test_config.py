"""
Unit tests for the configuration manager.
"""

import json
import logging
import pytest
from datetime import timezone
from zoneinfo import ZoneInfo

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from procrastinot.core.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in ("PROCRASTINOT_API_URL", "PROCRASTINOT_API_TOKEN", "PROCRASTINOT_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path):
    return Config(tmp_path / "config")


class TestConfigDefaults:
    """Tests for default values and file creation."""

    def test_creates_default_files(self, config):
        assert config.settings_file.exists()
        assert config.preferences_file.exists()

    def test_default_api_url(self, config):
        assert config.get("api_base_url") == "http://localhost:8080/api"

    def test_default_preferences(self, config):
        assert config.get("activity_feed_limit", "preferences") == 10
        assert config.get("streak_max_days", "preferences") == 365

    def test_unknown_key_returns_default(self, config):
        assert config.get("missing", default="x") == "x"

    def test_unset_token_returns_default(self, config):
        assert config.get("api_token", default="fallback") == "fallback"


class TestConfigPersistence:
    """Tests for set() and reloading."""

    def test_set_persists(self, tmp_path):
        config = Config(tmp_path)
        config.set("activity_feed_limit", 5, "preferences")

        reloaded = Config(tmp_path)
        assert reloaded.get("activity_feed_limit", "preferences") == 5

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"api_timeout": 5}))

        config = Config(tmp_path)

        assert config.get("api_timeout") == 5
        assert config.get("api_base_url") == "http://localhost:8080/api"


class TestEnvironmentOverrides:
    """Tests for PROCRASTINOT_* environment variables."""

    def test_api_url_override(self, config, monkeypatch):
        monkeypatch.setenv("PROCRASTINOT_API_URL", "https://api.example.com/api")
        assert config.get("api_base_url") == "https://api.example.com/api"

    def test_token_override(self, config, monkeypatch):
        monkeypatch.setenv("PROCRASTINOT_API_TOKEN", "secret")
        assert config.get("api_token") == "secret"


class TestTimezone:
    """Tests for timezone resolution."""

    def test_no_timezone_means_system_zone(self, config, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")

        assert config.get_timezone() is None
        assert config.now().tzinfo == ZoneInfo("America/New_York")

    def test_named_timezone(self, config):
        config.set("timezone", "UTC")
        assert config.now().utcoffset() == timezone.utc.utcoffset(None)

    def test_env_timezone_wins(self, config, monkeypatch):
        config.set("timezone", "UTC")
        monkeypatch.setenv("PROCRASTINOT_TIMEZONE", "Europe/Berlin")

        assert config.get_timezone() == ZoneInfo("Europe/Berlin")

    def test_unknown_timezone_falls_back(self, config):
        config.set("timezone", "Mars/Olympus_Mons")
        assert config.get_timezone() is None

    def test_unknown_timezone_is_logged(self, config, monkeypatch, caplog):
        monkeypatch.setenv("PROCRASTINOT_TIMEZONE", "Mars/Olympus_Mons")

        with caplog.at_level(logging.WARNING, logger="procrastinot.core.config"):
            config.get_timezone()

        assert "Mars/Olympus_Mons" in caplog.text
