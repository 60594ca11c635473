"""Tests for configuration management."""

import os
import pytest
from unittest.mock import patch

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from school_analytics.config import AppConfig, Settings, TierConfig


def test_tier_config_defaults():
    """Test tier configuration with defaults."""
    config = TierConfig()
    assert config.green_threshold == 85.0
    assert config.orange_threshold == 75.0
    assert config.red_threshold == 65.0

    thresholds = config.to_thresholds()
    assert (thresholds.green, thresholds.orange, thresholds.red) == (85.0, 75.0, 65.0)


def test_tier_config_from_env():
    """Test tier thresholds read from the environment."""
    with patch.dict(os.environ, {
        "SCHOOL_ANALYTICS_GREEN_THRESHOLD": "90",
        "SCHOOL_ANALYTICS_ORANGE_THRESHOLD": "80",
        "SCHOOL_ANALYTICS_RED_THRESHOLD": "70"
    }):
        config = TierConfig()
        assert config.green_threshold == 90.0
        assert config.to_thresholds().red == 70.0


def test_tier_config_invalid_order():
    """Test thresholds that are not descending."""
    with patch.dict(os.environ, {
        "SCHOOL_ANALYTICS_GREEN_THRESHOLD": "60"
    }):
        with pytest.raises(ValueError, match="strictly descending"):
            TierConfig()


def test_app_config_defaults():
    """Test app configuration with defaults."""
    config = AppConfig()
    assert config.name == "school-analytics"
    assert config.version == "0.1.0"
    assert config.log_level == "INFO"
    assert config.decimal_places == 1
    assert config.debug is False


def test_app_config_from_env():
    """Test app configuration overrides."""
    with patch.dict(os.environ, {
        "SCHOOL_ANALYTICS_LOG_LEVEL": "DEBUG",
        "SCHOOL_ANALYTICS_UPLOADS_PATH": "/data/uploads.json",
        "SCHOOL_ANALYTICS_DECIMAL_PLACES": "2"
    }):
        config = AppConfig()
        assert config.log_level == "DEBUG"
        assert config.uploads_path == "/data/uploads.json"
        assert config.decimal_places == 2


def test_settings_load():
    """Test loading the combined settings."""
    settings = Settings.load()
    assert settings.app.name == "school-analytics"
    assert settings.tiers.green_threshold == 85.0
