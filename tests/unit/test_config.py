"""
Unit tests for settings.
"""

import pytest
from pydantic import ValidationError

from mutabaah import config
from mutabaah.config import FollowAlongSettings, configure, get_settings


class TestFollowAlongSettings:
    """Test FollowAlongSettings defaults and validation."""

    def test_defaults(self, settings):
        assert settings.max_noise_words == 2
        assert settings.containment_score == 0.95
        assert settings.short_verse_word_count == 4
        assert settings.short_verse_threshold == 0.6
        assert settings.long_verse_threshold == 0.4
        assert settings.acceptance_floor == 0.35
        assert settings.initial_window_size == 5
        assert settings.lookahead_verses == 3
        assert settings.free_sessions_per_day == 3
        assert settings.storage_namespace == "@quran_notes"
        assert settings.max_stored_sessions == 100

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MUTABAAH_FREE_SESSIONS_PER_DAY", "5")
        monkeypatch.setenv("MUTABAAH_STORAGE_NAMESPACE", "@my_app")

        settings = FollowAlongSettings(_env_file=None)

        assert settings.free_sessions_per_day == 5
        assert settings.storage_namespace == "@my_app"

    def test_short_threshold_below_long_rejected(self):
        with pytest.raises(ValidationError):
            FollowAlongSettings(
                _env_file=None, short_verse_threshold=0.3, long_verse_threshold=0.5
            )

    @pytest.mark.parametrize("field,value", [
        ("max_noise_words", -1),
        ("acceptance_floor", 1.5),
        ("duration_tick_seconds", 0),
        ("initial_window_size", 0),
        ("storage_namespace", ""),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            FollowAlongSettings(_env_file=None, **{field: value})


class TestDefaultSettings:
    """Test the lazily created default settings."""

    @pytest.fixture(autouse=True)
    def restore_default(self):
        saved = config._default_settings
        yield
        config._default_settings = saved

    def test_get_settings_is_cached(self):
        config._default_settings = None
        assert get_settings() is get_settings()

    def test_configure_replaces_default(self):
        configured = configure(_env_file=None, lookahead_verses=6)

        assert get_settings() is configured
        assert get_settings().lookahead_verses == 6
