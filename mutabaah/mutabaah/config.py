"""
Configuration management for Mutabaah library.

Uses Pydantic Settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the MUTABAAH_ prefix.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FollowAlongSettings(BaseSettings):
    """
    Configuration settings for the follow-along engine.

    All settings can be overridden via environment variables with MUTABAAH_ prefix.

    Example:
        export MUTABAAH_FREE_SESSIONS_PER_DAY="5"
        export MUTABAAH_LOOKAHEAD_VERSES="4"
        export MUTABAAH_STORAGE_NAMESPACE="@my_app"
    """

    model_config = SettingsConfigDict(
        env_prefix="MUTABAAH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ============ Matching Settings ============

    max_noise_words: int = Field(
        default=2,
        description="Extraneous transcript words tolerated per alignment attempt",
        ge=0,
        le=10,
    )

    containment_score: float = Field(
        default=0.95,
        description="Score returned when the transcript contains the whole verse",
        ge=0.0,
        le=1.0,
    )

    short_verse_word_count: int = Field(
        default=4,
        description="Verses with fewer words than this use the short-verse threshold",
        ge=1,
    )

    short_verse_threshold: float = Field(
        default=0.6,
        description="Minimum score for accepting a short verse",
        ge=0.0,
        le=1.0,
    )

    long_verse_threshold: float = Field(
        default=0.4,
        description="Minimum score for accepting a longer verse",
        ge=0.0,
        le=1.0,
    )

    # ============ Session Settings ============

    acceptance_floor: float = Field(
        default=0.35,
        description="Confidence a selected match must exceed before it is surfaced",
        ge=0.0,
        le=1.0,
    )

    initial_window_size: int = Field(
        default=5,
        description="Verses searched before any verse has been matched",
        ge=1,
    )

    lookahead_verses: int = Field(
        default=3,
        description="Verses searched after the currently matched verse",
        ge=0,
    )

    free_sessions_per_day: int = Field(
        default=3,
        description="Follow-along sessions allowed per calendar day without entitlement",
        ge=0,
    )

    duration_tick_seconds: float = Field(
        default=1.0,
        description="Interval of the on-screen session duration timer (seconds)",
        gt=0.0,
    )

    recognition_language: str = Field(
        default="ar-SA",
        description="Locale requested from the speech recognizer",
    )

    # ============ Storage Settings ============

    storage_namespace: str = Field(
        default="@quran_notes",
        description="Prefix for all key-value store keys",
        min_length=1,
    )

    max_stored_sessions: int = Field(
        default=100,
        description="Maximum number of follow-along sessions kept in storage",
        ge=1,
    )

    # ============ Validators ============

    @model_validator(mode="after")
    def check_thresholds(self) -> "FollowAlongSettings":
        """Short verses must never be easier to accept than long ones."""
        if self.short_verse_threshold < self.long_verse_threshold:
            raise ValueError(
                "short_verse_threshold must be >= long_verse_threshold"
            )
        return self


# Default settings instance
_default_settings: FollowAlongSettings | None = None


def get_settings() -> FollowAlongSettings:
    """
    Get the default settings instance (lazily created).

    Returns:
        FollowAlongSettings: The default settings
    """
    global _default_settings
    if _default_settings is None:
        _default_settings = FollowAlongSettings()
    return _default_settings


def configure(**kwargs) -> FollowAlongSettings:
    """
    Create and set new default settings.

    Args:
        **kwargs: Settings to override

    Returns:
        FollowAlongSettings: The new settings instance
    """
    global _default_settings
    _default_settings = FollowAlongSettings(**kwargs)
    return _default_settings
