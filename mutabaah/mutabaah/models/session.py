"""
Follow-along session data model.
"""

import math
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from mutabaah.models.surah import Surah


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_session_accuracy(verses_recited: list[int], total_verses: int) -> int:
    """
    Calculate the accuracy percentage of a session.

    Accuracy is the share of distinct verses recited out of the surah's
    total, rounded half-up to a whole percent.

    Args:
        verses_recited: Verse numbers in recitation order (may repeat)
        total_verses: Number of verses in the surah

    Returns:
        Accuracy percentage between 0 and 100

    Examples:
        >>> calculate_session_accuracy([1, 1, 2, 3], 10)
        30
        >>> calculate_session_accuracy([], 7)
        0
    """
    if total_verses <= 0 or not verses_recited:
        return 0
    unique_verses = len(set(verses_recited))
    return min(100, _round_half_up(unique_verses / total_verses * 100))


def calculate_session_duration(started_at: datetime, ended_at: datetime) -> int:
    """
    Calculate the wall-clock duration between two timestamps in whole seconds.

    Returns 0 if the clock moved backwards.
    """
    seconds = (ended_at - started_at).total_seconds()
    return max(0, _round_half_up(seconds))


def new_session_id() -> str:
    """Generate a unique identifier for a finished session."""
    return f"session_{uuid4().hex}"


class FollowAlongSession(BaseModel):
    """
    The durable record of one follow-along recitation attempt.

    Created once when the session stops and never mutated afterwards,
    except by deleting it from storage.

    Attributes:
        id: Unique session identifier
        surah_id: Surah number (1-114)
        surah_name: Transliterated surah name
        surah_name_arabic: Arabic surah name
        started_at: When listening started
        ended_at: When the session was stopped
        verses_recited: Matched verse numbers in order (no adjacent repeats)
        total_verses: Number of verses in the surah
        accuracy_percentage: Share of distinct verses recited (0-100)
        duration_seconds: Wall-clock session length in seconds
    """

    id: str = Field(
        ...,
        description="Unique session identifier",
        min_length=1,
    )
    surah_id: int = Field(
        ...,
        description="Surah number (1-114)",
        ge=1,
        le=114,
    )
    surah_name: str = Field(
        default="Unknown",
        description="Transliterated surah name",
    )
    surah_name_arabic: str = Field(
        default="",
        description="Arabic surah name",
    )
    started_at: datetime = Field(
        ...,
        description="When listening started",
    )
    ended_at: datetime = Field(
        ...,
        description="When the session was stopped",
    )
    verses_recited: list[int] = Field(
        default_factory=list,
        description="Matched verse numbers in recitation order",
    )
    total_verses: int = Field(
        ...,
        description="Number of verses in the surah",
        ge=0,
    )
    accuracy_percentage: int = Field(
        default=0,
        description="Share of distinct verses recited (0-100)",
        ge=0,
        le=100,
    )
    duration_seconds: int = Field(
        default=0,
        description="Wall-clock session length in seconds",
        ge=0,
    )

    @field_validator("verses_recited")
    @classmethod
    def verse_numbers_positive(cls, v: list[int]) -> list[int]:
        """Verse numbers are 1-based."""
        if any(number < 1 for number in v):
            raise ValueError("verse numbers must be >= 1")
        return v

    @classmethod
    def finalize(
        cls,
        surah: Surah,
        started_at: datetime,
        ended_at: datetime,
        verses_recited: list[int],
        total_verses: int,
        session_id: str | None = None,
    ) -> "FollowAlongSession":
        """
        Build the finished record for a session.

        Args:
            surah: Surah that was recited
            started_at: When listening started
            ended_at: When the session stopped
            verses_recited: Recited verse history (copied)
            total_verses: Number of verses in the surah
            session_id: Explicit id (generated when omitted)

        Returns:
            FollowAlongSession with accuracy and duration computed
        """
        return cls(
            id=session_id or new_session_id(),
            surah_id=surah.id,
            surah_name=surah.name,
            surah_name_arabic=surah.name_arabic,
            started_at=started_at,
            ended_at=ended_at,
            verses_recited=list(verses_recited),
            total_verses=total_verses,
            accuracy_percentage=calculate_session_accuracy(verses_recited, total_verses),
            duration_seconds=calculate_session_duration(started_at, ended_at),
        )

    @property
    def unique_verse_count(self) -> int:
        """Number of distinct verses recited."""
        return len(set(self.verses_recited))

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "session_9f1c2e7d4b6a4d0f8e3a1b2c3d4e5f60",
                    "surah_id": 1,
                    "surah_name": "Al-Fatiha",
                    "surah_name_arabic": "الفاتحة",
                    "started_at": "2024-01-15T10:30:00",
                    "ended_at": "2024-01-15T10:31:05",
                    "verses_recited": [1, 2, 3],
                    "total_verses": 7,
                    "accuracy_percentage": 43,
                    "duration_seconds": 65,
                }
            ]
        },
    }

    def __str__(self) -> str:
        return (
            f"FollowAlongSession(Surah {self.surah_id}, "
            f"verses={self.unique_verse_count}/{self.total_verses}, "
            f"accuracy={self.accuracy_percentage}%)"
        )
