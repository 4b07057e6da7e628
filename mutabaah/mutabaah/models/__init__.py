"""
Pydantic data models for Mutabaah library.

These models represent the core data structures used throughout the library:
- Verse: A single verse of the surah being recited
- Surah: Identity of the surah a session is following
- MatchResult: Result of matching a transcript to a verse
- RecognitionResult: A transcript event from the speech recognizer
- FollowAlongSession: The persisted record of a finished session
"""

from mutabaah.models.verse import Verse
from mutabaah.models.surah import Surah
from mutabaah.models.match import MatchResult
from mutabaah.models.recognition import RecognitionResult
from mutabaah.models.session import (
    FollowAlongSession,
    calculate_session_accuracy,
    calculate_session_duration,
)

__all__ = [
    "Verse",
    "Surah",
    "MatchResult",
    "RecognitionResult",
    "FollowAlongSession",
    "calculate_session_accuracy",
    "calculate_session_duration",
]
