"""
مُتابَعة (Mutabaah) — Real-time follow-along tracking for Quran recitation.

Usage:
    from mutabaah import FollowAlongController, FollowAlongRepository, DailyUsageCounter
    from mutabaah.storage import InMemoryKeyValueStore

    store = InMemoryKeyValueStore()
    controller = FollowAlongController(
        verses,
        recognizer,
        FollowAlongRepository(store),
        DailyUsageCounter(store),
        surah=Surah(id=1, name="Al-Fatiha", name_arabic="الفاتحة"),
    )

    await controller.start_session()
    # ... recognizer delivers transcripts to controller.handle_result ...
    session = await controller.stop_session()
    print(f"Recited {session.verses_recited} ({session.accuracy_percentage}%)")
"""

from mutabaah.models import (
    FollowAlongSession,
    MatchResult,
    RecognitionResult,
    Surah,
    Verse,
)
from mutabaah.config import FollowAlongSettings, get_settings, configure
from mutabaah.exceptions import (
    MutabaahError,
    RecognitionError,
    RecognitionUnavailableError,
    StorageError,
    SessionStateError,
)
from mutabaah.core import find_best_match, normalize_arabic, score
from mutabaah.recognition import BaseSpeechRecognizer
from mutabaah.storage import FollowAlongRepository
from mutabaah.session import (
    DailyUsageCounter,
    FollowAlongController,
    SessionPhase,
    SessionStart,
    StartStatus,
)

__version__ = "1.0.0"
__all__ = [
    # Version
    "__version__",
    # Models
    "Verse",
    "Surah",
    "MatchResult",
    "RecognitionResult",
    "FollowAlongSession",
    # Config
    "FollowAlongSettings",
    "get_settings",
    "configure",
    # Exceptions
    "MutabaahError",
    "RecognitionError",
    "RecognitionUnavailableError",
    "StorageError",
    "SessionStateError",
    # Matching
    "normalize_arabic",
    "score",
    "find_best_match",
    # Session
    "BaseSpeechRecognizer",
    "FollowAlongRepository",
    "DailyUsageCounter",
    "FollowAlongController",
    "SessionPhase",
    "SessionStart",
    "StartStatus",
]
