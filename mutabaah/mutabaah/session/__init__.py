"""
Follow-along session management.
"""

from mutabaah.session.controller import (
    FollowAlongController,
    FollowAlongState,
    SessionPhase,
    SessionStart,
    StartStatus,
)
from mutabaah.session.usage import DailyUsageCounter

__all__ = [
    "FollowAlongController",
    "FollowAlongState",
    "SessionPhase",
    "SessionStart",
    "StartStatus",
    "DailyUsageCounter",
]
