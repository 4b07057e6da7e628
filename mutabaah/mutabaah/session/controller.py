"""
Follow-along session controller.

Drives the matching engine from a stream of recognizer transcripts, tracks
which verse is being recited, keeps the recited-verse history and turns a
finished session into a persisted FollowAlongSession.

Phases:
    IDLE -> LISTENING <-> PAUSED -> IDLE

A session only ever leaves the active phases through ``stop_session`` (or
``cancel_session``, which takes the same path), so whatever was captured is
always finalized.
"""

import asyncio
import math
import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import AsyncIterator, Callable, Sequence

from pydantic import BaseModel, Field

from mutabaah._logging import (
    get_logger,
    log_error,
    log_session_complete,
    log_session_start,
    log_verse_matched,
    log_warning,
)
from mutabaah.config import FollowAlongSettings, get_settings
from mutabaah.core.matcher import find_best_match
from mutabaah.exceptions import (
    RecognitionError,
    RecognitionUnavailableError,
    SessionStateError,
    StorageError,
)
from mutabaah.models import FollowAlongSession, MatchResult, RecognitionResult, Surah, Verse
from mutabaah.recognition.base import BaseSpeechRecognizer
from mutabaah.session.usage import DailyUsageCounter
from mutabaah.storage.repository import FollowAlongRepository

logger = get_logger(__name__)

VerseMatchedCallback = Callable[[MatchResult], None]
SessionErrorCallback = Callable[[RecognitionError, FollowAlongSession | None], None]


class SessionPhase(str, Enum):
    """Lifecycle phase of the follow-along controller."""

    IDLE = "idle"
    LISTENING = "listening"
    PAUSED = "paused"


class StartStatus(str, Enum):
    """Outcome of a session start request."""

    STARTED = "started"
    ALREADY_ACTIVE = "already_active"
    LIMIT_REACHED = "limit_reached"


class SessionStart(BaseModel):
    """
    Result of ``FollowAlongController.start_session``.

    A refused start because of the daily quota is reported here rather than
    raised: it is an upgrade prompt, not a failure.
    """

    status: StartStatus = Field(..., description="Outcome of the start request")
    sessions_remaining: float = Field(
        ...,
        description="Sessions left today (inf for unlimited users)",
        ge=0,
    )
    message: str = Field(default="", description="Human readable explanation")

    @property
    def started(self) -> bool:
        return self.status == StartStatus.STARTED

    @property
    def upgrade_required(self) -> bool:
        return self.status == StartStatus.LIMIT_REACHED


@dataclass
class FollowAlongState:
    """
    Mutable in-session state owned by a FollowAlongController.
    """

    phase: SessionPhase = SessionPhase.IDLE
    transcript: str = ""
    matched_verse_number: int | None = None
    match_confidence: float = 0.0
    verses_recited: list[int] = field(default_factory=list)
    started_at: datetime | None = None
    elapsed_seconds: int = 0

    @property
    def is_active(self) -> bool:
        return self.phase != SessionPhase.IDLE

    @property
    def is_listening(self) -> bool:
        return self.phase == SessionPhase.LISTENING

    def begin(self, started_at: datetime) -> None:
        self.reset()
        self.phase = SessionPhase.LISTENING
        self.started_at = started_at

    def record_match(self, match: MatchResult) -> bool:
        """
        Apply a surfaced match.

        Returns:
            True if the match moved to a different verse
        """
        number = match.verse.number
        if number == self.matched_verse_number:
            return False

        self.matched_verse_number = number
        self.match_confidence = match.confidence
        if not self.verses_recited or self.verses_recited[-1] != number:
            self.verses_recited.append(number)
        return True

    def clear_match(self) -> None:
        self.matched_verse_number = None
        self.match_confidence = 0.0

    def reset(self) -> None:
        self.phase = SessionPhase.IDLE
        self.transcript = ""
        self.clear_match()
        self.verses_recited = []
        self.started_at = None
        self.elapsed_seconds = 0


class FollowAlongController:
    """
    Real-time follow-along tracking for one surah.

    The controller is constructed by the application root with its
    collaborators injected, so several independent controllers can coexist.

    Example:
        controller = FollowAlongController(
            verses,
            recognizer,
            FollowAlongRepository(store),
            DailyUsageCounter(store),
            surah=Surah(id=1, name="Al-Fatiha", name_arabic="الفاتحة"),
            on_verse_matched=lambda match: haptics.pulse(),
        )

        outcome = await controller.start_session()
        if outcome.upgrade_required:
            show_paywall()
        ...
        session = await controller.stop_session()
    """

    def __init__(
        self,
        verses: Sequence[Verse],
        recognizer: BaseSpeechRecognizer,
        repository: FollowAlongRepository,
        usage_counter: DailyUsageCounter,
        surah: Surah | None = None,
        has_unlimited_usage: Callable[[], bool] | None = None,
        on_verse_matched: VerseMatchedCallback | None = None,
        on_error: SessionErrorCallback | None = None,
        clock: Callable[[], datetime] = datetime.now,
        settings: FollowAlongSettings | None = None,
    ) -> None:
        self.verses = list(verses)
        self.surah = surah
        self.recognizer = recognizer
        self.repository = repository
        self.usage_counter = usage_counter
        self.clock = clock
        self.settings = settings or get_settings()

        self._has_unlimited_usage = has_unlimited_usage
        self._on_verse_matched = on_verse_matched
        self._on_error = on_error

        self._state = FollowAlongState()
        self._session_lock = asyncio.Lock()
        self._event_lock = threading.Lock()
        self._timer_task: asyncio.Task | None = None
        self._stopping = False
        self._sessions_used_today = 0

        self.last_error: str | None = None

    # ============ Read-only state ============

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def is_listening(self) -> bool:
        return self._state.is_listening

    @property
    def transcript(self) -> str:
        return self._state.transcript

    @property
    def matched_verse_number(self) -> int | None:
        return self._state.matched_verse_number

    @property
    def match_confidence(self) -> float:
        return self._state.match_confidence

    @property
    def verses_recited(self) -> list[int]:
        return list(self._state.verses_recited)

    @property
    def current_session_duration(self) -> int:
        """Seconds shown on screen; not used for the persisted duration."""
        return self._state.elapsed_seconds

    @property
    def sessions_used_today(self) -> int:
        return self._sessions_used_today

    @property
    def has_unlimited_usage(self) -> bool:
        return bool(self._has_unlimited_usage and self._has_unlimited_usage())

    @property
    def sessions_remaining(self) -> float:
        if self.has_unlimited_usage:
            return math.inf
        return max(0, self.settings.free_sessions_per_day - self._sessions_used_today)

    @property
    def can_start_session(self) -> bool:
        if self.has_unlimited_usage:
            return True
        return self._sessions_used_today < self.settings.free_sessions_per_day

    def snapshot(self) -> FollowAlongState:
        """Copy of the current state, safe to hand to a UI layer."""
        with self._event_lock:
            return replace(self._state, verses_recited=list(self._state.verses_recited))

    # ============ Matching ============

    def candidate_window(self) -> list[Verse]:
        """
        Verses considered for the next transcript.

        The matched verse and the next ``lookahead_verses`` verses once a verse
        is matched, otherwise the first ``initial_window_size`` verses.
        """
        matched = self._state.matched_verse_number
        if matched is None:
            return self.verses[: self.settings.initial_window_size]

        for index, verse in enumerate(self.verses):
            if verse.number == matched:
                return self.verses[index : index + 1 + self.settings.lookahead_verses]
        return list(self.verses)

    def handle_result(self, result: RecognitionResult) -> MatchResult | None:
        """
        Process one transcript event from the recognizer.

        Args:
            result: Partial or final recognition result

        Returns:
            The surfaced match, or None if nothing cleared the acceptance floor
            (or no session is active)
        """
        with self._event_lock:
            if not self._state.is_active:
                logger.debug("Ignoring transcript: no active session")
                return None

            self._state.transcript = result.transcript
            match = find_best_match(result.transcript, self.candidate_window(), self.settings)

            if match is None or match.confidence <= self.settings.acceptance_floor:
                self._state.clear_match()
                return None

            if self._state.record_match(match):
                log_verse_matched(match.verse.number, match.confidence)
                if self._on_verse_matched is not None:
                    self._on_verse_matched(match)

            return match

    # ============ Session boundaries ============

    async def refresh_usage(self) -> int:
        """Reload today's usage count from storage."""
        try:
            self._sessions_used_today = await self.usage_counter.get_count()
        except StorageError as e:
            log_error("Failed to load follow-along usage", reason=e.message)
        return self._sessions_used_today

    async def start_session(self) -> SessionStart:
        """
        Start listening and tracking a new session.

        Returns:
            SessionStart describing whether the session started

        Raises:
            RecognitionUnavailableError: If the recognizer cannot start
        """
        async with self._session_lock:
            if self._state.is_active:
                return SessionStart(
                    status=StartStatus.ALREADY_ACTIVE,
                    sessions_remaining=self.sessions_remaining,
                )

            await self.refresh_usage()
            if not self.can_start_session:
                limit = self.settings.free_sessions_per_day
                logger.info(f"Follow-along limit reached ({limit} per day)")
                return SessionStart(
                    status=StartStatus.LIMIT_REACHED,
                    sessions_remaining=0,
                    message=(
                        f"Free users can use Follow Along {limit} times per day. "
                        "Upgrade for unlimited access."
                    ),
                )

            self.last_error = None
            started = await self.recognizer.start_listening(
                self.handle_result,
                self._handle_recognition_error,
                self.settings.recognition_language,
            )
            if not started:
                raise RecognitionUnavailableError(
                    self.last_error or "Speech recognition is not available."
                )

            with self._event_lock:
                self._state.begin(self.clock())
            self._start_timer()
            await self._record_usage()

            log_session_start(self.surah.id if self.surah else None, self._sessions_used_today)
            return SessionStart(
                status=StartStatus.STARTED,
                sessions_remaining=self.sessions_remaining,
            )

    async def stop_session(self) -> FollowAlongSession | None:
        """
        Stop listening and finalize the session.

        Waits for an in-flight start to finish first. A session that was
        started is always finalized, even with no matched verses.

        Returns:
            The finished session, or None if no session was started or the
            surah is unknown
        """
        async with self._session_lock:
            self._stopping = True
            try:
                return await self._finish_session()
            finally:
                self._stopping = False

    async def cancel_session(self) -> FollowAlongSession | None:
        """Stop because the host is going away (e.g. app backgrounded)."""
        if self._state.is_active:
            logger.info("Follow-along cancelled by host; finalizing session")
        return await self.stop_session()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[SessionStart]:
        """
        Run a session for the duration of an ``async with`` block.

        The session is stopped on exit, including on cancellation.
        """
        outcome = await self.start_session()
        try:
            yield outcome
        finally:
            if outcome.started:
                await self.stop_session()

    def mark_paused(self) -> None:
        """The recognizer paused while the session is still active."""
        if self._state.phase == SessionPhase.LISTENING:
            self._state.phase = SessionPhase.PAUSED

    def mark_resumed(self) -> None:
        """The recognizer resumed delivering results."""
        if self._state.phase == SessionPhase.PAUSED:
            self._state.phase = SessionPhase.LISTENING

    def load_surah(self, surah: Surah | None, verses: Sequence[Verse]) -> None:
        """
        Switch to another surah between sessions.

        Raises:
            SessionStateError: If a session is active
        """
        if self._state.is_active:
            raise SessionStateError(
                "Cannot change surah during an active session",
                phase=self._state.phase.value,
            )
        self.surah = surah
        self.verses = list(verses)

    # ============ Internals ============

    async def _record_usage(self) -> None:
        try:
            self._sessions_used_today = await self.usage_counter.increment()
        except StorageError as e:
            log_error("Failed to increment follow-along usage", reason=e.message)
            self._sessions_used_today += 1

    async def _finish_session(self) -> FollowAlongSession | None:
        try:
            await self.recognizer.stop_listening()
        except RecognitionError as e:
            log_error("Failed to stop listening", reason=e.message)

        # Results delivered after this point see an idle controller.
        with self._event_lock:
            ended_at = self.clock()
            started_at = self._state.started_at
            verses_recited = list(self._state.verses_recited)
            self._stop_timer()
            self._state.reset()

        session = None
        if started_at is not None:
            if self.surah is not None:
                session = FollowAlongSession.finalize(
                    self.surah,
                    started_at,
                    ended_at,
                    verses_recited,
                    len(self.verses),
                )
                await self._persist(session)
                log_session_complete(
                    session.surah_id,
                    session.unique_verse_count,
                    session.accuracy_percentage,
                    session.duration_seconds,
                )
            else:
                log_warning("Follow-along stopped without a surah; nothing saved")

        return session

    async def _persist(self, session: FollowAlongSession) -> None:
        try:
            await self.repository.save_session(session)
        except StorageError as e:
            log_error(
                "Follow-along session kept in memory only",
                session_id=session.id,
                reason=e.message,
            )

    async def _handle_recognition_error(self, message: str) -> None:
        self.last_error = message

        if not self._state.is_active or self._stopping:
            log_warning("Speech recognition error outside a session", reason=message)
            return

        surah_id = self.surah.id if self.surah else None
        log_error("Voice recognition error; stopping session", reason=message, surah_id=surah_id)
        session = await self.stop_session()

        if self._on_error is not None:
            self._on_error(RecognitionError(message, surah_id=surah_id), session)

    def _start_timer(self) -> None:
        self._stop_timer()
        self._timer_task = asyncio.get_running_loop().create_task(self._run_timer())

    def _stop_timer(self) -> None:
        task, self._timer_task = self._timer_task, None
        if task is not None:
            task.cancel()

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self.settings.duration_tick_seconds)
            if self._state.is_active:
                self._state.elapsed_seconds += 1
