"""
Shared fixtures and test configuration for Mutabaah tests.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from mutabaah.config import FollowAlongSettings
from mutabaah.exceptions import RecognitionError, StorageError
from mutabaah.models import RecognitionResult, Surah, Verse
from mutabaah.recognition import BaseSpeechRecognizer
from mutabaah.session import DailyUsageCounter, FollowAlongController
from mutabaah.storage import FollowAlongRepository, InMemoryKeyValueStore


class FakeRecognizer(BaseSpeechRecognizer):
    """Recognizer driven by the test: emit() delivers transcripts."""

    def __init__(
        self,
        available: bool = True,
        fail_on_stop: bool = False,
        stop_delay: float = 0.0,
    ) -> None:
        self.available = available
        self.fail_on_stop = fail_on_stop
        self.stop_delay = stop_delay
        self.language = None
        self.start_calls = 0
        self.stop_calls = 0
        self._listening = False
        self._on_result = None
        self._on_error = None

    async def start_listening(self, on_result, on_error, language) -> bool:
        self.start_calls += 1
        self.language = language
        if not self.available:
            await on_error("Microphone permission denied.")
            return False
        self._on_result = on_result
        self._on_error = on_error
        self._listening = True
        return True

    async def stop_listening(self) -> None:
        self.stop_calls += 1
        if self.stop_delay:
            await asyncio.sleep(self.stop_delay)
        self._listening = False
        self._on_result = None
        self._on_error = None
        if self.fail_on_stop:
            raise RecognitionError("native module crashed")

    @property
    def is_listening(self) -> bool:
        return self._listening

    def emit(self, transcript: str, is_final: bool = False):
        if self._on_result is None:
            return None
        return self._on_result(RecognitionResult(transcript=transcript, is_final=is_final))

    async def fail(self, message: str) -> None:
        await self._on_error(message)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 10, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FailingStore(InMemoryKeyValueStore):
    """Store whose reads and/or writes can be made to fail."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("disk unavailable", key=key)
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full", key=key)
        await super().set_item(key, value)

    async def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full", key=key)
        await super().remove_item(key)


class GatedStore(InMemoryKeyValueStore):
    """Store whose writes block until released, to hold a write in flight."""

    def __init__(self) -> None:
        super().__init__()
        self.write_started = asyncio.Event()
        self.release = asyncio.Event()

    async def set_item(self, key: str, value: str) -> None:
        self.write_started.set()
        await self.release.wait()
        await super().set_item(key, value)


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return FollowAlongSettings(_env_file=None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def unavailable_recognizer():
    return FakeRecognizer(available=False)


@pytest.fixture
def failing_store():
    return FailingStore(fail_writes=True)


@pytest.fixture
def unreadable_store():
    return FailingStore(fail_reads=True, fail_writes=True)


@pytest.fixture
def gated_store():
    return GatedStore()


@pytest.fixture
def fatiha():
    return Surah(id=1, name="Al-Fatiha", name_arabic="الفاتحة")


@pytest.fixture
def fatiha_verses():
    """Surah Al-Fatiha with full diacritics."""
    return [
        Verse(number=1, text="بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"),
        Verse(number=2, text="الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ"),
        Verse(number=3, text="الرَّحْمَٰنِ الرَّحِيمِ"),
        Verse(number=4, text="مَالِكِ يَوْمِ الدِّينِ"),
        Verse(number=5, text="إِيَّاكَ نَعْبُدُ وَإِيَّاكَ نَسْتَعِينُ"),
        Verse(number=6, text="اهْدِنَا الصِّرَاطَ الْمُسْتَقِيمَ"),
        Verse(
            number=7,
            text="صِرَاطَ الَّذِينَ أَنْعَمْتَ عَلَيْهِمْ غَيْرِ الْمَغْضُوبِ عَلَيْهِمْ وَلَا الضَّالِّينَ",
        ),
    ]


@pytest.fixture
def plain_verses():
    """First four verses of Al-Fatiha without diacritics."""
    return [
        Verse(number=1, text="بسم الله الرحمن الرحيم"),
        Verse(number=2, text="الحمد لله رب العالمين"),
        Verse(number=3, text="الرحمن الرحيم"),
        Verse(number=4, text="مالك يوم الدين"),
    ]


@pytest.fixture
def make_controller(fatiha, fatiha_verses, store, recognizer, clock, settings):
    """Build a controller; any constructor argument can be overridden."""

    def _make(store=store, **overrides) -> FollowAlongController:
        active_settings = overrides.pop("settings", settings)
        kwargs = {
            "verses": fatiha_verses,
            "recognizer": recognizer,
            "repository": FollowAlongRepository(store, settings=active_settings),
            "usage_counter": DailyUsageCounter(store, clock=clock, settings=active_settings),
            "surah": fatiha,
            "clock": clock,
            "settings": active_settings,
        }
        kwargs.update(overrides)
        return FollowAlongController(**kwargs)

    return _make


@pytest.fixture
def crashing_recognizer():
    """Recognizer whose stop call fails."""
    return FakeRecognizer(fail_on_stop=True)


@pytest.fixture
def slow_stop_recognizer():
    """Recognizer that takes a while to release the microphone."""
    return FakeRecognizer(stop_delay=0.05)
