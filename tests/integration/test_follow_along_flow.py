"""
Integration tests for Mutabaah library.
These tests drive full follow-along sessions from transcript to storage.
"""

import asyncio

import pytest

from mutabaah import FollowAlongController, FollowAlongRepository, DailyUsageCounter, StartStatus
from mutabaah.models import Verse
from mutabaah.storage import JsonFileKeyValueStore


FATIHA_UTTERANCES = [
    ["بسم الله", "بسم الله الرحمن الرحيم"],
    ["الحمد لله", "الحمد لله رب العالمين"],
    ["الرحمن الرحيم"],
    ["مالك يوم الدين"],
    ["اياك نعبد", "اياك نعبد واياك نستعين"],
    ["اهدنا الصراط المستقيم"],
    ["صراط الذين انعمت عليهم", "صراط الذين انعمت عليهم غير المغضوب عليهم ولا الضالين"],
]


@pytest.mark.integration
class TestFollowAlongFlow:
    """End-to-end sessions over Surah Al-Fatiha."""

    def test_two_verse_session(self, make_controller, recognizer, clock, store, settings):
        """Recite a two-verse passage, stop, and find the session in storage."""
        verses = [
            Verse(number=1, text="بسم الله الرحمن الرحيم"),
            Verse(number=2, text="الحمد لله رب العالمين"),
        ]
        controller = make_controller(verses=verses)

        async def scenario():
            outcome = await controller.start_session()
            assert outcome.started

            recognizer.emit("بسم الله الرحمن الرحيم")
            assert controller.matched_verse_number == 1
            clock.advance(4)

            recognizer.emit("الحمد لله رب العالمين", is_final=True)
            assert controller.matched_verse_number == 2
            clock.advance(4)

            return await controller.stop_session()

        session = asyncio.run(scenario())

        assert session.verses_recited == [1, 2]
        assert session.total_verses == 2
        assert session.accuracy_percentage == 100
        assert session.duration_seconds == 8

        stored = asyncio.run(FollowAlongRepository(store, settings=settings).get_all_sessions())
        assert stored == [session]

    def test_full_surah_with_partial_results(self, make_controller, recognizer, clock):
        """Partial results match eagerly and each verse is reported once."""
        matched = []
        controller = make_controller(on_verse_matched=lambda match: matched.append(match.verse.number))

        async def scenario():
            await controller.start_session()
            for utterance in FATIHA_UTTERANCES:
                for index, transcript in enumerate(utterance):
                    recognizer.emit(transcript, is_final=index == len(utterance) - 1)
                clock.advance(3)
            return await controller.stop_session()

        session = asyncio.run(scenario())

        assert matched == [1, 2, 3, 4, 5, 6, 7]
        assert session.verses_recited == [1, 2, 3, 4, 5, 6, 7]
        assert session.accuracy_percentage == 100
        assert session.duration_seconds == 21

    def test_skipped_verses_lower_accuracy(self, make_controller, recognizer):
        controller = make_controller()

        async def scenario():
            await controller.start_session()
            for transcript in [
                "بسم الله الرحمن الرحيم",
                "hmm الحمد لله umm رب العالمين",
                "مالك يوم الدين",
                "اهدنا الصراط المستقيم",
                "صراط الذين انعمت عليهم غير المغضوب عليهم ولا الضالين",
            ]:
                recognizer.emit(transcript)
            return await controller.stop_session()

        session = asyncio.run(scenario())

        assert session.verses_recited == [1, 2, 4, 6, 7]
        assert session.accuracy_percentage == 71

    def test_daily_limit_resets_next_day(self, make_controller, clock):
        controller = make_controller()

        async def scenario():
            outcomes = []
            for _ in range(4):
                outcomes.append(await controller.start_session())
                await controller.stop_session()
            clock.advance(24 * 60 * 60)
            outcomes.append(await controller.start_session())
            await controller.stop_session()
            return outcomes

        outcomes = asyncio.run(scenario())

        assert [o.status for o in outcomes] == [
            StartStatus.STARTED,
            StartStatus.STARTED,
            StartStatus.STARTED,
            StartStatus.LIMIT_REACHED,
            StartStatus.STARTED,
        ]
        assert [o.sessions_remaining for o in outcomes] == [2, 1, 0, 0, 2]

    def test_sessions_survive_restart_with_file_store(
        self, tmp_path, fatiha, fatiha_verses, recognizer, clock, settings
    ):
        """A new controller over the same file sees earlier sessions and usage."""
        path = tmp_path / "store.json"

        def build():
            store = JsonFileKeyValueStore(path)
            return FollowAlongController(
                fatiha_verses,
                recognizer,
                FollowAlongRepository(store, user_id="u1", settings=settings),
                DailyUsageCounter(store, user_id="u1", clock=clock, settings=settings),
                surah=fatiha,
                clock=clock,
                settings=settings,
            )

        async def first_run():
            controller = build()
            async with controller.session():
                recognizer.emit("بسم الله الرحمن الرحيم")

        async def second_run():
            controller = build()
            used = await controller.refresh_usage()
            sessions = await controller.repository.get_all_sessions()
            return used, sessions

        asyncio.run(first_run())
        used, sessions = asyncio.run(second_run())

        assert used == 1
        assert [s.verses_recited for s in sessions] == [[1]]
        assert sessions[0].surah_name_arabic == "الفاتحة"
