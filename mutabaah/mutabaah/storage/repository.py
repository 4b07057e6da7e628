"""
Persistence of finished follow-along sessions.

All sessions of one user live in a single JSON list under one key, most
recent first, capped at ``settings.max_stored_sessions``.
"""

from pydantic import TypeAdapter, ValidationError

from mutabaah._logging import get_logger
from mutabaah.config import FollowAlongSettings, get_settings
from mutabaah.exceptions import StorageError
from mutabaah.models import FollowAlongSession
from mutabaah.storage.base import KeyValueStore
from mutabaah.storage.keys import FOLLOW_ALONG_SESSIONS, build_storage_key

logger = get_logger(__name__)

_sessions_adapter = TypeAdapter(list[FollowAlongSession])


class FollowAlongRepository:
    """
    Stores follow-along sessions in a key-value store.

    Example:
        repository = FollowAlongRepository(InMemoryKeyValueStore(), user_id="u1")
        await repository.save_session(session)
        latest = (await repository.get_all_sessions())[0]
    """

    def __init__(
        self,
        store: KeyValueStore,
        user_id: str | None = None,
        settings: FollowAlongSettings | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.key = build_storage_key(
            FOLLOW_ALONG_SESSIONS, user_id, self.settings.storage_namespace
        )

    async def _load(self) -> list[FollowAlongSession]:
        data = await self.store.get_item(self.key)
        if not data:
            return []
        return _sessions_adapter.validate_json(data)

    async def _store(self, sessions: list[FollowAlongSession]) -> None:
        payload = _sessions_adapter.dump_json(sessions).decode("utf-8")
        await self.store.set_item(self.key, payload)

    async def get_all_sessions(self) -> list[FollowAlongSession]:
        """
        Load every stored session, most recent first.

        Unreadable or corrupt data is logged and treated as empty.
        """
        try:
            return await self._load()
        except (StorageError, ValidationError) as e:
            logger.error(f"Failed to load follow along sessions: {e}")
            return []

    async def get_session_by_id(self, session_id: str) -> FollowAlongSession | None:
        """Find a session by id."""
        for session in await self.get_all_sessions():
            if session.id == session_id:
                return session
        return None

    async def get_sessions_by_surah(self, surah_id: int) -> list[FollowAlongSession]:
        """All sessions for one surah, most recent first."""
        return [s for s in await self.get_all_sessions() if s.surah_id == surah_id]

    async def save_session(self, session: FollowAlongSession) -> None:
        """
        Insert or replace a session.

        A session with a known id replaces the stored one in place; a new
        session is inserted at the front. The oldest sessions beyond the cap
        are dropped.

        Raises:
            StorageError: If the sessions cannot be written
        """
        sessions = await self.get_all_sessions()

        for index, existing in enumerate(sessions):
            if existing.id == session.id:
                sessions[index] = session
                break
        else:
            sessions.insert(0, session)

        try:
            await self._store(sessions[: self.settings.max_stored_sessions])
        except StorageError as e:
            logger.error(f"Failed to save follow along session: {e}")
            raise

    async def delete_session(self, session_id: str) -> None:
        """
        Delete a session by id. Unknown ids are ignored.

        Raises:
            StorageError: If the sessions cannot be written
        """
        sessions = await self.get_all_sessions()
        remaining = [s for s in sessions if s.id != session_id]

        try:
            await self._store(remaining)
        except StorageError as e:
            logger.error(f"Failed to delete follow along session: {e}")
            raise

    async def clear_all_sessions(self) -> None:
        """Remove every stored session. Failures are logged, not raised."""
        try:
            await self.store.remove_item(self.key)
        except StorageError as e:
            logger.error(f"Failed to clear follow along sessions: {e}")
