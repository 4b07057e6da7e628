"""
Daily follow-along usage counter.

One integer per calendar day, stored under a date-based key, so counts
reset implicitly when the day changes.
"""

from datetime import date, datetime
from typing import Callable

from mutabaah._logging import get_logger
from mutabaah.config import FollowAlongSettings, get_settings
from mutabaah.exceptions import StorageError
from mutabaah.storage.base import KeyValueStore
from mutabaah.storage.keys import daily_usage_key

logger = get_logger(__name__)


class DailyUsageCounter:
    """
    Counts follow-along sessions started per calendar day.

    Example:
        counter = DailyUsageCounter(store)
        used = await counter.get_count()
        await counter.increment()
    """

    def __init__(
        self,
        store: KeyValueStore,
        user_id: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
        settings: FollowAlongSettings | None = None,
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.clock = clock
        self.settings = settings or get_settings()

    def today(self) -> date:
        """Current calendar day according to the counter's clock."""
        return self.clock().date()

    def key_for(self, day: date) -> str:
        return daily_usage_key(day, self.user_id, self.settings.storage_namespace)

    async def get_count(self, day: date | None = None) -> int:
        """
        Read the number of sessions started on ``day`` (default: today).

        Raises:
            StorageError: If the store cannot be read
        """
        key = self.key_for(day or self.today())
        stored = await self.store.get_item(key)
        if stored is None:
            return 0
        try:
            return max(0, int(stored))
        except ValueError:
            logger.warning(f"Ignoring corrupt usage count {stored!r} under {key}")
            return 0

    async def increment(self, day: date | None = None) -> int:
        """
        Add one session to ``day`` (default: today).

        Returns:
            The new count

        Raises:
            StorageError: If the store cannot be read or written
        """
        day = day or self.today()
        count = await self.get_count(day) + 1
        key = self.key_for(day)
        try:
            await self.store.set_item(key, str(count))
        except StorageError as e:
            raise StorageError(f"Failed to increment usage count: {e.message}", key=key)
        return count
