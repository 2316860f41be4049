"""In-process store for user preferences."""

import asyncio

import structlog

from .schemas import DEFAULT_PREFERENCES, UserPreferences

logger = structlog.get_logger(__name__)


class PreferencesStore:
    """Holds the current preferences; starts from the defaults."""

    def __init__(self, initial: UserPreferences = DEFAULT_PREFERENCES):
        self._preferences = initial
        self._lock = asyncio.Lock()

    async def get(self) -> UserPreferences:
        async with self._lock:
            return self._preferences

    async def save(self, preferences: UserPreferences) -> UserPreferences:
        """Replace the stored preferences."""
        async with self._lock:
            self._preferences = preferences
        logger.info("Preferences saved", **preferences.model_dump())
        return preferences

    async def reset(self) -> UserPreferences:
        """Restore the defaults."""
        return await self.save(DEFAULT_PREFERENCES)
