"""Settings feature module.

This module provides user preference management: which games count and the
display thresholds of the risk badge.
"""

from .router import router as settings_router
from .schemas import UserPreferences, DEFAULT_PREFERENCES
from .store import PreferencesStore
from .dependencies import get_preferences_store, PreferencesStoreDep

__all__ = [
    # Router
    "settings_router",
    # Schemas
    "UserPreferences",
    "DEFAULT_PREFERENCES",
    # Store
    "PreferencesStore",
    # Dependencies
    "get_preferences_store",
    "PreferencesStoreDep",
]
