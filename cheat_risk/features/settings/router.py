"""Settings API endpoints for managing user preferences."""

from fastapi import APIRouter
import structlog

from .dependencies import PreferencesStoreDep
from .schemas import UserPreferences

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=UserPreferences)
async def get_preferences(store: PreferencesStoreDep) -> UserPreferences:
    """Get the current preferences."""
    return await store.get()


@router.put("", response_model=UserPreferences)
async def save_preferences(
    preferences: UserPreferences,
    store: PreferencesStoreDep,
) -> UserPreferences:
    """
    Replace the preferences.

    Omitted fields take their default value. The moderate threshold must be
    lower than the high threshold, otherwise the request is rejected with 422.
    """
    saved = await store.save(preferences)
    logger.info("preferences_updated", rated_only=saved.rated_only)
    return saved


@router.post("/reset", response_model=UserPreferences)
async def reset_preferences(store: PreferencesStoreDep) -> UserPreferences:
    """Restore the default preferences."""
    return await store.reset()
