"""Dependency injection for settings feature."""

from typing import Annotated

from fastapi import Depends, Request

from .store import PreferencesStore


def get_preferences_store(request: Request) -> PreferencesStore:
    """
    Get the application's preferences store.

    :param request: Current request
    :returns: PreferencesStore created at startup
    """
    return request.app.state.preferences_store


# Type alias for dependency injection
PreferencesStoreDep = Annotated[PreferencesStore, Depends(get_preferences_store)]
