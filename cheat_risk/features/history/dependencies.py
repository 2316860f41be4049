"""Dependency injection for history feature."""

from typing import Annotated

from fastapi import Depends, Request

from .repository import HistoryRepositoryInterface


def get_history_repository(request: Request) -> HistoryRepositoryInterface:
    """
    Get the application's history repository.

    :param request: Current request
    :returns: Repository created at startup
    """
    return request.app.state.history_repository


# Type alias for dependency injection
HistoryRepositoryDep = Annotated[
    HistoryRepositoryInterface, Depends(get_history_repository)
]
