"""History feature module.

This module keeps a bounded, per-player list of past analyses.
"""

from .router import router as history_router
from .schemas import HistoryEntry, HistoryListResponse
from .repository import (
    HistoryRepositoryInterface,
    InMemoryHistoryRepository,
    JsonFileHistoryRepository,
    upsert_history,
)
from .dependencies import get_history_repository, HistoryRepositoryDep

__all__ = [
    # Router
    "history_router",
    # Schemas
    "HistoryEntry",
    "HistoryListResponse",
    # Repository
    "HistoryRepositoryInterface",
    "InMemoryHistoryRepository",
    "JsonFileHistoryRepository",
    "upsert_history",
    # Dependencies
    "get_history_repository",
    "HistoryRepositoryDep",
]
