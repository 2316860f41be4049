"""History API endpoints."""

from fastapi import APIRouter, status
import structlog

from .dependencies import HistoryRepositoryDep
from .schemas import HistoryListResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
async def get_history(repository: HistoryRepositoryDep) -> HistoryListResponse:
    """
    Get the analysis history.

    Entries are unique per username (case-insensitive), newest username
    first. Re-analysing a player updates their entry in place.
    """
    entries = await repository.list_entries()
    return HistoryListResponse(entries=entries, total=len(entries))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(repository: HistoryRepositoryDep) -> None:
    """Remove every history entry."""
    await repository.clear()
    logger.info("history_cleared_via_api")
