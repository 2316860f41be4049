"""Repository pattern implementation for the analysis history.

The history is a bounded list keyed by lowercased username. Adding a player
that is already present replaces the old entry where it stands.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

import structlog
from pydantic import TypeAdapter, ValidationError

from .schemas import HistoryEntry

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENTRIES = 50

_entries_adapter = TypeAdapter(List[HistoryEntry])


def upsert_history(
    entries: Sequence[HistoryEntry],
    entry: HistoryEntry,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> List[HistoryEntry]:
    """
    Return a new history list containing ``entry``.

    A previous entry for the same username (case-insensitive) is replaced at
    its position. A new username is put at the front and the list is
    truncated to ``max_entries``.
    """
    updated = list(entries)
    for index, existing in enumerate(updated):
        if existing.key == entry.key:
            updated[index] = entry
            return updated
    return [entry, *updated][:max_entries]


class HistoryRepositoryInterface(ABC):
    """Interface for history repository.

    Defines contract for data access operations.
    """

    @abstractmethod
    async def add(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """Upsert an entry and return the resulting history."""
        pass

    @abstractmethod
    async def list_entries(self) -> List[HistoryEntry]:
        """Return the history, newest username first."""
        pass

    @abstractmethod
    async def get(self, username: str) -> Optional[HistoryEntry]:
        """Find the entry of a player, case-insensitive."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""
        pass


class InMemoryHistoryRepository(HistoryRepositoryInterface):
    """History kept in process memory."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: List[HistoryEntry] = []
        self._lock = asyncio.Lock()

    async def add(self, entry: HistoryEntry) -> List[HistoryEntry]:
        async with self._lock:
            self._entries = upsert_history(self._entries, entry, self.max_entries)
            logger.debug(
                "History entry stored", username=entry.username, size=len(self._entries)
            )
            return list(self._entries)

    async def list_entries(self) -> List[HistoryEntry]:
        async with self._lock:
            return list(self._entries)

    async def get(self, username: str) -> Optional[HistoryEntry]:
        key = username.lower()
        async with self._lock:
            return next((e for e in self._entries if e.key == key), None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries = []
            logger.info("History cleared")


class JsonFileHistoryRepository(HistoryRepositoryInterface):
    """History persisted as a JSON array in a single file.

    File access runs in a worker thread; writes go to a temporary file that
    then replaces the target.
    """

    def __init__(
        self, path: Union[str, Path], max_entries: int = DEFAULT_MAX_ENTRIES
    ):
        self.path = Path(path)
        self.max_entries = max_entries
        self._lock = asyncio.Lock()

    def _read(self) -> List[HistoryEntry]:
        if not self.path.exists():
            return []
        raw = self.path.read_bytes()
        if not raw.strip():
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Unreadable history file, starting with an empty history",
                path=str(self.path),
                error=str(e),
            )
            return []

    def _write(self, entries: List[HistoryEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(_entries_adapter.dump_json(entries, indent=2))
        os.replace(tmp_path, self.path)

    async def add(self, entry: HistoryEntry) -> List[HistoryEntry]:
        async with self._lock:
            entries = await asyncio.to_thread(self._read)
            entries = upsert_history(entries, entry, self.max_entries)
            await asyncio.to_thread(self._write, entries)
            logger.debug(
                "History entry stored",
                username=entry.username,
                size=len(entries),
                path=str(self.path),
            )
            return entries

    async def list_entries(self) -> List[HistoryEntry]:
        async with self._lock:
            return await asyncio.to_thread(self._read)

    async def get(self, username: str) -> Optional[HistoryEntry]:
        key = username.lower()
        entries = await self.list_entries()
        return next((e for e in entries if e.key == key), None)

    async def clear(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write, [])
            logger.info("History cleared", path=str(self.path))
