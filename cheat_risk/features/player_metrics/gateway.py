"""
Chess.com Gateway - Anti-Corruption Layer for the player metrics feature.

This gateway translates chess.com API structures to our domain language and
hands a single consolidated ``PlayerData`` payload to the normalizer.

Responsibilities:
- Fan out profile / stats / monthly archive fetches concurrently and fan in
- Cache payloads per player for a short TTL (cache object owned by caller)
- Allow at most one in-flight gather per player identity
- Collapse upstream result codes into win/loss/draw
- Report any upstream problem as a tagged ``UpstreamFailure``
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

import structlog
from pydantic import ValidationError

from cheat_risk.core.cache import TTLCache
from cheat_risk.core.chess_api.errors import ChessAPIError, NotFoundError
from cheat_risk.core.chess_api.models import GameDTO, ProfileDTO, StatsDTO
from cheat_risk.core.enums import GameFormat, TimeClass, map_result_code
from cheat_risk.core.exceptions import PlayerNotFoundError, UpstreamFailure
from .schemas import GameRecord, LifetimeRecord, PlayerData

if TYPE_CHECKING:
    from cheat_risk.core.chess_api.client import ChessAPIClient

logger = structlog.get_logger(__name__)

SUPPORTED_TIME_CLASSES = {time_class.value for time_class in TimeClass}

# While the current month is young, the previous month's archive is
# fetched too so the recent sample is not nearly empty.
PREVIOUS_MONTH_CUTOFF_DAY = 15


def months_to_fetch(now: datetime) -> List[Tuple[int, int]]:
    """
    Archive months to read, oldest first.

    :param now: Reference time
    :returns: List of (year, month) tuples
    """
    months = []
    if now.day < PREVIOUS_MONTH_CUTOFF_DAY:
        if now.month == 1:
            months.append((now.year - 1, 12))
        else:
            months.append((now.year, now.month - 1))
    months.append((now.year, now.month))
    return months


def stats_to_lifetime_records(stats: StatsDTO) -> Dict[GameFormat, LifetimeRecord]:
    """Translate the stats payload into per-format lifetime records."""
    records: Dict[GameFormat, LifetimeRecord] = {}
    for game_format in GameFormat:
        format_stats = getattr(stats, game_format.value)
        if format_stats is None:
            continue
        record = format_stats.record
        records[game_format] = LifetimeRecord(
            rating=format_stats.last.rating if format_stats.last else 0,
            wins=record.win if record else 0,
            losses=record.loss if record else 0,
            draws=record.draw if record else 0,
        )
    return records


def game_to_record(game: GameDTO, username: str) -> Optional[GameRecord]:
    """
    Translate an archived game to a GameRecord from ``username``'s side.

    Returns None for games whose result code is not in the mapping table
    or whose fields fall outside the GameRecord constraints.
    """
    is_white = game.white.username.lower() == username.lower()
    player_color = "white" if is_white else "black"
    side = game.white if is_white else game.black

    result = map_result_code(side.result)
    if result is None:
        return None

    accuracy = None
    if game.accuracies is not None:
        accuracy = getattr(game.accuracies, player_color)

    try:
        return GameRecord(
            result=result,
            time_class=TimeClass(game.time_class),
            player_rating=side.rating,
            accuracy=accuracy,
            rated=game.rated,
            player_color=player_color,
            end_time=game.end_time,
        )
    except (ValidationError, ValueError):
        return None


class PlayerDataGateway:
    """
    Gathers everything the normalizer needs about one player.

    Hides chess.com structure and error vocabulary from the rest of the
    application.
    """

    def __init__(
        self,
        client: "ChessAPIClient",
        cache: Optional[TTLCache] = None,
        recent_games_limit: int = 50,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize gateway.

        :param client: Low-level chess.com API client
        :param cache: Payload cache; a 5 minute cache is created when omitted
        :param recent_games_limit: Most recent games kept in the sample
        :param clock: Source of "now" for archive month selection
        """
        self._client = client
        self.cache = cache if cache is not None else TTLCache(maxsize=500, ttl=300)
        self.recent_games_limit = recent_games_limit
        self._clock = clock
        self._in_flight: Dict[Tuple[str, bool], asyncio.Task] = {}

    async def gather_player_data(
        self, username: str, rated_only: bool = True
    ) -> PlayerData:
        """
        Fetch profile, stats and recent games concurrently.

        Concurrent calls for the same player share one underlying fetch.

        :param username: chess.com username (case-insensitive)
        :param rated_only: Keep only rated games in the recent sample
        :returns: Consolidated PlayerData
        :raises PlayerNotFoundError: If the player does not exist
        :raises UpstreamFailure: If the data could not be fetched
        """
        key = (username.strip().lower(), rated_only)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._gather(username.strip(), rated_only))
            self._in_flight[key] = task
            task.add_done_callback(lambda _task: self._in_flight.pop(key, None))
        else:
            logger.debug("Joining in-flight player fetch", username=username)

        return await asyncio.shield(task)

    async def _gather(self, username: str, rated_only: bool) -> PlayerData:
        logger.info("Gathering player data", username=username, rated_only=rated_only)
        try:
            profile, stats, recent_games = await asyncio.gather(
                self.fetch_profile(username),
                self.fetch_stats(username),
                self.fetch_recent_games(username, rated_only),
            )
        except NotFoundError as e:
            raise PlayerNotFoundError(
                f"Player not found: {username}",
                username=username,
                status_code=e.status_code,
                operation="gather_player_data",
                original_error=e,
            ) from e
        except ChessAPIError as e:
            raise UpstreamFailure(
                f"Could not fetch data for {username}: {e}",
                username=username,
                status_code=e.status_code,
                operation="gather_player_data",
                original_error=e,
            ) from e

        player_data = PlayerData(
            username=profile.username,
            joined=profile.joined,
            stats=stats_to_lifetime_records(stats),
            recent_games=recent_games,
        )

        logger.info(
            "Player data gathered",
            username=player_data.username,
            formats=[f.value for f in player_data.stats],
            recent_games=len(player_data.recent_games),
        )
        return player_data

    async def fetch_profile(self, username: str) -> ProfileDTO:
        """Profile with caching."""
        cached = self.cache.get("profile", username)
        if cached is not None:
            logger.debug("Using cached profile", username=username)
            return cached

        profile = await self._client.get_player_profile(username)
        self.cache.set("profile", username, profile)
        return profile

    async def fetch_stats(self, username: str) -> StatsDTO:
        """Stats with caching."""
        cached = self.cache.get("stats", username)
        if cached is not None:
            logger.debug("Using cached stats", username=username)
            return cached

        stats = await self._client.get_player_stats(username)
        self.cache.set("stats", username, stats)
        return stats

    async def fetch_recent_games(
        self, username: str, rated_only: bool = True
    ) -> List[GameRecord]:
        """
        Recent standard-chess games, newest last, with caching.

        A month whose archive cannot be fetched contributes no games
        instead of failing the whole gather.
        """
        cached = self.cache.get("games", username, rated_only)
        if cached is not None:
            logger.debug("Using cached games", username=username)
            return cached

        months = months_to_fetch(self._clock())
        archives = await asyncio.gather(
            *(self._fetch_month(username, year, month) for year, month in months)
        )

        records: List[GameRecord] = []
        for games in archives:
            for game in games:
                if game.rules != "chess" or game.time_class not in SUPPORTED_TIME_CLASSES:
                    continue
                if rated_only and not game.rated:
                    continue
                record = game_to_record(game, username)
                if record is not None:
                    records.append(record)

        records = records[-self.recent_games_limit :]
        logger.info(
            "Fetched recent games for analysis",
            username=username,
            months=len(months),
            games=len(records),
        )
        self.cache.set("games", username, rated_only, records)
        return records

    async def _fetch_month(self, username: str, year: int, month: int) -> List[GameDTO]:
        try:
            archive = await self._client.get_monthly_archive(username, year, month)
        except ChessAPIError as e:
            logger.warning(
                "Monthly archive unavailable",
                username=username,
                year=year,
                month=month,
                error=str(e),
            )
            return []
        return archive.games
