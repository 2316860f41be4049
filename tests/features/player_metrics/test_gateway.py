"""
Tests for the chess.com player data gateway.
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from cheat_risk.core.cache import TTLCache
from cheat_risk.core.chess_api import ChessAPIClient, ChessAPIError, NotFoundError
from cheat_risk.core.chess_api.models import (
    AccuraciesDTO,
    ArchiveDTO,
    FormatStatsDTO,
    GameDTO,
    GamePlayerDTO,
    ProfileDTO,
    RatingSnapshotDTO,
    RecordDTO,
    StatsDTO,
)
from cheat_risk.core.enums import GameFormat, GameResult, TimeClass
from cheat_risk.core.exceptions import PlayerNotFoundError, UpstreamFailure
from cheat_risk.features.player_metrics.gateway import (
    PlayerDataGateway,
    game_to_record,
    months_to_fetch,
    stats_to_lifetime_records,
)


def make_game_dto(
    white: str = "hikaru",
    black: str = "opponent",
    white_result: str = "win",
    black_result: str = "resigned",
    time_class: str = "blitz",
    rated: bool = True,
    rules: str = "chess",
    accuracies=None,
    end_time: int = 1710000000,
) -> GameDTO:
    return GameDTO(
        rules=rules,
        time_class=time_class,
        rated=rated,
        end_time=end_time,
        white=GamePlayerDTO(username=white, rating=1600, result=white_result),
        black=GamePlayerDTO(username=black, rating=1550, result=black_result),
        accuracies=accuracies,
    )


@pytest.fixture
def mock_client():
    client = AsyncMock(spec=ChessAPIClient)
    client.get_player_profile.return_value = ProfileDTO(
        username="Hikaru", joined=1389043258
    )
    client.get_player_stats.return_value = StatsDTO(
        chess_blitz=FormatStatsDTO(
            last=RatingSnapshotDTO(rating=3200),
            record=RecordDTO(win=100, loss=20, draw=30),
        )
    )
    client.get_monthly_archive.return_value = ArchiveDTO(
        games=[make_game_dto(end_time=1710000000 + i) for i in range(3)]
    )
    return client


@pytest.fixture
def gateway(mock_client, fixed_clock):
    return PlayerDataGateway(mock_client, cache=TTLCache(), clock=fixed_clock)


class TestMonthsToFetch:
    def test_early_in_month_includes_previous(self):
        now = datetime(2024, 3, 14, tzinfo=timezone.utc)
        assert months_to_fetch(now) == [(2024, 2), (2024, 3)]

    def test_later_in_month_only_current(self):
        now = datetime(2024, 3, 15, tzinfo=timezone.utc)
        assert months_to_fetch(now) == [(2024, 3)]

    def test_january_wraps_to_december(self):
        now = datetime(2024, 1, 2, tzinfo=timezone.utc)
        assert months_to_fetch(now) == [(2023, 12), (2024, 1)]


class TestTranslation:
    def test_stats_to_lifetime_records(self):
        stats = StatsDTO(
            chess_rapid=FormatStatsDTO(
                last=RatingSnapshotDTO(rating=1800), record=RecordDTO(win=5, loss=4)
            ),
            chess_bullet=FormatStatsDTO(),
        )

        records = stats_to_lifetime_records(stats)

        assert list(records) == [GameFormat.RAPID, GameFormat.BULLET]
        assert records[GameFormat.RAPID].rating == 1800
        assert records[GameFormat.RAPID].draws == 0
        assert records[GameFormat.BULLET].wins == 0

    def test_game_as_black(self):
        game = make_game_dto(
            white="someone",
            black="Hikaru",
            white_result="checkmated",
            black_result="win",
            accuracies=AccuraciesDTO(white=70.0, black=95.5),
        )

        record = game_to_record(game, "hikaru")

        assert record.result == GameResult.WIN
        assert record.player_color == "black"
        assert record.player_rating == 1550
        assert record.accuracy == 95.5
        assert record.time_class == TimeClass.BLITZ

    def test_draw_codes(self):
        game = make_game_dto(white_result="stalemate", black_result="stalemate")
        assert game_to_record(game, "hikaru").result == GameResult.DRAW

    def test_unknown_result_code_is_dropped(self):
        game = make_game_dto(white_result="bughousepartnerwin")
        assert game_to_record(game, "hikaru") is None

    def test_unsupported_time_class_is_dropped(self):
        assert game_to_record(make_game_dto(time_class="daily"), "hikaru") is None


class TestPlayerDataGateway:
    async def test_gather_player_data(self, gateway, mock_client):
        """Test that profile, stats and games are consolidated"""
        # Execute
        data = await gateway.gather_player_data("Hikaru")

        # Verify
        assert data.username == "Hikaru"
        assert data.joined == 1389043258
        assert data.stats[GameFormat.BLITZ].wins == 100
        assert len(data.recent_games) == 3
        assert all(g.result == GameResult.WIN for g in data.recent_games)
        mock_client.get_player_profile.assert_called_once_with("Hikaru")
        mock_client.get_player_stats.assert_called_once_with("Hikaru")
        mock_client.get_monthly_archive.assert_called_once_with("Hikaru", 2024, 3)

    async def test_filters_variants_and_unrated_games(self, gateway, mock_client):
        mock_client.get_monthly_archive.return_value = ArchiveDTO(
            games=[
                make_game_dto(),
                make_game_dto(rules="chess960"),
                make_game_dto(rated=False),
                make_game_dto(time_class="daily"),
            ]
        )

        rated = await gateway.gather_player_data("hikaru")
        everything = await gateway.gather_player_data("hikaru", rated_only=False)

        assert len(rated.recent_games) == 1
        assert len(everything.recent_games) == 2

    async def test_keeps_most_recent_games(self, mock_client, fixed_clock):
        mock_client.get_monthly_archive.return_value = ArchiveDTO(
            games=[make_game_dto(end_time=i) for i in range(60)]
        )
        gateway = PlayerDataGateway(
            mock_client, cache=TTLCache(), recent_games_limit=50, clock=fixed_clock
        )

        data = await gateway.gather_player_data("hikaru")

        assert len(data.recent_games) == 50
        assert data.recent_games[0].end_time == 10
        assert data.recent_games[-1].end_time == 59

    async def test_previous_month_is_fetched_early_in_month(self, mock_client):
        gateway = PlayerDataGateway(
            mock_client,
            cache=TTLCache(),
            clock=lambda: datetime(2024, 1, 5, tzinfo=timezone.utc),
        )

        data = await gateway.gather_player_data("hikaru")

        assert len(data.recent_games) == 6
        fetched = [c.args[1:] for c in mock_client.get_monthly_archive.call_args_list]
        assert sorted(fetched) == [(2023, 12), (2024, 1)]

    async def test_failed_month_degrades_to_empty(self, mock_client):
        mock_client.get_monthly_archive.side_effect = [
            ChessAPIError("archive down", status_code=500),
            ArchiveDTO(games=[make_game_dto()]),
        ]
        gateway = PlayerDataGateway(
            mock_client,
            cache=TTLCache(),
            clock=lambda: datetime(2024, 3, 1, tzinfo=timezone.utc),
        )

        data = await gateway.gather_player_data("hikaru")

        assert len(data.recent_games) == 1

    async def test_payloads_are_cached(self, gateway, mock_client):
        """Test that a second gather within the TTL hits the cache"""
        # Execute
        await gateway.gather_player_data("hikaru")
        await gateway.gather_player_data("HIKARU")

        # Verify
        assert mock_client.get_player_profile.call_count == 1
        assert mock_client.get_player_stats.call_count == 1
        assert mock_client.get_monthly_archive.call_count == 1

    async def test_concurrent_gathers_share_one_fetch(self, gateway, mock_client):
        first, second = await asyncio.gather(
            gateway.gather_player_data("hikaru"),
            gateway.gather_player_data("Hikaru"),
        )

        assert first == second
        assert mock_client.get_player_profile.call_count == 1
        assert gateway._in_flight == {}

    async def test_player_not_found(self, gateway, mock_client):
        mock_client.get_player_profile.side_effect = NotFoundError(
            "Resource not found", status_code=404
        )

        with pytest.raises(PlayerNotFoundError) as exc_info:
            await gateway.gather_player_data("ghost")

        assert exc_info.value.username == "ghost"
        assert exc_info.value.status_code == 404
        assert exc_info.value.tag == "player_not_found"

    async def test_upstream_failure_is_tagged(self, gateway, mock_client):
        mock_client.get_player_stats.side_effect = ChessAPIError(
            "Service unavailable", status_code=503
        )

        with pytest.raises(UpstreamFailure) as exc_info:
            await gateway.gather_player_data("hikaru")

        assert exc_info.value.tag == "upstream_failure"
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.original_error, ChessAPIError)

    async def test_failures_are_not_cached(self, gateway, mock_client):
        mock_client.get_player_stats.side_effect = [
            ChessAPIError("down", status_code=503),
            StatsDTO(),
        ]

        with pytest.raises(UpstreamFailure):
            await gateway.gather_player_data("hikaru")
        data = await gateway.gather_player_data("hikaru")

        assert data.stats == {}
