"""
Tests for the risk score selector and calculate_risk_score.
"""

from datetime import datetime, timedelta, timezone

import pytest

from cheat_risk.core.enums import GameFormat, RiskLevel
from cheat_risk.core.exceptions import InputValidationError
from cheat_risk.features.risk_scoring.classifier import classify_risk
from cheat_risk.features.risk_scoring.selector import (
    NO_RATED_GAMES,
    RiskScoreSelector,
    calculate_risk_score,
    round_half_up,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected", [(0.0, 0), (2.4, 2), (2.5, 3), (3.5, 4), (99.5, 100)]
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestRiskScoreSelector:
    def test_suspicious_player_scores_100(self, suspicious_metrics, fixed_clock):
        """80% win rates on 20 games for a 30 day old account hit the cap."""
        result = calculate_risk_score(suspicious_metrics, clock=fixed_clock)

        assert result.max_score.value == 100
        assert result.max_score.format == GameFormat.BLITZ
        assert result.max_score.reason is None
        assert result.max_score.factors.calculation.before_cap == pytest.approx(105.0)
        assert result.account_age_score == 1.5
        assert result.account_age_days == 30
        assert result.username == "hikaru"
        assert classify_risk(result.max_score.value) == RiskLevel.VERY_HIGH

    def test_formats_below_min_games_are_excluded(
        self, metrics_factory, format_stats_factory, fixed_clock
    ):
        metrics = metrics_factory(
            formats={
                GameFormat.RAPID: format_stats_factory(
                    overall_winrate=90.0, recent_winrate=90.0, recent_total=4
                ),
                GameFormat.BLITZ: format_stats_factory(
                    overall_winrate=55.0, recent_winrate=55.0, recent_total=5
                ),
            }
        )

        result = calculate_risk_score(metrics, clock=fixed_clock)

        assert result.max_score.format == GameFormat.BLITZ
        assert result.other_formats == []

    def test_all_formats_ineligible_gives_sentinel(
        self, metrics_factory, format_stats_factory, fixed_clock
    ):
        metrics = metrics_factory(
            formats={
                game_format: format_stats_factory(
                    overall_winrate=95.0, recent_winrate=100.0, recent_total=3
                )
                for game_format in GameFormat
            },
            account_age=5,
        )

        result = calculate_risk_score(metrics, clock=fixed_clock)

        assert result.max_score.value == 0
        assert result.max_score.format is None
        assert result.max_score.factors is None
        assert result.max_score.reason == NO_RATED_GAMES
        assert result.other_formats == []
        assert result.account_age_days == 5
        assert result.account_age_score == 1.5
        assert result.timestamp == fixed_clock()

    def test_no_formats_gives_sentinel(self, metrics_factory, fixed_clock):
        result = calculate_risk_score(metrics_factory(formats={}), clock=fixed_clock)
        assert result.max_score.reason == NO_RATED_GAMES

    def test_formats_are_ordered_by_score(
        self, metrics_factory, format_stats_factory, fixed_clock
    ):
        metrics = metrics_factory(
            formats={
                GameFormat.RAPID: format_stats_factory(
                    overall_winrate=55.0, recent_winrate=55.0
                ),
                GameFormat.BULLET: format_stats_factory(
                    overall_winrate=70.0, recent_winrate=70.0
                ),
                GameFormat.BLITZ: format_stats_factory(
                    overall_winrate=62.0, recent_winrate=62.0
                ),
            }
        )

        result = calculate_risk_score(metrics, clock=fixed_clock)

        assert result.max_score.format == GameFormat.BULLET
        assert [r.format for r in result.other_formats] == [
            GameFormat.BLITZ,
            GameFormat.RAPID,
        ]
        assert (
            result.max_score.value
            >= result.other_formats[0].score
            >= result.other_formats[1].score
        )

    def test_ties_keep_input_order(
        self, metrics_factory, format_stats_factory, fixed_clock
    ):
        stats = format_stats_factory(overall_winrate=65.0, recent_winrate=65.0)
        metrics = metrics_factory(
            formats={
                GameFormat.BLITZ: stats,
                GameFormat.RAPID: stats,
                GameFormat.BULLET: stats,
            }
        )

        result = calculate_risk_score(metrics, clock=fixed_clock)

        assert result.max_score.format == GameFormat.BLITZ
        assert [r.format for r in result.other_formats] == [
            GameFormat.RAPID,
            GameFormat.BULLET,
        ]

    def test_headline_value_is_rounded(
        self, metrics_factory, format_stats_factory, fixed_clock
    ):
        # 0.35 * 62.5 + 0.35 * 25 + 0.30 * 37.5 = 41.875
        metrics = metrics_factory(
            formats={
                GameFormat.BLITZ: format_stats_factory(
                    overall_winrate=65.0,
                    total_games=100,
                    recent_winrate=60.0,
                    recent_total=20,
                    accuracy_games=20,
                    high_accuracy_games=5,
                    high_accuracy_percentage=25.0,
                )
            }
        )

        result = calculate_risk_score(metrics, clock=fixed_clock)

        assert result.max_score.value == 42

    def test_idempotent_apart_from_timestamp(self, suspicious_metrics):
        ticks = iter(
            [
                datetime(2024, 1, 1, tzinfo=timezone.utc),
                datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=5),
            ]
        )
        selector = RiskScoreSelector(clock=lambda: next(ticks))

        first = selector.select(suspicious_metrics)
        second = selector.select(suspicious_metrics)

        assert first.timestamp != second.timestamp
        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(
            exclude={"timestamp"}
        )

    def test_invalid_metrics_are_rejected(self, metrics_factory, format_stats_factory):
        metrics = metrics_factory(
            formats={
                GameFormat.BLITZ: format_stats_factory(
                    overall_winrate=120.0, total_games=0
                )
            }
        )

        with pytest.raises(InputValidationError) as exc_info:
            calculate_risk_score(metrics)

        assert any("overall_winrate" in error for error in exc_info.value.errors)

    def test_accepts_raw_mapping(self, suspicious_metrics, fixed_clock):
        raw = suspicious_metrics.model_dump(mode="json")
        result = calculate_risk_score(raw, clock=fixed_clock)
        assert result.max_score.value == 100
