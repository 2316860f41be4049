"""
Win rate signal analyzer.

Scores how far a win rate sits above the 50% baseline. The curve is
piecewise linear up to 70% and keeps growing linearly beyond it; the cap is
applied later, on the aggregated format score.
"""

from typing import Optional

from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from ..schemas import SubScore
from .base_analyzer import BaseSignalAnalyzer
from .confidence import ConfidenceWeighter


class WinRateSignalAnalyzer(BaseSignalAnalyzer):
    """
    Analyzer for win rate signals (overall and recent).

    Curve over the win rate fraction ``wr``:

    - ``wr <= 0.5``: 0
    - ``0.5 < wr <= 0.6``: 0 -> 50
    - ``0.6 < wr <= 0.7``: 50 -> 100
    - ``wr > 0.7``: ``100 + ((wr - 0.7) / 0.1) * 100``, unbounded
    """

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        weighter: Optional[ConfidenceWeighter] = None,
    ):
        super().__init__("win_rate", config, weighter)

    def base_score(self, value: float) -> float:
        cfg = self.config
        win_rate = value

        if win_rate <= cfg.winrate_baseline:
            return 0.0

        if win_rate > cfg.winrate_high:
            overflow = (win_rate - cfg.winrate_high) / cfg.winrate_scale_factor
            return cfg.winrate_extended_score + overflow * cfg.winrate_extended_score

        if win_rate > cfg.winrate_medium:
            progress = (win_rate - cfg.winrate_medium) / (
                cfg.winrate_high - cfg.winrate_medium
            )
            return cfg.winrate_base_score + progress * cfg.winrate_base_score

        if win_rate > cfg.winrate_baseline:
            progress = (win_rate - cfg.winrate_baseline) / (
                cfg.winrate_medium - cfg.winrate_baseline
            )
            return progress * cfg.winrate_base_score

        # NaN falls through every comparison
        return 0.0

    def score(self, value: float, sample_size: int) -> SubScore:
        """
        Score a win rate.

        :param value: Win rate as a fraction in [0, 1]
        :param sample_size: Games behind the win rate
        :returns: SubScore weighted by sample-size confidence
        """
        result = self._weighted(self.base_score(value), sample_size)
        self._log_result(value, sample_size, result)
        return result


def win_rate_score(
    win_rate: float,
    total_games: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    weighter: Optional[ConfidenceWeighter] = None,
) -> SubScore:
    """Score a win rate fraction; see ``WinRateSignalAnalyzer``."""
    return WinRateSignalAnalyzer(config, weighter).score(win_rate, total_games)
