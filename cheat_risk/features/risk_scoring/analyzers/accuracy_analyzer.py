"""
High-accuracy signal analyzer.

Scores the share of reviewed games played at or above the rating-dependent
accuracy bar. Above the extreme threshold the score rises in flat steps.
"""

import math
from typing import Optional

from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from ..schemas import SubScore
from .base_analyzer import BaseSignalAnalyzer
from .confidence import ConfidenceWeighter

NO_ACCURACY_DATA = "no_accuracy_data"
BELOW_THRESHOLD = "below_threshold"


class HighAccuracySignalAnalyzer(BaseSignalAnalyzer):
    """
    Analyzer for the high-accuracy game percentage.

    Curve over the percentage ``pct``:

    - ``pct <= 10``: 0 (``below_threshold``)
    - ``10 < pct <= 20``: 0 -> 50
    - ``20 < pct <= 30``: 50 -> 100
    - ``pct > 30``: ``100 + floor((pct - 30) / 5) * 50``, a step function
    """

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        weighter: Optional[ConfidenceWeighter] = None,
    ):
        super().__init__("high_accuracy", config, weighter)

    def base_score(self, value: float) -> float:
        cfg = self.config
        pct = value

        if pct > cfg.accuracy_extreme_threshold:
            steps = math.floor(
                (pct - cfg.accuracy_extreme_threshold) / cfg.accuracy_extreme_step
            )
            return cfg.accuracy_high_max_score + steps * cfg.accuracy_extreme_increment

        if pct > cfg.accuracy_high_threshold:
            progress = (pct - cfg.accuracy_high_threshold) / (
                cfg.accuracy_extreme_threshold - cfg.accuracy_high_threshold
            )
            return cfg.accuracy_moderate_max_score + progress * (
                cfg.accuracy_high_max_score - cfg.accuracy_moderate_max_score
            )

        if pct > cfg.accuracy_moderate_threshold:
            progress = (pct - cfg.accuracy_moderate_threshold) / (
                cfg.accuracy_high_threshold - cfg.accuracy_moderate_threshold
            )
            return progress * cfg.accuracy_moderate_max_score

        return 0.0

    def score(self, value: float, sample_size: int) -> SubScore:
        """
        Score a high-accuracy percentage.

        :param value: Percentage (0-100) of reviewed games at high accuracy
        :param sample_size: Number of reviewed games
        :returns: SubScore; zero with a reason when there is no signal
        """
        if sample_size == 0 or value is None or math.isnan(value):
            result = self._zero(NO_ACCURACY_DATA)
        elif value <= self.config.accuracy_moderate_threshold:
            result = self._zero(BELOW_THRESHOLD)
        else:
            result = self._weighted(self.base_score(value), sample_size)

        self._log_result(value, sample_size, result)
        return result


def accuracy_score(
    high_accuracy_percentage: float,
    sample_count: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    weighter: Optional[ConfidenceWeighter] = None,
) -> SubScore:
    """Score a high-accuracy percentage; see ``HighAccuracySignalAnalyzer``."""
    return HighAccuracySignalAnalyzer(config, weighter).score(
        high_accuracy_percentage, sample_count
    )
