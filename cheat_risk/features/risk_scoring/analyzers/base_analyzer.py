"""
Base class for signal analyzers.

This module provides the abstract base class that all signal analyzers
inherit from to ensure a consistent interface and behavior.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import structlog

from cheat_risk.core.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from ..schemas import SubScore
from .confidence import ConfidenceWeighter


class BaseSignalAnalyzer(ABC):
    """
    Abstract base class for signal analyzers.

    Each analyzer turns one normalized signal plus its sample size into a
    bounded-below sub-score scaled by the sample-size confidence weight.
    """

    def __init__(
        self,
        signal_name: str,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
        weighter: Optional[ConfidenceWeighter] = None,
    ):
        self.signal_name = signal_name
        self.config = config
        self.weighter = weighter or ConfidenceWeighter(config.confidence_k)
        self.logger = structlog.get_logger(f"{__name__}.{signal_name}")

    @abstractmethod
    def score(self, value: float, sample_size: int) -> SubScore:
        """
        Score one signal.

        :param value: Normalized signal value
        :param sample_size: Number of games behind the value
        :returns: SubScore with base score, weight and weighted score
        """

    @abstractmethod
    def base_score(self, value: float) -> float:
        """Raw curve score before confidence weighting."""

    def _weighted(self, base_score: float, sample_size: int) -> SubScore:
        sample_weight = self.weighter.weight(sample_size)
        return SubScore(
            base_score=base_score,
            sample_weight=sample_weight,
            score=base_score * sample_weight,
        )

    def _zero(self, reason: Optional[str] = None) -> SubScore:
        return SubScore(base_score=0.0, sample_weight=0.0, score=0.0, reason=reason)

    def _log_result(
        self,
        value: float,
        sample_size: int,
        result: SubScore,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the result of a signal evaluation."""
        self.logger.debug(
            "Signal scored",
            signal=self.signal_name,
            value=value,
            sample_size=sample_size,
            base_score=result.base_score,
            sample_weight=result.sample_weight,
            score=result.score,
            reason=result.reason,
            **(context or {}),
        )
