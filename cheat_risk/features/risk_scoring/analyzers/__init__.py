"""
Signal analyzers.

This package contains the individual signal scorers combined by the format
risk aggregator.
"""

from .confidence import ConfidenceWeighter
from .base_analyzer import BaseSignalAnalyzer
from .win_rate_analyzer import WinRateSignalAnalyzer, win_rate_score
from .accuracy_analyzer import (
    HighAccuracySignalAnalyzer,
    accuracy_score,
    NO_ACCURACY_DATA,
    BELOW_THRESHOLD,
)

__all__ = [
    "ConfidenceWeighter",
    "BaseSignalAnalyzer",
    "WinRateSignalAnalyzer",
    "win_rate_score",
    "HighAccuracySignalAnalyzer",
    "accuracy_score",
    "NO_ACCURACY_DATA",
    "BELOW_THRESHOLD",
]
