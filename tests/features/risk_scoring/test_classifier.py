"""
Tests for risk level classification.
"""

import math

import pytest

from cheat_risk.core.enums import RiskLevel
from cheat_risk.core.exceptions import InputValidationError
from cheat_risk.core.scoring_config import ScoringConfig
from cheat_risk.features.risk_scoring.classifier import (
    classify_risk,
    describe_risk_level,
)


@pytest.mark.parametrize(
    "score,expected",
    [
        (0, RiskLevel.LOW),
        (30, RiskLevel.LOW),
        (31, RiskLevel.MODERATE),
        (50, RiskLevel.MODERATE),
        (51, RiskLevel.HIGH),
        (70, RiskLevel.HIGH),
        (71, RiskLevel.VERY_HIGH),
        (100, RiskLevel.VERY_HIGH),
    ],
)
def test_tier_boundaries(score, expected):
    assert classify_risk(score) == expected


@pytest.mark.parametrize("score", [-1, -0.01, 100.5, 250, math.nan])
def test_out_of_range_scores_are_rejected(score):
    with pytest.raises(InputValidationError):
        classify_risk(score)


def test_custom_boundaries():
    config = ScoringConfig(low_risk_max=20, moderate_risk_max=40, high_risk_max=60)
    assert classify_risk(21, config) == RiskLevel.MODERATE
    assert classify_risk(61, config) == RiskLevel.VERY_HIGH


def test_describe_from_score():
    info = describe_risk_level(71)

    assert info.level == RiskLevel.VERY_HIGH
    assert info.label == "Very High Risk"
    assert info.color == "#F44336"
    assert (info.min_score, info.max_score) == (71, 100)


@pytest.mark.parametrize(
    "level,label,color,bounds",
    [
        (RiskLevel.LOW, "Low Risk", "#4CAF50", (0, 30)),
        (RiskLevel.MODERATE, "Moderate Risk", "#FFC107", (31, 50)),
        (RiskLevel.HIGH, "High Risk", "#FF9800", (51, 70)),
        (RiskLevel.VERY_HIGH, "Very High Risk", "#F44336", (71, 100)),
    ],
)
def test_describe_levels(level, label, color, bounds):
    info = describe_risk_level(level)
    assert info.label == label
    assert info.color == color
    assert (info.min_score, info.max_score) == bounds
