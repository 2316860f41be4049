"""
Configuration for the risk scoring engine.

All thresholds, weights and curve constants live in one frozen model that
is passed at call time, so the engine never reads ambient state.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoringConfig(BaseModel):
    """Thresholds, weights and curve constants used by the scoring engine."""

    # Sample-size confidence: weight(n) = n / (n + K)
    confidence_k: float = Field(default=20.0, gt=0)
    min_games: int = Field(
        default=5, ge=0, description="Recent games needed for a format to count"
    )

    # Account age multiplier (flat step at the cutoff, inclusive)
    account_age_cutoff_days: int = Field(default=60, ge=0)
    account_age_multiplier: float = Field(default=1.5, ge=1.0)

    # Format score weights (must sum to 1.0)
    overall_winrate_weight: float = Field(default=0.35, ge=0)
    recent_winrate_weight: float = Field(default=0.35, ge=0)
    high_accuracy_weight: float = Field(default=0.30, ge=0)

    # Rating-dependent accuracy needed for a game to count as "high accuracy"
    accuracy_rating_threshold: int = Field(default=1500)
    low_rating_required_accuracy: float = Field(default=80.0, ge=0, le=100)
    high_rating_required_accuracy: float = Field(default=90.0, ge=0, le=100)

    # Win-rate curve (win rates as fractions)
    winrate_baseline: float = Field(default=0.5)
    winrate_medium: float = Field(default=0.6)
    winrate_high: float = Field(default=0.7)
    winrate_base_score: float = Field(default=50.0)
    winrate_extended_score: float = Field(default=100.0)
    winrate_scale_factor: float = Field(default=0.1, gt=0)

    # High-accuracy curve (percentages of reviewed games)
    accuracy_moderate_threshold: float = Field(default=10.0)
    accuracy_high_threshold: float = Field(default=20.0)
    accuracy_extreme_threshold: float = Field(default=30.0)
    accuracy_moderate_max_score: float = Field(default=50.0)
    accuracy_high_max_score: float = Field(default=100.0)
    accuracy_extreme_step: float = Field(default=5.0, gt=0)
    accuracy_extreme_increment: float = Field(default=50.0)

    # Final cap and risk tier upper bounds
    max_score: float = Field(
        default=100.0, gt=0, le=100, description="Cap applied to every format score"
    )
    low_risk_max: int = Field(default=30)
    moderate_risk_max: int = Field(default=50)
    high_risk_max: int = Field(default=70)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_configuration(self) -> "ScoringConfig":
        """Reject inconsistent weights, curves and tier boundaries."""
        total_weight = (
            self.overall_winrate_weight
            + self.recent_winrate_weight
            + self.high_accuracy_weight
        )
        if not (0.99 <= total_weight <= 1.01):  # Allow small floating point errors
            raise ValueError(
                f"Format weights must sum to 1.0, current sum: {total_weight:.4f}"
            )

        if not (self.winrate_baseline < self.winrate_medium < self.winrate_high):
            raise ValueError("Win-rate thresholds must be strictly ascending")

        if not (
            self.accuracy_moderate_threshold
            < self.accuracy_high_threshold
            < self.accuracy_extreme_threshold
        ):
            raise ValueError("Accuracy thresholds must be strictly ascending")

        if not (
            0 <= self.low_risk_max < self.moderate_risk_max < self.high_risk_max
            and self.high_risk_max < self.max_score
        ):
            raise ValueError("Risk tier boundaries must be ascending and below the cap")

        return self

    @property
    def weights(self) -> dict[str, float]:
        """Signal weights keyed by signal name."""
        return {
            "overall_winrate": self.overall_winrate_weight,
            "recent_winrate": self.recent_winrate_weight,
            "high_accuracy": self.high_accuracy_weight,
        }

    def required_accuracy(self, player_rating: int) -> float:
        """Accuracy a game needs to count as high accuracy at this rating."""
        if player_rating < self.accuracy_rating_threshold:
            return self.low_rating_required_accuracy
        return self.high_rating_required_accuracy


DEFAULT_SCORING_CONFIG = ScoringConfig()
