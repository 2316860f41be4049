"""Standalone validation of PlayerMetrics.

``validate_metrics`` is a pure diagnostic check that callers can run before
trusting an externally constructed metrics object; ``ensure_valid_metrics``
turns a failed check into an ``InputValidationError``.
"""

import math
from typing import Any, List, Mapping, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cheat_risk.core.exceptions import InputValidationError
from .schemas import FormatStats, PlayerMetrics

logger = structlog.get_logger(__name__)


class MetricsValidationReport(BaseModel):
    """Outcome of a metrics validation."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __bool__(self) -> bool:
        return self.is_valid


def _is_percentage(value: float) -> bool:
    return math.isfinite(value) and 0.0 <= value <= 100.0


def _check_format(name: str, stats: FormatStats) -> List[str]:
    errors: List[str] = []

    if stats.current_rating < 0:
        errors.append(f"{name}: current_rating must be >= 0")

    if not _is_percentage(stats.overall_winrate):
        errors.append(f"{name}: overall_winrate must be within 0-100")

    counts = stats.games_counts
    if counts.total != counts.wins + counts.losses + counts.draws:
        errors.append(f"{name}: games_counts.total must equal wins + losses + draws")

    recent = stats.recent_games
    if recent.total != recent.wins + recent.losses + recent.draws:
        errors.append(f"{name}: recent_games.total must equal wins + losses + draws")
    if not _is_percentage(recent.winrate):
        errors.append(f"{name}: recent_games.winrate must be within 0-100")

    accuracy = stats.accuracy
    if accuracy.high_accuracy_games > accuracy.games_with_accuracy:
        errors.append(
            f"{name}: accuracy.high_accuracy_games must not exceed games_with_accuracy"
        )
    # NaN is tolerated here; the accuracy scorer treats it as "no data"
    pct = accuracy.high_accuracy_percentage
    if pct < 0.0 or pct > 100.0:
        errors.append(f"{name}: accuracy.high_accuracy_percentage must be within 0-100")

    return errors


def _format_pydantic_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]


def validate_metrics(
    metrics: Union[PlayerMetrics, Mapping[str, Any]],
) -> MetricsValidationReport:
    """
    Check a metrics object against the PlayerMetrics invariants.

    :param metrics: A PlayerMetrics instance or a raw mapping of its fields
    :returns: MetricsValidationReport listing every problem found
    """
    if not isinstance(metrics, PlayerMetrics):
        try:
            metrics = PlayerMetrics.model_validate(metrics)
        except ValidationError as e:
            return MetricsValidationReport(
                is_valid=False, errors=_format_pydantic_errors(e)
            )

    errors: List[str] = []
    if metrics.account_age < 0:
        errors.append("account_age must be >= 0")
    if not metrics.username or not metrics.username.strip():
        errors.append("username must not be empty")

    for game_format, stats in metrics.formats.items():
        errors.extend(_check_format(game_format.value, stats))

    return MetricsValidationReport(is_valid=not errors, errors=errors)


def ensure_valid_metrics(
    metrics: Union[PlayerMetrics, Mapping[str, Any]],
) -> PlayerMetrics:
    """
    Validate metrics and return them as a PlayerMetrics instance.

    :raises InputValidationError: If any invariant is violated
    """
    report = validate_metrics(metrics)
    if not report.is_valid:
        logger.warning("Rejected invalid player metrics", errors=report.errors)
        raise InputValidationError(
            "Invalid player metrics: " + "; ".join(report.errors),
            errors=report.errors,
            operation="ensure_valid_metrics",
        )
    if isinstance(metrics, PlayerMetrics):
        return metrics
    return PlayerMetrics.model_validate(metrics)
