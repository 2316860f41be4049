"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .exceptions import (
    ServiceException,
    InputValidationError,
    UpstreamFailure,
    PlayerNotFoundError,
)
from .enums import GameResult, TimeClass, GameFormat, RiskLevel, map_result_code
from .cache import TTLCache
from .scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from .logging import setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Exceptions
    "ServiceException",
    "InputValidationError",
    "UpstreamFailure",
    "PlayerNotFoundError",
    # Enums
    "GameResult",
    "TimeClass",
    "GameFormat",
    "RiskLevel",
    "map_result_code",
    # Scoring configuration
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    # Cache
    "TTLCache",
    # Logging
    "setup_logging",
]
