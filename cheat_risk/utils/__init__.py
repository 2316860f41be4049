"""Utility functions shared across features."""

from .statistics import percentage, win_rate_percent

__all__ = ["percentage", "win_rate_percent"]
