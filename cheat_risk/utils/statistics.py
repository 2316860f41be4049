"""Percentage helpers shared by the metrics normalizer."""


def percentage(part: int, whole: int) -> float:
    """
    Share of ``part`` in ``whole`` on a 0-100 scale.

    Args:
        part: Counted subset (e.g. won games)
        whole: Size of the sample

    Returns:
        Percentage, or 0.0 for an empty sample
    """
    if whole <= 0:
        return 0.0
    return part / whole * 100


def win_rate_percent(wins: int, losses: int, draws: int) -> float:
    """Win rate over all finished games; draws count as games played."""
    return percentage(wins, wins + losses + draws)
