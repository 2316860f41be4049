"""Sample-size confidence weighting."""

from typing import Dict


class ConfidenceWeighter:
    """
    Computes ``weight(n) = n / (n + K)``, memoized per distinct ``n``.

    One instance is meant to live for a single scoring pass; the memo is
    tied to the instance's K and is never shared between configurations.
    """

    def __init__(self, k: float = 20.0):
        if k <= 0:
            raise ValueError("Confidence constant K must be positive")
        self.k = k
        self._memo: Dict[int, float] = {}

    def weight(self, n: int) -> float:
        """Confidence in a signal backed by ``n`` samples, in [0, 1)."""
        if n <= 0:
            return 0.0
        cached = self._memo.get(n)
        if cached is None:
            cached = n / (n + self.k)
            self._memo[n] = cached
        return cached

    __call__ = weight

    def __len__(self) -> int:
        return len(self._memo)
