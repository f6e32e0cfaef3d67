"""
Summary statistics over a sequence of observed values.
"""

import math

import numpy as np


class SummaryStatistics:
    """
    Count, mean and variance of the values added so far.

    Only real observations are added; callers skip missing values rather than
    recording them as zero. All statistics are independent of insertion order.
    """

    def __init__(self):
        self._values: list[float] = []

    def add_value(self, value: float) -> None:
        self._values.append(float(value))

    def _array(self) -> np.ndarray:
        # Sorted so that floating point rounding does not depend on insertion order
        return np.sort(np.asarray(self._values, dtype=float))

    @property
    def n(self) -> int:
        return len(self._values)

    @property
    def mean(self) -> float:
        if not self._values:
            return math.nan
        return float(np.mean(self._array()))

    @property
    def population_variance(self) -> float:
        """Variance with divisor n."""
        if not self._values:
            return math.nan
        return float(np.var(self._array(), ddof=0))

    @property
    def variance(self) -> float:
        """Sample variance with divisor n - 1."""
        if not self._values:
            return math.nan
        if len(self._values) == 1:
            return 0.0
        return float(np.var(self._array(), ddof=1))
