import statistics
from collections.abc import Iterable

import numpy as np


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    data = list(values)
    if not data:
        return 0.0
    return statistics.fmean(data)


def percentile(values: Iterable[float], p: float) -> float:
    """Linear-interpolated percentile at fractional rank ``p * (n - 1)``; 0.0 for an empty sequence."""
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"percentile fraction must be within [0, 1], got {p}")
    data = list(values)
    if not data:
        return 0.0
    return float(np.quantile(np.asarray(data, dtype=float), p, method="linear"))
