"""Trend classification for the weekly series."""

from collections.abc import Sequence
from typing import Literal

import numpy as np
from scipy import stats

TrendLabel = Literal["increasing", "decreasing", "stable"]

MIN_TREND_POINTS = 3


def detect_trend(
    values: Sequence[float] | np.ndarray,
    p_threshold: float = 0.05,
    r_threshold: float = 0.3,
) -> TrendLabel:
    """Classify a chronologically ordered series by its least-squares slope.

    A slope counts only when the fit is significant (p below p_threshold)
    and the correlation is strong enough (|r| above r_threshold).

    Args:
        values: Weekly metric values, oldest first
        p_threshold: Significance cutoff for the slope
        r_threshold: Minimum absolute correlation

    Returns:
        "increasing", "decreasing" or "stable".
    """
    series = np.asarray(values, dtype=float)
    if series.size < MIN_TREND_POINTS or np.ptp(series) == 0:
        return "stable"

    fit = stats.linregress(np.arange(series.size), series)
    if fit.pvalue >= p_threshold or abs(fit.rvalue) <= r_threshold:
        return "stable"
    return "increasing" if fit.slope > 0 else "decreasing"
