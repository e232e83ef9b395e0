"""Derived rate calculations with guarded division."""

from .models import BaseMetrics, DerivedRates


def safe_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or exactly 0.0 when denominator <= 0."""
    if denominator > 0:
        return (numerator / denominator) * 100
    return 0.0


def ctr(metrics: BaseMetrics) -> float:
    return safe_pct(metrics.clicks, metrics.impressions)


def conversion_rate(metrics: BaseMetrics) -> float:
    return safe_pct(metrics.conversions, metrics.clicks)


def roi(metrics: BaseMetrics) -> float:
    return safe_pct(metrics.revenue - metrics.spend, metrics.spend)


def roas(metrics: BaseMetrics) -> float | None:
    """Revenue / spend as a ratio (not a percentage); None without spend."""
    if metrics.spend > 0:
        return metrics.revenue / metrics.spend
    return None


def derive_rates(metrics: BaseMetrics, include_roi: bool = False) -> DerivedRates:
    """Compute CTR, conversion rate and optionally ROI from final totals.

    Args:
        metrics: Accumulated totals for one group
        include_roi: Whether the view carries ROI (region view only)

    Returns:
        DerivedRates with percentages; zero denominators yield 0.0.
    """
    return DerivedRates(
        ctr=ctr(metrics),
        conversion_rate=conversion_rate(metrics),
        roi=roi(metrics) if include_roi else None,
    )
