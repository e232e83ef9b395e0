"""Reusable Polars expressions for view tables."""

import polars as pl


# =============================================================================
# TEMPORAL
# =============================================================================


def previous_value_expr(metric: str) -> pl.Expr:
    """Previous row's value (previous week once sorted chronologically)."""
    return pl.col(metric).shift(1).alias(f"{metric}_previous")


def wow_change_expr(metric: str) -> pl.Expr:
    """Week-over-week percentage change.

    Formula: (current - previous) / previous * 100
    Null for the first week and wherever the previous week is 0.
    """
    previous = pl.col(metric).shift(1)
    return (
        pl.when(previous > 0)
        .then((pl.col(metric) - previous) / previous * 100)
        .otherwise(None)
        .alias(f"{metric}_wow_change")
    )


# =============================================================================
# SHARES
# =============================================================================


def share_of_total_expr(metric: str) -> pl.Expr:
    """Row value as a percentage of the column total (0 when total is 0)."""
    total = pl.col(metric).sum()
    return (
        pl.when(total > 0)
        .then(pl.col(metric) / total * 100)
        .otherwise(0.0)
        .alias(f"{metric}_share")
    )
