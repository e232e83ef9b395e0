"""Group-and-sum accumulation of breakdown records."""

from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

from .models import BaseMetrics

R = TypeVar("R")
GroupKey = Hashable


def _number(value: Any) -> Any:
    return 0 if value is None else value


def record_metrics(record: Any) -> BaseMetrics:
    """Read base metrics off a record; absent or null fields count as 0."""
    return BaseMetrics(
        impressions=_number(getattr(record, "impressions", None)),
        clicks=_number(getattr(record, "clicks", None)),
        conversions=_number(getattr(record, "conversions", None)),
        spend=_number(getattr(record, "spend", None)),
        revenue=_number(getattr(record, "revenue", None)),
    )


def key_text(*parts: Any, sep: str = "-") -> str:
    """Join key fields into one string key, rendering None as ''."""
    return sep.join("" if p is None else str(p) for p in parts)


def accumulate(
    records: Iterable[R],
    key_fn: Callable[[R], GroupKey],
    metrics_fn: Callable[[R], BaseMetrics] = record_metrics,
) -> dict[GroupKey, BaseMetrics]:
    """Sum base metrics per group key.

    Entries are immutable, so every value in the mapping is a complete
    snapshot of its group at any point of the fold. Keys keep first-seen
    order. Rates are not accumulated; derive them from the result.

    Args:
        records: Breakdown records, possibly empty
        key_fn: Group key for a record
        metrics_fn: Base metrics carried by a record (read or derived)

    Returns:
        Mapping of group key to summed BaseMetrics.
    """
    totals: dict[GroupKey, BaseMetrics] = {}
    for record in records:
        key = key_fn(record)
        totals[key] = totals.get(key, BaseMetrics.zero()) + metrics_fn(record)
    return totals
