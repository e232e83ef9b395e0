"""Analytics module for dashboard view aggregation."""

from .accumulator import accumulate, key_text, record_metrics
from .calculator import (
    DashboardEngine,
    aggregate_demographics,
    aggregate_devices,
    aggregate_regions,
    aggregate_weekly,
)
from .models import (
    BaseMetrics,
    CountryTotals,
    DemographicBucket,
    DemographicView,
    DerivedRates,
    DeviceBucket,
    DeviceView,
    GenderSummary,
    HeatPoint,
    RegionBucket,
    RegionView,
    WeeklyBucket,
    WeeklyView,
    WeekOverWeekChange,
)
from .rates import derive_rates, safe_pct

__all__ = [
    "BaseMetrics",
    "CountryTotals",
    "DashboardEngine",
    "DemographicBucket",
    "DemographicView",
    "DerivedRates",
    "DeviceBucket",
    "DeviceView",
    "GenderSummary",
    "HeatPoint",
    "RegionBucket",
    "RegionView",
    "WeeklyBucket",
    "WeeklyView",
    "WeekOverWeekChange",
    "accumulate",
    "aggregate_demographics",
    "aggregate_devices",
    "aggregate_regions",
    "aggregate_weekly",
    "derive_rates",
    "key_text",
    "record_metrics",
    "safe_pct",
]
