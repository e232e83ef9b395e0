"""Input and output models."""

from .campaign import (
    Campaign,
    DemographicBreakdown,
    DemographicPerformance,
    DevicePerformance,
    Gender,
    MarketingData,
    RegionalPerformance,
    WeeklyPerformance,
)
from .snapshot import DashboardSnapshot

__all__ = [
    "Campaign",
    "DashboardSnapshot",
    "DemographicBreakdown",
    "DemographicPerformance",
    "DevicePerformance",
    "Gender",
    "MarketingData",
    "RegionalPerformance",
    "WeeklyPerformance",
]
