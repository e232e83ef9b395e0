"""Output models for dashboard view aggregation."""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

import polars as pl

from .stats import TrendLabel


@dataclass(frozen=True)
class BaseMetrics:
    """Summable counters shared by every breakdown record."""

    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    spend: float = 0.0
    revenue: float = 0.0

    @classmethod
    def zero(cls) -> "BaseMetrics":
        return cls()

    def __add__(self, other: "BaseMetrics") -> "BaseMetrics":
        if not isinstance(other, BaseMetrics):
            return NotImplemented
        return BaseMetrics(
            impressions=self.impressions + other.impressions,
            clicks=self.clicks + other.clicks,
            conversions=self.conversions + other.conversions,
            spend=self.spend + other.spend,
            revenue=self.revenue + other.revenue,
        )


@dataclass(frozen=True)
class DerivedRates:
    """Percentages derived from one group's accumulated totals."""

    ctr: float  # clicks / impressions * 100
    conversion_rate: float  # conversions / clicks * 100
    roi: float | None = None  # (revenue - spend) / spend * 100, region only


# =============================================================================
# DEMOGRAPHIC VIEW
# =============================================================================


@dataclass(frozen=True)
class DemographicBucket:
    """Totals for one age group within one gender."""

    age_group: str
    impressions: int
    clicks: int
    conversions: int
    ctr: float
    conversion_rate: float


@dataclass(frozen=True)
class GenderSummary:
    """Card totals and per-age-group table for one gender."""

    gender: str
    total_clicks: int
    total_spend: float
    total_revenue: float
    age_groups: dict[str, DemographicBucket] = field(default_factory=dict)


@dataclass(frozen=True)
class DemographicView:
    """Demographic view model.

    Spend and revenue are derived per slice (clicks x cpc and
    conversions x average_order_value of the parent campaign).
    """

    male: GenderSummary
    female: GenderSummary
    age_group_spend: dict[str, float]
    age_group_revenue: dict[str, float]

    @property
    def is_empty(self) -> bool:
        return not (self.male.age_groups or self.female.age_groups or self.age_group_spend)

    def to_frame(
        self,
        gender: Literal["Male", "Female"] = "Male",
        sort_by: str | None = "conversions",
        descending: bool = True,
    ) -> pl.DataFrame:
        """Age-group table for one gender."""
        summary = self.male if gender == "Male" else self.female
        return _frame(
            (asdict(b) for b in summary.age_groups.values()),
            DEMOGRAPHIC_SCHEMA,
            sort_by,
            descending,
        )


# =============================================================================
# DEVICE VIEW
# =============================================================================


@dataclass(frozen=True)
class DeviceBucket:
    """Merged totals for one device name across campaigns."""

    device: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    roas: float | None  # see RoasMode


@dataclass(frozen=True)
class DeviceView:
    """Device view model."""

    devices: list[DeviceBucket]

    @property
    def is_empty(self) -> bool:
        return not self.devices

    def bucket(self, device: str) -> DeviceBucket:
        """Named device, or a zero-valued bucket when the dataset has none."""
        for b in self.devices:
            if b.device == device:
                return b
        return DeviceBucket(
            device=device,
            impressions=0,
            clicks=0,
            conversions=0,
            spend=0.0,
            revenue=0.0,
            ctr=0.0,
            conversion_rate=0.0,
            roas=None,
        )

    def to_frame(self, sort_by: str | None = "clicks", descending: bool = True) -> pl.DataFrame:
        return _frame((asdict(b) for b in self.devices), DEVICE_SCHEMA, sort_by, descending)


# =============================================================================
# REGION VIEW
# =============================================================================


@dataclass(frozen=True)
class RegionBucket:
    """Merged totals for one city/country pair."""

    city: str
    country: str
    lat: float | None
    lng: float | None
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    roi: float

    @property
    def key(self) -> str:
        return f"{self.city}-{self.country}"


@dataclass(frozen=True)
class CountryTotals:
    """Country rollup used by the bubble map."""

    country: str
    lat: float
    lng: float
    revenue: float
    spend: float


@dataclass(frozen=True)
class HeatPoint:
    """Weighted coordinate used by the heat map."""

    lat: float
    lng: float
    value: float


@dataclass(frozen=True)
class RegionView:
    """Region view model with dataset-wide totals."""

    regions: list[RegionBucket]
    total_revenue: float
    total_spend: float
    total_clicks: int
    total_conversions: int

    @property
    def region_count(self) -> int:
        return len(self.regions)

    @property
    def is_empty(self) -> bool:
        return not self.regions

    def country_totals(self) -> list[CountryTotals]:
        """Roll regions up by country, keeping the first city's coordinates."""
        countries: dict[str, CountryTotals] = {}
        for r in self.regions:
            current = countries.get(r.country)
            if current is None:
                countries[r.country] = CountryTotals(
                    country=r.country,
                    lat=r.lat or 0.0,
                    lng=r.lng or 0.0,
                    revenue=r.revenue,
                    spend=r.spend,
                )
            else:
                countries[r.country] = CountryTotals(
                    country=current.country,
                    lat=current.lat,
                    lng=current.lng,
                    revenue=current.revenue + r.revenue,
                    spend=current.spend + r.spend,
                )
        return list(countries.values())

    def heat_points(
        self, metric: Literal["revenue", "spend", "clicks", "conversions"] = "revenue"
    ) -> list[HeatPoint]:
        """Regions with usable coordinates, weighted by metric.

        A zero latitude or longitude is treated as missing.
        """
        return [
            HeatPoint(lat=r.lat, lng=r.lng, value=float(getattr(r, metric)))
            for r in self.regions
            if r.lat and r.lng
        ]

    def to_frame(self, sort_by: str | None = "revenue", descending: bool = True) -> pl.DataFrame:
        return _frame((asdict(r) for r in self.regions), REGION_SCHEMA, sort_by, descending)


# =============================================================================
# WEEKLY VIEW
# =============================================================================


@dataclass(frozen=True)
class WeeklyBucket:
    """Merged totals for one week start."""

    week_start: str
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float


@dataclass(frozen=True)
class WeekOverWeekChange:
    """WoW delta for a single metric."""

    week_start: str
    metric_name: str
    current_value: float
    previous_value: float
    pct_change: float | None  # None when the previous week is 0


@dataclass(frozen=True)
class WeeklyView:
    """Weekly view model. `weeks` is in ascending chronological order."""

    weeks: list[WeeklyBucket]
    wow_changes: list[WeekOverWeekChange]
    revenue_trend: TrendLabel

    @property
    def is_empty(self) -> bool:
        return not self.weeks

    @property
    def week_labels(self) -> list[str]:
        return [w.week_start for w in self.weeks]

    @property
    def total_revenue(self) -> float:
        return sum(w.revenue for w in self.weeks)

    @property
    def total_spend(self) -> float:
        return sum(w.spend for w in self.weeks)

    @property
    def total_clicks(self) -> int:
        return sum(w.clicks for w in self.weeks)

    def series(self, metric: str) -> list[tuple[str, float]]:
        """(week, value) pairs in chronological order for a line chart."""
        return [(w.week_start, getattr(w, metric)) for w in self.weeks]

    @property
    def revenue_series(self) -> list[tuple[str, float]]:
        return self.series("revenue")

    @property
    def spend_series(self) -> list[tuple[str, float]]:
        return self.series("spend")

    @property
    def clicks_series(self) -> list[tuple[str, float]]:
        return self.series("clicks")

    def to_frame(self, sort_by: str | None = None, descending: bool = False) -> pl.DataFrame:
        return _frame((asdict(w) for w in self.weeks), WEEKLY_SCHEMA, sort_by, descending)


# =============================================================================
# TABLE SCHEMAS
# =============================================================================

_COUNTERS = {
    "impressions": pl.Int64,
    "clicks": pl.Int64,
    "conversions": pl.Int64,
}
_MONEY = {"spend": pl.Float64, "revenue": pl.Float64}
_RATES = {"ctr": pl.Float64, "conversion_rate": pl.Float64}

DEMOGRAPHIC_SCHEMA = {"age_group": pl.Utf8, **_COUNTERS, **_RATES}
DEVICE_SCHEMA = {"device": pl.Utf8, **_COUNTERS, **_MONEY, **_RATES, "roas": pl.Float64}
REGION_SCHEMA = {
    "city": pl.Utf8,
    "country": pl.Utf8,
    "lat": pl.Float64,
    "lng": pl.Float64,
    **_COUNTERS,
    **_MONEY,
    **_RATES,
    "roi": pl.Float64,
}
WEEKLY_SCHEMA = {"week_start": pl.Utf8, **_COUNTERS, **_MONEY, **_RATES}


def _frame(
    rows: Iterable[dict[str, Any]],
    schema: dict[str, Any],
    sort_by: str | None,
    descending: bool,
) -> pl.DataFrame:
    """Build a typed table frame; an unknown sort column keeps row order."""
    rows = list(rows)
    df = pl.DataFrame(rows, schema=schema) if rows else pl.DataFrame(schema=schema)
    if sort_by and sort_by in df.columns:
        df = df.sort(sort_by, descending=descending, maintain_order=True)
    return df
