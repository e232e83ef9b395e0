"""View aggregators - turn campaign breakdowns into dashboard view models."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from operator import attrgetter
from typing import NamedTuple

import polars as pl

from ..models.campaign import Campaign, Gender, MarketingData, RegionalPerformance
from ..models.snapshot import DashboardSnapshot
from ..settings import DashboardSettings, RegionKeyPolicy, RoasMode
from .accumulator import GroupKey, accumulate, key_text
from .expressions import previous_value_expr, wow_change_expr
from .models import (
    BaseMetrics,
    DemographicBucket,
    DemographicView,
    DeviceBucket,
    DeviceView,
    GenderSummary,
    RegionBucket,
    RegionView,
    WeeklyBucket,
    WeeklyView,
    WeekOverWeekChange,
)
from .rates import derive_rates, roas
from .stats import detect_trend

WOW_METRICS = ("revenue", "spend", "clicks")


# =============================================================================
# DEMOGRAPHIC
# =============================================================================


class DemographicSlice(NamedTuple):
    """A demographic breakdown entry with spend/revenue derived from its campaign."""

    gender: str
    age_group: str
    metrics: BaseMetrics


def demographic_slices(campaigns: Sequence[Campaign]) -> list[DemographicSlice]:
    """Flatten every campaign's demographic breakdown into slices.

    spend = clicks * campaign.cpc
    revenue = conversions * campaign.average_order_value
    """
    slices: list[DemographicSlice] = []
    for campaign in campaigns:
        for entry in campaign.demographic_breakdown:
            perf = entry.performance
            slices.append(
                DemographicSlice(
                    gender=entry.gender,
                    age_group=entry.age_group,
                    metrics=BaseMetrics(
                        impressions=perf.impressions,
                        clicks=perf.clicks,
                        conversions=perf.conversions,
                        spend=perf.clicks * campaign.cpc,
                        revenue=perf.conversions * campaign.average_order_value,
                    ),
                )
            )
    return slices


def _gender_summary(
    gender: Gender, by_gender_age: dict[GroupKey, BaseMetrics]
) -> GenderSummary:
    age_groups: dict[str, DemographicBucket] = {}
    total = BaseMetrics.zero()
    for (slice_gender, age_group), metrics in by_gender_age.items():
        if slice_gender != gender.value:
            continue
        rates = derive_rates(metrics)
        age_groups[age_group] = DemographicBucket(
            age_group=age_group,
            impressions=metrics.impressions,
            clicks=metrics.clicks,
            conversions=metrics.conversions,
            ctr=rates.ctr,
            conversion_rate=rates.conversion_rate,
        )
        total = total + metrics

    return GenderSummary(
        gender=gender.value,
        total_clicks=total.clicks,
        total_spend=total.spend,
        total_revenue=total.revenue,
        age_groups=age_groups,
    )


def aggregate_demographics(campaigns: Sequence[Campaign]) -> DemographicView:
    """Aggregate demographic breakdowns into per-gender and per-age-group totals.

    Slices with a gender other than Male/Female still count toward the
    age-group spend and revenue charts.
    """
    slices = demographic_slices(campaigns)
    metrics_of = attrgetter("metrics")

    by_gender_age = accumulate(
        slices, key_fn=lambda s: (s.gender, s.age_group), metrics_fn=metrics_of
    )
    by_age = accumulate(slices, key_fn=attrgetter("age_group"), metrics_fn=metrics_of)

    return DemographicView(
        male=_gender_summary(Gender.MALE, by_gender_age),
        female=_gender_summary(Gender.FEMALE, by_gender_age),
        age_group_spend={age: m.spend for age, m in by_age.items()},
        age_group_revenue={age: m.revenue for age, m in by_age.items()},
    )


# =============================================================================
# DEVICE
# =============================================================================


def aggregate_devices(
    campaigns: Sequence[Campaign],
    roas_mode: RoasMode = RoasMode.PASSTHROUGH,
) -> DeviceView:
    """Merge device performance across campaigns by device name.

    In PASSTHROUGH mode the merged ROAS is the first-seen record's value and
    is not recomputed from merged totals; in RECOMPUTE mode it is
    revenue / spend of the merged totals.
    """
    records = [d for c in campaigns for d in c.device_performance]
    totals = accumulate(records, key_fn=attrgetter("device"))

    first_roas: dict[str, float | None] = {}
    for record in records:
        first_roas.setdefault(record.device, record.roas)

    devices: list[DeviceBucket] = []
    for device, metrics in totals.items():
        rates = derive_rates(metrics)
        devices.append(
            DeviceBucket(
                device=device,
                impressions=metrics.impressions,
                clicks=metrics.clicks,
                conversions=metrics.conversions,
                spend=metrics.spend,
                revenue=metrics.revenue,
                ctr=rates.ctr,
                conversion_rate=rates.conversion_rate,
                roas=(
                    roas(metrics)
                    if roas_mode == RoasMode.RECOMPUTE
                    else first_roas.get(device)
                ),
            )
        )

    return DeviceView(devices=devices)


# =============================================================================
# REGION
# =============================================================================


def region_fields(
    record: RegionalPerformance, policy: RegionKeyPolicy = RegionKeyPolicy.AS_IS
) -> tuple[str, str]:
    """(city, country) for a record under the given key policy."""
    city, country = record.city, record.country
    if policy == RegionKeyPolicy.SWAP_LONGER_CITY and len(city) > len(country):
        return country, city
    return city, country


def aggregate_regions(
    campaigns: Sequence[Campaign],
    key_policy: RegionKeyPolicy = RegionKeyPolicy.AS_IS,
) -> RegionView:
    """Merge regional performance by "city-country" and compute dataset totals.

    Coordinates come from the first record seen for each region.
    """
    records = [r for c in campaigns for r in c.regional_performance]

    def region_key(record: RegionalPerformance) -> str:
        return key_text(*region_fields(record, key_policy))

    totals = accumulate(records, key_fn=region_key)

    first_seen: dict[str, RegionalPerformance] = {}
    for record in records:
        first_seen.setdefault(region_key(record), record)

    regions: list[RegionBucket] = []
    for key, metrics in totals.items():
        origin = first_seen[key]
        city, country = region_fields(origin, key_policy)
        rates = derive_rates(metrics, include_roi=True)
        regions.append(
            RegionBucket(
                city=city,
                country=country,
                lat=origin.lat,
                lng=origin.lng,
                impressions=metrics.impressions,
                clicks=metrics.clicks,
                conversions=metrics.conversions,
                spend=metrics.spend,
                revenue=metrics.revenue,
                ctr=rates.ctr,
                conversion_rate=rates.conversion_rate,
                roi=rates.roi,
            )
        )

    overall = sum(totals.values(), BaseMetrics.zero())
    return RegionView(
        regions=regions,
        total_revenue=overall.revenue,
        total_spend=overall.spend,
        total_clicks=overall.clicks,
        total_conversions=overall.conversions,
    )


# =============================================================================
# WEEKLY
# =============================================================================


def week_sort_key(week_start: str) -> tuple[int, datetime, str]:
    """Chronological sort key; unparseable keys sort last, lexicographically.

    A trailing "Z" is read as UTC.
    """
    text = week_start[:-1] + "+00:00" if week_start.endswith("Z") else week_start
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return (1, datetime.min, week_start)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return (0, parsed, week_start)


def week_over_week(
    weeks: list[WeeklyBucket], metrics: Sequence[str] = WOW_METRICS
) -> list[WeekOverWeekChange]:
    """WoW changes for each week after the first, in chronological order."""
    if len(weeks) < 2:
        return []

    df = pl.DataFrame(
        {
            "week_start": [w.week_start for w in weeks],
            **{m: [float(getattr(w, m)) for w in weeks] for m in metrics},
        }
    ).with_columns(
        [previous_value_expr(m) for m in metrics] + [wow_change_expr(m) for m in metrics]
    )

    changes: list[WeekOverWeekChange] = []
    for row in df.slice(1).to_dicts():
        for metric in metrics:
            changes.append(
                WeekOverWeekChange(
                    week_start=row["week_start"],
                    metric_name=metric,
                    current_value=row[metric],
                    previous_value=row[f"{metric}_previous"],
                    pct_change=row[f"{metric}_wow_change"],
                )
            )
    return changes


def aggregate_weekly(
    campaigns: Sequence[Campaign],
    trend_p_threshold: float = 0.05,
    trend_r_threshold: float = 0.3,
) -> WeeklyView:
    """Merge weekly performance by week_start, ordered chronologically."""
    records = [w for c in campaigns for w in c.weekly_performance]
    totals = accumulate(records, key_fn=attrgetter("week_start"))

    weeks: list[WeeklyBucket] = []
    for week in sorted(totals, key=week_sort_key):
        metrics = totals[week]
        rates = derive_rates(metrics)
        weeks.append(
            WeeklyBucket(
                week_start=week,
                impressions=metrics.impressions,
                clicks=metrics.clicks,
                conversions=metrics.conversions,
                spend=metrics.spend,
                revenue=metrics.revenue,
                ctr=rates.ctr,
                conversion_rate=rates.conversion_rate,
            )
        )

    return WeeklyView(
        weeks=weeks,
        wow_changes=week_over_week(weeks),
        revenue_trend=detect_trend(
            [w.revenue for w in weeks],
            p_threshold=trend_p_threshold,
            r_threshold=trend_r_threshold,
        ),
    )


# =============================================================================
# ENGINE
# =============================================================================


@dataclass
class DashboardEngine:
    """Runs the view aggregators over one dataset snapshot.

    Every call recomputes from `data`; nothing is cached between views.

    Attributes:
        data: Validated marketing dataset
        settings: Aggregation settings (region key policy, ROAS mode, trend thresholds)
    """

    data: MarketingData
    settings: DashboardSettings = field(default_factory=DashboardSettings)

    @property
    def campaigns(self) -> list[Campaign]:
        return self.data.campaigns

    def get_demographic_view(self) -> DemographicView:
        return aggregate_demographics(self.campaigns)

    def get_device_view(self) -> DeviceView:
        return aggregate_devices(self.campaigns, roas_mode=self.settings.roas_mode)

    def get_region_view(self) -> RegionView:
        return aggregate_regions(self.campaigns, key_policy=self.settings.region_key_policy)

    def get_weekly_view(self) -> WeeklyView:
        return aggregate_weekly(
            self.campaigns,
            trend_p_threshold=self.settings.trend_p_threshold,
            trend_r_threshold=self.settings.trend_r_threshold,
        )

    def get_snapshot(self) -> DashboardSnapshot:
        """Run all four views and package them for serialization."""
        return DashboardSnapshot(
            generated_at=datetime.now(),
            campaign_count=len(self.campaigns),
            demographic=self.get_demographic_view(),
            device=self.get_device_view(),
            region=self.get_region_view(),
            weekly=self.get_weekly_view(),
        )
