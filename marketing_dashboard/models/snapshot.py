"""DashboardSnapshot - consolidated, JSON-serializable output of all views."""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..analytics.models import (
        DemographicView,
        DeviceView,
        GenderSummary,
        RegionView,
        WeeklyView,
    )


def _money(value: float) -> float:
    return round(value, 2)


def _pct(value: float | None) -> float | None:
    return round(value, 2) if value is not None else None


def gender_to_dict(summary: "GenderSummary") -> dict[str, Any]:
    return {
        "total_clicks": summary.total_clicks,
        "total_spend": _money(summary.total_spend),
        "total_revenue": _money(summary.total_revenue),
        "age_groups": [
            {
                "age_group": b.age_group,
                "impressions": b.impressions,
                "clicks": b.clicks,
                "conversions": b.conversions,
                "ctr": _pct(b.ctr),
                "conversion_rate": _pct(b.conversion_rate),
            }
            for b in summary.age_groups.values()
        ],
    }


def demographic_to_dict(view: "DemographicView") -> dict[str, Any]:
    return {
        "male": gender_to_dict(view.male),
        "female": gender_to_dict(view.female),
        "age_group_spend": {k: _money(v) for k, v in view.age_group_spend.items()},
        "age_group_revenue": {k: _money(v) for k, v in view.age_group_revenue.items()},
    }


def device_to_dict(view: "DeviceView") -> list[dict[str, Any]]:
    return [
        {
            "device": d.device,
            "impressions": d.impressions,
            "clicks": d.clicks,
            "conversions": d.conversions,
            "spend": _money(d.spend),
            "revenue": _money(d.revenue),
            "ctr": _pct(d.ctr),
            "conversion_rate": _pct(d.conversion_rate),
            "roas": _pct(d.roas),
        }
        for d in view.devices
    ]


def region_to_dict(view: "RegionView") -> dict[str, Any]:
    return {
        "region_count": view.region_count,
        "total_revenue": _money(view.total_revenue),
        "total_spend": _money(view.total_spend),
        "total_clicks": view.total_clicks,
        "total_conversions": view.total_conversions,
        "regions": [
            {
                "city": r.city,
                "country": r.country,
                "lat": r.lat,
                "lng": r.lng,
                "impressions": r.impressions,
                "clicks": r.clicks,
                "conversions": r.conversions,
                "spend": _money(r.spend),
                "revenue": _money(r.revenue),
                "ctr": _pct(r.ctr),
                "conversion_rate": _pct(r.conversion_rate),
                "roi": _pct(r.roi),
            }
            for r in view.regions
        ],
    }


def weekly_to_dict(view: "WeeklyView") -> dict[str, Any]:
    return {
        "week_count": len(view.weeks),
        "total_revenue": _money(view.total_revenue),
        "total_spend": _money(view.total_spend),
        "total_clicks": view.total_clicks,
        "revenue_trend": view.revenue_trend,
        "weeks": [
            {
                "week": w.week_start,
                "impressions": w.impressions,
                "clicks": w.clicks,
                "conversions": w.conversions,
                "spend": _money(w.spend),
                "revenue": _money(w.revenue),
                "ctr": _pct(w.ctr),
                "conversion_rate": _pct(w.conversion_rate),
            }
            for w in view.weeks
        ],
        "wow_changes": [
            {
                "week": c.week_start,
                "metric": c.metric_name,
                "pct_change": _pct(c.pct_change),
            }
            for c in view.wow_changes
        ],
    }


@dataclass
class DashboardSnapshot:
    """All four view models computed from one dataset load.

    Rates are percentages rounded to 2 decimals; money is rounded to cents.
    """

    generated_at: datetime
    campaign_count: int
    demographic: "DemographicView"
    device: "DeviceView"
    region: "RegionView"
    weekly: "WeeklyView"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "meta": {
                "generated_at": self.generated_at.isoformat(),
                "campaign_count": self.campaign_count,
            },
            "demographic": demographic_to_dict(self.demographic),
            "device": device_to_dict(self.device),
            "region": region_to_dict(self.region),
            "weekly": weekly_to_dict(self.weekly),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

