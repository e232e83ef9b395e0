"""Dashboard service - orchestrates dataset loading and view aggregation."""

import logging
from dataclasses import dataclass
from typing import Any, Literal, get_args

from ..analytics import (
    DashboardEngine,
    DemographicView,
    DeviceView,
    RegionView,
    WeeklyView,
)
from ..analytics.expressions import share_of_total_expr
from ..exceptions import DatasetLoadError
from ..ingestion import DatasetLoader
from ..models.campaign import MarketingData
from ..models.snapshot import (
    DashboardSnapshot,
    demographic_to_dict,
    device_to_dict,
    region_to_dict,
    weekly_to_dict,
)
from ..settings import DashboardSettings

logger = logging.getLogger(__name__)

ViewName = Literal["demographic", "device", "region", "weekly"]
VIEW_NAMES: tuple[str, ...] = get_args(ViewName)

ViewModel = DemographicView | DeviceView | RegionView | WeeklyView


@dataclass
class ViewResult:
    """Outcome of building one view: a model, or the error that replaced it."""

    view: str
    model: ViewModel | None = None
    error: str | None = None
    data: MarketingData | None = None  # dataset the model was built from

    @property
    def ok(self) -> bool:
        return self.error is None


class DashboardService:
    """Service for building dashboard views from the marketing dataset.

    Orchestrates:
    1. Fetching and validating the dataset (once per call)
    2. Running the requested view aggregator
    3. Shaping cards, chart series and table rows for presentation

    Usage:
        service = DashboardService()
        result = service.build_view("weekly")
        summary = service.generate_summary_dict(result)
        snapshot = service.build_snapshot(result.data)
    """

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        loader: DatasetLoader | None = None,
    ):
        """Initialize service.

        Args:
            settings: Dashboard settings. Defaults to the bundled config.
            loader: Dataset loader. Defaults to one using settings.request_timeout.
        """
        self.settings = settings or DashboardSettings.load()
        self.loader = loader or DatasetLoader(timeout=self.settings.request_timeout)

    def load_dataset(self) -> MarketingData:
        """Fetch the dataset from the configured source.

        Raises:
            DatasetLoadError: If fetching, parsing or validation fails
        """
        return self.loader.load(self.settings.data_source)

    def build_view(self, view: str) -> ViewResult:
        """Load the dataset and aggregate one view.

        A load failure is reported through ViewResult.error and aggregation
        is skipped; it is never raised.

        Raises:
            ValueError: If view is not a known view name
        """
        if view not in VIEW_NAMES:
            raise ValueError(f"Unknown view '{view}'. Available: {list(VIEW_NAMES)}")

        try:
            data = self.load_dataset()
        except DatasetLoadError as e:
            return ViewResult(view=view, error=f"Error loading data: {e.reason}")

        logger.debug("Aggregating %s view over %d campaign(s)", view, len(data.campaigns))
        engine = DashboardEngine(data=data, settings=self.settings)
        builders = {
            "demographic": engine.get_demographic_view,
            "device": engine.get_device_view,
            "region": engine.get_region_view,
            "weekly": engine.get_weekly_view,
        }
        return ViewResult(view=view, model=builders[view](), data=data)

    def build_snapshot(self, data: MarketingData | None = None) -> DashboardSnapshot:
        """Run all views over data, loading the dataset only when data is None.

        Pass ViewResult.data to snapshot the dataset already on screen
        without fetching it again.

        Raises:
            DatasetLoadError: If the dataset cannot be loaded
        """
        if data is None:
            data = self.load_dataset()
        return DashboardEngine(data=data, settings=self.settings).get_snapshot()

    def generate_summary_dict(self, result: ViewResult) -> dict[str, Any]:
        """Convert a ViewResult to cards, chart series and table rows.

        Args:
            result: ViewResult from build_view()

        Returns:
            Dictionary suitable for JSON serialization or rendering
        """
        if not result.ok or result.model is None:
            return {"view": result.view, "error": result.error}

        shapers = {
            "demographic": self._demographic_summary,
            "device": self._device_summary,
            "region": self._region_summary,
            "weekly": self._weekly_summary,
        }
        return {"view": result.view, "error": None, **shapers[result.view](result.model)}

    def _table_rows(self, view: str, model: ViewModel, **kwargs: Any) -> list[dict[str, Any]]:
        sort = self.settings.tables.get(view)
        frame = model.to_frame(
            sort_by=sort.sort_by if sort else None,
            descending=sort.descending if sort else False,
            **kwargs,
        )
        if view == "device":
            frame = frame.with_columns(share_of_total_expr("impressions"))
        return frame.to_dicts()

    def _demographic_summary(self, view: DemographicView) -> dict[str, Any]:
        body = demographic_to_dict(view)
        return {
            "cards": {
                "male_clicks": body["male"]["total_clicks"],
                "male_spend": body["male"]["total_spend"],
                "male_revenue": body["male"]["total_revenue"],
                "female_clicks": body["female"]["total_clicks"],
                "female_spend": body["female"]["total_spend"],
                "female_revenue": body["female"]["total_revenue"],
            },
            "charts": {
                "age_group_spend": [
                    {"label": k, "value": v} for k, v in body["age_group_spend"].items()
                ],
                "age_group_revenue": [
                    {"label": k, "value": v} for k, v in body["age_group_revenue"].items()
                ],
            },
            "tables": {
                "male": self._table_rows("demographic", view, gender="Male"),
                "female": self._table_rows("demographic", view, gender="Female"),
            },
        }

    def _device_summary(self, view: DeviceView) -> dict[str, Any]:
        desktop = view.bucket("Desktop")
        mobile = view.bucket("Mobile")
        return {
            "cards": {
                "desktop_clicks": desktop.clicks,
                "mobile_clicks": mobile.clicks,
                "desktop_spend": round(desktop.spend, 2),
                "mobile_spend": round(mobile.spend, 2),
                "desktop_revenue": round(desktop.revenue, 2),
                "mobile_revenue": round(mobile.revenue, 2),
            },
            "charts": {
                "clicks": [
                    {"label": "Desktop", "value": desktop.clicks},
                    {"label": "Mobile", "value": mobile.clicks},
                ],
                "conversions": [
                    {"label": "Desktop", "value": desktop.conversions},
                    {"label": "Mobile", "value": mobile.conversions},
                ],
            },
            "devices": device_to_dict(view),
            "tables": {"devices": self._table_rows("device", view)},
        }

    def _region_summary(self, view: RegionView) -> dict[str, Any]:
        body = region_to_dict(view)
        return {
            "cards": {
                "region_count": body["region_count"],
                "total_revenue": body["total_revenue"],
                "total_spend": body["total_spend"],
                "total_conversions": body["total_conversions"],
            },
            "map": [
                {
                    "country": c.country,
                    "lat": c.lat,
                    "lng": c.lng,
                    "revenue": round(c.revenue, 2),
                    "spend": round(c.spend, 2),
                }
                for c in view.country_totals()
            ],
            "heat": [
                {"lat": p.lat, "lng": p.lng, "value": p.value}
                for p in view.heat_points("revenue")
            ],
            "tables": {"regions": self._table_rows("region", view)},
        }

    def _weekly_summary(self, view: WeeklyView) -> dict[str, Any]:
        body = weekly_to_dict(view)
        return {
            "cards": {
                "week_count": body["week_count"],
                "total_revenue": body["total_revenue"],
                "total_spend": body["total_spend"],
                "total_clicks": body["total_clicks"],
            },
            "charts": {
                "revenue_by_week": [{"label": w, "value": v} for w, v in view.revenue_series],
                "spend_by_week": [{"label": w, "value": v} for w, v in view.spend_series],
            },
            "revenue_trend": body["revenue_trend"],
            "wow_changes": body["wow_changes"],
            "tables": {"weeks": self._table_rows("weekly", view)},
        }
