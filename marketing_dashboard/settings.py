"""Dashboard settings loaded from YAML."""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "config" / "dashboard.yaml"
DATA_SOURCE_ENV = "MARKETING_DATA_SOURCE"


class RegionKeyPolicy(str, Enum):
    """How region records are keyed before merging."""

    AS_IS = "as_is"
    # Swap city/country when the city text is longer than the country text.
    SWAP_LONGER_CITY = "swap_longer_city"


class RoasMode(str, Enum):
    """How ROAS is reported for merged device totals."""

    PASSTHROUGH = "passthrough"  # first-seen record's roas, never recomputed
    RECOMPUTE = "recompute"  # revenue / spend of merged totals


@dataclass(frozen=True)
class TableSort:
    """Default sort for a view's detail table."""

    sort_by: str | None
    descending: bool = False


def _default_tables() -> dict[str, TableSort]:
    return {
        "demographic": TableSort("conversions", descending=True),
        "device": TableSort("clicks", descending=True),
        "region": TableSort("revenue", descending=True),
        "weekly": TableSort(None),
    }


@dataclass
class DashboardSettings:
    """Runtime settings for data loading and view aggregation.

    Usage:
        settings = DashboardSettings.load()
        settings = DashboardSettings.load(Path("my_dashboard.yaml"))
    """

    data_source: str = "data/sample_marketing_data.json"
    request_timeout: float = 30.0
    region_key_policy: RegionKeyPolicy = RegionKeyPolicy.AS_IS
    roas_mode: RoasMode = RoasMode.PASSTHROUGH
    trend_p_threshold: float = 0.05
    trend_r_threshold: float = 0.3
    tables: dict[str, TableSort] = field(default_factory=_default_tables)

    @classmethod
    def load(cls, path: Path | None = None) -> "DashboardSettings":
        """Load settings from YAML, applying the data source env override."""
        path = path or DEFAULT_SETTINGS_PATH
        try:
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        except Exception as e:
            raise ConfigLoadError(f"Failed to load settings from {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {path} must contain a mapping")

        settings = cls.from_dict(raw)
        override = os.environ.get(DATA_SOURCE_ENV)
        if override:
            logger.info("Data source overridden by %s", DATA_SOURCE_ENV)
            settings.data_source = override
        return settings

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "DashboardSettings":
        defaults = cls()
        region = raw.get("region") or {}
        device = raw.get("device") or {}
        weekly = raw.get("weekly") or {}

        tables = _default_tables()
        for view, table in (raw.get("tables") or {}).items():
            table = table or {}
            tables[view] = TableSort(
                sort_by=table.get("sort_by"),
                descending=bool(table.get("descending", False)),
            )

        return cls(
            data_source=str(raw.get("data_source", defaults.data_source)),
            request_timeout=float(raw.get("request_timeout", defaults.request_timeout)),
            region_key_policy=_enum_value(
                RegionKeyPolicy, region.get("key_policy", defaults.region_key_policy.value)
            ),
            roas_mode=_enum_value(RoasMode, device.get("roas_mode", defaults.roas_mode.value)),
            trend_p_threshold=float(weekly.get("trend_p_threshold", defaults.trend_p_threshold)),
            trend_r_threshold=float(weekly.get("trend_r_threshold", defaults.trend_r_threshold)),
            tables=tables,
        )


def _enum_value(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [m.value for m in enum_cls]
        raise ConfigLoadError(
            f"Invalid {enum_cls.__name__} '{value}'. Allowed: {allowed}"
        ) from None
