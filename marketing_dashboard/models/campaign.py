"""Pydantic models for marketing dataset validation."""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, FiniteFloat


def _zero_if_null(value: Any) -> Any:
    return 0 if value is None else value


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _list_if_null(value: Any) -> Any:
    return [] if value is None else value


def _dict_if_null(value: Any) -> Any:
    return {} if value is None else value


# Absent or null numbers count as zero, never as "missing". Infinity and NaN are rejected.
Count = Annotated[int, BeforeValidator(_zero_if_null), Field(ge=0)]
Money = Annotated[float, BeforeValidator(_zero_if_null), Field(ge=0, allow_inf_nan=False)]
KeyText = Annotated[str, BeforeValidator(_text)]


class Gender(str, Enum):
    """Genders the demographic view splits on."""

    MALE = "Male"
    FEMALE = "Female"


class DemographicPerformance(BaseModel):
    """Performance counters for one demographic slice."""

    model_config = ConfigDict(extra="ignore")

    impressions: Count = 0
    clicks: Count = 0
    conversions: Count = 0


class DemographicBreakdown(BaseModel):
    """One gender x age-group slice of a campaign.

    Spend and revenue are not carried; they are derived from the parent
    campaign's cpc and average_order_value.
    """

    model_config = ConfigDict(extra="ignore")

    gender: KeyText = ""
    age_group: KeyText = ""
    performance: Annotated[
        DemographicPerformance, BeforeValidator(_dict_if_null)
    ] = Field(default_factory=DemographicPerformance)


class DevicePerformance(BaseModel):
    """Per-device slice of a campaign."""

    model_config = ConfigDict(extra="ignore")

    device: KeyText = ""
    impressions: Count = 0
    clicks: Count = 0
    conversions: Count = 0
    spend: Money = 0.0
    revenue: Money = 0.0

    # Pass-through fields from the source feed
    ctr: Optional[FiniteFloat] = None
    conversion_rate: Optional[FiniteFloat] = None
    roas: Optional[FiniteFloat] = None
    percentage_of_traffic: Optional[FiniteFloat] = None


class RegionalPerformance(BaseModel):
    """Per-city slice of a campaign."""

    model_config = ConfigDict(extra="ignore")

    city: KeyText = ""
    country: KeyText = ""
    lat: Optional[FiniteFloat] = None
    lng: Optional[FiniteFloat] = None
    impressions: Count = 0
    clicks: Count = 0
    conversions: Count = 0
    spend: Money = 0.0
    revenue: Money = 0.0


class WeeklyPerformance(BaseModel):
    """Per-week slice of a campaign, keyed by ISO week start date."""

    model_config = ConfigDict(extra="ignore")

    week_start: KeyText = ""
    impressions: Count = 0
    clicks: Count = 0
    conversions: Count = 0
    spend: Money = 0.0
    revenue: Money = 0.0


class Campaign(BaseModel):
    """A campaign with its optional breakdown arrays."""

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: KeyText = ""
    cpc: Money = 0.0
    average_order_value: Money = 0.0

    demographic_breakdown: Annotated[
        list[DemographicBreakdown], BeforeValidator(_list_if_null)
    ] = Field(default_factory=list)
    device_performance: Annotated[
        list[DevicePerformance], BeforeValidator(_list_if_null)
    ] = Field(default_factory=list)
    regional_performance: Annotated[
        list[RegionalPerformance], BeforeValidator(_list_if_null)
    ] = Field(default_factory=list)
    weekly_performance: Annotated[
        list[WeeklyPerformance], BeforeValidator(_list_if_null)
    ] = Field(default_factory=list)


class MarketingData(BaseModel):
    """Full dataset as returned by the data source."""

    model_config = ConfigDict(extra="ignore")

    campaigns: Annotated[list[Campaign], BeforeValidator(_list_if_null)] = Field(
        default_factory=list
    )
