"""Custom exceptions for the marketing dashboard."""

from typing import Any


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    pass


class ConfigLoadError(DashboardError):
    """Failed to load dashboard settings."""

    pass


class DatasetLoadError(DashboardError):
    """The marketing dataset could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(reason)


class DataValidationError(DatasetLoadError):
    """Dataset payload did not match the expected campaign shapes."""

    def __init__(self, errors: list[dict[str, Any]], campaign_count: int, source: str = "<payload>"):
        self.errors = errors
        self.campaign_count = campaign_count
        super().__init__(
            source,
            f"Validation failed with {len(errors)} error(s) across {campaign_count} campaign(s). "
            f"First error: {errors[0] if errors else 'N/A'}",
        )
