"""Shared fixtures for dashboard tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from marketing_dashboard.models.campaign import MarketingData


@pytest.fixture
def payload() -> dict[str, Any]:
    """Two campaigns covering every breakdown type."""
    return {
        "campaigns": [
            {
                "id": 1,
                "name": "Launch",
                "cpc": 2,
                "average_order_value": 50,
                "demographic_breakdown": [
                    {
                        "gender": "Male",
                        "age_group": "25-34",
                        "performance": {"impressions": 100, "clicks": 10, "conversions": 2},
                    },
                    {
                        "gender": "Female",
                        "age_group": "25-34",
                        "performance": {"impressions": 200, "clicks": 20, "conversions": 5},
                    },
                ],
                "device_performance": [
                    {
                        "device": "Desktop",
                        "impressions": 100,
                        "clicks": 10,
                        "conversions": 2,
                        "spend": 50,
                        "revenue": 200,
                        "roas": 4.0,
                    },
                    {
                        "device": "Mobile",
                        "impressions": 300,
                        "clicks": 12,
                        "conversions": 1,
                        "spend": 30,
                        "revenue": 45,
                    },
                ],
                "regional_performance": [
                    {
                        "city": "London",
                        "country": "UK",
                        "lat": 51.5,
                        "lng": -0.12,
                        "impressions": 1000,
                        "clicks": 50,
                        "conversions": 5,
                        "spend": 100,
                        "revenue": 300,
                    },
                ],
                "weekly_performance": [
                    {
                        "week_start": "2024-01-08",
                        "impressions": 500,
                        "clicks": 25,
                        "conversions": 5,
                        "spend": 60,
                        "revenue": 150,
                    },
                ],
            },
            {
                "id": 2,
                "name": "Retargeting",
                "cpc": 1,
                "average_order_value": 20,
                "demographic_breakdown": [
                    {
                        "gender": "Male",
                        "age_group": "35-44",
                        "performance": {"impressions": 50, "clicks": 5, "conversions": 1},
                    },
                ],
                "device_performance": [
                    {
                        "device": "Desktop",
                        "impressions": 50,
                        "clicks": 5,
                        "conversions": 1,
                        "spend": 25,
                        "revenue": 100,
                        "roas": 4.0,
                    },
                ],
                "regional_performance": [
                    {
                        "city": "London",
                        "country": "UK",
                        "lat": 51.5,
                        "lng": -0.12,
                        "impressions": 500,
                        "clicks": 25,
                        "conversions": 3,
                        "spend": 50,
                        "revenue": 100,
                    },
                    {
                        "city": "Paris",
                        "country": "France",
                        "impressions": 400,
                        "clicks": 0,
                        "conversions": 0,
                        "spend": 0,
                        "revenue": 0,
                    },
                ],
                "weekly_performance": [
                    {
                        "week_start": "2024-01-01",
                        "impressions": 400,
                        "clicks": 20,
                        "conversions": 4,
                        "spend": 40,
                        "revenue": 100,
                    },
                    {
                        "week_start": "2024-01-08",
                        "impressions": 100,
                        "clicks": 5,
                        "conversions": 1,
                        "spend": 10,
                        "revenue": 50,
                    },
                ],
            },
        ]
    }


@pytest.fixture
def marketing_data(payload: dict[str, Any]) -> MarketingData:
    return MarketingData.model_validate(payload)


@pytest.fixture
def empty_data() -> MarketingData:
    return MarketingData.model_validate({"campaigns": []})


@pytest.fixture
def dataset_file(tmp_path: Path, payload: dict[str, Any]) -> Path:
    """Payload written to a JSON file."""
    path = tmp_path / "marketing_data.json"
    path.write_text(json.dumps(payload))
    return path
