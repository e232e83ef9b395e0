"""Dataset loading: fetch, parse and validate the marketing dataset."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from ..exceptions import DataValidationError, DatasetLoadError
from ..models.campaign import MarketingData

logger = logging.getLogger(__name__)


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


class DatasetLoader:
    """Loads the marketing dataset from a JSON file or an http(s) URL.

    One attempt per call: no retry and no caching. Every failure surfaces as
    DatasetLoadError carrying a single human-readable reason.

    Usage:
        loader = DatasetLoader(timeout=30)
        data = loader.load("data/sample_marketing_data.json")
    """

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None):
        self.timeout = timeout
        self.client = client

    def load(self, source: str | Path) -> MarketingData:
        """Full pipeline: Read -> Parse -> Validate.

        Args:
            source: File path or http(s) URL

        Returns:
            Validated MarketingData

        Raises:
            DatasetLoadError: If the source cannot be read or parsed
            DataValidationError: If the payload does not match the dataset shape
        """
        label = str(source)
        try:
            payload = self._fetch(label) if is_url(source) else self._read(Path(source))
        except DatasetLoadError as e:
            logger.error("Failed to load dataset from %s: %s", label, e.reason)
            raise

        data = self.load_dict(payload, source=label)
        logger.info("Loaded %d campaign(s) from %s", len(data.campaigns), label)
        return data

    def load_dict(self, payload: Any, source: str = "<payload>") -> MarketingData:
        """Validate an already-parsed payload.

        Accepts {"campaigns": [...]} or a bare list of campaigns.
        """
        if isinstance(payload, list):
            payload = {"campaigns": payload}
        if not isinstance(payload, dict):
            raise DatasetLoadError(
                source, f"Unexpected payload type {type(payload).__name__}; expected an object"
            )

        try:
            return MarketingData.model_validate(payload)
        except ValidationError as e:
            campaigns = payload.get("campaigns")
            count = len(campaigns) if isinstance(campaigns, list) else 0
            logger.error("Dataset from %s failed validation (%d errors)", source, e.error_count())
            raise DataValidationError(
                e.errors(include_url=False), count, source=source
            ) from e

    def _read(self, path: Path) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise DatasetLoadError(str(path), f"Failed to read {path}: {e}") from e
        except ValueError as e:
            raise DatasetLoadError(str(path), f"{path} is not valid JSON: {e}") from e

    def _fetch(self, url: str) -> Any:
        client = self.client or httpx.Client(timeout=self.timeout)
        try:
            response = client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise DatasetLoadError(
                url, f"Failed to fetch data: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DatasetLoadError(url, f"Failed to fetch data: {e}") from e
        except ValueError as e:
            raise DatasetLoadError(url, f"Response from {url} is not valid JSON: {e}") from e
        finally:
            if self.client is None:
                client.close()
