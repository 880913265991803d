"""
Product snapshot sources.

Implements RecordSourcePort for the catalog view:
- HttpProductSource: GET the product listing endpoint with httpx
- JsonFileProductSource: read a saved snapshot from disk

Both raise SourceFetchError on any failure; callers decide whether to show an
error and hand the engine an empty source.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from src.rules.models import SourceRules

logger = logging.getLogger(__name__)


class SourceFetchError(Exception):
    """Snapshot could not be fetched or decoded."""


class HttpProductSource:
    """Fetches the product snapshot over HTTP."""

    def __init__(
        self,
        url: str,
        limit: int = 0,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self.limit = limit
        self.timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_rules(cls, rules: SourceRules, client: httpx.Client | None = None) -> HttpProductSource:
        return cls(
            url=rules.url,
            limit=rules.limit,
            timeout_seconds=rules.timeout_seconds,
            client=client,
        )

    def fetch_snapshot(self) -> dict[str, Any]:
        params = {"limit": self.limit} if self.limit else None
        client = self._client or httpx.Client(timeout=self.timeout_seconds)
        try:
            response = client.get(self.url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise SourceFetchError(
                f"Product source returned {e.response.status_code} for {self.url}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Product source request failed: {e}") from e
        except ValueError as e:
            raise SourceFetchError(f"Product source returned invalid JSON: {e}") from e
        finally:
            if self._client is None:
                client.close()

        if not isinstance(payload, dict):
            raise SourceFetchError("Product source returned a non-object payload")

        logger.info("Fetched product snapshot from %s", self.url)
        return payload


class JsonFileProductSource:
    """Reads a product snapshot from a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch_snapshot(self) -> dict[str, Any]:
        try:
            with open(self.path) as f:
                payload = json.load(f)
        except OSError as e:
            raise SourceFetchError(f"Cannot read snapshot {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SourceFetchError(f"Invalid JSON in snapshot {self.path}: {e}") from e

        if not isinstance(payload, dict):
            raise SourceFetchError(f"Snapshot {self.path} is not a JSON object")
        return payload
