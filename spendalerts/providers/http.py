"""HTTP provider — pulls each domain from a REST backend with httpx."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from spendalerts.core.config import ProviderConfig, get_settings
from spendalerts.providers.base import Record, SnapshotProvider
from spendalerts.providers.exceptions import SnapshotFetchError, SnapshotParseError

logger = structlog.stdlib.get_logger()


class HttpSnapshotProvider(SnapshotProvider):
    """Fetches ``GET {base_url}/{domain}``; each response is a JSON array.

    A ``{"data": [...]}`` envelope is unwrapped as well.

    Usage::

        async with HttpSnapshotProvider() as provider:
            snapshot = await fetch_snapshot(provider)
    """

    def __init__(self, config: ProviderConfig | None = None) -> None:
        self._config = config or get_settings().provider
        self._http: httpx.AsyncClient | None = None

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    async def connect(self) -> None:
        """Create the httpx async client."""
        headers: dict[str, str] = {"Accept": "application/json"}
        api_key = self._config.api_key.get_secret_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._http = httpx.AsyncClient(
            base_url=self._config.base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(self._config.timeout_secs),
        )

    async def close(self) -> None:
        """Close the httpx async client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _fetch(self, domain: str, params: dict[str, str] | None = None) -> list[Record]:
        if self._http is None:
            raise SnapshotFetchError("HTTP client not connected")

        try:
            response = await self._http.get(f"/{domain}", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SnapshotFetchError(
                f"{domain} endpoint returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SnapshotFetchError(f"{domain} request failed: {exc}") from exc

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise SnapshotParseError(f"{domain} endpoint returned invalid JSON") from exc

        if isinstance(body, dict) and "data" in body:
            body = body["data"]
        if not isinstance(body, list):
            raise SnapshotParseError(f"{domain} endpoint did not return an array")

        logger.debug("snapshot_domain_fetched", domain=domain, count=len(body))
        return body

    async def get_budgets(self) -> list[Record]:
        return await self._fetch("budgets")

    async def get_transactions(self) -> list[Record]:
        return await self._fetch("transactions")

    async def get_goals(self) -> list[Record]:
        return await self._fetch("goals")

    async def get_subscriptions(self, status: str = "active") -> list[Record]:
        return await self._fetch("subscriptions", params={"status": status})

    async def get_bills(self) -> list[Record]:
        return await self._fetch("bills")

    async def get_debts(self) -> list[Record]:
        return await self._fetch("debts")
