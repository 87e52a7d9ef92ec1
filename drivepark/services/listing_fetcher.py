"""
Read listings from the backend API for server-rendered pages.

Failures never surface as errors here: any non-success status, transport
error or undecodable body is reported as an absent listing (None). Successful
payloads are reused for `revalidate_seconds` and refetched afterwards.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable
from urllib.parse import quote

import httpx

from drivepark.domain.listings import ListingType

logger = logging.getLogger(__name__)


def is_listing_payload(payload: Any) -> bool:
    """A listing body carries a string `type` and an `id` or `slug`."""
    if not isinstance(payload, dict):
        return False
    return isinstance(payload.get("type"), str) and bool(payload.get("id") or payload.get("slug"))


class ListingFetcher:
    def __init__(
        self,
        base_url: str,
        *,
        revalidate_seconds: float = 60,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.revalidate_seconds = revalidate_seconds
        self.timeout = timeout
        self._transport = transport
        self._clock = clock
        self._fresh: dict[str, tuple[float, Any]] = {}

    def _cached(self, url: str) -> Any | None:
        entry = self._fresh.get(url)
        if entry is None:
            return None
        fetched_at, payload = entry
        if self._clock() - fetched_at >= self.revalidate_seconds:
            del self._fresh[url]
            return None
        return payload

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any | None:
        url = str(httpx.URL(self.base_url + path, params=params))
        cached = self._cached(url)
        if cached is not None:
            return cached
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("backend request failed for %s: %s", url, exc)
            return None
        if not response.is_success:
            if response.status_code != 404:
                logger.warning("backend answered %s for %s", response.status_code, url)
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("backend returned an undecodable body for %s", url)
            return None
        self._fresh[url] = (self._clock(), payload)
        return payload

    async def fetch_listing(self, key: str) -> dict | None:
        """Fetch one listing by id or slug; None when absent or unreachable."""
        # "." and ".." would be resolved as dot-segments and leave /listings/
        if not key or key in (".", ".."):
            return None
        payload = await self._get_json(f"/listings/{quote(key, safe='')}")
        return payload if is_listing_payload(payload) else None

    async def fetch_similar(
        self,
        listing_type: ListingType,
        city: str | None,
        exclude_id: str | None,
        *,
        limit: int = 4,
    ) -> list[dict]:
        """Other active listings of the same vertical in the same city."""
        if not city:
            return []
        payload = await self._get_json(
            "/listings",
            params={"type": listing_type.value, "city": city, "limit": limit},
        )
        if not isinstance(payload, dict):
            return []
        items = payload.get("items") or []
        return [item for item in items if is_listing_payload(item) and item.get("id") != exclude_id]
