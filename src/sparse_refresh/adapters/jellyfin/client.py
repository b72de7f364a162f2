"""Jellyfin HTTP API client for item queries and refreshes."""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Optional

import httpx

from sparse_refresh.config import Settings
from sparse_refresh.core import (
    ImageType,
    ItemKind,
    ItemQuery,
    ItemQueryFailure,
    LibraryStore,
    MediaItem,
    RefreshExecutor,
    RefreshFailure,
)

logger = logging.getLogger(__name__)

ITEM_FIELDS = "ProviderIds,Overview,DateCreated,PremiereDate,DateLastRefreshed,SortName"
FRACTION = re.compile(r"\.(\d+)")


def parse_jellyfin_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a Jellyfin timestamp into an aware UTC datetime.

    Jellyfin sends seven fractional digits and a ``Z`` suffix, and uses
    ``0001-01-01T00:00:00`` for "never".
    """
    if not value:
        return None

    text = value.strip().replace("Z", "+00:00")
    text = FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable timestamp %r", value)
        return None

    if parsed.year <= 1:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_item(record: dict[str, Any], fallback_kind: ItemKind) -> MediaItem:
    """Map a BaseItemDto record onto a MediaItem."""
    try:
        kind = ItemKind(record.get("Type"))
    except ValueError:
        kind = fallback_kind

    image_counts: dict[ImageType, int] = {}
    for tag_name in (record.get("ImageTags") or {}):
        try:
            image_counts[ImageType(tag_name)] = 1
        except ValueError:
            continue
    backdrops = record.get("BackdropImageTags") or []
    if backdrops:
        image_counts[ImageType.BACKDROP] = len(backdrops)

    return MediaItem(
        id=record["Id"],
        kind=kind,
        name=record.get("Name"),
        sort_name=record.get("SortName"),
        overview=record.get("Overview"),
        provider_ids={k: v for k, v in (record.get("ProviderIds") or {}).items() if v},
        premiere_date=parse_jellyfin_datetime(record.get("PremiereDate")),
        date_created=parse_jellyfin_datetime(record.get("DateCreated")),
        date_last_refreshed=parse_jellyfin_datetime(record.get("DateLastRefreshed")),
        image_counts=image_counts,
        is_virtual=record.get("LocationType") == "Virtual",
    )


class JellyfinClient(LibraryStore, RefreshExecutor):
    """Jellyfin server adapter: streams library items and queues refreshes."""

    def __init__(self, settings: Settings) -> None:
        self.base_url = settings.server_url
        self.api_key = settings.api_key
        self.timeout = settings.server.timeout
        self.page_size = settings.server.page_size
        self.max_retries = settings.server.max_retries
        self.initial_retry_delay = settings.server.initial_retry_delay

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-Emby-Token"] = self.api_key
        return headers

    def build_params(self, query: ItemQuery) -> dict[str, Any]:
        """Translate an ItemQuery into /Items query parameters."""
        params: dict[str, Any] = {
            "IncludeItemTypes": ",".join(kind.value for kind in query.item_kinds),
            "Recursive": str(query.recursive).lower(),
            "Fields": ITEM_FIELDS,
            "EnableTotalRecordCount": "true",
        }
        if query.exclude_virtual:
            params["IsMissing"] = "false"
        if query.order_by:
            params["SortBy"] = ",".join(name for name, _ in query.order_by)
            params["SortOrder"] = ",".join(order.value for _, order in query.order_by)
        return params

    async def query_items(self, query: ItemQuery) -> AsyncIterator[MediaItem]:
        """Stream matching items page by page."""
        params = self.build_params(query)
        fallback_kind = query.item_kinds[0] if query.item_kinds else ItemKind.MOVIE
        seen_ids: set[str] = set()
        start_index = 0

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                page_params = {**params, "StartIndex": start_index, "Limit": self.page_size}
                try:
                    response = await self._request(client, "GET", "/Items", params=page_params)
                    data = response.json()
                except (httpx.HTTPError, ValueError) as e:
                    raise ItemQueryFailure(
                        f"Failed to query items at offset {start_index}: {e}",
                        suggestion="Check the server URL and JELLYFIN_API_KEY",
                    ) from e

                records = data.get("Items") or []
                for record in records:
                    item = parse_item(record, fallback_kind)
                    if item.id in seen_ids:
                        continue
                    seen_ids.add(item.id)

                    if query.exclude_virtual and item.is_virtual:
                        continue
                    if (
                        query.min_date_created is not None
                        and item.date_created is not None
                        and item.date_created < query.min_date_created
                    ):
                        continue
                    yield item

                start_index += len(records)
                total = data.get("TotalRecordCount") or 0
                if not records or start_index >= total:
                    break

    async def refresh(
        self, item: MediaItem, replace_all_images: bool, replace_all_metadata: bool
    ) -> None:
        """Queue a full metadata and image refresh for the item."""
        params = {
            "MetadataRefreshMode": "FullRefresh",
            "ImageRefreshMode": "FullRefresh",
            "ReplaceAllMetadata": str(replace_all_metadata).lower(),
            "ReplaceAllImages": str(replace_all_images).lower(),
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                await self._request(client, "POST", f"/Items/{item.id}/Refresh", params=params)
            except httpx.HTTPError as e:
                raise RefreshFailure(f"Refresh of {item.display_name} failed: {e}", item.id) from e

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a request, retrying rate limits and server errors with backoff."""
        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    params=params,
                    headers=self._headers(),
                )

                # Rate limit - retry with backoff
                if response.status_code == 429:
                    retry_after = self._get_retry_delay(response, attempt)
                    logger.warning(
                        "Rate limited on %s %s, retrying after %.1fs (attempt %d/%d)",
                        method, path, retry_after, attempt + 1, self.max_retries,
                    )
                    await asyncio.sleep(retry_after)
                    continue

                # Server errors - retry with backoff
                if response.status_code >= 500 and attempt < self.max_retries - 1:
                    retry_delay = self.initial_retry_delay * (2 ** attempt)
                    logger.warning(
                        "Server error %d on %s %s, retrying after %.1fs",
                        response.status_code, method, path, retry_delay,
                    )
                    await asyncio.sleep(retry_delay)
                    continue

                # Other errors - raise immediately
                response.raise_for_status()
                return response

            except httpx.RequestError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    retry_delay = self.initial_retry_delay * (2 ** attempt)
                    logger.warning("Network error on %s %s, retrying after %.1fs", method, path, retry_delay)
                    await asyncio.sleep(retry_delay)
                    continue
                raise

        # If we exhausted all retries
        if last_exception:
            raise last_exception
        raise httpx.HTTPError(f"{method} {path} failed after {self.max_retries} attempts")

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        return self.initial_retry_delay * (2 ** attempt)
