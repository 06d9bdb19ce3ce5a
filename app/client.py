"""HTTP client for the rental marketplace API.

Fetches a pre-filtered page of listings from the server and re-applies the
full filter set locally, so filters can be changed without another request.
"""

import logging
from typing import Any

import httpx

from app.catalog.filters import FilterSpec
from app.catalog.query import build_query_params, query
from app.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)


class RentalApiClient:
    def __init__(
        self,
        base_url: str = "",
        token: str | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = 15,
    ):
        # An injected client stays owned by the caller
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.http.request(method, path, headers=self._headers(), **kwargs)
        response.raise_for_status()
        return response.json()

    def fetch_properties(
        self,
        spec: FilterSpec | None = None,
        property_type: str | None = None,
    ) -> tuple[list[ListingRecord], int]:
        """Fetch listings with the server-side pre-filters only.

        The server may answer with ``{"properties": [...], "pagination":
        {"total": n}}`` or with a bare array; both are accepted.
        """
        params = build_query_params(spec, property_type=property_type)
        data = self._request("GET", "/api/properties", params=params)

        if isinstance(data, list):
            items = data
            total = len(items)
        elif isinstance(data, dict) and isinstance(data.get("properties"), list):
            items = data["properties"]
            pagination = data.get("pagination") or {}
            total = pagination.get("total")
            if not isinstance(total, int) or isinstance(total, bool):
                total = len(items)
        else:
            logger.warning(f"Unexpected properties payload: {type(data).__name__}")
            return [], 0

        return [ListingRecord.model_validate(item) for item in items], total

    def browse(
        self, spec: FilterSpec, property_type: str | None = None
    ) -> list[ListingRecord]:
        listings, _ = self.fetch_properties(spec, property_type=property_type)
        return query(listings, spec)

    def toggle_wishlist(self, listing_id: str) -> list[str]:
        """Flip membership server-side. Do not retry on an ambiguous failure."""
        return self._request("POST", f"/api/wishlist/{listing_id}")

    def get_wishlist(self) -> list[ListingRecord]:
        data = self._request("GET", "/api/wishlist")
        return [ListingRecord.model_validate(item) for item in data]

    def close(self):
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
