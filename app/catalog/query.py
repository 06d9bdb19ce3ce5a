"""Catalog query engine: category match, filter predicate, then stable sort."""

import logging
from dataclasses import dataclass
from typing import Iterable

from app.catalog.categories import category_property_type, matches
from app.catalog.filters import FilterSpec, active_filter_count, passes
from app.catalog.sorting import sort_listings
from app.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogResult:
    listings: list[ListingRecord]
    total_before: int
    total_after: int
    active_filters: int


def query(listings: Iterable[ListingRecord], spec: FilterSpec) -> list[ListingRecord]:
    """Return the listings matching ``spec``, ordered by ``spec.sort``.

    Pure and deterministic: the input is never mutated and a fresh list is
    returned every call.
    """
    in_category = [listing for listing in listings if matches(listing, spec.category)]
    filtered = [listing for listing in in_category if passes(listing, spec)]
    return sort_listings(filtered, spec.sort)


def run_query(listings: Iterable[ListingRecord], spec: FilterSpec) -> CatalogResult:
    """Run :func:`query` and collect the counts shown next to the results."""
    listings = list(listings)
    results = query(listings, spec)

    logger.debug(
        f"Catalog query {spec.category!r}: {len(results)} of {len(listings)} listings"
    )

    return CatalogResult(
        listings=results,
        total_before=len(listings),
        total_after=len(results),
        active_filters=active_filter_count(spec),
    )


def build_query_params(
    spec: FilterSpec | None = None, property_type: str | None = None
) -> dict[str, str]:
    """Server-side pre-filter parameters for ``GET /api/properties``.

    Only the simple pre-filters travel to the server; the rest of the spec
    is applied locally with :func:`query`. ``property_type`` may be a category
    id, which is mapped to its canonical propertyType.
    """
    params: dict[str, str] = {}

    if spec is not None and spec.location:
        params["location"] = spec.location

    if property_type:
        params["propertyType"] = category_property_type(property_type)

    return params
