from datetime import datetime, timezone
from enum import Enum
from functools import cmp_to_key
from typing import Iterable

from app.schemas.listing import ListingRecord

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortKey(str, Enum):
    PRICE_LOW_HIGH = "price-low-high"
    PRICE_HIGH_LOW = "price-high-low"
    RATING = "rating"
    NEWEST = "newest"
    BEDROOMS = "bedrooms"


def _price(listing: ListingRecord) -> float:
    return listing.price or 0


def _rating(listing: ListingRecord) -> float:
    return listing.average_rating or listing.rating or 0


def _created(listing: ListingRecord) -> datetime:
    created_at = listing.created_at
    if created_at is None:
        return EPOCH
    if created_at.tzinfo is None:
        # Stored timestamps without an offset are UTC
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def _bedrooms(listing: ListingRecord) -> int:
    return (listing.capacity.bedrooms if listing.capacity else None) or 0


# sort key -> (value extractor, descending)
_ORDERINGS = {
    SortKey.PRICE_LOW_HIGH.value: (_price, False),
    SortKey.PRICE_HIGH_LOW.value: (_price, True),
    SortKey.RATING.value: (_rating, True),
    SortKey.NEWEST.value: (_created, True),
    SortKey.BEDROOMS.value: (_bedrooms, True),
}


def compare(a: ListingRecord, b: ListingRecord, sort_key: str) -> int:
    """Three-way comparison of two listings under ``sort_key``.

    Unknown keys compare everything as equal, which leaves the input order
    untouched once the (stable) sort runs.
    """
    ordering = _ORDERINGS.get(sort_key)
    if ordering is None:
        return 0

    value, descending = ordering
    left, right = value(a), value(b)
    if descending:
        left, right = right, left

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def sort_listings(listings: Iterable[ListingRecord], sort_key: str) -> list[ListingRecord]:
    return sorted(listings, key=cmp_to_key(lambda a, b: compare(a, b, sort_key)))
