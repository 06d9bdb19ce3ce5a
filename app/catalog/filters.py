"""Filter specification and the per-listing filter predicate."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter

from app.catalog.categories import ALL
from app.schemas.listing import AMENITIES, ListingRecord
from app.utils import is_bool_like, parse_number

logger = logging.getLogger(__name__)

DEFAULT_SORT = "price-low-high"

# Query parameter name -> FilterSpec field
_PARAM_NAMES = {
    "priceMin": "price_min",
    "price_min": "price_min",
    "priceMax": "price_max",
    "price_max": "price_max",
    "bedrooms": "bedrooms",
    "location": "location",
    "category": "category",
    "sort": "sort",
    "sortBy": "sort",
}

_MALFORMED = object()


def _coerce_number(value: Any):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return _MALFORMED
    number = parse_number(str(value))
    return _MALFORMED if number is None else number


class FilterSpec(BaseModel):
    """An immutable set of catalog filters plus the sort key.

    ``None`` means "not applied". ``ignored`` lists the fields whose raw
    input was present but malformed; those are treated as not applied too.
    """

    model_config = ConfigDict(frozen=True)

    category: str = ALL
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    bedrooms: Optional[int] = None
    location: Optional[str] = None
    amenities: dict[str, bool] = {}
    sort: str = DEFAULT_SORT
    ignored: tuple[str, ...] = ()

    @property
    def required_amenities(self) -> list[str]:
        return [name for name, required in self.amenities.items() if required]

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterSpec":
        """Build a spec from raw query/form values, coercing leniently."""
        raw: dict[str, Any] = {}
        for key, value in params.items():
            if key in _PARAM_NAMES:
                raw[_PARAM_NAMES[key]] = value

        ignored: list[str] = []
        values: dict[str, Any] = {}

        for name in ("price_min", "price_max", "bedrooms"):
            number = _coerce_number(raw.get(name))
            if number is _MALFORMED:
                ignored.append(name)
            elif number is not None:
                values[name] = int(number) if name == "bedrooms" else number

        location = str(raw.get("location") or "").strip()
        if location:
            values["location"] = location

        category = str(raw.get("category") or "").strip()
        values["category"] = category or ALL

        sort = str(raw.get("sort") or "").strip()
        values["sort"] = sort or DEFAULT_SORT

        amenities: dict[str, bool] = {}
        nested = params.get("amenities")
        if isinstance(nested, Mapping):
            flags = dict(nested)
        elif isinstance(nested, str) and nested.strip():
            flags = {name.strip(): True for name in nested.split(",") if name.strip()}
        else:
            flags = {}
        flags.update({name: params[name] for name in AMENITIES if name in params})

        for name, flag in flags.items():
            if isinstance(flag, bool):
                amenities[name] = flag
            elif isinstance(flag, str) and is_bool_like(flag):
                amenities[name] = TypeAdapter(bool).validate_python(flag)
            else:
                ignored.append(name)
        values["amenities"] = amenities

        if ignored:
            logger.debug(f"Ignoring malformed filter values: {ignored}")

        return cls(**values, ignored=tuple(ignored))


def passes(listing: ListingRecord, spec: FilterSpec) -> bool:
    """Check a listing against every applied filter in ``spec``."""
    price = listing.price or 0

    if spec.price_min is not None and price < spec.price_min:
        return False

    if spec.price_max is not None and price > spec.price_max:
        return False

    if (
        spec.bedrooms is not None
        and listing.capacity is not None
        and (listing.capacity.bedrooms or 0) < spec.bedrooms
    ):
        return False

    city = listing.location.city if listing.location else None
    if spec.location and city and spec.location.strip().lower() not in city.strip().lower():
        return False

    amenities = listing.amenities or {}
    for name in spec.required_amenities:
        if amenities.get(name) is not True:
            return False

    return True


def active_filter_count(spec: FilterSpec) -> int:
    """Number of non-default filters, as shown on the filter badge."""
    count = len(spec.required_amenities)

    for value in (spec.price_min, spec.price_max, spec.bedrooms, spec.location):
        if value is not None and value != "":
            count += 1

    if spec.category != ALL:
        count += 1

    return count
