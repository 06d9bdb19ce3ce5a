from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

AMENITIES = (
    "wifi",
    "pool",
    "kitchen",
    "parking",
    "petFriendly",
    "ac",
    "hotTub",
    "breakfast",
    "workspace",
    "washer",
    "dryer",
    "gym",
)


class CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Location(CamelModel):
    city: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None


class Capacity(CamelModel):
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    guests: Optional[int] = None
    beds: Optional[int] = None


class ImageRef(CamelModel):
    model_config = ConfigDict(extra="allow")

    url: str


class ListingRecord(CamelModel):
    """A rentable property as seen by the catalog.

    Numeric fields stay ``None`` when the source record lacks them; readers
    substitute zero (or the documented default) at the point of use.
    """

    id: str
    title: str = ""
    description: Optional[str] = None
    price: Optional[float] = None
    property_type: Optional[str] = None
    category: Optional[str] = None
    location: Optional[Location] = None
    capacity: Optional[Capacity] = None
    amenities: Optional[dict[str, bool]] = None
    size: Optional[float] = None
    average_rating: Optional[float] = None
    rating: Optional[float] = None
    trending: bool = False
    created_at: Optional[datetime] = None
    images: list[Union[str, ImageRef]] = []
