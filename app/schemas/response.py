from datetime import date, datetime
from typing import Optional

from app.models import BookingStatus
from app.schemas.listing import CamelModel, ListingRecord


class UpsertPropertiesError(CamelModel):
    property_id: Optional[str]
    error: str


class UpsertPropertiesResponse(CamelModel):
    status: str
    ids: list[str] = []
    error: UpsertPropertiesError | None


class Pagination(CamelModel):
    total: int
    page: int
    pages: int
    limit: int


class PropertiesResponse(CamelModel):
    properties: list[ListingRecord]
    pagination: Pagination
    unfiltered_total: int
    active_filters: int
    ignored_filters: list[str] = []


class CategoryOut(CamelModel):
    id: str
    label: str
    property_type: Optional[str] = None


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    wishlist: list[str]
    created_at: Optional[datetime] = None


class BookingOut(CamelModel):
    id: str
    property_id: str
    user_id: str
    check_in: date
    check_out: date
    guests: int
    total_price: Optional[float] = None
    status: BookingStatus
    created_at: Optional[datetime] = None


class BookingCheck(CamelModel):
    is_confirmed: bool


class ReviewOut(CamelModel):
    id: str
    property_id: str
    user_id: str
    rating: int
    comment: str
    created_at: Optional[datetime] = None


class MessageOut(CamelModel):
    id: str
    sender_id: str
    recipient_id: str
    property_id: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None
