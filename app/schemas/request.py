from datetime import date, datetime
from typing import Literal, Optional, Union

from pydantic import EmailStr, Field, model_validator

from app.schemas.listing import Capacity, CamelModel, ImageRef, Location


class UpsertProperty(CamelModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    property_type: Optional[str] = None
    category: Optional[str] = None
    location: Optional[Location] = None
    capacity: Optional[Capacity] = None
    amenities: Optional[dict[str, bool]] = None
    size: Optional[float] = Field(default=None, ge=0)
    average_rating: Optional[float] = Field(default=None, ge=0, le=5)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    trending: bool = False
    created_at: Optional[datetime] = None
    images: list[Union[str, ImageRef]] = []
    owner_id: Optional[str] = None


class UpsertPropertiesRequest(CamelModel):
    properties: list[UpsertProperty]


class CreateUser(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr


class CreateBooking(CamelModel):
    property_id: str
    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_dates(self) -> "CreateBooking":
        if self.check_out <= self.check_in:
            raise ValueError("checkOut must be after checkIn")
        return self


class UpdateBooking(CamelModel):
    status: Literal["confirmed", "cancelled"]


class CreateReview(CamelModel):
    property_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""


class CreateMessage(CamelModel):
    recipient_id: str
    property_id: Optional[str] = None
    content: str = Field(min_length=1)
