import enum
import uuid
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Enum, Field, Relationship, SQLModel


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Property(SQLModel, table=True):
    __tablename__ = "properties"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    description: Optional[str] = None
    price: Optional[float] = None
    property_type: Optional[str] = Field(default=None, index=True)
    category: Optional[str] = None

    # Location
    city: Optional[str] = Field(default=None, index=True)
    country: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None

    # Capacity
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    guests: Optional[int] = None
    beds: Optional[int] = None

    amenities: Optional[Dict] = Field(default=None, sa_column=Column(JSON))
    images: Optional[List] = Field(default=None, sa_column=Column(JSON))
    size: Optional[float] = None
    average_rating: Optional[float] = None
    rating: Optional[float] = None
    trending: bool = Field(default=False)
    owner_id: Optional[str] = Field(default=None, foreign_key="users.id")
    created_at: Optional[datetime] = Field(default_factory=utcnow)

    # Relationships
    reviews: List["Review"] = Relationship(back_populates="property")
    bookings: List["Booking"] = Relationship(back_populates="property")


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    wishlist: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utcnow)


class BookingStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: str = Field(default_factory=new_id, primary_key=True)
    property_id: str = Field(foreign_key="properties.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    check_in: date
    check_out: date
    guests: int = Field(default=1)
    total_price: Optional[float] = None
    status: BookingStatus = Field(
        default=BookingStatus.PENDING,
        sa_column=Column(
            Enum(BookingStatus),
            nullable=False,
        ),
    )
    created_at: datetime = Field(default_factory=utcnow)

    # Relationships
    property: Optional[Property] = Relationship(back_populates="bookings")


class Review(SQLModel, table=True):
    __tablename__ = "reviews"

    id: str = Field(default_factory=new_id, primary_key=True)
    property_id: str = Field(foreign_key="properties.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    rating: int
    comment: str = Field(default="")
    created_at: datetime = Field(default_factory=utcnow)

    # Relationships
    property: Optional[Property] = Relationship(back_populates="reviews")


class Message(SQLModel, table=True):
    __tablename__ = "messages"

    id: str = Field(default_factory=new_id, primary_key=True)
    sender_id: str = Field(foreign_key="users.id", index=True)
    recipient_id: str = Field(foreign_key="users.id", index=True)
    property_id: Optional[str] = Field(default=None, foreign_key="properties.id")
    content: str
    created_at: datetime = Field(default_factory=utcnow)
