"""Listing store backed by the ``properties`` table."""

import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from app.database import NotFoundError
from app.models import Property
from app.schemas.listing import Capacity, ListingRecord, Location
from app.schemas.request import UpsertProperty

logger = logging.getLogger(__name__)


def to_record(row: Property) -> ListingRecord:
    """Convert a flat ``properties`` row into a nested listing record."""
    location = None
    if any((row.city, row.country, row.state, row.address)):
        location = Location(
            city=row.city, country=row.country, state=row.state, address=row.address
        )

    capacity = None
    if any(v is not None for v in (row.bedrooms, row.bathrooms, row.guests, row.beds)):
        capacity = Capacity(
            bedrooms=row.bedrooms,
            bathrooms=row.bathrooms,
            guests=row.guests,
            beds=row.beds,
        )

    return ListingRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        price=row.price,
        property_type=row.property_type,
        category=row.category,
        location=location,
        capacity=capacity,
        amenities=row.amenities,
        size=row.size,
        average_rating=row.average_rating,
        rating=row.rating,
        trending=row.trending,
        created_at=row.created_at,
        images=row.images or [],
    )


def fetch_listings(
    session: Session, location: str | None = None, property_type: str | None = None
) -> list[ListingRecord]:
    """Fetch listings, applying the simple server-side pre-filters."""
    statement = select(Property)

    if location:
        statement = statement.where(Property.city.ilike(f"%{location.strip()}%"))

    if property_type:
        statement = statement.where(
            func.lower(Property.property_type) == property_type.strip().lower()
        )

    statement = statement.order_by(Property.created_at, Property.id)
    return [to_record(row) for row in session.exec(statement).all()]


def fetch_listing_by_id(session: Session, listing_id: str) -> ListingRecord:
    row = session.get(Property, listing_id)
    if row is None:
        raise NotFoundError("Property", listing_id)
    return to_record(row)


def fetch_listings_by_ids(
    session: Session, listing_ids: Iterable[str]
) -> list[ListingRecord]:
    """Resolve ids in the given order, silently dropping unknown ones."""
    listing_ids = list(listing_ids)
    if not listing_ids:
        return []

    rows = session.exec(select(Property).where(Property.id.in_(listing_ids))).all()
    by_id = {row.id: row for row in rows}
    return [to_record(by_id[i]) for i in listing_ids if i in by_id]


def _as_utc(value: datetime) -> datetime:
    # Timestamps without an offset are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def upsert_listing(session: Session, payload: UpsertProperty) -> Property:
    """Create a listing, or overwrite the stored fields of an existing one."""
    fields = {
        "title": payload.title,
        "description": payload.description,
        "price": payload.price,
        "property_type": payload.property_type,
        "category": payload.category,
        "amenities": payload.amenities,
        "images": [
            image if isinstance(image, str) else image.model_dump()
            for image in payload.images
        ],
        "size": payload.size,
        "average_rating": payload.average_rating,
        "rating": payload.rating,
        "trending": payload.trending,
        "owner_id": payload.owner_id,
    }
    fields.update((payload.location or Location()).model_dump())
    fields.update((payload.capacity or Capacity()).model_dump())

    existing = session.get(Property, payload.id) if payload.id else None

    if existing:
        # Update existing listing
        for name, value in fields.items():
            setattr(existing, name, value)
        if payload.created_at:
            existing.created_at = _as_utc(payload.created_at)
        session.add(existing)
        listing_obj = existing
    else:
        # Create new listing
        new_listing = Property(**fields)
        if payload.id:
            new_listing.id = payload.id
        if payload.created_at:
            new_listing.created_at = _as_utc(payload.created_at)
        session.add(new_listing)
        listing_obj = new_listing

    session.flush()
    return listing_obj
