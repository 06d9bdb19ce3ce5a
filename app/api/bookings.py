import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import select

from app.auth import require_user_id
from app.database import NotFoundError, get_db_session
from app.models import Booking, BookingStatus, Property, User
from app.schemas.request import CreateBooking, UpdateBooking
from app.schemas.response import BookingCheck, BookingOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(payload: CreateBooking, user_id: str = Depends(require_user_id)):
    """Request a stay. New bookings start out pending."""
    logger.info(f"POST /api/bookings - Property: {payload.property_id}, User: {user_id}")

    with get_db_session() as session:
        if session.get(User, user_id) is None:
            raise NotFoundError("User", user_id)

        property_obj = session.get(Property, payload.property_id)
        if property_obj is None:
            raise NotFoundError("Property", payload.property_id)

        nights = (payload.check_out - payload.check_in).days
        booking = Booking(
            property_id=payload.property_id,
            user_id=user_id,
            check_in=payload.check_in,
            check_out=payload.check_out,
            guests=payload.guests,
            total_price=nights * property_obj.price
            if property_obj.price is not None
            else None,
        )
        session.add(booking)
        session.flush()
        return BookingOut.model_validate(booking)


@router.get("", response_model=list[BookingOut])
def get_bookings(user_id: str = Depends(require_user_id)):
    with get_db_session() as session:
        bookings = session.exec(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.check_in)
        ).all()
        return [BookingOut.model_validate(booking) for booking in bookings]


@router.get("/check/{property_id}", response_model=BookingCheck)
def check_booking(property_id: str):
    """Whether the property has a confirmed booking."""
    with get_db_session() as session:
        confirmed = session.exec(
            select(Booking.id).where(
                Booking.property_id == property_id,
                Booking.status == BookingStatus.CONFIRMED,
            )
        ).first()
        return BookingCheck(is_confirmed=confirmed is not None)


@router.patch("/{booking_id}", response_model=BookingOut)
def update_booking(
    booking_id: str, payload: UpdateBooking, user_id: str = Depends(require_user_id)
):
    logger.info(f"PATCH /api/bookings/{booking_id} - Status: {payload.status}")

    with get_db_session() as session:
        booking = session.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        if booking.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed to modify this booking",
            )

        booking.status = BookingStatus(payload.status)
        session.add(booking)
        session.flush()
        return BookingOut.model_validate(booking)
