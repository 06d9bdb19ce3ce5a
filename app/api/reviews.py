import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlmodel import select

from app.auth import require_user_id
from app.database import NotFoundError, get_db_session
from app.models import Property, Review, User
from app.schemas.request import CreateReview
from app.schemas.response import ReviewOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(payload: CreateReview, user_id: str = Depends(require_user_id)):
    """Add a review and refresh the property's average rating."""
    logger.info(f"POST /api/reviews - Property: {payload.property_id}, User: {user_id}")

    with get_db_session() as session:
        if session.get(User, user_id) is None:
            raise NotFoundError("User", user_id)

        property_obj = session.get(Property, payload.property_id)
        if property_obj is None:
            raise NotFoundError("Property", payload.property_id)

        review = Review(
            property_id=payload.property_id,
            user_id=user_id,
            rating=payload.rating,
            comment=payload.comment,
        )
        session.add(review)
        session.flush()

        average = session.exec(
            select(func.avg(Review.rating)).where(
                Review.property_id == payload.property_id
            )
        ).one()
        property_obj.average_rating = round(float(average), 2)
        session.add(property_obj)

        return ReviewOut.model_validate(review)


@router.get("/property/{property_id}", response_model=list[ReviewOut])
def get_property_reviews(property_id: str):
    with get_db_session() as session:
        reviews = session.exec(
            select(Review)
            .where(Review.property_id == property_id)
            .order_by(Review.created_at.desc())
        ).all()
        return [ReviewOut.model_validate(review) for review in reviews]
