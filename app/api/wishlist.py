import logging

from fastapi import APIRouter, Depends

from app.auth import require_user_id
from app.database import get_db_session
from app.schemas.listing import ListingRecord
from app.services import wishlist

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.post("/{listing_id}", response_model=list[str])
def toggle_wishlist(listing_id: str, user_id: str = Depends(require_user_id)):
    """Flip the listing's membership in the caller's wishlist."""
    logger.info(f"POST /api/wishlist/{listing_id} - User: {user_id}")
    with get_db_session() as session:
        return wishlist.toggle(session, user_id, listing_id)


@router.put("/{listing_id}", response_model=list[str])
def add_to_wishlist(listing_id: str, user_id: str = Depends(require_user_id)):
    logger.info(f"PUT /api/wishlist/{listing_id} - User: {user_id}")
    with get_db_session() as session:
        return wishlist.add(session, user_id, listing_id)


@router.delete("/{listing_id}", response_model=list[str])
def remove_from_wishlist(listing_id: str, user_id: str = Depends(require_user_id)):
    logger.info(f"DELETE /api/wishlist/{listing_id} - User: {user_id}")
    with get_db_session() as session:
        return wishlist.remove(session, user_id, listing_id)


@router.get("", response_model=list[ListingRecord])
def get_wishlist(user_id: str = Depends(require_user_id)):
    logger.info(f"GET /api/wishlist - User: {user_id}")
    with get_db_session() as session:
        return wishlist.list_wishlist(session, user_id)
