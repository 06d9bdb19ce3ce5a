"""Wishlist operations.

A user's wishlist is a duplicate-free list of listing ids stored on the user
row. ``toggle`` flips membership of one listing; ``add`` and ``remove`` set it
explicitly and are safe to retry. None of these lock the user row, so two
concurrent writes for the same user are last-writer-wins.
"""

import logging

from sqlalchemy.orm.attributes import flag_modified
from sqlmodel import Session

from app import store
from app.database import NotFoundError
from app.models import User
from app.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)


def _get_user(session: Session, user_id: str) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def _save(session: Session, user: User, wishlist: list[str]) -> list[str]:
    # Drops any duplicate that slipped into the stored list, keeping first position
    user.wishlist = list(dict.fromkeys(wishlist))
    flag_modified(user, "wishlist")
    session.add(user)
    session.flush()
    return list(user.wishlist)


def toggle(session: Session, user_id: str, listing_id: str) -> list[str]:
    """Add ``listing_id`` if absent, remove it if present; return the new ids.

    Not safe to retry blindly: a second call undoes the first.
    """
    user = _get_user(session, user_id)
    wishlist = list(user.wishlist or [])

    if listing_id in wishlist:
        wishlist = [i for i in wishlist if i != listing_id]
        logger.info(f"Removed {listing_id} from wishlist of user {user_id}")
    else:
        wishlist.append(listing_id)
        logger.info(f"Added {listing_id} to wishlist of user {user_id}")

    return _save(session, user, wishlist)


def add(session: Session, user_id: str, listing_id: str) -> list[str]:
    user = _get_user(session, user_id)
    wishlist = list(user.wishlist or [])
    if listing_id not in wishlist:
        wishlist.append(listing_id)
    return _save(session, user, wishlist)


def remove(session: Session, user_id: str, listing_id: str) -> list[str]:
    user = _get_user(session, user_id)
    wishlist = [i for i in (user.wishlist or []) if i != listing_id]
    return _save(session, user, wishlist)


def list_wishlist(session: Session, user_id: str) -> list[ListingRecord]:
    """Resolve the user's wishlist to listing records.

    Ids whose listing no longer exists are left out of the result.
    """
    user = _get_user(session, user_id)
    return store.fetch_listings_by_ids(session, user.wishlist or [])
