import logging
import math

from fastapi import APIRouter, Query, Request
from sqlalchemy.exc import SQLAlchemyError

from app import store
from app.catalog.categories import ALL, MENU, TRENDING, category_property_type
from app.catalog.filters import FilterSpec
from app.catalog.query import run_query
from app.config import settings
from app.database import get_db_session
from app.schemas.listing import ListingRecord
from app.schemas.request import UpsertPropertiesRequest
from app.schemas.response import (
    CategoryOut,
    Pagination,
    PropertiesResponse,
    UpsertPropertiesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=PropertiesResponse)
def get_properties(
    request: Request,
    location: str | None = None,
    property_type: str | None = Query(default=None, alias="propertyType"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
):
    """Browse the catalog.

    ``location`` and ``propertyType`` are applied by the store; the full
    filter set (category, price, bedrooms, location, amenities) and the sort
    are then applied by the catalog engine. Malformed filter values are
    ignored rather than rejected.
    """
    spec = FilterSpec.from_params(request.query_params)
    logger.info(f"GET /api/properties - Filters: {spec}")

    with get_db_session() as session:
        listings = store.fetch_listings(
            session, location=location, property_type=property_type
        )

    result = run_query(listings, spec)

    page_size = limit or settings.page_size
    offset = (page - 1) * page_size

    return PropertiesResponse(
        properties=result.listings[offset : offset + page_size],
        pagination=Pagination(
            total=result.total_after,
            page=page,
            pages=max(1, math.ceil(result.total_after / page_size)),
            limit=page_size,
        ),
        unfiltered_total=result.total_before,
        active_filters=result.active_filters,
        ignored_filters=list(spec.ignored),
    )


@router.get("/categories", response_model=list[CategoryOut])
def get_categories():
    """The category menu, in display order."""
    return [
        CategoryOut(
            id=category_id,
            label=label,
            property_type=None
            if category_id in (ALL, TRENDING)
            else category_property_type(category_id),
        )
        for category_id, label in MENU
    ]


@router.get("/{property_id}", response_model=ListingRecord)
def get_property(property_id: str):
    logger.info(f"GET /api/properties/{property_id}")
    with get_db_session() as session:
        return store.fetch_listing_by_id(session, property_id)


@router.put("", response_model=UpsertPropertiesResponse)
def upsert_properties(properties_data: UpsertPropertiesRequest):
    """
    Insert or update multiple listings.
    `UpsertPropertiesRequest` is the source of truth.
    """
    logger.info(
        f"PUT /api/properties - Upserting {len(properties_data.properties)} listings"
    )

    with get_db_session() as session:
        current_property_id = None
        ids = []

        try:
            for property_data in properties_data.properties:
                current_property_id = property_data.id

                property_obj = store.upsert_listing(session, property_data)
                ids.append(property_obj.id)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Upsert failed for property {current_property_id}: {e}")
            return UpsertPropertiesResponse(
                status="failed",
                error={"property_id": current_property_id, "error": str(e)},
            )

        return UpsertPropertiesResponse(status="success", ids=ids, error=None)
