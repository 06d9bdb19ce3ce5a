from datetime import datetime

import jwt
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database import create_tables, drop_database, get_db_session
from app.models import User
from app.schemas.listing import Capacity, Location
from app.schemas.request import UpsertPropertiesRequest, UpsertProperty


@pytest.fixture(autouse=True)
def cleanup_test_database():
    """Fresh tables for every test."""
    create_tables()
    yield

    drop_database()


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_auth_headers():
    def _headers(user_id: str) -> dict[str, str]:
        token = jwt.encode({"id": user_id}, settings.jwt_secret, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def user() -> User:
    with get_db_session() as session:
        user = User(name="Ada Guest", email="ada@example.com")
        session.add(user)
    return user


@pytest.fixture
def other_user() -> User:
    with get_db_session() as session:
        user = User(name="Ben Host", email="ben@example.com")
        session.add(user)
    return user


@pytest.fixture
def auth_headers(user, make_auth_headers) -> dict[str, str]:
    return make_auth_headers(user.id)


@pytest.fixture
def create_sample_listings():
    """Provide sample listings for testing."""
    from app.api.properties import upsert_properties

    properties = UpsertPropertiesRequest(
        properties=[
            UpsertProperty(
                id="p1",
                title="Seaside Cottage",
                price=50,
                category="Beach House",
                property_type="House",
                location=Location(city="Malibu", country="USA"),
                capacity=Capacity(bedrooms=2, bathrooms=1, guests=4, beds=2),
                amenities={"wifi": True, "pool": True},
                average_rating=4.5,
                created_at=datetime(2024, 1, 1),
                images=["https://img.example.com/p1.jpg"],
            ),
            UpsertProperty(
                id="p2",
                title="Tuscan Villa",
                price=150,
                category="Villa",
                property_type="Villa",
                location=Location(city="Florence", country="Italy"),
                capacity=Capacity(bedrooms=4, bathrooms=3, guests=8, beds=5),
                amenities={"wifi": True, "kitchen": True},
                average_rating=4.9,
                trending=True,
                created_at=datetime(2024, 3, 1),
                images=[{"url": "https://img.example.com/p2.jpg"}],
            ),
            UpsertProperty(
                id="p3",
                title="Lake Cabin",
                price=90,
                category="Lakefront",
                property_type="Cabin",
                location=Location(city="Lake Tahoe", country="USA"),
                capacity=Capacity(bedrooms=3),
                amenities={},
                rating=4.2,
                created_at=datetime(2024, 2, 1),
            ),
            UpsertProperty(
                id="p4",
                title="Downtown Loft",
                price=120,
                property_type="Apartment",
                location=Location(city="New York", country="USA"),
                created_at=datetime(2023, 12, 1),
            ),
        ],
    )

    response = upsert_properties(properties)
    if response.status == "failed":
        raise Exception(f"Failed to create sample listings: {response.error}")

    return properties
