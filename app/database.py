import logging
import os
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.config import settings
from app.models import (  # noqa: F401
    Booking,
    Message,
    Property,
    Review,
    User,
)

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Custom exception for database operations."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class NotFoundError(Exception):
    """Raised when a stored record cannot be resolved by its identifier."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        self.message = f"{entity} not found"
        super().__init__(f"{entity} {identifier!r} not found")


def get_database_url() -> str:
    if os.environ.get("PYTEST_VERSION"):
        return settings.test_database_url
    return settings.database_url


def is_in_memory(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///") or ":memory:" in database_url


def build_engine(database_url: str) -> Engine:
    if is_in_memory(database_url):
        # A single shared connection keeps in-memory databases alive across sessions
        return create_engine(
            database_url,
            echo=settings.database_echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=settings.database_echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=settings.database_echo,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,
    )


@lru_cache
def get_engine() -> Engine:
    return build_engine(get_database_url())


async def initialize_database():
    """Create the database tables."""
    try:
        engine = get_engine()
        SQLModel.metadata.create_all(engine)
        logger.info("Database initialized successfully.")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        raise DatabaseError("Failed to initialize database", original_error=e)


def create_tables():
    SQLModel.metadata.create_all(get_engine())


def drop_database():
    """Drop the database tables."""
    engine = get_engine()
    SQLModel.metadata.drop_all(engine)
    logger.info("Database dropped successfully.")


@contextmanager
def get_db_session():
    engine = get_engine()
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database operation failed: {e}")
        # Raise a concealed database error
        raise DatabaseError("Database operation failed", original_error=e)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
