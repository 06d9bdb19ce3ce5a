import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.bookings import router as bookings_router
from app.api.messages import router as messages_router
from app.api.properties import router as properties_router
from app.api.reviews import router as reviews_router
from app.api.users import router as users_router
from app.api.wishlist import router as wishlist_router
from app.config import settings
from app.database import DatabaseError, NotFoundError, initialize_database

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database on startup."""
    for warning in settings.validate_startup():
        logger.warning(warning)
    await initialize_database()
    yield


app = FastAPI(title="Smart Rent System API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    origin = request.headers.get("origin") or "unknown"
    logger.info(f"{request.method} {request.url.path} from {origin}")
    return await call_next(request)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": exc.message})


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    content = {"message": "Something went wrong!"}
    if settings.is_development and exc.original_error is not None:
        content["error"] = str(exc.original_error)
    return JSONResponse(status_code=500, content=content)


# Include routers
app.include_router(properties_router)
app.include_router(wishlist_router)
app.include_router(users_router)
app.include_router(bookings_router)
app.include_router(reviews_router)
app.include_router(messages_router)


@app.get("/api/health")
async def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@app.get("/api")
async def root():
    return {
        "message": "Smart Rent System API",
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "health": "/api/health",
            "properties": "/api/properties",
            "users": "/api/users",
            "messages": "/api/messages",
            "reviews": "/api/reviews",
            "bookings": "/api/bookings",
            "wishlist": "/api/wishlist",
        },
    }
