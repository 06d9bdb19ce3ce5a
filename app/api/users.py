import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import select

from app.auth import require_user_id
from app.database import NotFoundError, get_db_session
from app.models import User
from app.schemas.request import CreateUser
from app.schemas.response import UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUser):
    logger.info(f"POST /api/users - Email: {payload.email}")
    with get_db_session() as session:
        existing = session.exec(select(User).where(User.email == payload.email)).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="User already exists"
            )

        user = User(name=payload.name, email=payload.email)
        session.add(user)
        session.flush()
        return UserOut.model_validate(user)


def _get_user(user_id: str) -> UserOut:
    with get_db_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return UserOut.model_validate(user)


@router.get("/me", response_model=UserOut)
def get_me(user_id: str = Depends(require_user_id)):
    return _get_user(user_id)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str):
    return _get_user(user_id)
