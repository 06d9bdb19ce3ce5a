import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlmodel import select

from app.auth import require_user_id
from app.database import NotFoundError, get_db_session
from app.models import Message, Property, User
from app.schemas.request import CreateMessage
from app.schemas.response import MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(payload: CreateMessage, user_id: str = Depends(require_user_id)):
    logger.info(f"POST /api/messages - From: {user_id}, To: {payload.recipient_id}")

    with get_db_session() as session:
        for identifier in (user_id, payload.recipient_id):
            if session.get(User, identifier) is None:
                raise NotFoundError("User", identifier)

        if payload.property_id and session.get(Property, payload.property_id) is None:
            raise NotFoundError("Property", payload.property_id)

        message = Message(
            sender_id=user_id,
            recipient_id=payload.recipient_id,
            property_id=payload.property_id,
            content=payload.content,
        )
        session.add(message)
        session.flush()
        return MessageOut.model_validate(message)


@router.get("", response_model=list[MessageOut])
def get_messages(user_id: str = Depends(require_user_id)):
    """Messages the caller sent or received, newest first."""
    with get_db_session() as session:
        messages = session.exec(
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
            .order_by(Message.created_at.desc())
        ).all()
        return [MessageOut.model_validate(message) for message in messages]
