"""Direct message API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.message import Message
from src.schemas.auth import StatusMessage
from src.schemas.message import DirectMessageResponse, MessageCreate
from src.tasks.notifications import notify_new_message, queue_notification

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/{sender}/{receiver}", response_model=list[DirectMessageResponse])
def get_conversation(
    sender: str,
    receiver: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Get messages exchanged between two users in either direction, oldest first."""
    return (
        db.query(Message)
        .filter(
            or_(
                and_(Message.sender == sender, Message.receiver == receiver),
                and_(Message.sender == receiver, Message.receiver == sender),
            )
        )
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )


@router.post("", response_model=StatusMessage, status_code=status.HTTP_201_CREATED)
def send_message(
    message_data: MessageCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Send a direct message and notify the receiver once it is saved."""
    message = Message(
        sender=message_data.sender,
        receiver=message_data.receiver,
        content=message_data.content,
    )
    db.add(message)
    db.commit()
    db.refresh(message)

    queue_notification(notify_new_message, message.id)

    return StatusMessage(message="Message sent successfully")
