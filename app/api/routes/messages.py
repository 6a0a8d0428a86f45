"""Broadcast messages from admins to every member."""

from fastapi import APIRouter, BackgroundTasks, status

from app.api.deps import AdminUser, AuthUser, DbSession, Hub
from app.core.errors import NotFoundError
from app.models import Message, Profile
from app.realtime import MESSAGE_DELETED, MESSAGE_NEW
from app.schemas.common import MessageResponse
from app.schemas.message import MessageCreate, MessageRead

router = APIRouter()

HISTORY_LIMIT = 100


@router.get("", response_model=list[MessageRead])
def list_messages(db: DbSession, _user: AuthUser) -> list[Message]:
    """The latest messages, newest first. Read state is tracked by the client."""
    return db.query(Message).order_by(Message.created_at.desc()).limit(HISTORY_LIMIT).all()


@router.get("/{message_id}", response_model=MessageRead)
def get_message(message_id: str, db: DbSession, _user: AuthUser) -> Message:
    message = db.get(Message, message_id)
    if message is None:
        raise NotFoundError("Message not found")
    return message


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def create_message(
    body: MessageCreate,
    db: DbSession,
    admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Message:
    """Store the message, then push it to every connected client."""
    profile = db.get(Profile, admin.id)
    message = Message(
        # Denormalized on purpose; renaming the author later does not rewrite history
        sender=(profile.display_name if profile else "") or "Admin",
        role=admin.role,
        subject=body.subject,
        content=body.content,
        priority=body.priority,
        type=body.type,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    payload = MessageRead.model_validate(message).model_dump(mode="json", by_alias=True)
    background.add_task(hub.broadcast, MESSAGE_NEW, payload)
    return message


@router.delete("/{message_id}", response_model=MessageResponse)
def delete_message(
    message_id: str,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> MessageResponse:
    message = db.get(Message, message_id)
    if message is None:
        raise NotFoundError("Message not found")
    db.delete(message)
    db.commit()
    background.add_task(hub.broadcast, MESSAGE_DELETED, {"id": message_id})
    return MessageResponse(message="Message deleted successfully")
