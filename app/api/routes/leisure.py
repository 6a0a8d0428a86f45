"""Leisure events, their participants and the money collected for them."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Query, status
from sqlalchemy.exc import IntegrityError

from app.api.deps import AdminUser, AuthUser, DbSession, Hub
from app.core.errors import NotFoundError, ValidationFailed
from app.models import LeisureContribution, LeisureEvent, LeisureParticipant, Profile
from app.realtime import EVENT_UPDATED
from app.schemas.common import MessageResponse, partial_update
from app.schemas.leisure import (
    EventCreate,
    EventRead,
    EventUpdate,
    LeisureContributionCreate,
    LeisureContributionRead,
    ParticipantCreate,
    ParticipantRead,
    ParticipantStatusUpdate,
)

router = APIRouter()


def _get_event(db, event_id: str) -> LeisureEvent:
    event = db.get(LeisureEvent, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def _notify(background: BackgroundTasks, hub, event: LeisureEvent) -> None:
    payload = EventRead.model_validate(event).model_dump(mode="json", by_alias=True)
    background.add_task(hub.broadcast, EVENT_UPDATED, payload)


def _add_participant(db, event_id: str, profile_id: str, status: str) -> LeisureParticipant:
    """Insert a participant row; the (event, profile) pair is unique."""
    existing = (
        db.query(LeisureParticipant)
        .filter(
            LeisureParticipant.event_id == event_id,
            LeisureParticipant.profile_id == profile_id,
        )
        .first()
    )
    if existing is not None:
        raise ValidationFailed("Already registered for this event", code="ALREADY_JOINED")
    participant = LeisureParticipant(event_id=event_id, profile_id=profile_id, status=status)
    db.add(participant)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent join
        db.rollback()
        raise ValidationFailed(
            "Already registered for this event", code="ALREADY_JOINED"
        ) from e
    db.refresh(participant)
    return participant


# Events


@router.get("/events", response_model=list[EventRead])
def list_events(db: DbSession, _user: AuthUser) -> list[LeisureEvent]:
    return db.query(LeisureEvent).order_by(LeisureEvent.created_at.desc()).all()


@router.get("/events/{event_id}", response_model=EventRead)
def get_event(event_id: str, db: DbSession, _user: AuthUser) -> LeisureEvent:
    return _get_event(db, event_id)


@router.post("/events", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    body: EventCreate,
    db: DbSession,
    admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> LeisureEvent:
    event = LeisureEvent(**body.model_dump(), created_by=admin.id)
    db.add(event)
    db.commit()
    db.refresh(event)
    _notify(background, hub, event)
    return event


@router.put("/events/{event_id}", response_model=EventRead)
def update_event(
    event_id: str,
    body: EventUpdate,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> LeisureEvent:
    event = _get_event(db, event_id)
    for field, value in partial_update(body).items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    _notify(background, hub, event)
    return event


@router.delete("/events/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: str,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> MessageResponse:
    """Participants and contributions of the event are deleted with it."""
    event = _get_event(db, event_id)
    db.delete(event)
    db.commit()
    background.add_task(hub.broadcast, EVENT_UPDATED, {"id": event_id, "deleted": True})
    return MessageResponse(message="Event deleted successfully")


@router.post(
    "/events/{event_id}/join",
    response_model=ParticipantRead,
    status_code=status.HTTP_201_CREATED,
)
def join_event(
    event_id: str,
    db: DbSession,
    user: AuthUser,
    background: BackgroundTasks,
    hub: Hub,
) -> LeisureParticipant:
    """Self-registration; lands as pending until an admin approves it."""
    event = _get_event(db, event_id)
    if event.max_participants is not None and len(event.participants) >= event.max_participants:
        raise ValidationFailed("Event is full", code="EVENT_FULL")
    participant = _add_participant(db, event.id, user.id, "pending")
    db.refresh(event)
    _notify(background, hub, event)
    return participant


# Participants


@router.get("/participants", response_model=list[ParticipantRead])
def list_participants(
    db: DbSession,
    _user: AuthUser,
    event_id: Annotated[str | None, Query(alias="eventId")] = None,
) -> list[LeisureParticipant]:
    query = db.query(LeisureParticipant)
    if event_id:
        query = query.filter(LeisureParticipant.event_id == event_id)
    return query.order_by(LeisureParticipant.created_at.desc()).all()


@router.post(
    "/participants", response_model=ParticipantRead, status_code=status.HTTP_201_CREATED
)
def add_participant(
    body: ParticipantCreate, db: DbSession, _admin: AdminUser
) -> LeisureParticipant:
    _get_event(db, body.event_id)
    if db.get(Profile, body.profile_id) is None:
        raise NotFoundError("Profile not found")
    return _add_participant(db, body.event_id, body.profile_id, body.status)


@router.put("/participants/{participant_id}", response_model=ParticipantRead)
def set_participant_status(
    participant_id: str,
    body: ParticipantStatusUpdate,
    db: DbSession,
    _admin: AdminUser,
) -> LeisureParticipant:
    participant = db.get(LeisureParticipant, participant_id)
    if participant is None:
        raise NotFoundError("Participant not found")
    participant.status = body.status
    db.commit()
    db.refresh(participant)
    return participant


@router.delete("/participants/{participant_id}", response_model=MessageResponse)
def remove_participant(participant_id: str, db: DbSession, _admin: AdminUser) -> MessageResponse:
    participant = db.get(LeisureParticipant, participant_id)
    if participant is None:
        raise NotFoundError("Participant not found")
    db.delete(participant)
    db.commit()
    return MessageResponse(message="Participant removed successfully")


# Contributions


@router.get("/contributions", response_model=list[LeisureContributionRead])
def list_leisure_contributions(
    db: DbSession,
    _user: AuthUser,
    event_id: Annotated[str | None, Query(alias="eventId")] = None,
) -> list[LeisureContribution]:
    query = db.query(LeisureContribution)
    if event_id:
        query = query.filter(LeisureContribution.event_id == event_id)
    return query.order_by(LeisureContribution.created_at.desc()).all()


@router.post(
    "/contributions",
    response_model=LeisureContributionRead,
    status_code=status.HTTP_201_CREATED,
)
def add_leisure_contribution(
    body: LeisureContributionCreate, db: DbSession, _admin: AdminUser
) -> LeisureContribution:
    _get_event(db, body.event_id)
    if db.get(Profile, body.profile_id) is None:
        raise NotFoundError("Profile not found")
    contribution = LeisureContribution(**body.model_dump())
    db.add(contribution)
    db.commit()
    db.refresh(contribution)
    return contribution


@router.delete("/contributions/{contribution_id}", response_model=MessageResponse)
def delete_leisure_contribution(
    contribution_id: str, db: DbSession, _admin: AdminUser
) -> MessageResponse:
    contribution = db.get(LeisureContribution, contribution_id)
    if contribution is None:
        raise NotFoundError("Contribution not found")
    db.delete(contribution)
    db.commit()
    return MessageResponse(message="Contribution deleted successfully")
