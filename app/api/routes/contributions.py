"""Monthly contribution ledger. Residents only ever see their own rows."""

from fastapi import APIRouter, BackgroundTasks, status

from app.api.deps import AdminUser, AuthUser, DbSession, Hub
from app.core.errors import NotFoundError
from app.models import Contribution, Profile
from app.realtime import CONTRIBUTION_UPDATED
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse, partial_update
from app.schemas.contribution import (
    ContributionCreate,
    ContributionRead,
    ContributionStatusUpdate,
    ContributionUpdate,
)

router = APIRouter()


def _get_visible(db, contribution_id: str, user: CurrentUser) -> Contribution:
    contribution = db.get(Contribution, contribution_id)
    # A resident asking for someone else's row gets the same 404 as a missing one
    if contribution is None or (not user.is_admin and contribution.profile_id != user.id):
        raise NotFoundError("Contribution not found")
    return contribution


def _notify(background: BackgroundTasks, hub, contribution: Contribution) -> None:
    payload = ContributionRead.model_validate(contribution).model_dump(mode="json", by_alias=True)
    background.add_task(hub.broadcast, CONTRIBUTION_UPDATED, payload)


@router.get("", response_model=list[ContributionRead])
def list_contributions(db: DbSession, user: AuthUser) -> list[Contribution]:
    query = db.query(Contribution)
    if not user.is_admin:
        query = query.filter(Contribution.profile_id == user.id)
    return query.order_by(Contribution.created_at.desc()).all()


@router.get("/{contribution_id}", response_model=ContributionRead)
def get_contribution(contribution_id: str, db: DbSession, user: AuthUser) -> Contribution:
    return _get_visible(db, contribution_id, user)


@router.post("", response_model=ContributionRead, status_code=status.HTTP_201_CREATED)
def create_contribution(
    body: ContributionCreate,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Contribution:
    if db.get(Profile, body.profile_id) is None:
        raise NotFoundError("Profile not found")
    contribution = Contribution(**body.model_dump())
    db.add(contribution)
    db.commit()
    db.refresh(contribution)
    _notify(background, hub, contribution)
    return contribution


@router.put("/{contribution_id}", response_model=ContributionRead)
def update_contribution(
    contribution_id: str,
    body: ContributionUpdate,
    db: DbSession,
    admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Contribution:
    contribution = _get_visible(db, contribution_id, admin)
    changes = partial_update(body)
    if changes.get("profile_id") and db.get(Profile, changes["profile_id"]) is None:
        raise NotFoundError("Profile not found")
    for field, value in changes.items():
        setattr(contribution, field, value)
    db.commit()
    db.refresh(contribution)
    _notify(background, hub, contribution)
    return contribution


@router.patch("/{contribution_id}/status", response_model=ContributionRead)
def set_contribution_status(
    contribution_id: str,
    body: ContributionStatusUpdate,
    db: DbSession,
    admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Contribution:
    contribution = _get_visible(db, contribution_id, admin)
    contribution.status = body.status
    db.commit()
    db.refresh(contribution)
    _notify(background, hub, contribution)
    return contribution


@router.delete("/{contribution_id}", response_model=MessageResponse)
def delete_contribution(
    contribution_id: str,
    db: DbSession,
    admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> MessageResponse:
    contribution = _get_visible(db, contribution_id, admin)
    db.delete(contribution)
    db.commit()
    background.add_task(
        hub.broadcast, CONTRIBUTION_UPDATED, {"id": contribution_id, "deleted": True}
    )
    return MessageResponse(message="Contribution deleted successfully")
