"""Profiles: self-service reads/edits and the admin approval workflow."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile

from app.api.deps import (
    AdminUser,
    AuthUser,
    DbSession,
    Hub,
    get_app_settings,
    get_upload_dir,
)
from app.core.config import Settings
from app.models import Profile
from app.realtime import PROFILE_UPDATED
from app.schemas.auth import ProfileStatus, Role
from app.schemas.common import MessageResponse, partial_update
from app.schemas.profile import (
    ApproveRequest,
    BulkApproveRequest,
    BulkDeleteRequest,
    BulkResult,
    ProfileAdminUpdate,
    ProfileRead,
    ProfileSelfUpdate,
    RoleUpdate,
)
from app.services import approval, storage

router = APIRouter()


def _notify(background: BackgroundTasks, hub, profile: Profile) -> None:
    payload = ProfileRead.model_validate(profile).model_dump(mode="json", by_alias=True)
    background.add_task(hub.broadcast, PROFILE_UPDATED, payload)


@router.get("", response_model=list[ProfileRead])
def list_profiles(
    db: DbSession,
    _user: AuthUser,
    role: Role | None = None,
    status: ProfileStatus | None = None,
) -> list[Profile]:
    """All profiles, newest first; optional role/status filters."""
    query = db.query(Profile)
    if role:
        query = query.filter(Profile.role == role)
    if status:
        query = query.filter(Profile.status == status)
    return query.order_by(Profile.created_at.desc()).all()


@router.get("/me", response_model=ProfileRead)
def get_me(db: DbSession, user: AuthUser) -> Profile:
    return approval.get_profile(db, user.id)


@router.put("/me", response_model=ProfileRead)
@router.patch("/me", response_model=ProfileRead, include_in_schema=False)
def update_me(body: ProfileSelfUpdate, db: DbSession, user: AuthUser) -> Profile:
    """Edit one's own contact fields; role and status are not editable here."""
    profile = approval.get_profile(db, user.id)
    for field, value in partial_update(body).items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile


@router.post("/me/avatar", response_model=ProfileRead)
async def upload_avatar(
    db: DbSession,
    user: AuthUser,
    settings: Annotated[Settings, Depends(get_app_settings)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    avatar: UploadFile = File(...),
) -> Profile:
    """Replace the caller's avatar with a 500x500 JPEG rendition of the uploaded image."""
    url = await storage.save_avatar(avatar, upload_dir, settings.MAX_AVATAR_BYTES)
    profile = approval.get_profile(db, user.id)
    profile.avatar = url
    db.commit()
    db.refresh(profile)
    return profile


@router.get("/pending", response_model=list[ProfileRead])
def list_pending(db: DbSession, _admin: AdminUser) -> list[Profile]:
    return approval.list_pending(db)


@router.post("/bulk/approve", response_model=BulkResult)
def bulk_approve(
    body: BulkApproveRequest,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> BulkResult:
    """Approve each id independently; failures do not undo earlier successes."""
    result = approval.bulk_approve(db, body.ids, grant_admin=body.grant_admin)
    if result.succeeded:
        background.add_task(hub.broadcast, PROFILE_UPDATED, {"ids": result.succeeded})
    return result


@router.post("/bulk/delete", response_model=BulkResult)
def bulk_delete(
    body: BulkDeleteRequest,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> BulkResult:
    """Delete each id independently; failures do not undo earlier successes."""
    result = approval.bulk_delete(db, body.ids)
    if result.succeeded:
        background.add_task(
            hub.broadcast, PROFILE_UPDATED, {"ids": result.succeeded, "deleted": True}
        )
    return result


@router.get("/{profile_id}", response_model=ProfileRead)
def get_profile(profile_id: str, db: DbSession, _user: AuthUser) -> Profile:
    return approval.get_profile(db, profile_id)


@router.put("/{profile_id}", response_model=ProfileRead)
def update_profile(
    profile_id: str,
    body: ProfileAdminUpdate,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Profile:
    """Admin edit, including role and status."""
    profile = approval.update_profile(db, profile_id, partial_update(body))
    _notify(background, hub, profile)
    return profile


@router.post("/{profile_id}/approve", response_model=ProfileRead)
def approve_profile(
    profile_id: str,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
    body: ApproveRequest | None = None,
) -> Profile:
    grant_admin = body.grant_admin if body else False
    profile = approval.approve(db, profile_id, grant_admin=grant_admin)
    _notify(background, hub, profile)
    return profile


@router.post("/{profile_id}/reject", response_model=ProfileRead)
def reject_profile(
    profile_id: str,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Profile:
    profile = approval.reject(db, profile_id)
    _notify(background, hub, profile)
    return profile


@router.put("/{profile_id}/role", response_model=ProfileRead)
def set_role(
    profile_id: str,
    body: RoleUpdate,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> Profile:
    profile = approval.set_role(db, profile_id, body.role)
    _notify(background, hub, profile)
    return profile


@router.delete("/{profile_id}", response_model=MessageResponse)
def delete_profile(
    profile_id: str,
    db: DbSession,
    _admin: AdminUser,
    background: BackgroundTasks,
    hub: Hub,
) -> MessageResponse:
    """Delete the profile's user account; cascades to everything the profile owns."""
    approval.delete_profile(db, profile_id)
    background.add_task(hub.broadcast, PROFILE_UPDATED, {"id": profile_id, "deleted": True})
    return MessageResponse(message="Profile deleted successfully")
