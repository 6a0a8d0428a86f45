"""Approval workflow: status transitions and role changes on profiles.

pending -> approved, pending -> rejected, rejected -> approved are all allowed;
role (resident/admin) changes independently of status. Callers are expected
to have checked that the acting user is an admin.
"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models import Profile
from app.schemas.profile import BulkResult

logger = logging.getLogger(__name__)


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def list_pending(db: Session) -> list[Profile]:
    """Profiles waiting for a decision, newest first."""
    return (
        db.query(Profile)
        .filter(Profile.status == "pending")
        .order_by(Profile.created_at.desc())
        .all()
    )


def approve(db: Session, profile_id: str, grant_admin: bool = False) -> Profile:
    """
    Set status=approved, then (only if that committed) role=admin when requested.

    Approving an already-approved profile is a no-op, not an error.
    """
    profile = get_profile(db, profile_id)
    if profile.status != "approved":
        previous = profile.status
        profile.status = "approved"
        db.commit()
        logger.info("Profile %s approved (was %s)", profile.id, previous)
    if grant_admin and profile.role != "admin":
        profile.role = "admin"
        db.commit()
        logger.info("Profile %s promoted to admin at approval", profile.id)
    db.refresh(profile)
    return profile


def reject(db: Session, profile_id: str) -> Profile:
    profile = get_profile(db, profile_id)
    profile.status = "rejected"
    db.commit()
    db.refresh(profile)
    logger.info("Profile %s rejected", profile.id)
    return profile


def set_role(db: Session, profile_id: str, role: str) -> Profile:
    """Promote or demote; does not guard against removing the last admin."""
    profile = get_profile(db, profile_id)
    profile.role = role
    db.commit()
    db.refresh(profile)
    logger.info("Profile %s role set to %s", profile.id, role)
    return profile


def update_profile(db: Session, profile_id: str, changes: dict[str, Any]) -> Profile:
    """Admin edit of arbitrary profile fields, status and role included."""
    profile = get_profile(db, profile_id)
    for field, value in changes.items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    if "status" in changes or "role" in changes:
        logger.info(
            "Profile %s updated: status=%s role=%s", profile.id, profile.status, profile.role
        )
    return profile


def delete_profile(db: Session, profile_id: str) -> None:
    """Delete the underlying User; the profile and what it owns go with it. Irreversible."""
    profile = get_profile(db, profile_id)
    db.delete(profile.user)
    db.commit()
    logger.info("Profile %s and its user deleted", profile_id)


def _run_bulk(db: Session, ids: list[str], action, label: str) -> BulkResult:
    succeeded: list[str] = []
    failed: list[str] = []
    for profile_id in ids:
        try:
            action(profile_id)
        except Exception:
            # Earlier ids stay committed; keep going with the rest
            db.rollback()
            logger.exception("Bulk %s failed for profile %s", label, profile_id)
            failed.append(profile_id)
        else:
            succeeded.append(profile_id)
    logger.info(
        "Bulk %s: %s succeeded, %s failed", label, len(succeeded), len(failed)
    )
    return BulkResult(processed=len(ids), succeeded=succeeded, failed=failed)


def bulk_approve(db: Session, ids: list[str], grant_admin: bool = False) -> BulkResult:
    """Approve each id independently and sequentially."""
    return _run_bulk(db, ids, lambda pid: approve(db, pid, grant_admin), "approve")


def bulk_delete(db: Session, ids: list[str]) -> BulkResult:
    """Delete each id independently and sequentially."""
    return _run_bulk(db, ids, lambda pid: delete_profile(db, pid), "delete")
