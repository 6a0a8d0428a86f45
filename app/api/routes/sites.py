"""Internship sites and the residents assigned to them."""

from fastapi import APIRouter, status

from app.api.deps import AdminUser, AuthUser, DbSession
from app.core.errors import NotFoundError
from app.models import Profile, Site
from app.schemas.common import MessageResponse, partial_update
from app.schemas.site import AssignResidentRequest, SiteCreate, SiteRead, SiteUpdate

router = APIRouter()


def _get_site(db, site_id: str) -> Site:
    site = db.get(Site, site_id)
    if site is None:
        raise NotFoundError("Site not found")
    return site


@router.get("", response_model=list[SiteRead])
def list_sites(db: DbSession, _user: AuthUser) -> list[Site]:
    return db.query(Site).order_by(Site.created_at.desc()).all()


@router.get("/{site_id}", response_model=SiteRead)
def get_site(site_id: str, db: DbSession, _user: AuthUser) -> Site:
    return _get_site(db, site_id)


@router.post("", response_model=SiteRead, status_code=status.HTTP_201_CREATED)
def create_site(body: SiteCreate, db: DbSession, _admin: AdminUser) -> Site:
    site = Site(**body.model_dump())
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


@router.put("/{site_id}", response_model=SiteRead)
def update_site(site_id: str, body: SiteUpdate, db: DbSession, _admin: AdminUser) -> Site:
    site = _get_site(db, site_id)
    for field, value in partial_update(body).items():
        setattr(site, field, value)
    db.commit()
    db.refresh(site)
    return site


@router.delete("/{site_id}", response_model=MessageResponse)
def delete_site(site_id: str, db: DbSession, _admin: AdminUser) -> MessageResponse:
    """Assigned residents keep their profiles; their site_id is cleared."""
    site = _get_site(db, site_id)
    for resident in site.residents:
        resident.site_id = None
    db.delete(site)
    db.commit()
    return MessageResponse(message="Site deleted successfully")


@router.post("/{site_id}/residents", response_model=SiteRead)
def assign_resident(
    site_id: str, body: AssignResidentRequest, db: DbSession, _admin: AdminUser
) -> Site:
    """Assign a resident to this site; a resident belongs to at most one site."""
    site = _get_site(db, site_id)
    resident = db.get(Profile, body.resident_id)
    if resident is None:
        raise NotFoundError("Resident not found")
    resident.site_id = site.id
    db.commit()
    db.refresh(site)
    return site


@router.delete("/{site_id}/residents/{resident_id}", response_model=SiteRead)
def unassign_resident(
    site_id: str, resident_id: str, db: DbSession, _admin: AdminUser
) -> Site:
    site = _get_site(db, site_id)
    resident = db.get(Profile, resident_id)
    if resident is None or resident.site_id != site.id:
        raise NotFoundError("Resident not assigned to this site")
    resident.site_id = None
    db.commit()
    db.refresh(site)
    return site
