"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api.routes import (
    attendance,
    auth,
    contributions,
    education,
    leisure,
    messages,
    profiles,
    search,
    settings,
    sites,
    storage,
)
from app.schemas.common import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    }
)
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(sites.router, prefix="/sites", tags=["sites"])
router.include_router(education.subjects_router, prefix="/subjects", tags=["education"])
router.include_router(education.modules_router, prefix="/modules", tags=["education"])
router.include_router(education.files_router, prefix="/files", tags=["education"])
router.include_router(contributions.router, prefix="/contributions", tags=["contributions"])
router.include_router(leisure.router, prefix="/leisure", tags=["leisure"])
router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(storage.router, prefix="/storage", tags=["storage"])
router.include_router(search.router, prefix="/search", tags=["search"])
