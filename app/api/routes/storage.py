"""File uploads to local disk, served back under /uploads."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.api.deps import AdminUser, AuthUser, get_app_settings, get_upload_dir
from app.core.config import Settings
from app.core.errors import ValidationFailed
from app.schemas.common import MessageResponse
from app.schemas.storage import UploadedFile, UploadedFiles
from app.services import storage

router = APIRouter()


@router.post("/upload", response_model=UploadedFile, status_code=status.HTTP_201_CREATED)
async def upload_file(
    _user: AuthUser,
    settings: Annotated[Settings, Depends(get_app_settings)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    file: UploadFile = File(...),
) -> UploadedFile:
    return await storage.save_upload(file, upload_dir, settings.MAX_UPLOAD_BYTES)


@router.post(
    "/upload-multiple", response_model=UploadedFiles, status_code=status.HTTP_201_CREATED
)
async def upload_files(
    _user: AuthUser,
    settings: Annotated[Settings, Depends(get_app_settings)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    files: list[UploadFile] = File(...),
) -> UploadedFiles:
    """Store up to MAX_FILES_PER_REQUEST files; the first invalid one aborts the rest."""
    if len(files) > storage.MAX_FILES_PER_REQUEST:
        raise ValidationFailed(
            f"At most {storage.MAX_FILES_PER_REQUEST} files per request",
            code="TOO_MANY_FILES",
        )
    saved = [
        await storage.save_upload(f, upload_dir, settings.MAX_UPLOAD_BYTES) for f in files
    ]
    return UploadedFiles(files=saved)


@router.delete("/{filename}", response_model=MessageResponse)
def delete_file(
    filename: str,
    _admin: AdminUser,
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
) -> MessageResponse:
    storage.delete_upload(upload_dir, filename)
    return MessageResponse(message="File deleted successfully")
