"""Schemas for file uploads."""

from app.schemas.common import CamelModel


class UploadedFile(CamelModel):
    url: str
    filename: str
    original_name: str
    size: int
    mimetype: str | None = None


class UploadedFiles(CamelModel):
    files: list[UploadedFile]
