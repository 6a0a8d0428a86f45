"""Upload storage on local disk: UUID-renamed files served under /uploads."""

import io
import logging
import uuid
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from app.core.errors import AppError, NotFoundError, ValidationFailed
from app.schemas.storage import UploadedFile

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
AVATAR_SUBDIR = "avatars"
AVATAR_SIZE = (500, 500)
AVATAR_QUALITY = 80
MAX_FILES_PER_REQUEST = 10

ALLOWED_EXTENSIONS = frozenset(
    {
        ".jpeg", ".jpg", ".png", ".gif", ".pdf", ".doc", ".docx",
        ".ppt", ".pptx", ".xls", ".xlsx", ".mp4", ".avi", ".mov",
    }
)
AVATAR_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".webp"})
AVATAR_MIME_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)


def _extension(filename: str | None) -> str:
    return Path(filename or "").suffix.lower()


def _write(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)


async def _read_capped(upload: UploadFile, max_bytes: int) -> bytes:
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise AppError(
            f"File size must not exceed {max_bytes // (1024 * 1024)} MB.",
            status_code=413,
            code="FILE_TOO_LARGE",
        )
    return content


async def save_upload(upload: UploadFile, upload_dir: Path, max_bytes: int) -> UploadedFile:
    """Store one upload under a fresh UUID name and return its public URL."""
    ext = _extension(upload.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationFailed("Invalid file type", code="INVALID_FILE_TYPE")
    content = await _read_capped(upload, max_bytes)
    if not content:
        raise ValidationFailed("Uploaded file is empty", code="EMPTY_FILE")

    filename = f"{uuid.uuid4()}{ext}"
    await run_in_threadpool(_write, upload_dir / filename, content)
    logger.info("Stored upload %s (%s bytes)", filename, len(content))
    return UploadedFile(
        url=f"{PUBLIC_PREFIX}/{filename}",
        filename=filename,
        original_name=upload.filename or filename,
        size=len(content),
        mimetype=upload.content_type,
    )


async def save_avatar(upload: UploadFile, upload_dir: Path, max_bytes: int) -> str:
    """Validate an image, crop it to a 500x500 JPEG and return its public URL."""
    ext = _extension(upload.filename)
    if ext not in AVATAR_EXTENSIONS or upload.content_type not in AVATAR_MIME_TYPES:
        raise ValidationFailed(
            f"File type not allowed. Accepted formats: {', '.join(sorted(AVATAR_MIME_TYPES))}",
            code="INVALID_FILE_TYPE",
        )
    content = await _read_capped(upload, max_bytes)
    filename = f"avatar-{uuid.uuid4()}.jpg"
    await run_in_threadpool(_render_avatar, content, upload_dir / AVATAR_SUBDIR / filename)
    return f"{PUBLIC_PREFIX}/{AVATAR_SUBDIR}/{filename}"


def _render_avatar(content: bytes, target: Path) -> None:
    """Center-crop to a square, scale to AVATAR_SIZE and save as JPEG."""
    try:
        image = Image.open(io.BytesIO(content))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationFailed("Uploaded file is not a valid image", code="INVALID_IMAGE") from e

    width, height = image.size
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    image = image.crop((left, top, left + side, top + side)).resize(AVATAR_SIZE)
    if image.mode != "RGB":
        image = image.convert("RGB")

    target.parent.mkdir(parents=True, exist_ok=True)
    image.save(target, format="JPEG", quality=AVATAR_QUALITY, optimize=True)


def delete_upload(upload_dir: Path, filename: str) -> None:
    """Remove a stored upload by bare filename."""
    root = upload_dir.resolve()
    target = (upload_dir / filename).resolve()
    if target.parent != root:
        raise ValidationFailed("Invalid filename", code="INVALID_FILENAME")
    if not target.is_file():
        raise NotFoundError("File not found")
    target.unlink()
    logger.info("Deleted upload %s", filename)
