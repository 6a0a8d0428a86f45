"""Educational library: subjects group modules, modules group files."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.api.deps import AdminUser, AuthUser, DbSession
from app.core.errors import NotFoundError
from app.models import File, Module, Subject
from app.schemas.common import MessageResponse, partial_update
from app.schemas.education import (
    FileCreate,
    FileRead,
    ModuleCreate,
    ModuleRead,
    ModuleUpdate,
    SubjectCreate,
    SubjectRead,
    SubjectUpdate,
)

subjects_router = APIRouter()
modules_router = APIRouter()
files_router = APIRouter()


def _get_or_404(db, model, obj_id: str, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def _apply(db, obj, changes: dict):
    for field, value in changes.items():
        setattr(obj, field, value)
    db.commit()
    db.refresh(obj)
    return obj


def _create(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


# Subjects


@subjects_router.get("", response_model=list[SubjectRead])
def list_subjects(
    db: DbSession,
    _user: AuthUser,
    year: int | None = None,
    category: str | None = None,
) -> list[Subject]:
    query = db.query(Subject)
    if year is not None:
        query = query.filter(Subject.year == year)
    if category:
        query = query.filter(Subject.category == category)
    return query.order_by(Subject.created_at.desc()).all()


@subjects_router.get("/{subject_id}", response_model=SubjectRead)
def get_subject(subject_id: str, db: DbSession, _user: AuthUser) -> Subject:
    return _get_or_404(db, Subject, subject_id, "Subject")


@subjects_router.post("", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
def create_subject(body: SubjectCreate, db: DbSession, _admin: AdminUser) -> Subject:
    return _create(db, Subject(**body.model_dump()))


@subjects_router.put("/{subject_id}", response_model=SubjectRead)
def update_subject(
    subject_id: str, body: SubjectUpdate, db: DbSession, _admin: AdminUser
) -> Subject:
    subject = _get_or_404(db, Subject, subject_id, "Subject")
    return _apply(db, subject, partial_update(body))


@subjects_router.delete("/{subject_id}", response_model=MessageResponse)
def delete_subject(subject_id: str, db: DbSession, _admin: AdminUser) -> MessageResponse:
    """Modules survive with subject_id cleared; files attached to the subject are removed."""
    subject = _get_or_404(db, Subject, subject_id, "Subject")
    for module in subject.modules:
        module.subject_id = None
    db.delete(subject)
    db.commit()
    return MessageResponse(message="Subject deleted successfully")


# Modules


@modules_router.get("", response_model=list[ModuleRead])
def list_modules(
    db: DbSession,
    _user: AuthUser,
    subject_id: Annotated[str | None, Query(alias="subjectId")] = None,
    category: str | None = None,
) -> list[Module]:
    query = db.query(Module)
    if subject_id:
        query = query.filter(Module.subject_id == subject_id)
    if category:
        query = query.filter(Module.category == category)
    return query.order_by(Module.created_at.desc()).all()


@modules_router.get("/{module_id}", response_model=ModuleRead)
def get_module(module_id: str, db: DbSession, _user: AuthUser) -> Module:
    return _get_or_404(db, Module, module_id, "Module")


@modules_router.post("", response_model=ModuleRead, status_code=status.HTTP_201_CREATED)
def create_module(body: ModuleCreate, db: DbSession, _admin: AdminUser) -> Module:
    if body.subject_id:
        _get_or_404(db, Subject, body.subject_id, "Subject")
    return _create(db, Module(**body.model_dump()))


@modules_router.put("/{module_id}", response_model=ModuleRead)
def update_module(
    module_id: str, body: ModuleUpdate, db: DbSession, _admin: AdminUser
) -> Module:
    module = _get_or_404(db, Module, module_id, "Module")
    changes = partial_update(body)
    if changes.get("subject_id"):
        _get_or_404(db, Subject, changes["subject_id"], "Subject")
    return _apply(db, module, changes)


@modules_router.delete("/{module_id}", response_model=MessageResponse)
def delete_module(module_id: str, db: DbSession, _admin: AdminUser) -> MessageResponse:
    module = _get_or_404(db, Module, module_id, "Module")
    db.delete(module)
    db.commit()
    return MessageResponse(message="Module deleted successfully")


# Files


@files_router.get("", response_model=list[FileRead])
def list_files(
    db: DbSession,
    _user: AuthUser,
    module_id: Annotated[str | None, Query(alias="moduleId")] = None,
    subject_id: Annotated[str | None, Query(alias="subjectId")] = None,
) -> list[File]:
    query = db.query(File)
    if module_id:
        query = query.filter(File.module_id == module_id)
    if subject_id:
        query = query.filter(File.subject_id == subject_id)
    return query.order_by(File.created_at.desc()).all()


@files_router.get("/{file_id}", response_model=FileRead)
def get_file(file_id: str, db: DbSession, _user: AuthUser) -> File:
    return _get_or_404(db, File, file_id, "File")


@files_router.post("", response_model=FileRead, status_code=status.HTTP_201_CREATED)
def create_file(body: FileCreate, db: DbSession, admin: AdminUser) -> File:
    """Register an already-uploaded file (see /storage/upload) in the library."""
    if body.module_id:
        _get_or_404(db, Module, body.module_id, "Module")
    if body.subject_id:
        _get_or_404(db, Subject, body.subject_id, "Subject")
    return _create(db, File(**body.model_dump(), uploaded_by=admin.id))


@files_router.delete("/{file_id}", response_model=MessageResponse)
def delete_file(file_id: str, db: DbSession, _admin: AdminUser) -> MessageResponse:
    """Removes the library entry only; the stored upload is deleted via /storage."""
    record = _get_or_404(db, File, file_id, "File")
    db.delete(record)
    db.commit()
    return MessageResponse(message="File deleted successfully")
