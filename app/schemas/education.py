"""Schemas for the educational library: subjects, modules and files."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, reject_null


class SubjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    # Accepts "1" as well as 1
    year: int | None = Field(default=None, ge=1, le=10)
    category: str | None = Field(default=None, max_length=100)


class SubjectUpdate(SubjectCreate):
    name: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v: object) -> object:
        return reject_null(v)


class ModuleCreate(CamelModel):
    subject_id: str | None = Field(default=None, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    year: str | None = Field(default=None, max_length=20)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)


class ModuleUpdate(ModuleCreate):
    name: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v: object) -> object:
        return reject_null(v)


class FileCreate(CamelModel):
    module_id: str | None = Field(default=None, max_length=36)
    subject_id: str | None = Field(default=None, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    # Relative paths such as /uploads/<uuid>.pdf are accepted
    url: str = Field(..., min_length=1, max_length=1024)
    size: int | None = Field(default=None, gt=0)


class FileRead(CamelModel):
    id: str
    module_id: str | None = None
    subject_id: str | None = None
    name: str
    type: str | None = None
    url: str
    size: int | None = None
    uploaded_by: str | None = None
    created_at: datetime


class ModuleRead(CamelModel):
    id: str
    subject_id: str | None = None
    name: str
    year: str | None = None
    description: str | None = None
    category: str | None = None
    created_at: datetime
    files: list[FileRead] = []


class SubjectRead(CamelModel):
    id: str
    name: str
    year: int | None = None
    category: str | None = None
    created_at: datetime
    modules: list[ModuleRead] = []
    files: list[FileRead] = []
