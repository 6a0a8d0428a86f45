"""ORM models for the educational library: subjects, modules (courses) and files."""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    year = Column(Integer, nullable=True, index=True)
    category = Column(String(100), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    modules = relationship("Module", back_populates="subject")
    files = relationship("File", back_populates="subject", cascade="all, delete-orphan")


class Module(Base):
    __tablename__ = "modules"

    id = Column(String(36), primary_key=True, default=new_id)
    subject_id = Column(
        String(36), ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False, index=True)
    year = Column(String(20), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    subject = relationship("Subject", back_populates="modules")
    files = relationship("File", back_populates="module", cascade="all, delete-orphan")


class File(Base):
    """Library entry pointing at an uploaded document (url is relative, e.g. /uploads/<uuid>.pdf)."""

    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=new_id)
    module_id = Column(
        String(36), ForeignKey("modules.id", ondelete="CASCADE"), nullable=True, index=True
    )
    subject_id = Column(
        String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(100), nullable=True)
    url = Column(String(1024), nullable=False)
    size = Column(BigInteger, nullable=True)
    uploaded_by = Column(
        String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    module = relationship("Module", back_populates="files")
    subject = relationship("Subject", back_populates="files")
    uploader = relationship("Profile")
