"""ORM model for internship sites; residents are assigned through Profile.site_id."""

from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class Site(Base):
    __tablename__ = "sites"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(100), nullable=True)
    supervisor = Column(String(255), nullable=True)
    duration = Column(String(100), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    residents = relationship("Profile", back_populates="site")
