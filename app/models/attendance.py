"""ORM model for attendance declarations (sign-in sheets)."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class Attendance(Base):
    """
    item_type: 'staff', 'epu', 'diu' or 'stage'
    status: 'pending', 'confirmed' or 'rejected'
    """

    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_type = Column(String(20), nullable=False)
    item_id = Column(String(36), nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    profile = relationship("Profile", back_populates="attendance")
