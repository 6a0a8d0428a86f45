"""ORM model for the membership contribution ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class Contribution(Base):
    """
    One dues payment (or expected payment) by a profile.

    amount is exact (Numeric); it becomes a float only when serialized.
    status: 'pending', 'paid' or 'overdue'
    """

    __tablename__ = "contributions"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Numeric(12, 2), nullable=False)
    month = Column(String(20), nullable=True)
    year = Column(String(10), nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_method = Column(String(50), nullable=True)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    profile = relationship("Profile", back_populates="contributions")
