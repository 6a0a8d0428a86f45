"""ORM models for leisure events, their participants and their dedicated funds."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class LeisureEvent(Base):
    """type: 'voyage', 'pique-nique' or 'fete'"""

    __tablename__ = "leisure_events"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(255), nullable=True)
    max_participants = Column(Integer, nullable=True)
    cost_per_person = Column(Numeric(12, 2), nullable=True)
    created_by = Column(
        String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    participants = relationship(
        "LeisureParticipant", back_populates="event", cascade="all, delete-orphan"
    )
    contributions = relationship(
        "LeisureContribution", back_populates="event", cascade="all, delete-orphan"
    )


class LeisureParticipant(Base):
    """status: 'pending', 'approved' or 'rejected'"""

    __tablename__ = "leisure_participants"
    __table_args__ = (
        UniqueConstraint("event_id", "profile_id", name="uq_leisure_participant_event_profile"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(
        String(36), ForeignKey("leisure_events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("LeisureEvent", back_populates="participants")
    profile = relationship("Profile", back_populates="leisure_participations")


class LeisureContribution(Base):
    """payment_status: 'pending' or 'paid'"""

    __tablename__ = "leisure_contributions"

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(
        String(36), ForeignKey("leisure_events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Numeric(12, 2), nullable=False)
    payment_status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    event = relationship("LeisureEvent", back_populates="contributions")
    profile = relationship("Profile", back_populates="leisure_contributions")
