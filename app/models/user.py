"""ORM models for credentials (User) and the authorization-bearing Profile."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow


class User(Base):
    """
    Authentication identity: email and password hash only.

    Deleting a User deletes its Profile (and everything the profile owns).
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Profile(Base):
    """
    User-facing identity and authorization subject; exactly one per User.

    role: 'resident' or 'admin'
    status: 'pending', 'approved' or 'rejected'
    """

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    year = Column(String(20), nullable=True)
    hospital = Column(String(255), nullable=True)
    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    role = Column(String(32), nullable=False, default="resident")
    status = Column(String(32), nullable=False, default="pending", index=True)
    avatar = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="profile")
    site = relationship("Site", back_populates="residents")
    contributions = relationship(
        "Contribution", back_populates="profile", cascade="all, delete-orphan"
    )
    attendance = relationship(
        "Attendance", back_populates="profile", cascade="all, delete-orphan"
    )
    leisure_participations = relationship(
        "LeisureParticipant", back_populates="profile", cascade="all, delete-orphan"
    )
    leisure_contributions = relationship(
        "LeisureContribution", back_populates="profile", cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
