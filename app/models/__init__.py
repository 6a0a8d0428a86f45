"""SQLAlchemy ORM models."""

from app.models.attendance import Attendance
from app.models.base import Base
from app.models.contribution import Contribution
from app.models.education import File, Module, Subject
from app.models.leisure import LeisureContribution, LeisureEvent, LeisureParticipant
from app.models.message import Message
from app.models.setting import Setting
from app.models.site import Site
from app.models.user import Profile, User

__all__ = [
    "Attendance",
    "Base",
    "Contribution",
    "File",
    "LeisureContribution",
    "LeisureEvent",
    "LeisureParticipant",
    "Message",
    "Module",
    "Profile",
    "Setting",
    "Site",
    "Subject",
    "User",
]
