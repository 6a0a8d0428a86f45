"""Initial schema: accounts, profiles, sites, education library, ledgers, messages.

Revision ID: 20260101000000
Revises:
Create Date: 2026-01-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20260101000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), nullable=False)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "sites",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=100), nullable=True),
        sa.Column("supervisor", sa.String(length=255), nullable=True),
        sa.Column("duration", sa.String(length=100), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sites_name"), "sites", ["name"], unique=False)
    op.create_index(op.f("ix_sites_created_at"), "sites", ["created_at"], unique=False)

    op.create_table(
        "profiles",
        _id(),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("year", sa.String(length=20), nullable=True),
        sa.Column("hospital", sa.String(length=255), nullable=True),
        sa.Column("site_id", sa.String(length=36), nullable=True),
        sa.Column("role", sa.String(length=32), server_default="resident", nullable=False),
        sa.Column("status", sa.String(length=32), server_default="pending", nullable=False),
        sa.Column("avatar", sa.String(length=1024), nullable=True),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_profiles_user_id"), "profiles", ["user_id"], unique=True)
    op.create_index(op.f("ix_profiles_site_id"), "profiles", ["site_id"], unique=False)
    op.create_index(op.f("ix_profiles_status"), "profiles", ["status"], unique=False)
    op.create_index(op.f("ix_profiles_created_at"), "profiles", ["created_at"], unique=False)

    op.create_table(
        "subjects",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_subjects_name"), "subjects", ["name"], unique=False)
    op.create_index(op.f("ix_subjects_year"), "subjects", ["year"], unique=False)
    op.create_index(op.f("ix_subjects_category"), "subjects", ["category"], unique=False)
    op.create_index(op.f("ix_subjects_created_at"), "subjects", ["created_at"], unique=False)

    op.create_table(
        "modules",
        _id(),
        sa.Column("subject_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("year", sa.String(length=20), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_modules_subject_id"), "modules", ["subject_id"], unique=False)
    op.create_index(op.f("ix_modules_name"), "modules", ["name"], unique=False)
    op.create_index(op.f("ix_modules_category"), "modules", ["category"], unique=False)
    op.create_index(op.f("ix_modules_created_at"), "modules", ["created_at"], unique=False)

    op.create_table(
        "files",
        _id(),
        sa.Column("module_id", sa.String(length=36), nullable=True),
        sa.Column("subject_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=100), nullable=True),
        sa.Column("url", sa.String(length=1024), nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=True),
        sa.Column("uploaded_by", sa.String(length=36), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_files_module_id"), "files", ["module_id"], unique=False)
    op.create_index(op.f("ix_files_subject_id"), "files", ["subject_id"], unique=False)
    op.create_index(op.f("ix_files_name"), "files", ["name"], unique=False)
    op.create_index(op.f("ix_files_created_at"), "files", ["created_at"], unique=False)

    op.create_table(
        "contributions",
        _id(),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("month", sa.String(length=20), nullable=True),
        sa.Column("year", sa.String(length=10), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
        sa.Column("payment_method", sa.String(length=50), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contributions_profile_id"), "contributions", ["profile_id"], unique=False)
    op.create_index(op.f("ix_contributions_status"), "contributions", ["status"], unique=False)
    op.create_index(op.f("ix_contributions_created_at"), "contributions", ["created_at"], unique=False)

    op.create_table(
        "leisure_events",
        _id(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("cost_per_person", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(["created_by"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_leisure_events_created_at"), "leisure_events", ["created_at"], unique=False)

    op.create_table(
        "leisure_participants",
        _id(),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["event_id"], ["leisure_events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "profile_id", name="uq_leisure_participant_event_profile"),
    )
    op.create_index(op.f("ix_leisure_participants_event_id"), "leisure_participants", ["event_id"], unique=False)
    op.create_index(op.f("ix_leisure_participants_profile_id"), "leisure_participants", ["profile_id"], unique=False)

    op.create_table(
        "leisure_contributions",
        _id(),
        sa.Column("event_id", sa.String(length=36), nullable=False),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("payment_status", sa.String(length=20), server_default="pending", nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["event_id"], ["leisure_events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_leisure_contributions_event_id"), "leisure_contributions", ["event_id"], unique=False)
    op.create_index(op.f("ix_leisure_contributions_profile_id"), "leisure_contributions", ["profile_id"], unique=False)
    op.create_index(op.f("ix_leisure_contributions_created_at"), "leisure_contributions", ["created_at"], unique=False)

    op.create_table(
        "attendance",
        _id(),
        sa.Column("profile_id", sa.String(length=36), nullable=False),
        sa.Column("item_type", sa.String(length=20), nullable=False),
        sa.Column("item_id", sa.String(length=36), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_attendance_profile_id"), "attendance", ["profile_id"], unique=False)
    op.create_index(op.f("ix_attendance_status"), "attendance", ["status"], unique=False)
    op.create_index(op.f("ix_attendance_created_at"), "attendance", ["created_at"], unique=False)

    op.create_table(
        "settings",
        _id(),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_settings_key"), "settings", ["key"], unique=True)

    op.create_table(
        "messages",
        _id(),
        sa.Column("sender", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("priority", sa.String(length=20), server_default="info", nullable=False),
        sa.Column("type", sa.String(length=20), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_messages_created_at"), "messages", ["created_at"], unique=False)


def downgrade() -> None:
    for table in (
        "messages",
        "settings",
        "attendance",
        "leisure_contributions",
        "leisure_participants",
        "leisure_events",
        "contributions",
        "files",
        "modules",
        "subjects",
        "profiles",
        "sites",
        "users",
    ):
        op.drop_table(table)
