"""Attendance declarations: one per item type per day, and the CSV export."""

import csv
import io
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from app.core.errors import ValidationFailed
from app.models import Attendance

CSV_HEADERS = ["Date", "Heure", "Nom", "Prénom", "Année", "Hôpital", "Type", "Statut"]
STATUS_LABELS = {"confirmed": "Validé", "rejected": "Rejeté"}


def _day_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def declare(
    db: Session,
    profile_id: str,
    item_type: str,
    item_id: str | None = None,
    now: datetime | None = None,
) -> Attendance:
    """Record a pending declaration; a second one for the same type on the same day is refused."""
    now = now or datetime.now(UTC)
    start, end = _day_bounds(now)
    existing = (
        db.query(Attendance)
        .filter(
            Attendance.profile_id == profile_id,
            Attendance.item_type == item_type,
            Attendance.created_at >= start,
            Attendance.created_at < end,
        )
        .first()
    )
    if existing is not None:
        raise ValidationFailed(
            "Attendance already declared for this category today.",
            code="ALREADY_DECLARED",
        )
    row = Attendance(
        profile_id=profile_id,
        item_type=item_type,
        item_id=item_id,
        status="pending",
        created_at=now,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def filtered_query(
    db: Session,
    status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
):
    query = db.query(Attendance)
    if status:
        query = query.filter(Attendance.status == status)
    if start_date:
        query = query.filter(Attendance.created_at >= start_date)
    if end_date:
        query = query.filter(Attendance.created_at <= end_date)
    return query.order_by(Attendance.created_at.desc())


def to_csv(rows: Iterable[Attendance]) -> str:
    """Semicolon-separated export with a BOM so spreadsheet tools detect UTF-8."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for a in rows:
        profile = a.profile
        writer.writerow(
            [
                a.created_at.strftime("%d/%m/%Y"),
                a.created_at.strftime("%H:%M:%S"),
                profile.last_name if profile else "",
                profile.first_name if profile else "",
                (profile.year or "") if profile else "",
                (profile.hospital or "") if profile else "",
                a.item_type,
                STATUS_LABELS.get(a.status, "En attente"),
            ]
        )
    return "\ufeff" + buffer.getvalue()
