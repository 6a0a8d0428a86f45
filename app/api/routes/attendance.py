"""Attendance declarations and their validation by admins."""

from datetime import UTC, date, datetime, time, timedelta
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from app.api.deps import AdminUser, AuthUser, DbSession
from app.core.errors import AuthorizationError, NotFoundError
from app.models import Attendance
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceRead,
    AttendanceStatus,
    AttendanceValidate,
)
from app.schemas.common import MessageResponse
from app.services import attendance as attendance_service

router = APIRouter()


def _range(start_date: date | None, end_date: date | None) -> tuple[datetime | None, datetime | None]:
    # Both bounds are whole days; the end day is included
    start = datetime.combine(start_date, time.min, tzinfo=UTC) if start_date else None
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=UTC)
        - timedelta(microseconds=1)
        if end_date
        else None
    )
    return start, end


@router.post("", response_model=AttendanceRead, status_code=status.HTTP_201_CREATED)
def declare_attendance(body: AttendanceCreate, db: DbSession, user: AuthUser) -> Attendance:
    return attendance_service.declare(db, user.id, body.item_type, body.item_id)


@router.get("/me", response_model=list[AttendanceRead])
def my_attendance(db: DbSession, user: AuthUser) -> list[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.profile_id == user.id)
        .order_by(Attendance.created_at.desc())
        .all()
    )


@router.get("/pending", response_model=list[AttendanceRead])
def pending_attendance(db: DbSession, _admin: AdminUser) -> list[Attendance]:
    return attendance_service.filtered_query(db, status="pending").all()


@router.get("/all", response_model=list[AttendanceRead])
def all_attendance(
    db: DbSession,
    _admin: AdminUser,
    status: AttendanceStatus | None = None,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> list[Attendance]:
    start, end = _range(start_date, end_date)
    return attendance_service.filtered_query(db, status, start, end).all()


@router.get("/export")
def export_attendance(
    db: DbSession,
    _admin: AdminUser,
    status: AttendanceStatus | None = None,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> Response:
    """CSV download of the same rows /attendance/all would return."""
    start, end = _range(start_date, end_date)
    rows = attendance_service.filtered_query(db, status, start, end).all()
    filename = f"presences_{datetime.now(UTC):%Y-%m-%d}.csv"
    return Response(
        content=attendance_service.to_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{attendance_id}/validate", response_model=AttendanceRead)
def validate_attendance(
    attendance_id: str, body: AttendanceValidate, db: DbSession, _admin: AdminUser
) -> Attendance:
    row = db.get(Attendance, attendance_id)
    if row is None:
        raise NotFoundError("Attendance not found")
    row.status = body.status
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{attendance_id}", response_model=MessageResponse)
def delete_attendance(attendance_id: str, db: DbSession, user: AuthUser) -> MessageResponse:
    """Admins may delete any declaration; residents only their own pending ones."""
    row = db.get(Attendance, attendance_id)
    if row is None:
        raise NotFoundError("Attendance not found")
    if not user.is_admin and (row.profile_id != user.id or row.status != "pending"):
        raise AuthorizationError("Admin access required")
    db.delete(row)
    db.commit()
    return MessageResponse(message="Attendance deleted successfully")
