"""Attendance declarations: one per type per day, admin validation and CSV export."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

from app.core.errors import ValidationFailed
from app.services import attendance
from support import ApiTestCase


class TestDeclareService(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.member = self.create_member("ama@example.org")
        self.db = self.Session()

    def tearDown(self) -> None:
        self.db.close()
        super().tearDown()

    def test_second_declaration_same_day_is_refused(self) -> None:
        morning = datetime(2026, 3, 2, 8, 0, tzinfo=UTC)
        attendance.declare(self.db, self.member.id, "staff", now=morning)
        with self.assertRaises(ValidationFailed) as ctx:
            attendance.declare(self.db, self.member.id, "staff", now=morning + timedelta(hours=9))
        self.assertEqual(ctx.exception.code, "ALREADY_DECLARED")

    def test_other_type_or_next_day_is_allowed(self) -> None:
        morning = datetime(2026, 3, 2, 8, 0, tzinfo=UTC)
        attendance.declare(self.db, self.member.id, "staff", now=morning)
        attendance.declare(self.db, self.member.id, "epu", now=morning)
        row = attendance.declare(self.db, self.member.id, "staff", now=morning + timedelta(days=1))
        self.assertEqual(row.status, "pending")


class TestCsvExport(unittest.TestCase):
    def test_semicolon_separated_with_bom_and_french_labels(self) -> None:
        row = SimpleNamespace(
            created_at=datetime(2026, 3, 2, 8, 5, 9),
            item_type="stage",
            status="confirmed",
            profile=SimpleNamespace(
                first_name="Ama", last_name="Mensah", year="DES 2", hospital=None
            ),
        )
        lines = attendance.to_csv([row]).splitlines()
        self.assertTrue(lines[0].startswith("\ufeffDate;Heure;Nom;"))
        self.assertEqual(lines[1], "02/03/2026;08:05:09;Mensah;Ama;DES 2;;stage;Validé")

    def test_pending_label(self) -> None:
        row = SimpleNamespace(
            created_at=datetime(2026, 3, 2), item_type="diu", status="pending", profile=None
        )
        self.assertTrue(attendance.to_csv([row]).rstrip().endswith("diu;En attente"))


class TestAttendanceApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_h = self.admin_headers()
        self.member = self.create_member("ama@example.org")
        self.member_h = self.headers_for(self.member)

    def _declare(self, item_type: str = "staff"):
        return self.client.post(
            "/api/attendance", json={"itemType": item_type}, headers=self.member_h
        )

    def test_declare_twice_today(self) -> None:
        self.assertEqual(self._declare().status_code, 201)
        response = self._declare()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "ALREADY_DECLARED")
        self.assertEqual(len(self.client.get("/api/attendance/me", headers=self.member_h).json()), 1)

    def test_unknown_item_type(self) -> None:
        self.assertEqual(self._declare("lecture").status_code, 400)

    def test_admin_validates_and_filters(self) -> None:
        row_id = self._declare().json()["id"]
        pending = self.client.get("/api/attendance/pending", headers=self.admin_h).json()
        self.assertEqual([r["id"] for r in pending], [row_id])
        response = self.client.patch(
            f"/api/attendance/{row_id}/validate", json={"status": "confirmed"}, headers=self.admin_h
        )
        self.assertEqual(response.json()["status"], "confirmed")
        confirmed = self.client.get(
            "/api/attendance/all?status=confirmed", headers=self.admin_h
        ).json()
        self.assertEqual(len(confirmed), 1)
        self.assertEqual(self.client.get("/api/attendance/pending", headers=self.admin_h).json(), [])

    def test_date_range_includes_end_day(self) -> None:
        self._declare()
        today = datetime.now(UTC).date().isoformat()
        rows = self.client.get(
            f"/api/attendance/all?startDate={today}&endDate={today}", headers=self.admin_h
        ).json()
        self.assertEqual(len(rows), 1)
        tomorrow = (datetime.now(UTC).date() + timedelta(days=1)).isoformat()
        rows = self.client.get(
            f"/api/attendance/all?startDate={tomorrow}", headers=self.admin_h
        ).json()
        self.assertEqual(rows, [])

    def test_export_is_csv_download(self) -> None:
        self._declare()
        response = self.client.get("/api/attendance/export", headers=self.admin_h)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("text/csv"))
        self.assertIn("attachment;", response.headers["content-disposition"])
        self.assertIn("Mensah;Ama", response.text)

    def test_resident_cannot_validate_or_export(self) -> None:
        row_id = self._declare().json()["id"]
        response = self.client.patch(
            f"/api/attendance/{row_id}/validate", json={"status": "confirmed"}, headers=self.member_h
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            self.client.get("/api/attendance/export", headers=self.member_h).status_code, 403
        )
        mine = self.client.get("/api/attendance/me", headers=self.member_h).json()
        self.assertEqual(mine[0]["status"], "pending")

    def test_resident_may_withdraw_own_pending_declaration(self) -> None:
        row_id = self._declare().json()["id"]
        response = self.client.delete(f"/api/attendance/{row_id}", headers=self.member_h)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/attendance/me", headers=self.member_h).json(), [])
