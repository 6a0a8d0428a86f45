"""Approval workflow: transitions, idempotence, bulk partial failure and signup atomicity."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from app.models import Contribution, Profile, User
from app.schemas.auth import SignupRequest
from app.services import accounts, approval
from app.services.accounts import count_users
from support import ApiTestCase


class TestApprovalService(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.pending = self.create_member("pending@example.org", status="pending")
        self.db = self.Session()

    def tearDown(self) -> None:
        self.db.close()
        super().tearDown()

    def test_approve_is_idempotent(self) -> None:
        first = approval.approve(self.db, self.pending.id)
        self.assertEqual(first.status, "approved")
        second = approval.approve(self.db, self.pending.id)
        self.assertEqual(second.status, "approved")
        self.assertEqual(second.role, "resident")

    def test_approve_with_grant_admin_sets_both(self) -> None:
        profile = approval.approve(self.db, self.pending.id, grant_admin=True)
        self.assertEqual((profile.status, profile.role), ("approved", "admin"))

    def test_rejected_profile_can_be_approved(self) -> None:
        approval.reject(self.db, self.pending.id)
        profile = approval.approve(self.db, self.pending.id)
        self.assertEqual(profile.status, "approved")

    def test_role_is_independent_of_status(self) -> None:
        profile = approval.set_role(self.db, self.pending.id, "admin")
        self.assertEqual((profile.status, profile.role), ("pending", "admin"))

    def test_list_pending_is_newest_first(self) -> None:
        newer = self.create_member("newer@example.org", status="pending")
        ids = [p.id for p in approval.list_pending(self.db)]
        self.assertEqual(ids, [newer.id, self.pending.id])

    def test_delete_profile_cascades_to_user_and_owned_rows(self) -> None:
        self.db.add(Contribution(profile_id=self.pending.id, amount=5000))
        self.db.commit()
        approval.delete_profile(self.db, self.pending.id)
        self.assertEqual(self.count(Profile), 0)
        self.assertEqual(self.count(User), 0)
        self.assertEqual(self.count(Contribution), 0)

    def test_bulk_approve_reports_partial_failure(self) -> None:
        other = self.create_member("other@example.org", status="pending")
        result = approval.bulk_approve(self.db, [self.pending.id, "missing-id", other.id])
        self.assertEqual(result.processed, 3)
        self.assertEqual(result.succeeded, [self.pending.id, other.id])
        self.assertEqual(result.failed, ["missing-id"])
        self.assertFalse(result.ok)
        # Earlier successes are not rolled back
        with self.Session() as db:
            self.assertEqual(db.get(Profile, self.pending.id).status, "approved")

    def test_bulk_delete_keeps_going_after_a_failure(self) -> None:
        other = self.create_member("other@example.org")
        result = approval.bulk_delete(self.db, ["missing-id", self.pending.id, other.id])
        self.assertEqual(result.failed, ["missing-id"])
        self.assertEqual(self.count(User), 0)


class TestBulkRollbackOnError(unittest.TestCase):
    def test_failed_item_rolls_back_session(self) -> None:
        db = MagicMock()
        db.get.return_value = None
        result = approval.bulk_approve(db, ["a", "b"])
        self.assertEqual(result.failed, ["a", "b"])
        self.assertEqual(db.rollback.call_count, 2)


class TestSignupAtomicity(ApiTestCase):
    def test_profile_failure_leaves_no_user(self) -> None:
        with self.Session() as db:
            before = count_users(db)
        # first_name is NOT NULL on profiles; bypass validation to violate it
        payload = SignupRequest.model_construct(
            email="broken@example.org",
            password="secret1",
            first_name=None,
            last_name="B",
            phone=None,
            year=None,
            hospital=None,
        )
        with self.Session() as db, self.assertRaises(IntegrityError):
            accounts.signup(db, payload)
        with self.Session() as db:
            self.assertEqual(count_users(db), before)
        self.assertEqual(self.count(Profile), 0)

    def test_concurrent_duplicate_signup_is_user_exists(self) -> None:
        self.create_member("race@example.org")
        payload = SignupRequest(
            email="race@example.org", password="secret1", first_name="A", last_name="B"
        )
        # The pre-insert lookup misses; the unique index catches the duplicate
        with self.Session() as db, patch.object(
            accounts, "find_user_by_email", side_effect=[None, MagicMock()]
        ), self.assertRaises(ConflictError) as ctx:
            accounts.signup(db, payload)
        self.assertEqual((ctx.exception.status_code, ctx.exception.code), (400, "USER_EXISTS"))
        self.assertEqual(self.count(User), 1)

    def test_successful_signup_creates_exactly_one_of_each(self) -> None:
        payload = SignupRequest(
            email="ok@example.org", password="secret1", first_name="A", last_name="B"
        )
        with self.Session() as db:
            user, profile = accounts.signup(db, payload)
            self.assertEqual(profile.user_id, user.id)
        self.assertEqual(self.count(User), 1)
        self.assertEqual(self.count(Profile), 1)


class TestEnsureAdmin(ApiTestCase):
    def test_creates_once_then_reports_existing(self) -> None:
        with self.Session() as db:
            profile, created = accounts.ensure_admin(db, "Boss@example.org", "secret1")
            self.assertTrue(created)
            self.assertEqual((profile.role, profile.status), ("admin", "approved"))
            _, created_again = accounts.ensure_admin(db, "boss@example.org", "secret1")
            self.assertFalse(created_again)
            self.assertEqual(accounts.seed_default_settings(db), 4)
