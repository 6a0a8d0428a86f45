"""Shared fixtures for API tests: isolated SQLite database and a fresh app per test."""

import tempfile
import unittest
from functools import lru_cache
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import create_access_token, hash_password
from app.main import create_app
from app.models import Base, Profile, User

PASSWORD = "secret123"


@lru_cache
def password_hash() -> str:
    # bcrypt is slow on purpose; hash once for the whole run
    return hash_password(PASSWORD)


class ApiTestCase(unittest.TestCase):
    """Each test gets its own database file, upload dir, rate-limit table and realtime hub."""

    # Overrides applied on top of the environment settings
    settings_overrides: dict = {"AUTH_RATE_LIMIT_MAX_REQUESTS": 100}

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        tmp = Path(self._tmp.name)
        self.engine = create_engine(
            f"sqlite:///{tmp / 'test.db'}",
            connect_args={"check_same_thread": False},
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False)

        self.settings = get_settings().model_copy(
            update={"UPLOAD_DIR": str(tmp / "uploads"), **self.settings_overrides}
        )
        self.app = create_app(self.settings)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self) -> None:
        self.client.close()
        self.engine.dispose()
        self._tmp.cleanup()

    # Data helpers

    def create_member(
        self,
        email: str,
        first_name: str = "Ama",
        last_name: str = "Mensah",
        role: str = "resident",
        status: str = "approved",
        **fields,
    ) -> Profile:
        """Insert a User and its Profile directly; returns the detached profile."""
        with self.Session(expire_on_commit=False) as db:
            user = User(email=email, password_hash=password_hash())
            profile = Profile(
                user=user,
                first_name=first_name,
                last_name=last_name,
                email=email,
                role=role,
                status=status,
                **fields,
            )
            db.add_all([user, profile])
            db.commit()
            return profile

    def token_for(self, profile: Profile) -> str:
        return create_access_token(profile.user_id, profile.email)

    def headers_for(self, profile: Profile) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(profile)}"}

    def admin_headers(self) -> dict[str, str]:
        if not hasattr(self, "admin"):
            self.admin = self.create_member("admin@example.org", "Kofi", "Admin", role="admin")
        return self.headers_for(self.admin)

    def resident_headers(self, email: str = "resident@example.org") -> dict[str, str]:
        return self.headers_for(self.create_member(email))

    def count(self, model) -> int:
        with self.Session() as db:
            return db.query(model).count()
