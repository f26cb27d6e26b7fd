"""Shared harness for API tests: in-memory SQLite behind the real app, with cheap hashing."""

import unittest
import uuid
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_order_notifier, get_password_hasher
from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import PasswordHasher
from app.main import app
from app.models import PAGE_SLUGS, Base, Page, Role
from app.repositories import Store
from app.services.tokens import TokenService

# Lowest bcrypt cost; the algorithm is the same, only faster.
FAST_HASHER = PasswordHasher(rounds=4)


class ApiTestCase(unittest.TestCase):
    """Fresh database per test; dependency overrides are removed in tearDown."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        with self.SessionLocal() as db:
            db.add_all(Page(slug=slug, title=slug.capitalize(), content="") for slug in PAGE_SLUGS)
            db.commit()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        self.notifier = MagicMock()
        self.notifier.notify_order.return_value = True
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_password_hasher] = lambda: FAST_HASHER
        app.dependency_overrides[get_order_notifier] = lambda: self.notifier
        self.client = TestClient(app)
        self.tokens = TokenService.from_settings(get_settings())

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    @contextmanager
    def store(self) -> Iterator[Store]:
        """Repositories on a separate session, for arranging and inspecting rows directly."""
        db = self.SessionLocal()
        try:
            yield Store.from_session(db)
        finally:
            db.close()

    def sign_up(
        self,
        email: str = "alice@example.com",
        password: str = "correct-horse",
        name: str = "Alice",
    ) -> dict:
        resp = self.client.post(
            "/api/auth/sign-up",
            json={"email": email, "password": password, "name": name},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    @staticmethod
    def bearer(access: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access}"}

    def admin_headers(self) -> dict[str, str]:
        """Access token with role 'admin' for an arbitrary subject; admin routes never load the user."""
        pair = self.tokens.issue(uuid.uuid4(), Role.ADMIN)
        return self.bearer(pair.access)

    def user_headers(self) -> dict[str, str]:
        pair = self.tokens.issue(uuid.uuid4(), Role.USER)
        return self.bearer(pair.access)
