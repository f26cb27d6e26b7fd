"""Tests for the create_user provisioning script."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import PasswordHasher
from app.models import Base
from app.repositories import AccountRepository
from app.scripts.create_user import build_parser, run

HASHER = PasswordHasher(rounds=4)


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine)()
        self.accounts = AccountRepository(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = run(self.accounts, HASHER, build_parser().parse_args(list(argv)))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("Owner@Example.com", "long-enough-pw", "Owner", "--role", "admin")
        self.assertEqual(code, 0)
        self.assertIn("owner@example.com", out)
        user = self.accounts.get_by_email("owner@example.com")
        self.assertEqual((user.name, user.role), ("Owner", "admin"))
        self.assertTrue(HASHER.verify(user.password_hash, "long-enough-pw"))

    def test_default_role_is_user(self) -> None:
        self.assertEqual(self._run("a@example.com", "long-enough-pw")[0], 0)
        self.assertEqual(self.accounts.get_by_email("a@example.com").role, "user")

    def test_existing_email_fails_without_promote(self) -> None:
        self._run("a@example.com", "long-enough-pw")
        code, _, err = self._run("a@example.com", "long-enough-pw", "--role", "admin")
        self.assertEqual(code, 1)
        self.assertIn("--promote", err)
        self.assertEqual(self.accounts.get_by_email("a@example.com").role, "user")

    def test_promote_existing(self) -> None:
        self._run("a@example.com", "long-enough-pw")
        code, _, _ = self._run("a@example.com", "ignored", "--role", "admin", "--promote")
        self.assertEqual(code, 0)
        self.assertEqual(self.accounts.get_by_email("a@example.com").role, "admin")

    def test_weak_password(self) -> None:
        code, _, err = self._run("a@example.com", "short")
        self.assertEqual(code, 1)
        self.assertIn("at least 8", err)
        self.assertIsNone(self.accounts.get_by_email("a@example.com"))

    def test_invalid_email(self) -> None:
        self.assertEqual(self._run("not-an-email", "long-enough-pw")[0], 1)
