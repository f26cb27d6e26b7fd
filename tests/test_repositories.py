"""Tests for the repository layer: partial updates, full replace and storage error translation."""

import unittest
import uuid
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import Conflict, InternalError, NotFound, to_app_error
from app.models import Base, Role
from app.repositories import UNCHANGED, SetTo, StorageError, StorageErrorKind, Store
from app.repositories.errors import duplicate_field, translate_db_error
from app.repositories.partial import changed_values


class TestChangedValues(unittest.TestCase):
    def test_only_set_fields(self) -> None:
        self.assertEqual(
            changed_values({"name": SetTo(""), "email": UNCHANGED}),
            {"name": ""},
        )

    def test_empty(self) -> None:
        self.assertEqual(changed_values({}), {})

    def test_rejects_raw_values(self) -> None:
        with self.assertRaises(TypeError):
            changed_values({"name": "Alice"})


class TestTranslateDbError(unittest.TestCase):
    def _integrity(self, message: str, pgcode: str | None = None) -> IntegrityError:
        orig = Exception(message)
        orig.pgcode = pgcode
        return IntegrityError("INSERT ...", {}, orig)

    def test_postgres_unique_violation(self) -> None:
        err = self._integrity(
            'duplicate key value violates unique constraint "ix_users_email"\n'
            "DETAIL:  Key (email)=(a@example.com) already exists.",
            pgcode="23505",
        )
        storage_err = translate_db_error(err, "user")
        self.assertIs(storage_err.kind, StorageErrorKind.CONFLICT)
        self.assertEqual(storage_err.field, "email")

    def test_sqlite_unique_violation(self) -> None:
        err = self._integrity("UNIQUE constraint failed: products.slug")
        self.assertEqual(duplicate_field(err), "slug")
        self.assertIs(translate_db_error(err, "product").kind, StorageErrorKind.CONFLICT)

    def test_other_errors_are_internal(self) -> None:
        err = OperationalError("SELECT 1", {}, Exception("connection refused"))
        with self.assertLogs("app.repositories.errors", level="ERROR"):
            storage_err = translate_db_error(err, "user")
        self.assertIs(storage_err.kind, StorageErrorKind.INTERNAL)


class TestToAppError(unittest.TestCase):
    def test_mapping(self) -> None:
        not_found = to_app_error(StorageError(StorageErrorKind.NOT_FOUND, "product"))
        self.assertIsInstance(not_found, NotFound)
        self.assertEqual(not_found.message, "Product not found.")

        conflict = to_app_error(StorageError(StorageErrorKind.CONFLICT, "user", "email"))
        self.assertIsInstance(conflict, Conflict)
        self.assertEqual(conflict.status_code, 409)

        internal = to_app_error(StorageError(StorageErrorKind.INTERNAL, "user"))
        self.assertIsInstance(internal, InternalError)
        self.assertEqual(internal.message, "Internal server error.")


class SQLiteTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine)()
        self.store = Store.from_session(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()


class TestAccountPartialUpdate(SQLiteTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.store.accounts.create_user("Alice@Example.com", "Alice", "hash-a")
        self.bob = self.store.accounts.create_user("bob@example.com", "Bob", "hash-b")

    def test_email_is_stored_lowercase(self) -> None:
        self.assertEqual(self.alice.email, "alice@example.com")
        self.assertIsNotNone(self.store.accounts.get_by_email("ALICE@example.com"))

    def test_no_changes_is_a_read(self) -> None:
        user = self.store.accounts.update_profile(self.alice.id, {"name": UNCHANGED, "email": UNCHANGED})
        self.assertEqual((user.name, user.email), ("Alice", "alice@example.com"))

    def test_single_field(self) -> None:
        user = self.store.accounts.update_profile(self.alice.id, {"name": SetTo("Alicia"), "email": UNCHANGED})
        self.assertEqual((user.name, user.email), ("Alicia", "alice@example.com"))

    def test_unknown_id(self) -> None:
        for bad_id in (uuid.uuid4(), "not-a-uuid", None):
            with self.subTest(bad_id=bad_id):
                with self.assertRaises(StorageError) as ctx:
                    self.store.accounts.update_profile(bad_id, {"name": SetTo("X")})
                self.assertIs(ctx.exception.kind, StorageErrorKind.NOT_FOUND)

    def test_conflict_leaves_row_untouched(self) -> None:
        with self.assertRaises(StorageError) as ctx:
            self.store.accounts.update_profile(
                self.alice.id,
                {"name": SetTo("Renamed"), "email": SetTo("bob@example.com")},
            )
        self.assertIs(ctx.exception.kind, StorageErrorKind.CONFLICT)
        self.assertEqual(ctx.exception.field, "email")

        user = self.store.accounts.get(self.alice.id)
        self.assertEqual((user.name, user.email), ("Alice", "alice@example.com"))

    def test_duplicate_create_is_conflict(self) -> None:
        with self.assertRaises(StorageError) as ctx:
            self.store.accounts.create_user("BOB@example.com", "Bob 2", "hash")
        self.assertIs(ctx.exception.kind, StorageErrorKind.CONFLICT)

    def test_set_role(self) -> None:
        user = self.store.accounts.set_role(self.bob.id, Role.ADMIN)
        self.assertEqual(user.role, "admin")


class TestCatalogReplace(SQLiteTestCase):
    def test_replace_overwrites_every_field(self) -> None:
        product = self.store.products.create(
            {"slug": "tee", "title": "Tee", "price": 100, "images": ["/a.jpg"], "is_new": True}
        )
        replaced = self.store.products.replace(
            product.id,
            {
                "slug": "tee",
                "title": "Tee 2",
                "description": "",
                "price": 200,
                "currency": "RUB",
                "images": [],
                "is_new": False,
                "is_on_sale": False,
            },
        )
        self.assertEqual(replaced.id, product.id)
        self.assertEqual((replaced.title, replaced.price, replaced.images), ("Tee 2", 200, []))
        self.assertFalse(replaced.is_new)

    def test_delete_unknown(self) -> None:
        with self.assertRaises(StorageError) as ctx:
            self.store.gallery.delete(uuid.uuid4())
        self.assertIs(ctx.exception.kind, StorageErrorKind.NOT_FOUND)
        self.assertEqual(ctx.exception.entity, "gallery item")


class TestStoreWiring(unittest.TestCase):
    def test_all_repositories_share_the_session(self) -> None:
        session = MagicMock()
        store = Store.from_session(session)
        for repo in (store.accounts, store.products, store.gallery, store.pages, store.orders):
            self.assertIs(repo.session, session)
