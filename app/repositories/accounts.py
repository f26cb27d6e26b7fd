"""Credential store: user accounts and the orders that belong to them."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from app.models import Order, Role, User
from app.repositories.base import SQLRepository
from app.repositories.partial import FieldUpdate


class AccountRepository(SQLRepository[User]):
    model = User
    entity = "user"

    def get_by_email(self, email: str) -> User | None:
        return self.find_one(email=email.strip().lower())

    def create_user(self, email: str, name: str, password_hash: str, role: Role = Role.USER) -> User:
        """Insert a user. A taken email surfaces as StorageError(CONFLICT, field='email')."""
        return self.create(
            {
                "email": email.strip().lower(),
                "name": name,
                "password_hash": password_hash,
                "role": role.value,
            }
        )

    def update_profile(self, user_id: Any, changes: dict[str, FieldUpdate[str]]) -> User:
        return self.update_partial(user_id, changes)

    def set_role(self, user_id: Any, role: Role) -> User:
        return self.replace(user_id, {"role": role.value})

    def list_orders(self, user_id: Any) -> list[Order]:
        """Orders placed by the user, newest first, with items loaded."""
        key = self._to_key(user_id)
        if key is None:
            return []
        stmt = (
            select(Order)
            .where(Order.user_id == key)
            .options(selectinload(Order.items))
            .order_by(Order.created_at.desc())
        )
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise self._fail(e) from e
