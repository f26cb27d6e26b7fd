"""Order intake persistence."""

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.models import Order, OrderItem
from app.repositories.base import SQLRepository


class OrderRepository(SQLRepository[Order]):
    model = Order
    entity = "order"

    def create_order(
        self,
        header: dict[str, Any],
        items: Sequence[dict[str, Any]],
        user_id: uuid.UUID | None = None,
    ) -> Order:
        """Insert the order and its items in one transaction."""
        order = Order(user_id=user_id, **header)
        order.items = [OrderItem(position=i, **item) for i, item in enumerate(items)]
        try:
            self.session.add(order)
            self.session.commit()
            self.session.refresh(order)
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return order
