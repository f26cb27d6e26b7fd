"""Order intake: persist the order, then notify the shop chat in the background."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status

from app.api.deps import Identity, get_optional_identity, get_order_notifier, get_store
from app.repositories import Store, StorageError, StorageErrorKind
from app.schemas.orders import CreateOrderRequest, OrderCreatedResponse
from app.services.notifications import OrderNotifier

logger = logging.getLogger(__name__)

router = APIRouter()


def _linked_user_id(store: Store, identity: Identity | None) -> uuid.UUID | None:
    """Account id for the order, or None for guests and accounts that no longer exist."""
    if identity is None:
        return None
    try:
        return store.accounts.get(identity.user_id).id
    except StorageError as e:
        if e.kind is not StorageErrorKind.NOT_FOUND:
            raise
        logger.warning("Order token subject has no account; storing as guest order")
        return None


@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    body: CreateOrderRequest,
    background_tasks: BackgroundTasks,
    store: Annotated[Store, Depends(get_store)],
    notifier: Annotated[OrderNotifier, Depends(get_order_notifier)],
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
) -> OrderCreatedResponse:
    """
    Place an order. A Bearer token is optional; when present it links the order
    to the account. The chat notification runs after the response and never
    fails the request.
    """
    header = {
        "total": body.total,
        "customer_name": body.customer.name.strip(),
        "customer_email": str(body.customer.email),
        "customer_phone": body.customer.phone.strip(),
        "customer_telegram": body.customer.telegram.strip(),
        "customer_address": body.customer.address.strip(),
        "comment": body.comment.strip(),
    }
    items = [
        {
            "product_id": item.product_id,
            "title": item.title,
            "price": item.price,
            "quantity": item.quantity,
        }
        for item in body.items
    ]
    order = store.orders.create_order(header, items, user_id=_linked_user_id(store, identity))
    logger.info(
        "Order created",
        extra={"order_id": str(order.id), "items": len(items), "total": body.total},
    )
    background_tasks.add_task(notifier.notify_order, body, str(order.id))
    return OrderCreatedResponse(message="Order accepted.", id=order.id)
