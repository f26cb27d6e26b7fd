"""Order notifications sent to a Telegram chat through the bot API. Best-effort only."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import httpx

from app.schemas.orders import CreateOrderRequest

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Characters with meaning in Telegram's legacy Markdown parse mode.
_MARKDOWN_SPECIAL = re.compile(r"([_*`\[])")


class NotificationError(Exception):
    """Raised when the bot API rejects or cannot receive a message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _escape(text: str) -> str:
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _money(minor_units: int) -> str:
    return f"{minor_units // 100}.{minor_units % 100:02d}"


def format_order_message(order: CreateOrderRequest, order_id: str | None = None) -> str:
    """Render the order as a Markdown chat message. User-supplied text is escaped."""
    customer = order.customer
    lines = ["*New order*" + (f" `{order_id}`" if order_id else ""), ""]
    lines.append(f"*Customer:* {_escape(customer.name)}")
    lines.append(f"*Email:* {_escape(customer.email)}")
    if customer.phone:
        lines.append(f"*Phone:* {_escape(customer.phone)}")
    if customer.telegram:
        lines.append(f"*Telegram:* {_escape(customer.telegram)}")
    if customer.address:
        lines.append(f"*Address:* {_escape(customer.address)}")

    lines.extend(["", "*Items:*"])
    for i, item in enumerate(order.items, start=1):
        label = item.title or f"Product {item.product_id}"
        lines.append(f"{i}. {_escape(label)}")
        lines.append(f"   Quantity: {item.quantity}")
        lines.append(f"   Price: {_money(item.price)}")
        lines.append(f"   Subtotal: {_money(item.price * item.quantity)}")

    lines.extend(["", f"*Total:* {_money(order.total)}"])
    if order.comment:
        lines.extend(["", "*Comment:*", _escape(order.comment)])
    return "\n".join(lines)


class OrderNotifier:
    """Posts order messages to the configured chat. Does nothing when the bot is not configured."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self.settings.telegram_configured

    def send(self, text: str) -> None:
        """Send one message. Raises NotificationError on transport or API failure."""
        token = self.settings.TELEGRAM_BOT_TOKEN.get_secret_value()
        url = f"{self.settings.TELEGRAM_API_BASE_URL}/bot{token}/sendMessage"
        payload = {
            "chat_id": self.settings.TELEGRAM_CHAT_ID,
            "text": text,
            "parse_mode": "Markdown",
            "disable_web_page_preview": True,
        }
        timeout = httpx.Timeout(self.settings.TELEGRAM_REQUEST_TIMEOUT_SEC)
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                resp = client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise NotificationError("Telegram request timed out.") from e
        except httpx.HTTPError as e:
            raise NotificationError("Telegram is unreachable.") from e
        if resp.status_code != 200:
            try:
                detail = resp.json().get("description") or resp.text[:200]
            except ValueError:
                detail = resp.text[:200] if resp.text else "Unknown error"
            raise NotificationError(
                f"Telegram returned {resp.status_code}: {detail}", resp.status_code
            )

    def notify_order(self, order: CreateOrderRequest, order_id: str | None = None) -> bool:
        """
        Send the order message; never raises. Returns True when the message was delivered.
        Runs after the response has been sent (BackgroundTasks), so failures are only logged.
        """
        if not self.enabled:
            logger.warning(
                "Order notification skipped: Telegram is not configured",
                extra={"order_id": order_id},
            )
            return False
        try:
            self.send(format_order_message(order, order_id))
        except NotificationError as e:
            logger.error(
                "Order notification failed",
                extra={
                    "order_id": order_id,
                    "status_code": e.status_code,
                    "reason": e.message[:500],
                },
            )
            return False
        logger.info("Order notification sent", extra={"order_id": order_id})
        return True
