"""
Purchase service implementation.

Records purchases and serves a user's purchase history. After a purchase
is stored, an order confirmation is emailed to the buyer when a notifier
is configured; delivery problems are logged and never undo the purchase.
"""

import html
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from fastapi.concurrency import run_in_threadpool

from modules.notifications.exceptions import DeliveryError
from modules.notifications.interfaces import INotificationService
from shared.repository import MAX_EMAIL_LENGTH, canonical_email

from .exceptions import UnknownCustomerError
from .interfaces import IPurchaseService, IPurchaseStore
from .models import Purchase, PurchaseHistory, PurchaseResult

logger = logging.getLogger(__name__)

# Largest value of purchases.total, NUMERIC(10, 2)
MAX_TOTAL = Decimal("99999999.99")


class PurchaseService(IPurchaseService):
    """
    Implementation of the purchase service.

    Args:
        store: Purchase persistence
        notifier: Email sender for order confirmations, or None to skip them
    """

    def __init__(
        self,
        store: IPurchaseStore,
        notifier: Optional[INotificationService] = None,
    ):
        self._store = store
        self._notifier = notifier

    async def record_purchase(
        self,
        user_email: str,
        total: Optional[Decimal],
        items: Optional[list[Any]],
    ) -> PurchaseResult:
        user_email = canonical_email(user_email or "")
        if not user_email or not total or items is None:
            return PurchaseResult(success=False, message="Incomplete purchase data.")
        if total < 0:
            return PurchaseResult(success=False, message="Purchase total must be positive.")
        if total > MAX_TOTAL:
            return PurchaseResult(success=False, message="Purchase total is too large.")
        if len(user_email) > MAX_EMAIL_LENGTH:
            # Wider than any stored account email
            return PurchaseResult(success=False, message="No account found for this email.")

        try:
            purchase = await run_in_threadpool(self._store.insert, user_email, total, items)
        except UnknownCustomerError:
            return PurchaseResult(success=False, message="No account found for this email.")

        logger.info("Recorded purchase %s for %s (total %s)", purchase.id, purchase.user_email, purchase.total)
        await self._send_confirmation(purchase)
        return PurchaseResult(success=True, message="Purchase saved successfully!", purchase=purchase)

    async def list_purchases(self, user_email: str) -> PurchaseHistory:
        user_email = canonical_email(user_email or "")
        if not user_email:
            return PurchaseHistory(success=False, message="User email not provided.")

        purchases = await run_in_threadpool(self._store.list_for_user, user_email)
        return PurchaseHistory(success=True, purchases=purchases)

    async def _send_confirmation(self, purchase: Purchase) -> None:
        if self._notifier is None:
            return

        try:
            await self._notifier.send_email(
                to_email=purchase.user_email,
                subject=f"Order #{purchase.id} confirmed",
                message_html=render_order_html(purchase),
                order_total=purchase.total,
            )
        except DeliveryError as e:
            logger.warning(
                "Order confirmation for purchase %s not sent: %s",
                purchase.id,
                e.message,
            )
        except Exception:
            # The purchase is already committed; the request must still succeed
            logger.exception("Order confirmation for purchase %s failed unexpectedly", purchase.id)


def render_order_html(purchase: Purchase) -> str:
    """Plain order summary for the confirmation email."""
    rows = "".join(
        f"<li>{html.escape(_describe_item(item))}</li>" for item in purchase.items
    )
    return (
        f"<h2>Order #{purchase.id}</h2>"
        f"<p>Thank you for your purchase!</p>"
        f"<ul>{rows}</ul>"
        f"<p><strong>Total: {purchase.total:.2f}</strong></p>"
    )


def _describe_item(item: Any) -> str:
    if not isinstance(item, dict):
        return str(item)

    name = item.get("name") or item.get("title") or item.get("id") or "Item"
    quantity = item.get("quantity") or item.get("qty")
    price = item.get("price")
    description = f"{quantity} x {name}" if quantity else str(name)
    if price is not None:
        try:
            description += f" ({Decimal(str(price)):.2f})"
        except InvalidOperation:
            description += f" ({price})"
    return description
