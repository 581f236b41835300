"""
Purchases module interfaces.
"""

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from .models import Purchase, PurchaseHistory, PurchaseResult


@runtime_checkable
class IPurchaseStore(Protocol):
    """Persistence for purchases."""

    def insert(self, user_email: str, total: Decimal, items: list[Any]) -> Purchase:
        """
        Record a purchase.

        Raises:
            UnknownCustomerError: If user_email has no account
        """
        ...

    def list_for_user(self, user_email: str) -> list[Purchase]:
        """A user's purchases, most recent first."""
        ...


@runtime_checkable
class IPurchaseService(Protocol):
    """Interface for purchase recording and history."""

    async def record_purchase(
        self,
        user_email: str,
        total: Decimal,
        items: list[Any],
    ) -> PurchaseResult:
        """
        Persist a purchase and send the order confirmation.

        A failed confirmation email never fails the purchase.
        """
        ...

    async def list_purchases(self, user_email: str) -> PurchaseHistory:
        """List a user's purchases, most recent first."""
        ...
