"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory stores standing in for PostgreSQL, a fast bcrypt hasher, and
notifiers that record or fail deliveries.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Optional

import pytest

from api.dependencies import reset_container
from modules.auth.exceptions import AccountNotFoundError, DuplicateAccountError
from modules.auth.hasher import BcryptHasher
from modules.auth.models import Account, IdentityMode
from modules.auth.service import AccountService
from modules.notifications.exceptions import DeliveryError
from modules.purchases.exceptions import UnknownCustomerError
from modules.purchases.models import Purchase
from modules.purchases.service import PurchaseService
from shared.repository import canonical_email


class InMemoryAccountStore:
    """IAccountStore backed by a dict, with the same uniqueness rules as the table."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self._next_id = 1

    def find_by_email(self, email: str) -> Optional[Account]:
        account = self.accounts.get(canonical_email(email))
        return account.model_copy() if account else None

    def insert(self, account: Account) -> int:
        key = canonical_email(account.email)
        if key in self.accounts:
            raise DuplicateAccountError(key)
        stored = account.model_copy(update={"id": self._next_id})
        self.accounts[key] = stored
        self._next_id += 1
        return stored.id

    def update(self, email: str, /, **fields: Any) -> None:
        key = canonical_email(email)
        if key not in self.accounts:
            raise AccountNotFoundError(key)
        self.accounts[key] = self.accounts[key].model_copy(update=fields)


class InMemoryPurchaseStore:
    """IPurchaseStore backed by a list; only known emails may buy."""

    def __init__(self, known_emails: Optional[set[str]] = None) -> None:
        self.known_emails = known_emails if known_emails is not None else {"ana@x.com"}
        self.purchases: list[Purchase] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def insert(self, user_email: str, total: Decimal, items: list[Any]) -> Purchase:
        email = canonical_email(user_email)
        if email not in self.known_emails:
            raise UnknownCustomerError(email)
        self._clock += timedelta(minutes=1)
        purchase = Purchase(
            id=len(self.purchases) + 1,
            user_email=email,
            total=total,
            items=items,
            date=self._clock,
        )
        self.purchases.append(purchase)
        return purchase

    def list_for_user(self, user_email: str) -> list[Purchase]:
        email = canonical_email(user_email)
        mine = [p for p in self.purchases if p.user_email == email]
        return sorted(mine, key=lambda p: p.date, reverse=True)


class RecordingNotifier:
    """INotificationService that remembers every email it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    async def send_email(
        self,
        to_email: str,
        subject: str,
        message_html: str,
        to_name: Optional[str] = None,
        order_total: Optional[Any] = None,
    ) -> str:
        self.sent.append(
            {
                "to_email": to_email,
                "subject": subject,
                "message_html": message_html,
                "to_name": to_name,
                "order_total": order_total,
            }
        )
        return f"<msg-{len(self.sent)}@test>"


class FailingNotifier:
    """INotificationService whose deliveries always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    async def send_email(self, to_email: str, subject: str, message_html: str, **kwargs: Any) -> str:
        self.attempts += 1
        raise DeliveryError(smtp_error="connection refused")


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def hasher() -> BcryptHasher:
    """bcrypt at the minimum cost, to keep tests fast."""
    return BcryptHasher(rounds=4)


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def account_service(account_store, hasher) -> AccountService:
    return AccountService(store=account_store, hasher=hasher)


@pytest.fixture
def password_account(account_store, hasher) -> Account:
    """A PASSWORD_ONLY account for ana@x.com with password 'secret1'."""
    account = Account(
        email="ana@x.com",
        name="Ana",
        password_hash=hasher.hash("secret1"),
        identity_mode=IdentityMode.PASSWORD_ONLY,
    )
    account_store.insert(account)
    return account


@pytest.fixture
def google_account(account_store) -> Account:
    """A GOOGLE_LINKED account without a password for bia@x.com."""
    account = Account(
        email="bia@x.com",
        name="Bia",
        password_hash=None,
        identity_mode=IdentityMode.GOOGLE_LINKED,
    )
    account_store.insert(account)
    return account


@pytest.fixture
def purchase_store() -> InMemoryPurchaseStore:
    return InMemoryPurchaseStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()


@pytest.fixture
def purchase_service(purchase_store, notifier) -> PurchaseService:
    return PurchaseService(store=purchase_store, notifier=notifier)
