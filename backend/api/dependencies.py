"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations around the database
handle created at startup.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.database import Database
    from modules.auth.interfaces import IAccountService
    from modules.notifications.interfaces import INotificationService
    from modules.purchases.interfaces import IPurchaseService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._database: "Database | None" = None
        self._account_service: "IAccountService | None" = None
        self._notification_service: "INotificationService | None" = None
        self._purchase_service: "IPurchaseService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def database(self) -> "Database":
        """Get the database handle created by init_database()."""
        if self._database is None:
            from shared.database import get_database
            self._database = get_database()
        return self._database

    @property
    def accounts(self) -> "IAccountService":
        """Get the account service instance."""
        if self._account_service is None:
            from modules.auth.hasher import BcryptHasher
            from modules.auth.repository import AccountRepository
            from modules.auth.service import AccountService
            self._account_service = AccountService(
                store=AccountRepository(self.database),
                hasher=BcryptHasher(rounds=self.settings.bcrypt_rounds),
                passwordless_relink=self.settings.passwordless_relink,
            )
        return self._account_service

    @property
    def notifications(self) -> "INotificationService":
        """Get the notification service instance."""
        if self._notification_service is None:
            from modules.notifications.service import SmtpEmailService
            self._notification_service = SmtpEmailService(self.settings)
        return self._notification_service

    @property
    def purchases(self) -> "IPurchaseService":
        """Get the purchase service instance."""
        if self._purchase_service is None:
            from modules.purchases.repository import PurchaseRepository
            from modules.purchases.service import PurchaseService
            self._purchase_service = PurchaseService(
                store=PurchaseRepository(self.database),
                notifier=self.notifications if self.settings.purchase_emails_enabled else None,
            )
        return self._purchase_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._database = None
        self._account_service = None
        self._notification_service = None
        self._purchase_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_account_service() -> "IAccountService":
    """FastAPI dependency for account service."""
    return get_container().accounts


def get_purchase_service() -> "IPurchaseService":
    """FastAPI dependency for purchase service."""
    return get_container().purchases


def get_notification_service() -> "INotificationService":
    """FastAPI dependency for notification service."""
    return get_container().notifications


def get_db() -> "Database":
    """FastAPI dependency for the database handle."""
    return get_container().database
