"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with in-memory fakes and swapping
the store or hashing primitive without touching the identity logic.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import Account, AuthResult


@runtime_checkable
class IAccountStore(Protocol):
    """Persistent table of accounts keyed by (case-insensitive) email."""

    def find_by_email(self, email: str) -> Optional[Account]:
        """
        Look up an account.

        Returns:
            The Account if found, None otherwise
        """
        ...

    def insert(self, account: Account) -> int:
        """
        Create an account.

        Returns:
            The new row ID

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        ...

    def update(self, email: str, /, **fields: Any) -> None:
        """
        Update fields of an existing account.

        Raises:
            AccountNotFoundError: If no account has this email
        """
        ...


@runtime_checkable
class ICredentialHasher(Protocol):
    """One-way password hashing primitive."""

    def hash(self, plaintext: str) -> str:
        ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        ...


@runtime_checkable
class IAccountService(Protocol):
    """
    Interface for account identity operations.

    Each method returns an AuthResult; refusals (including missing or
    oversized fields) are never raised.
    Store failures propagate as StoreError.
    """

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Create a password-protected account."""
        ...

    async def login(
        self,
        email: Optional[str],
        password: Optional[str] = None,
        name: Optional[str] = None,
    ) -> AuthResult:
        """
        Authenticate an account.

        Without a password this is the Google-identified path: unknown
        emails are registered when a name is given.
        """
        ...

    async def change_password(
        self,
        email: Optional[str],
        current_password: Optional[str],
        new_password: Optional[str],
    ) -> AuthResult:
        """Replace the password of a password-protected account."""
        ...
