"""
Authentication module exceptions.

Account refusals (wrong password, duplicate registration, ...) are returned
as AuthResult values. These exceptions cover the store contract only, and
are translated by the service before they reach the API.
"""

from shared.exceptions import ConflictError, NotFoundError


class DuplicateAccountError(ConflictError):
    """Raised by the account store when the email is already taken."""

    def __init__(self, email: str):
        super().__init__(
            f"Account already exists: {email}",
            code="DUPLICATE_ACCOUNT",
            details={"email": email},
        )


class AccountNotFoundError(NotFoundError):
    """Raised by the account store when updating an account that doesn't exist."""

    def __init__(self, email: str):
        super().__init__(
            f"Account not found: {email}",
            code="ACCOUNT_NOT_FOUND",
            details={"email": email},
        )
