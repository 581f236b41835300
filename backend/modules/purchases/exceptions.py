"""
Purchases module exceptions.
"""

from shared.exceptions import ValidationError


class UnknownCustomerError(ValidationError):
    """Raised by the purchase store when the buyer's email has no account."""

    def __init__(self, user_email: str):
        super().__init__(
            f"No account for purchase email: {user_email}",
            code="UNKNOWN_CUSTOMER",
            details={"user_email": user_email},
        )
