"""
Notifications module exceptions.

Delivery failures are reported to the caller of the email endpoint but
must never fail the operation that triggered the email (e.g. a purchase).
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class DeliveryError(ExternalServiceError):
    """Raised when an email cannot be handed to the SMTP server."""

    def __init__(self, message: str = "Failed to send email", smtp_error: Optional[str] = None):
        super().__init__(
            message,
            service="smtp",
            code="DELIVERY_FAILED",
            details={"smtp_error": smtp_error} if smtp_error else {},
        )


class EmailNotConfiguredError(DeliveryError):
    """Raised when required SMTP settings are missing."""

    def __init__(self, missing: list[str]):
        super().__init__("Server email configuration is incomplete")
        self.code = "EMAIL_NOT_CONFIGURED"
        self.missing = missing
        self.details["missing"] = missing
