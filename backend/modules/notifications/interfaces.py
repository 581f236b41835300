"""
Notifications module interface.

The purchases module depends on INotificationService to send order
confirmations without knowing how mail is delivered.
"""

from decimal import Decimal
from typing import Protocol, Optional, Union, runtime_checkable


@runtime_checkable
class INotificationService(Protocol):
    """Interface for transactional email."""

    async def send_email(
        self,
        to_email: str,
        subject: str,
        message_html: str,
        to_name: Optional[str] = None,
        order_total: Optional[Union[Decimal, str]] = None,
    ) -> str:
        """
        Send an HTML email with a plain-text alternative.

        Returns:
            The Message-ID of the sent email

        Raises:
            EmailNotConfiguredError: If SMTP settings are missing
            DeliveryError: If the SMTP exchange fails
        """
        ...
