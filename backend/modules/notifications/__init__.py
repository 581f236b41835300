"""
Notifications module.

Transactional email over SMTP.

Public API:
- INotificationService: Interface for sending email
- EmailRequest / EmailResponse: Models for the send-email endpoint
- DeliveryError, EmailNotConfiguredError: Delivery failures
"""

from .interfaces import INotificationService
from .models import EmailRequest, EmailResponse
from .exceptions import DeliveryError, EmailNotConfiguredError

__all__ = [
    "INotificationService",
    "EmailRequest",
    "EmailResponse",
    "DeliveryError",
    "EmailNotConfiguredError",
]
