"""
Notifications module data models.
"""

from decimal import Decimal
from typing import Optional, Union
from pydantic import BaseModel, Field


class EmailRequest(BaseModel):
    """
    Body of POST /api/send-email.

    Fields are optional here so that missing ones produce the endpoint's
    own 400 message instead of a schema error.
    """

    to_email: Optional[str] = None
    to_name: Optional[str] = None
    subject: Optional[str] = None
    message_html: Optional[str] = None
    order_total: Optional[Union[Decimal, str]] = None

    model_config = {"extra": "ignore"}

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("to_email", "subject", "message_html")
            if not getattr(self, name)
        ]


class EmailResponse(BaseModel):
    """Response of POST /api/send-email."""

    message: str
    message_id: Optional[str] = Field(None, alias="messageId")
    missing: Optional[list[str]] = None

    model_config = {"populate_by_name": True}
