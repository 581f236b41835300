"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ActionResponse(BaseModel):
    """
    Envelope returned by every Storefront endpoint.

    Modules extend it with their own payload fields (user, purchases, ...).
    """

    success: bool = Field(..., description="Whether the requested action succeeded")
    message: Optional[str] = Field(None, description="Human-readable outcome")

    model_config = {
        "populate_by_name": True,
    }
