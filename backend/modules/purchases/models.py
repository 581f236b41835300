"""
Purchases module data models.

A purchase is immutable once recorded. `items` is stored as JSONB and is
opaque to the backend: whatever the storefront cart sends is kept as is.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator

from shared.models import ActionResponse


class Purchase(BaseModel):
    """A recorded purchase."""

    id: int = Field(..., description="Purchase ID")
    user_email: str = Field(..., description="Buyer's account email")
    total: Decimal = Field(..., description="Order total")
    items: list[Any] = Field(default_factory=list, description="Cart items")
    date: datetime = Field(..., description="When the purchase was recorded")


class PurchaseCreate(BaseModel):
    """
    Body of POST /api/purchases.

    Accepts the flat form {userEmail, total, items} and the storefront's
    nested form {userEmail, purchaseData: {total, items}}.
    """

    user_email: Optional[str] = Field(None, alias="userEmail")
    total: Optional[Decimal] = None
    items: Optional[list[Any]] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def flatten_purchase_data(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("purchaseData"), dict):
            nested = data["purchaseData"]
            data = {**data}
            data.setdefault("total", nested.get("total"))
            data.setdefault("items", nested.get("items"))
        return data


class PurchaseResult(BaseModel):
    """Outcome of recording a purchase."""

    success: bool
    message: str
    purchase: Optional[Purchase] = None


class PurchaseHistory(BaseModel):
    """Outcome of listing a user's purchases."""

    success: bool
    message: Optional[str] = None
    purchases: list[Purchase] = Field(default_factory=list)


class PurchaseListItem(BaseModel):
    """One row of GET /api/purchases."""

    id: int
    total: Decimal
    items: list[Any]
    date: datetime


class PurchaseCreatedResponse(ActionResponse):
    """Response of POST /api/purchases."""

    purchase_id: Optional[int] = Field(None, alias="purchaseId")


class PurchaseListResponse(ActionResponse):
    """Response of GET /api/purchases."""

    purchases: Optional[list[PurchaseListItem]] = None
