"""
Purchase endpoints.

POST records a purchase (and emails the order confirmation); GET lists a
user's purchase history, most recent first.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from modules.purchases.interfaces import IPurchaseService
from modules.purchases.models import (
    PurchaseCreate,
    PurchaseCreatedResponse,
    PurchaseListItem,
    PurchaseListResponse,
)
from ..dependencies import get_purchase_service

router = APIRouter()


@router.post("", response_model=PurchaseCreatedResponse, response_model_exclude_none=True)
async def create_purchase(
    body: PurchaseCreate,
    response: Response,
    service: IPurchaseService = Depends(get_purchase_service),
) -> PurchaseCreatedResponse:
    """Record a purchase for an existing account."""
    result = await service.record_purchase(body.user_email, body.total, body.items)
    if not result.success:
        response.status_code = 400
    return PurchaseCreatedResponse(
        success=result.success,
        message=result.message,
        purchase_id=result.purchase.id if result.purchase else None,
    )


@router.get("", response_model=PurchaseListResponse, response_model_exclude_none=True)
async def list_purchases(
    response: Response,
    email: Optional[str] = Query(default=None, description="Buyer's account email"),
    service: IPurchaseService = Depends(get_purchase_service),
) -> PurchaseListResponse:
    """List the purchases of a user, most recent first."""
    history = await service.list_purchases(email or "")
    if not history.success:
        response.status_code = 400
        return PurchaseListResponse(success=False, message=history.message)

    return PurchaseListResponse(
        success=True,
        purchases=[
            PurchaseListItem(id=p.id, total=p.total, items=p.items, date=p.date)
            for p in history.purchases
        ],
    )
