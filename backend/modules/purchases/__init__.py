"""
Purchases module.

Records purchases and lists purchase history per user.

Public API:
- IPurchaseService: Interface for purchase operations
- IPurchaseStore: Persistence interface
- Purchase, PurchaseCreate, PurchaseResult, PurchaseHistory: Models
- UnknownCustomerError: Raised by the store for purchases without an account
"""

from .interfaces import IPurchaseService, IPurchaseStore
from .models import (
    Purchase,
    PurchaseCreate,
    PurchaseResult,
    PurchaseHistory,
    PurchaseListItem,
    PurchaseCreatedResponse,
    PurchaseListResponse,
)
from .exceptions import UnknownCustomerError

__all__ = [
    "IPurchaseService",
    "IPurchaseStore",
    "Purchase",
    "PurchaseCreate",
    "PurchaseResult",
    "PurchaseHistory",
    "PurchaseListItem",
    "PurchaseCreatedResponse",
    "PurchaseListResponse",
    "UnknownCustomerError",
]
