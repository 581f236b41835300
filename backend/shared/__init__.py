"""
Shared infrastructure for the Storefront backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL connection pool
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import Database, init_database, get_database, close_database
from .exceptions import (
    StorefrontError,
    NotFoundError,
    ValidationError,
    ConflictError,
    StoreError,
    ExternalServiceError,
)
from .models import ActionResponse

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "init_database",
    "get_database",
    "close_database",
    "StorefrontError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "StoreError",
    "ExternalServiceError",
    "ActionResponse",
]
