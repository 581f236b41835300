"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
pooled PostgreSQL access and providing shared utilities for data operations.
"""

from typing import TypeVar, Generic

from .database import Database


T = TypeVar("T")


# Width of the email columns in users and purchases
MAX_EMAIL_LENGTH = 100


def canonical_email(email: str) -> str:
    """Normalize an email for storage and lookup (case-insensitive)."""
    return email.strip().lower()


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Pooled cursor access via self._db.cursor()
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class PurchaseRepository(BaseRepository[Purchase]):
            def get_by_id(self, purchase_id: int) -> Optional[Purchase]:
                with self._db.cursor() as cur:
                    cur.execute("SELECT * FROM purchases WHERE id = %s", (purchase_id,))
                    row = cur.fetchone()
                return self._map_to_purchase(row) if row else None
    """

    def __init__(self, db: Database) -> None:
        """
        Initialize the repository with a database handle.

        Args:
            db: Pooled database used for every query.
        """
        self._db = db
