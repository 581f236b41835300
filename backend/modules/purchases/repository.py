"""
Purchase repository for database access.

Encapsulates all SQL for the `purchases` table. `items` is written as
JSONB; psycopg2 decodes it back to Python lists on read.
"""

from decimal import Decimal
from typing import Any

from psycopg2.extras import Json

from shared.exceptions import ConflictError
from shared.repository import BaseRepository, canonical_email
from .exceptions import UnknownCustomerError
from .models import Purchase

_COLUMNS = "id, user_email, total, items, date"


class PurchaseRepository(BaseRepository[Purchase]):
    """Repository for purchase data access."""

    def insert(self, user_email: str, total: Decimal, items: list[Any]) -> Purchase:
        email = canonical_email(user_email)
        try:
            with self._db.cursor() as cur:
                cur.execute(
                    "INSERT INTO purchases (user_email, total, items) "
                    f"VALUES (%s, %s, %s) RETURNING {_COLUMNS}",
                    (email, total, Json(items)),
                )
                row = cur.fetchone()
        except ConflictError as e:
            # Only the user_email foreign key can reject this insert
            raise UnknownCustomerError(email) from e

        return self._map_to_purchase(row)

    def list_for_user(self, user_email: str) -> list[Purchase]:
        with self._db.cursor() as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM purchases "
                "WHERE user_email = %s ORDER BY date DESC, id DESC",
                (canonical_email(user_email),),
            )
            rows = cur.fetchall()

        return [self._map_to_purchase(row) for row in rows]

    def _map_to_purchase(self, row: dict[str, Any]) -> Purchase:
        return Purchase(
            id=row["id"],
            user_email=row["user_email"],
            total=row["total"],
            items=row["items"] or [],
            date=row["date"],
        )
