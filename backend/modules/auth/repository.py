"""
Account repository for database access.

Encapsulates all SQL for the `users` table. Emails are canonicalized
(stripped and lowercased) here, so every caller gets case-insensitive
lookups without having to remember it.
"""

from typing import Any, Optional

from psycopg2 import sql

from shared.exceptions import ConflictError
from shared.repository import BaseRepository, canonical_email
from .exceptions import AccountNotFoundError, DuplicateAccountError
from .models import Account, IdentityMode


# Account field -> users column
_UPDATABLE_COLUMNS = {
    "name": "name",
    "password_hash": "password_hash",
    "identity_mode": "google",
}


class AccountRepository(BaseRepository[Account]):
    """
    Repository for account data access.

    Note: This repository does NOT enforce identity rules.
    AccountService decides which transitions are allowed.
    """

    def find_by_email(self, email: str) -> Optional[Account]:
        with self._db.cursor() as cur:
            cur.execute(
                "SELECT id, email, name, password_hash, google, created_at "
                "FROM users WHERE email = %s",
                (canonical_email(email),),
            )
            row = cur.fetchone()

        if row is None:
            return None
        return self._map_to_account(row)

    def insert(self, account: Account) -> int:
        email = canonical_email(account.email)
        try:
            with self._db.cursor() as cur:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash, google) "
                    "VALUES (%s, %s, %s, %s) RETURNING id",
                    (
                        account.name,
                        email,
                        account.password_hash,
                        account.identity_mode == IdentityMode.GOOGLE_LINKED,
                    ),
                )
                row = cur.fetchone()
        except ConflictError as e:
            raise DuplicateAccountError(email) from e

        return row["id"]

    def update(self, email: str, /, **fields: Any) -> None:
        unknown = set(fields) - set(_UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update account fields: {sorted(unknown)}")
        if not fields:
            return

        assignments = []
        values: list[Any] = []
        for field, value in fields.items():
            if field == "identity_mode":
                value = IdentityMode(value) == IdentityMode.GOOGLE_LINKED
            assignments.append(
                sql.SQL("{} = %s").format(sql.Identifier(_UPDATABLE_COLUMNS[field]))
            )
            values.append(value)

        query = sql.SQL("UPDATE users SET {} WHERE email = %s").format(
            sql.SQL(", ").join(assignments)
        )
        key = canonical_email(email)
        with self._db.cursor() as cur:
            cur.execute(query, (*values, key))
            updated = cur.rowcount

        if updated == 0:
            raise AccountNotFoundError(key)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_account(self, row: dict[str, Any]) -> Account:
        return Account(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row.get("password_hash"),
            identity_mode=(
                IdentityMode.GOOGLE_LINKED if row.get("google") else IdentityMode.PASSWORD_ONLY
            ),
            created_at=row.get("created_at"),
        )
