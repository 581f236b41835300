"""Tests for modules/auth/repository.py against a mocked Database."""

import pytest
from datetime import datetime
from unittest.mock import MagicMock

from modules.auth.exceptions import AccountNotFoundError, DuplicateAccountError
from modules.auth.models import Account, IdentityMode
from modules.auth.repository import AccountRepository
from shared.exceptions import ConflictError, StoreError


@pytest.fixture
def cursor():
    return MagicMock()


@pytest.fixture
def db(cursor):
    db = MagicMock()
    db.cursor.return_value.__enter__.return_value = cursor
    return db


@pytest.fixture
def repo(db):
    return AccountRepository(db)


class TestFindByEmail:
    def test_maps_row(self, repo, cursor):
        created = datetime(2024, 1, 1)
        cursor.fetchone.return_value = {
            "id": 7,
            "email": "ana@x.com",
            "name": "Ana",
            "password_hash": "$2b$hash",
            "google": False,
            "created_at": created,
        }

        account = repo.find_by_email("Ana@X.com")

        assert account.id == 7
        assert account.identity_mode == IdentityMode.PASSWORD_ONLY
        assert account.password_hash == "$2b$hash"
        assert account.created_at == created

    def test_lookup_uses_canonical_email(self, repo, cursor):
        cursor.fetchone.return_value = None
        repo.find_by_email("  Ana@X.COM ")

        _, params = cursor.execute.call_args.args
        assert params == ("ana@x.com",)

    def test_google_flag(self, repo, cursor):
        cursor.fetchone.return_value = {
            "id": 1,
            "email": "bia@x.com",
            "name": "Bia",
            "password_hash": None,
            "google": True,
            "created_at": None,
        }
        assert repo.find_by_email("bia@x.com").identity_mode == IdentityMode.GOOGLE_LINKED

    def test_not_found(self, repo, cursor):
        cursor.fetchone.return_value = None
        assert repo.find_by_email("nobody@x.com") is None

    def test_store_error_propagates(self, repo, db):
        db.cursor.side_effect = StoreError("Database unavailable")
        with pytest.raises(StoreError):
            repo.find_by_email("ana@x.com")


class TestInsert:
    def test_insert_returns_id(self, repo, cursor):
        cursor.fetchone.return_value = {"id": 42}
        account = Account(email="Ana@X.com", name="Ana", password_hash="h")

        assert repo.insert(account) == 42
        _, params = cursor.execute.call_args.args
        assert params == ("Ana", "ana@x.com", "h", False)

    def test_insert_google_account(self, repo, cursor):
        cursor.fetchone.return_value = {"id": 1}
        repo.insert(Account(email="bia@x.com", name="Bia", identity_mode=IdentityMode.GOOGLE_LINKED))

        _, params = cursor.execute.call_args.args
        assert params == ("Bia", "bia@x.com", None, True)

    def test_duplicate_email(self, repo, db):
        db.cursor.side_effect = ConflictError("Constraint violation", details={"pgcode": "23505"})

        with pytest.raises(DuplicateAccountError):
            repo.insert(Account(email="ana@x.com", name="Ana", password_hash="h"))


class TestUpdate:
    def test_update_maps_identity_mode_to_column(self, repo, cursor):
        cursor.rowcount = 1
        repo.update("Ana@x.com", identity_mode=IdentityMode.GOOGLE_LINKED)

        _, params = cursor.execute.call_args.args
        assert params == (True, "ana@x.com")

    def test_update_password_and_mode(self, repo, cursor):
        cursor.rowcount = 1
        repo.update("ana@x.com", password_hash="new", identity_mode=IdentityMode.PASSWORD_ONLY)

        _, params = cursor.execute.call_args.args
        assert params == ("new", False, "ana@x.com")

    def test_update_missing_account(self, repo, cursor):
        cursor.rowcount = 0
        with pytest.raises(AccountNotFoundError):
            repo.update("nobody@x.com", name="X")

    def test_update_rejects_unknown_fields(self, repo, cursor):
        with pytest.raises(ValueError):
            repo.update("ana@x.com", google=True)
        cursor.execute.assert_not_called()

    def test_update_cannot_change_email(self, repo, cursor):
        """The lookup email is positional, so email= is just an unknown field."""
        with pytest.raises(ValueError):
            repo.update("ana@x.com", email="other@x.com")
        cursor.execute.assert_not_called()

    def test_update_nothing(self, repo, cursor):
        repo.update("ana@x.com")
        cursor.execute.assert_not_called()
