"""
Account identity service.

Implements the account state machine: an email is either unknown,
a PASSWORD_ONLY account, or a GOOGLE_LINKED account (with or without a
stored hash). register, login and change_password decide which
transitions a request may perform.

bcrypt and the account store both block, so each operation runs in the
threadpool and the event loop stays free.
"""

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from shared.repository import MAX_EMAIL_LENGTH, canonical_email
from .exceptions import DuplicateAccountError
from .interfaces import IAccountService, IAccountStore, ICredentialHasher
from .models import MAX_NAME_LENGTH, Account, AuthFailure, AuthResult, IdentityMode

logger = logging.getLogger(__name__)


class AccountService(IAccountService):
    """
    Implementation of the account service.

    Args:
        store: Account persistence
        hasher: Password hashing primitive
        passwordless_relink: Flip existing PASSWORD_ONLY accounts to
            GOOGLE_LINKED on a successful passwordless login
    """

    def __init__(
        self,
        store: IAccountStore,
        hasher: ICredentialHasher,
        passwordless_relink: bool = True,
    ):
        self._store = store
        self._hasher = hasher
        self._passwordless_relink = passwordless_relink

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        return await run_in_threadpool(self._register, name, email, password)

    async def login(
        self,
        email: Optional[str],
        password: Optional[str] = None,
        name: Optional[str] = None,
    ) -> AuthResult:
        return await run_in_threadpool(self._login, email, password, name)

    async def change_password(
        self,
        email: Optional[str],
        current_password: Optional[str],
        new_password: Optional[str],
    ) -> AuthResult:
        return await run_in_threadpool(self._change_password, email, current_password, new_password)

    # -------------------------------------------------------------------------
    # Operations (run in the threadpool)
    # -------------------------------------------------------------------------

    def _register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        email = canonical_email(email or "")
        name = (name or "").strip()
        if not name or not email or not password:
            return AuthResult.fail(AuthFailure.VALIDATION, "Incomplete registration data.")
        refused = _check_lengths(email, name)
        if refused is not None:
            return refused

        existing = self._store.find_by_email(email)
        if existing is not None:
            if existing.google:
                return AuthResult.fail(AuthFailure.ALREADY_GOOGLE_LINKED)
            return AuthResult.fail(AuthFailure.ALREADY_REGISTERED)

        account = Account(
            email=email,
            name=name,
            password_hash=self._hasher.hash(password),
            identity_mode=IdentityMode.PASSWORD_ONLY,
        )
        try:
            self._store.insert(account)
        except DuplicateAccountError:
            # Lost a race with a concurrent registration
            return AuthResult.fail(AuthFailure.ALREADY_REGISTERED)

        logger.info("Registered account %s", account.email)
        return AuthResult.ok("User registered successfully.")

    def _login(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> AuthResult:
        email = canonical_email(email or "")
        if not email:
            return AuthResult.fail(AuthFailure.VALIDATION, "Incomplete login data.")

        if password:
            return self._password_login(email, password)
        return self._passwordless_login(email, (name or "").strip())

    def _change_password(
        self,
        email: Optional[str],
        current_password: Optional[str],
        new_password: Optional[str],
    ) -> AuthResult:
        email = canonical_email(email or "")
        if not email or not new_password:
            return AuthResult.fail(AuthFailure.VALIDATION, "Incomplete password change data.")

        account = self._store.find_by_email(email)
        if account is None:
            return AuthResult.fail(AuthFailure.NOT_FOUND)
        if account.google:
            return AuthResult.fail(AuthFailure.GOOGLE_MANAGED_ACCOUNT)

        if not current_password or not self._password_login(email, current_password).success:
            return AuthResult.fail(AuthFailure.INCORRECT_CURRENT_PASSWORD)

        self._store.update(
            email,
            password_hash=self._hasher.hash(new_password),
            identity_mode=IdentityMode.PASSWORD_ONLY,
        )
        logger.info("Changed password for %s", account.email)
        return AuthResult.ok("Password updated successfully.")

    # -------------------------------------------------------------------------
    # Login sub-protocols
    # -------------------------------------------------------------------------

    def _password_login(self, email: str, password: str) -> AuthResult:
        account = self._store.find_by_email(email)
        if account is None:
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS)
        if account.google:
            return AuthResult.fail(AuthFailure.GOOGLE_ONLY_ACCOUNT)
        if not account.password_hash:
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS)
        if not self._hasher.verify(password, account.password_hash):
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS)

        return AuthResult.ok(user=account.to_identity())

    def _passwordless_login(self, email: str, name: str) -> AuthResult:
        account = self._store.find_by_email(email)

        if account is None:
            if not name:
                return AuthResult.fail(AuthFailure.INSUFFICIENT_DATA)
            refused = _check_lengths(email, name)
            if refused is not None:
                return refused
            account = Account(
                email=email,
                name=name,
                password_hash=None,
                identity_mode=IdentityMode.GOOGLE_LINKED,
            )
            try:
                account.id = self._store.insert(account)
                logger.info("Created Google-linked account %s", account.email)
                return AuthResult.ok(user=account.to_identity())
            except DuplicateAccountError:
                # Created concurrently; continue with the stored account
                account = self._store.find_by_email(email)
                if account is None:
                    raise

        if not account.google and self._passwordless_relink:
            self._store.update(email, identity_mode=IdentityMode.GOOGLE_LINKED)
            account = account.model_copy(update={"identity_mode": IdentityMode.GOOGLE_LINKED})
            logger.info("Linked account %s to Google sign-in", account.email)

        return AuthResult.ok(user=account.to_identity())


def _check_lengths(email: str, name: str) -> Optional[AuthResult]:
    """Refuse values wider than the users table columns."""
    if len(email) > MAX_EMAIL_LENGTH:
        return AuthResult.fail(
            AuthFailure.VALIDATION,
            f"Email must be at most {MAX_EMAIL_LENGTH} characters.",
        )
    if len(name) > MAX_NAME_LENGTH:
        return AuthResult.fail(
            AuthFailure.VALIDATION,
            f"Name must be at most {MAX_NAME_LENGTH} characters.",
        )
    return None
