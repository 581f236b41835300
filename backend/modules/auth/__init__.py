"""
Authentication module.

Handles account registration, password and Google-identified login,
and password changes.

Public API:
- IAccountService: Interface for account operations
- IAccountStore / ICredentialHasher: Collaborator interfaces
- Account, AccountIdentity, AuthResult: Models
- dispatch: Action-tag dispatcher used by the users route
"""

from .interfaces import IAccountService, IAccountStore, ICredentialHasher
from .models import (
    Account,
    AccountIdentity,
    AuthFailure,
    AuthResult,
    IdentityMode,
    UserActionRequest,
    UserActionResponse,
)
from .exceptions import DuplicateAccountError, AccountNotFoundError
from .dispatcher import dispatch, status_for

__all__ = [
    # Interfaces
    "IAccountService",
    "IAccountStore",
    "ICredentialHasher",
    # Models
    "Account",
    "AccountIdentity",
    "AuthFailure",
    "AuthResult",
    "IdentityMode",
    "UserActionRequest",
    "UserActionResponse",
    # Exceptions
    "DuplicateAccountError",
    "AccountNotFoundError",
    # Dispatch
    "dispatch",
    "status_for",
]
