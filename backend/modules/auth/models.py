"""
Authentication module data models.

These models define the account record, the identity exposed to API
callers, and the structured result every account operation returns.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import ActionResponse
from shared.repository import canonical_email


# Width of users.name
MAX_NAME_LENGTH = 100


class IdentityMode(str, Enum):
    """How an account authenticates."""

    PASSWORD_ONLY = "password_only"
    GOOGLE_LINKED = "google_linked"


class AuthFailure(str, Enum):
    """Reasons an account operation can be refused."""

    VALIDATION = "VALIDATION"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    ALREADY_GOOGLE_LINKED = "ALREADY_GOOGLE_LINKED"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    GOOGLE_ONLY_ACCOUNT = "GOOGLE_ONLY_ACCOUNT"
    NOT_FOUND = "NOT_FOUND"
    GOOGLE_MANAGED_ACCOUNT = "GOOGLE_MANAGED_ACCOUNT"
    INCORRECT_CURRENT_PASSWORD = "INCORRECT_CURRENT_PASSWORD"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"


FAILURE_MESSAGES: dict[AuthFailure, str] = {
    AuthFailure.VALIDATION: "Incomplete request data.",
    AuthFailure.ALREADY_REGISTERED: "This email is already registered.",
    AuthFailure.ALREADY_GOOGLE_LINKED: (
        'This email is linked to Google sign-in. Use "Sign in with Google" instead.'
    ),
    AuthFailure.INSUFFICIENT_DATA: "Insufficient login data.",
    # Same text for unknown email and wrong password
    AuthFailure.INVALID_CREDENTIALS: "Incorrect email or password.",
    AuthFailure.GOOGLE_ONLY_ACCOUNT: (
        'Use "Sign in with Google" or set a password on your account.'
    ),
    AuthFailure.NOT_FOUND: "User not found.",
    AuthFailure.GOOGLE_MANAGED_ACCOUNT: (
        "The password for this account is managed by Google."
    ),
    AuthFailure.INCORRECT_CURRENT_PASSWORD: "Current password is incorrect.",
    AuthFailure.UNKNOWN_ACTION: "Invalid action.",
}


class Account(BaseModel):
    """
    A stored account, keyed by canonical email.

    An account without a password hash is always GOOGLE_LINKED. A
    GOOGLE_LINKED account may still hold a hash from an earlier registration.
    """

    id: Optional[int] = Field(None, description="Database row ID")
    email: str = Field(..., description="Canonical (lowercased) email")
    name: str = Field(..., description="Display name")
    password_hash: Optional[str] = Field(None, description="bcrypt hash, if any")
    identity_mode: IdentityMode = Field(default=IdentityMode.PASSWORD_ONLY)
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    @field_validator("email")
    @classmethod
    def canonicalize_email(cls, value: str) -> str:
        return canonical_email(value)

    @property
    def google(self) -> bool:
        return self.identity_mode == IdentityMode.GOOGLE_LINKED

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def to_identity(self) -> "AccountIdentity":
        return AccountIdentity(
            email=self.email,
            name=self.name,
            has_password=self.has_password,
            google=self.google,
        )


class AccountIdentity(BaseModel):
    """What callers learn about an account after a successful login."""

    email: str
    name: str
    has_password: bool = Field(..., alias="hasPassword")
    google: bool

    model_config = {"frozen": True, "populate_by_name": True}


class AuthResult(BaseModel):
    """
    Outcome of an account operation.

    Business-rule refusals are reported here instead of being raised.
    """

    success: bool
    failure: Optional[AuthFailure] = None
    message: Optional[str] = None
    user: Optional[AccountIdentity] = None

    @classmethod
    def ok(
        cls,
        message: Optional[str] = None,
        user: Optional[AccountIdentity] = None,
    ) -> "AuthResult":
        return cls(success=True, message=message, user=user)

    @classmethod
    def fail(cls, failure: AuthFailure, message: Optional[str] = None) -> "AuthResult":
        return cls(
            success=False,
            failure=failure,
            message=message or FAILURE_MESSAGES[failure],
        )


class UserActionRequest(BaseModel):
    """Body of POST /api/users."""

    action: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class UserActionResponse(ActionResponse):
    """Response of POST /api/users."""

    user: Optional[AccountIdentity] = None
