import pytest
from unittest.mock import AsyncMock

from modules.auth.dispatcher import ACTIONS, dispatch, status_for
from modules.auth.models import AuthFailure, AuthResult, UserActionRequest
from shared.exceptions import StoreError


class TestStatusFor:
    def test_success_is_200(self):
        assert status_for(AuthResult.ok()) == 200

    @pytest.mark.parametrize(
        "failure,status",
        [
            (AuthFailure.ALREADY_REGISTERED, 409),
            (AuthFailure.ALREADY_GOOGLE_LINKED, 409),
            (AuthFailure.INVALID_CREDENTIALS, 401),
            (AuthFailure.GOOGLE_ONLY_ACCOUNT, 401),
            (AuthFailure.NOT_FOUND, 401),
            (AuthFailure.INCORRECT_CURRENT_PASSWORD, 401),
            (AuthFailure.GOOGLE_MANAGED_ACCOUNT, 400),
            (AuthFailure.INSUFFICIENT_DATA, 400),
            (AuthFailure.VALIDATION, 400),
            (AuthFailure.UNKNOWN_ACTION, 400),
        ],
    )
    def test_failure_statuses(self, failure, status):
        assert status_for(AuthResult.fail(failure)) == status


class TestDispatch:
    def test_action_table(self):
        """Both the camelCase and legacy snake_case tags map to change password."""
        assert set(ACTIONS) == {"register", "login", "changePassword", "change_password"}
        assert ACTIONS["changePassword"] is ACTIONS["change_password"]

    @pytest.mark.asyncio
    async def test_register(self, account_service):
        status, result = await dispatch(
            account_service,
            UserActionRequest(action="register", name="Ana", email="ana@x.com", password="secret1"),
        )
        assert status == 200
        assert result.success is True

    @pytest.mark.asyncio
    async def test_register_incomplete(self, account_service):
        status, result = await dispatch(
            account_service,
            UserActionRequest(action="register", email="ana@x.com"),
        )
        assert status == 400
        assert result.failure == AuthFailure.VALIDATION

    @pytest.mark.asyncio
    async def test_register_long_name(self, account_service, account_store):
        """Oversized input is a 400, not a store failure."""
        status, result = await dispatch(
            account_service,
            UserActionRequest(action="register", name="A" * 101, email="ana@x.com", password="secret1"),
        )
        assert status == 400
        assert result.failure == AuthFailure.VALIDATION
        assert account_store.accounts == {}

    @pytest.mark.asyncio
    async def test_passwordless_login_blank_email(self, account_service, account_store):
        status, _ = await dispatch(
            account_service, UserActionRequest(action="login", email="   ", name="New")
        )
        assert status == 400
        assert account_store.accounts == {}

    @pytest.mark.asyncio
    async def test_login_without_email(self, account_service):
        status, _ = await dispatch(account_service, UserActionRequest(action="login", password="x"))
        assert status == 400

    @pytest.mark.asyncio
    async def test_passwordless_login_without_name_for_known_account(
        self, account_service, google_account
    ):
        """A known account can use passwordless login with just an email."""
        status, result = await dispatch(
            account_service, UserActionRequest(action="login", email="bia@x.com")
        )
        assert status == 200
        assert result.user.google is True

    @pytest.mark.asyncio
    async def test_change_password_legacy_tag(self, account_service, password_account):
        status, _ = await dispatch(
            account_service,
            UserActionRequest(
                action="change_password",
                email="ana@x.com",
                current_password="secret1",
                new_password="secret2",
            ),
        )
        assert status == 200

    @pytest.mark.asyncio
    async def test_change_password_without_new_password(self, account_service, password_account):
        status, _ = await dispatch(
            account_service,
            UserActionRequest(action="changePassword", email="ana@x.com", current_password="secret1"),
        )
        assert status == 400

    @pytest.mark.asyncio
    async def test_missing_action(self, account_service):
        status, result = await dispatch(account_service, UserActionRequest(email="ana@x.com"))
        assert status == 400
        assert result.failure == AuthFailure.UNKNOWN_ACTION

    @pytest.mark.asyncio
    async def test_unknown_action(self, account_service):
        status, result = await dispatch(account_service, UserActionRequest(action="delete"))
        assert status == 400
        assert result.message == "Invalid action."

    @pytest.mark.asyncio
    async def test_store_error_propagates(self):
        """Store failures are not converted to results."""
        service = AsyncMock()
        service.login.side_effect = StoreError("connection reset")

        with pytest.raises(StoreError):
            await dispatch(service, UserActionRequest(action="login", email="ana@x.com", password="x"))
