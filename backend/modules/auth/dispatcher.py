"""
Action dispatch for POST /api/users.

Maps an action tag to an IAccountService operation and the operation's
result to an HTTP status. Field validation belongs to the
service. Neither step holds state; StoreError raised by the service
propagates to the route.
"""

from typing import Awaitable, Callable

from .interfaces import IAccountService
from .models import AuthFailure, AuthResult, UserActionRequest

ActionHandler = Callable[[IAccountService, UserActionRequest], Awaitable[AuthResult]]


async def _register(service: IAccountService, request: UserActionRequest) -> AuthResult:
    return await service.register(request.name, request.email, request.password)


async def _login(service: IAccountService, request: UserActionRequest) -> AuthResult:
    return await service.login(request.email, request.password, request.name)


async def _change_password(service: IAccountService, request: UserActionRequest) -> AuthResult:
    return await service.change_password(
        request.email,
        request.current_password,
        request.new_password,
    )


ACTIONS: dict[str, ActionHandler] = {
    "register": _register,
    "login": _login,
    "changePassword": _change_password,
    "change_password": _change_password,
}

_FAILURE_STATUS: dict[AuthFailure, int] = {
    AuthFailure.ALREADY_REGISTERED: 409,
    AuthFailure.ALREADY_GOOGLE_LINKED: 409,
    AuthFailure.INVALID_CREDENTIALS: 401,
    AuthFailure.GOOGLE_ONLY_ACCOUNT: 401,
    AuthFailure.NOT_FOUND: 401,
    AuthFailure.INCORRECT_CURRENT_PASSWORD: 401,
    AuthFailure.GOOGLE_MANAGED_ACCOUNT: 400,
    AuthFailure.INSUFFICIENT_DATA: 400,
    AuthFailure.VALIDATION: 400,
    AuthFailure.UNKNOWN_ACTION: 400,
}


def status_for(result: AuthResult) -> int:
    """HTTP status for an operation result."""
    if result.success:
        return 200
    return _FAILURE_STATUS.get(result.failure, 400)


async def dispatch(
    service: IAccountService,
    request: UserActionRequest,
) -> tuple[int, AuthResult]:
    """Run the requested action and return (status, result)."""
    if not request.action:
        result = AuthResult.fail(AuthFailure.UNKNOWN_ACTION, "User action not specified.")
        return status_for(result), result

    handler = ACTIONS.get(request.action)
    if handler is None:
        result = AuthResult.fail(AuthFailure.UNKNOWN_ACTION)
    else:
        result = await handler(service, request)
    return status_for(result), result
