"""
User account endpoint.

A single POST endpoint whose `action` field selects register, login or
changePassword. The status code comes from the dispatcher.
"""

from fastapi import APIRouter, Depends, Response

from modules.auth.dispatcher import dispatch
from modules.auth.interfaces import IAccountService
from modules.auth.models import UserActionRequest, UserActionResponse
from ..dependencies import get_account_service

router = APIRouter()


@router.post("", response_model=UserActionResponse, response_model_exclude_none=True)
async def user_action(
    body: UserActionRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
) -> UserActionResponse:
    """
    Register, log in, or change a password.

    Store failures are turned into an opaque 500 by the app's exception handler.
    """
    status_code, result = await dispatch(service, body)
    response.status_code = status_code
    return UserActionResponse(
        success=result.success,
        message=result.message,
        user=result.user,
    )
