"""
Transactional email endpoint.

Lets the storefront send an HTML email (e.g. an order receipt it rendered
itself) through the server's SMTP account.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from modules.notifications.exceptions import DeliveryError, EmailNotConfiguredError
from modules.notifications.interfaces import INotificationService
from modules.notifications.models import EmailRequest, EmailResponse
from ..dependencies import get_notification_service

router = APIRouter()


def _respond(status_code: int, payload: EmailResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(by_alias=True, exclude_none=True),
    )


@router.post("", response_model=EmailResponse, response_model_exclude_none=True)
async def send_email(
    body: EmailRequest,
    service: INotificationService = Depends(get_notification_service),
) -> JSONResponse:
    """
    Send an email.

    Requires to_email, subject and message_html. SMTP failures are reported
    without the underlying error text.
    """
    if body.missing_fields():
        return _respond(
            400,
            EmailResponse(message="Required fields: to_email, subject and message_html."),
        )

    try:
        message_id = await service.send_email(
            to_email=body.to_email,
            subject=body.subject,
            message_html=body.message_html,
            to_name=body.to_name,
            order_total=body.order_total,
        )
    except EmailNotConfiguredError as e:
        return _respond(
            500,
            EmailResponse(message="Server configuration incomplete.", missing=e.missing),
        )
    except DeliveryError:
        return _respond(500, EmailResponse(message="Failed to send email."))

    return _respond(200, EmailResponse(message="Email sent successfully!", message_id=message_id))
