from unittest.mock import AsyncMock

from api.app import app
from api.dependencies import get_notification_service
from modules.notifications.exceptions import DeliveryError, EmailNotConfiguredError


def _use_notifier(service):
    app.dependency_overrides[get_notification_service] = lambda: service


class TestSendEmail:
    def test_send(self, client, notifier):
        response = client.post(
            "/api/send-email",
            json={
                "to_email": "ana@x.com",
                "to_name": "Ana",
                "subject": "Receipt",
                "message_html": "<p>Thanks</p>",
                "order_total": "59.90",
            },
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Email sent successfully!", "messageId": "<msg-1@test>"}
        assert notifier.sent[0]["to_name"] == "Ana"

    def test_missing_fields(self, client, notifier):
        response = client.post("/api/send-email", json={"to_email": "ana@x.com"})
        assert response.status_code == 400
        assert notifier.sent == []

    def test_not_configured(self, client):
        service = AsyncMock()
        service.send_email.side_effect = EmailNotConfiguredError(["smtp_host", "email_from"])
        _use_notifier(service)

        response = client.post(
            "/api/send-email",
            json={"to_email": "ana@x.com", "subject": "Hi", "message_html": "<p>x</p>"},
        )
        assert response.status_code == 500
        assert response.json() == {
            "message": "Server configuration incomplete.",
            "missing": ["smtp_host", "email_from"],
        }

    def test_delivery_failure_hides_smtp_error(self, client):
        service = AsyncMock()
        service.send_email.side_effect = DeliveryError(smtp_error="535 bad credentials for shop@example.com")
        _use_notifier(service)

        response = client.post(
            "/api/send-email",
            json={"to_email": "ana@x.com", "subject": "Hi", "message_html": "<p>x</p>"},
        )
        assert response.status_code == 500
        assert response.json() == {"message": "Failed to send email."}
