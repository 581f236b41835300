"""Fixtures for API tests: a TestClient wired to in-memory services."""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.dependencies import get_account_service, get_notification_service, get_purchase_service


@pytest.fixture
def client(account_service, purchase_service, notifier):
    """
    TestClient whose services use the in-memory stores from tests/conftest.py.

    The lifespan is not entered, so no database pool is opened.
    """
    app.dependency_overrides[get_account_service] = lambda: account_service
    app.dependency_overrides[get_purchase_service] = lambda: purchase_service
    app.dependency_overrides[get_notification_service] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
