import pytest
from fastapi.testclient import TestClient

from backoffice.api.v1.dependencies import (
    get_bank_account_service,
    get_kyc_service,
    get_support_ticket_service,
)
from backoffice.main import app
from tests.conftest import OWNER_ID, REVIEWER_ID


@pytest.fixture
def client(bank_account_service, kyc_service, ticket_service):
    """TestClient with services backed by in-memory repositories (no startup events)."""
    app.dependency_overrides[get_bank_account_service] = lambda: bank_account_service
    app.dependency_overrides[get_kyc_service] = lambda: kyc_service
    app.dependency_overrides[get_support_ticket_service] = lambda: ticket_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return {"X-User-Id": OWNER_ID}


@pytest.fixture
def reviewer_headers():
    return {"X-User-Id": REVIEWER_ID, "X-User-Role": "admin"}
