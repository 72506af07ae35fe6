"""Fixtures for API route tests.

Routes run against a ServiceContainer whose DynamoDB and S3 services point
at moto, and whose Cognito client is a MagicMock.
"""

from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from listings.api.dependencies import ServiceContainer
from listings.api.main import create_app
from listings.config import Settings
from listings.services.auth_service import AccountService

OWNER_ID = "a1b2c3d4-e5f6-7890-abcd-ef1234567890"


@pytest.fixture
def container(
    db: Any,
    storage: Any,
    mock_cognito_idp: MagicMock,
    cognito_user_pool_config: dict[str, str],
) -> ServiceContainer:
    settings = Settings(
        environment="test",
        dynamodb_table_prefix="test-listings",
        property_images_bucket="test-property-images",
        cognito_user_pool_id=cognito_user_pool_config["user_pool_id"],
        cognito_client_id=cognito_user_pool_config["client_id"],
    )
    container = ServiceContainer(settings)
    container.db = db
    container.storage = storage
    with patch("boto3.client", return_value=mock_cognito_idp):
        container.accounts = AccountService(
            user_pool_id=settings.cognito_user_pool_id,
            client_id=settings.cognito_client_id,
        )
    return container


@pytest.fixture
def client(container: ServiceContainer) -> Generator[TestClient, None, None]:
    """Test client for an app built around the mocked services."""
    with TestClient(create_app(container), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers API Gateway forwards for a signed-in owner."""
    return {"x-user-sub": OWNER_ID, "x-user-email": "owner@example.com"}
