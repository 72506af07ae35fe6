"""Pytest configuration and fixtures for the listing service tests.

This module provides reusable fixtures for testing:
- DynamoDB and S3 mocking with moto
- Cognito client mocking with MagicMock
- Sample listing data (a fully valid form, images, upload files)
"""

import datetime as dt
import os
from collections.abc import Callable
from typing import Any, Generator
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-listings")
os.environ.setdefault("PROPERTY_IMAGES_BUCKET", "test-property-images")

# Only set fake credentials for moto if no real credentials are present
if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

REGION = "eu-west-1"
TABLE_PREFIX = "test-listings"
BUCKET = "test-property-images"
OWNER_ID = "a1b2c3d4-e5f6-7890-abcd-ef1234567890"
OTHER_USER_ID = "f0e9d8c7-b6a5-4321-9876-543210fedcba"


# === AWS Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION


@pytest.fixture
def aws(aws_credentials: None) -> Generator[None, None, None]:
    """Run the test inside a moto mock_aws context."""
    with mock_aws():
        yield


@pytest.fixture
def create_tables(aws: None) -> None:
    """Create the listing DynamoDB tables."""
    client = boto3.client("dynamodb", region_name=REGION)
    client.create_table(
        TableName=f"{TABLE_PREFIX}-properties",
        KeySchema=[{"AttributeName": "property_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "property_id", "AttributeType": "S"},
            {"AttributeName": "owner_id", "AttributeType": "S"},
            {"AttributeName": "created_at", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "owner_id-index",
                "KeySchema": [
                    {"AttributeName": "owner_id", "KeyType": "HASH"},
                    {"AttributeName": "created_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    client.create_table(
        TableName=f"{TABLE_PREFIX}-property-images",
        KeySchema=[
            {"AttributeName": "property_id", "KeyType": "HASH"},
            {"AttributeName": "position", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "property_id", "AttributeType": "S"},
            {"AttributeName": "position", "AttributeType": "N"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


@pytest.fixture
def s3_bucket(aws: None) -> str:
    """Create the property images bucket."""
    client = boto3.client("s3", region_name=REGION)
    client.create_bucket(
        Bucket=BUCKET,
        CreateBucketConfiguration={"LocationConstraint": REGION},
    )
    return BUCKET


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from listings.services.dynamodb import DynamoDBService

    return DynamoDBService(environment="test", table_prefix=TABLE_PREFIX, region=REGION)


@pytest.fixture
def storage(s3_bucket: str) -> Any:
    """ObjectStorageService bound to the mocked bucket."""
    from listings.services.storage import ObjectStorageService

    return ObjectStorageService(bucket=s3_bucket, region=REGION)


# === Cognito Fixtures ===


@pytest.fixture
def cognito_user_pool_config() -> dict[str, str]:
    """Cognito User Pool configuration for tests."""
    return {
        "user_pool_id": "eu-west-1_TestPool",
        "client_id": "test-client-id-12345",
    }


@pytest.fixture
def mock_cognito_idp() -> MagicMock:
    """Mock Cognito client with successful default responses."""
    client = MagicMock()
    client.sign_up.return_value = {
        "UserSub": OWNER_ID,
        "UserConfirmed": False,
        "CodeDeliveryDetails": {
            "Destination": "o***@e***",
            "DeliveryMedium": "EMAIL",
            "AttributeName": "email",
        },
    }
    client.initiate_auth.return_value = {
        "AuthenticationResult": {
            "AccessToken": "access-token",
            "IdToken": "id-token",
            "RefreshToken": "refresh-token",
            "ExpiresIn": 3600,
            "TokenType": "Bearer",
        }
    }
    client.forgot_password.return_value = {
        "CodeDeliveryDetails": {"Destination": "o***@e***", "DeliveryMedium": "EMAIL"}
    }
    client.confirm_forgot_password.return_value = {}
    return client


# === Sample Data Fixtures ===


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def other_user_id() -> str:
    return OTHER_USER_ID


@pytest.fixture
def make_image() -> Callable[..., Any]:
    """Factory for ImageRecord instances with unique ids."""
    from listings.models import ImageRecord

    def _make(n: int) -> ImageRecord:
        return ImageRecord(
            id=f"img-{n}",
            storage_path=f"properties/{OWNER_ID}/img-{n}.jpg",
            public_url=f"https://{BUCKET}.s3.{REGION}.amazonaws.com/properties/{OWNER_ID}/img-{n}.jpg",
            display_name=f"photo-{n}.jpg",
            byte_size=1024 * n,
            mime_type="image/jpeg",
        )

    return _make


@pytest.fixture
def valid_fields() -> dict[str, Any]:
    """Field values that pass every wizard step."""
    return {
        "name": "Sunny Loft Studio",
        "property_type": "loft",
        "description": "Bright open-plan loft with big windows and a long table.",
        "address_line1": "Storgata 12",
        "city": "Oslo",
        "state": "Oslo",
        "postal_code": "0155",
        "country": "Norway",
        "size_sqft": 1000.0,
        "length_ft": 40.0,
        "width_ft": 25.0,
        "ceiling_height_ft": 12.0,
        "max_guests": 12,
        "bedrooms": 0,
        "bathrooms": 1,
        "amenities": ["wifi", "natural_light"],
        "nearby_facilities": ["cafes", "public_transport"],
        "price_per_hour": 45.0,
        "price_per_day": 300.0,
        "minimum_hours": 2,
        "discount_weekly": 10,
        "discount_monthly": 20,
        "cancellation_policy": "moderate",
        "no_smoking": True,
    }


@pytest.fixture
def valid_form(valid_fields: dict[str, Any]) -> Any:
    """A FormValue that passes the whole-listing check."""
    from listings.models import FormValue

    return FormValue(**valid_fields)


@pytest.fixture
def make_file() -> Callable[..., Any]:
    """Factory for IncomingFile uploads of a given size."""
    from listings.models import IncomingFile

    def _make(
        filename: str = "photo.jpg",
        size: int = 2 * 1024 * 1024,
        content_type: str = "image/jpeg",
    ) -> IncomingFile:
        return IncomingFile(filename=filename, content_type=content_type, data=b"\xff" * size)

    return _make


@pytest.fixture
def july_dates() -> list[dt.date]:
    return [dt.date(2025, 7, 15), dt.date(2025, 7, 16), dt.date(2025, 7, 17)]
