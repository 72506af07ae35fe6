"""Unit tests for the S3-backed object storage service."""

from unittest.mock import patch

import boto3
import pytest
from botocore.exceptions import ClientError, ConnectionClosedError, EndpointConnectionError

from listings.services.storage import ObjectStorageService, StorageResult
from listings.utils.logging import clear_correlation_id, set_correlation_id

BUCKET = "test-property-images"
REGION = "eu-west-1"


def list_keys() -> list[str]:
    s3 = boto3.client("s3", region_name=REGION)
    return [obj["Key"] for obj in s3.list_objects_v2(Bucket=BUCKET).get("Contents", [])]


class TestUpload:
    def test_upload(self, storage: ObjectStorageService) -> None:
        result = storage.upload("properties/u/a.jpg", b"data", "image/jpeg")

        assert result == StorageResult(path="properties/u/a.jpg")
        assert result.ok
        assert list_keys() == ["properties/u/a.jpg"]

    def test_upload_missing_bucket(self, aws: None) -> None:
        storage = ObjectStorageService(bucket="no-such-bucket", region=REGION)

        result = storage.upload("properties/u/a.jpg", b"data", "image/jpeg")

        assert not result.ok
        assert result.error == "Upload failed (NoSuchBucket)"

    def test_upload_connection_error(self, storage: ObjectStorageService) -> None:
        """A transport failure comes back as an error result instead of raising."""
        error = EndpointConnectionError(endpoint_url=f"https://s3.{REGION}.amazonaws.com")

        with patch.object(storage._client, "put_object", side_effect=error):
            result = storage.upload("properties/u/a.jpg", b"data", "image/jpeg")

        assert not result.ok
        assert result.error == "Upload failed (EndpointConnectionError)"

    def test_failure_logged_with_correlation_id(
        self, storage: ObjectStorageService, caplog: pytest.LogCaptureFixture
    ) -> None:
        error = EndpointConnectionError(endpoint_url=f"https://s3.{REGION}.amazonaws.com")
        set_correlation_id("req-123")
        try:
            with patch.object(storage._client, "put_object", side_effect=error):
                with caplog.at_level("WARNING", logger="listings.services.storage"):
                    storage.upload("properties/u/a.jpg", b"data", "image/jpeg")
        finally:
            clear_correlation_id()

        record = caplog.records[-1]
        assert record.name == "listings.services.storage"
        assert record.correlation_id == "req-123"


class TestPublicUrl:
    def test_s3_url(self, storage: ObjectStorageService) -> None:
        url = storage.get_public_url("properties/u/my photo.jpg")
        assert url == f"https://{BUCKET}.s3.{REGION}.amazonaws.com/properties/u/my%20photo.jpg"

    def test_cdn_url(self, aws: None) -> None:
        storage = ObjectStorageService(
            bucket=BUCKET, region=REGION, public_base_url="https://cdn.example.com/"
        )
        assert storage.get_public_url("properties/u/a.jpg") == (
            "https://cdn.example.com/properties/u/a.jpg"
        )


class TestRemove:
    def test_remove(self, storage: ObjectStorageService) -> None:
        storage.upload("properties/u/a.jpg", b"a", "image/jpeg")
        storage.upload("properties/u/b.jpg", b"b", "image/jpeg")

        result = storage.remove(["properties/u/a.jpg"])

        assert result.ok
        assert list_keys() == ["properties/u/b.jpg"]

    def test_remove_nothing(self, storage: ObjectStorageService) -> None:
        assert storage.remove([]) == StorageResult()

    def test_remove_client_error(self, storage: ObjectStorageService) -> None:
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "DeleteObjects")

        with patch.object(storage._client, "delete_objects", side_effect=error):
            result = storage.remove(["properties/u/a.jpg"])

        assert result.error == "Delete failed (AccessDenied)"

    def test_remove_partial_failure(self, storage: ObjectStorageService) -> None:
        response = {"Errors": [{"Key": "properties/u/a.jpg", "Code": "AccessDenied"}]}

        with patch.object(storage._client, "delete_objects", return_value=response):
            result = storage.remove(["properties/u/a.jpg", "properties/u/b.jpg"])

        assert result.error == "Delete failed for: properties/u/a.jpg"

    def test_remove_connection_closed(self, storage: ObjectStorageService) -> None:
        error = ConnectionClosedError(endpoint_url=f"https://s3.{REGION}.amazonaws.com")

        with patch.object(storage._client, "delete_objects", side_effect=error):
            result = storage.remove(["properties/u/a.jpg"])

        assert result.error == "Delete failed (ConnectionClosedError)"
