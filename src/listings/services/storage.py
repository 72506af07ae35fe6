"""Object storage for listing photos, backed by S3."""

import os
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict

from listings.utils.logging import get_logger

logger = get_logger(__name__)


def aws_error_code(error: ClientError | BotoCoreError) -> str:
    """Service error code, or the botocore exception name for transport errors."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "Unknown")
    return type(error).__name__


class StorageResult(BaseModel):
    """Result of a storage call: either a path or an error message."""

    model_config = ConfigDict(strict=True)

    path: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ObjectStorageService:
    """Uploads, removes and resolves public URLs for listing images.

    Storage failures are returned as ``StorageResult.error`` rather than
    raised, so callers can carry on with the rest of a batch.
    """

    def __init__(
        self,
        bucket: str | None = None,
        region: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize storage service.

        Args:
            bucket: Bucket name. Defaults to PROPERTY_IMAGES_BUCKET or "property-images".
            region: AWS region. Defaults to the boto3 configuration.
            public_base_url: CDN base URL for public links. Defaults to
                PUBLIC_ASSET_BASE_URL; S3 virtual-host URLs are used when unset.
        """
        self.bucket = bucket or os.getenv("PROPERTY_IMAGES_BUCKET", "property-images")
        self.public_base_url = public_base_url or os.getenv("PUBLIC_ASSET_BASE_URL")
        self._client = boto3.client("s3", region_name=region)

    @property
    def region(self) -> str:
        return self._client.meta.region_name or "us-east-1"

    def upload(self, path: str, data: bytes, content_type: str) -> StorageResult:
        """Store an object.

        Args:
            path: Object key
            data: File contents
            content_type: MIME type stored with the object

        Returns:
            StorageResult with the stored path, or the error message
        """
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            error_code = aws_error_code(e)
            logger.warning("Upload of %s failed: %s", path, error_code)
            return StorageResult(error=f"Upload failed ({error_code})")
        return StorageResult(path=path)

    def get_public_url(self, path: str) -> str:
        """Public URL for a stored object."""
        key = quote(path)
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def remove(self, paths: list[str]) -> StorageResult:
        """Delete objects.

        Args:
            paths: Object keys to delete

        Returns:
            StorageResult with an error message if any key failed
        """
        if not paths:
            return StorageResult()

        try:
            response = self._client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": p} for p in paths], "Quiet": True},
            )
        except (ClientError, BotoCoreError) as e:
            error_code = aws_error_code(e)
            logger.warning("Delete of %d object(s) failed: %s", len(paths), error_code)
            return StorageResult(error=f"Delete failed ({error_code})")

        failed = response.get("Errors", [])
        if failed:
            keys = ", ".join(err.get("Key", "?") for err in failed)
            return StorageResult(error=f"Delete failed for: {keys}")
        return StorageResult()
