"""Amazon S3 object storage for profile photos."""

import asyncio

import boto3
import logfire
from botocore.exceptions import BotoCoreError, ClientError

from mingle.adapter.error import StorageError
from mingle.config import StorageSettings
from mingle.domain.service.profile_service import ObjectStorage


class S3ObjectStorage(ObjectStorage):
    """Resolves object keys to presigned GET URLs."""

    def __init__(self, settings: StorageSettings) -> None:
        self.settings = settings
        # Endpoint override targets MinIO in local development
        if settings.endpoint_url:
            self.client = boto3.client(
                "s3",
                endpoint_url=settings.endpoint_url,
                region_name=settings.aws_region,
            )
        else:
            self.client = boto3.client("s3", region_name=settings.aws_region)

    async def resolve(self, key: str) -> str | None:
        """Generate a presigned URL for ``key``.

        Raises:
            StorageError: If the URL cannot be generated
        """
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.settings.bucket, "Key": key},
                ExpiresIn=self.settings.url_expiry_seconds,
            )
        except (ClientError, BotoCoreError) as e:
            logfire.error("Presigned URL generation failed", key=key, error=str(e))
            raise StorageError(f"Cannot resolve {key}") from e


class MockObjectStorage(ObjectStorage):
    """Mock object storage for testing.

    Keys listed in ``missing`` resolve to None.
    """

    def __init__(self) -> None:
        self.missing: set[str] = set()

    async def resolve(self, key: str) -> str | None:
        if key in self.missing:
            return None
        return f"https://storage.test/{key}?signature=mock"
