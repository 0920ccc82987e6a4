"""Amazon S3 object storage adapter."""

from .client import MockObjectStorage, S3ObjectStorage

__all__ = ["MockObjectStorage", "S3ObjectStorage"]
