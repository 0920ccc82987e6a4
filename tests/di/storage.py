"""Mock object storage providers for testing."""

from dishka import Scope, provide

from mingle.adapter.s3 import MockObjectStorage
from mingle.domain.service import ObjectStorage
from mingle.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider returning fake signed URLs."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_object_storage(self) -> ObjectStorage:
        return MockObjectStorage()
