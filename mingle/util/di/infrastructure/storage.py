"""Object storage infrastructure providers."""

from dishka import Scope, provide

from mingle.adapter.s3 import S3ObjectStorage
from mingle.config import StorageSettings
from mingle.domain.service import ObjectStorage
from mingle.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider (Amazon S3)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_object_storage(self, settings: StorageSettings) -> ObjectStorage:
        return S3ObjectStorage(settings)
