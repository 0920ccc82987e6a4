"""Mock providers for testing."""

from .cache import MockCacheProvider
from .mail import MockMailProvider
from .persistence import MockPersistenceProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockMailProvider",
    "MockPersistenceProvider",
    "MockStorageProvider",
    "build_test_container",
]
