"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider, CacheRepositoryProvider
from .mail import MailProvider
from .persistence import PersistenceProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "CacheRepositoryProvider",
    "MailProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
    "StorageProvider",
]
