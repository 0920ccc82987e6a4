"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold invitation workflow logic that spans entities and
    stores (record store, local cache, notification feed).
    """

    pass
