"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class StorageError(ProviderError):
    """Object storage could not produce a URL."""

    pass
