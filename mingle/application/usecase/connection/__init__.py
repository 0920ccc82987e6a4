"""Connection use cases."""

from mingle.application.usecase.connection.get_connections import (
    ConnectionItem,
    GetConnectionsRequest,
    GetConnectionsResponse,
    GetConnectionsUseCase,
)

__all__ = [
    "ConnectionItem",
    "GetConnectionsRequest",
    "GetConnectionsResponse",
    "GetConnectionsUseCase",
]
