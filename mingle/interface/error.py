"""Interface layer errors.

Maps domain errors to HTTP responses.
"""

from fastapi import HTTPException, status

from mingle.domain.error import (
    CacheError,
    DomainError,
    DuplicateInvitationError,
    InvalidTransitionError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateInvitationError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (CacheError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def http_error(error: DomainError) -> HTTPException:
    """Build the HTTPException for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            detail = str(error)
            if isinstance(error, (PersistenceError, CacheError)):
                detail = "Service temporarily unavailable"
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error"
    )


def delivery_failed(detail: dict) -> HTTPException:
    """Build the HTTPException for a failed invitation email."""
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
