"""Translation of SQLAlchemy failures into domain persistence errors."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

from mingle.domain.error import PersistenceError, StoreUnavailableError


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise driver errors as PersistenceError subclasses.

    Connection-level failures become StoreUnavailableError.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailableError(f"{operation}: record store unreachable") from e
    except SQLAlchemyError as e:
        raise PersistenceError(f"{operation}: {e.__class__.__name__}") from e
