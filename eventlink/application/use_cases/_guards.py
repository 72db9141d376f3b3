"""Guards shared by use cases: actor presence and store error translation."""

from collections.abc import Iterator
from contextlib import contextmanager

from eventlink.application.interfaces.store import StoreError, TransactionConflictError
from eventlink.domain.exceptions import (
    AuthenticationException,
    TransientStoreException,
)
from eventlink.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def require_actor(actor_id: str | None) -> str:
    """Return actor_id, or raise AuthenticationException when it is missing."""
    if not actor_id:
        raise AuthenticationException()
    return actor_id


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """Re-raise store failures inside the block as TransientStoreException.

    Domain exceptions pass through untouched.
    """
    try:
        yield
    except TransactionConflictError as e:
        logger.warning("%s: transaction retries exhausted under contention", operation)
        raise TransientStoreException(operation, "contention") from e
    except StoreError as e:
        logger.error("%s: store failure: %s", operation, e)
        raise TransientStoreException(operation, str(e)) from e
