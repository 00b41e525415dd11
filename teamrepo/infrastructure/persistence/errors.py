"""Translation of SQLAlchemy / DBAPI failures into the repository taxonomy."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

from teamrepo.domain.exceptions import ConstraintViolation, StoreConnectionError

logger = logging.getLogger(__name__)

CONNECTION_ERRORS: tuple[type[Exception], ...] = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
)


@contextmanager
def translate_errors(entity_name: str, operation: str) -> Iterator[None]:
    """Re-raise provider errors as ConstraintViolation / StoreConnectionError.

    Anything else (including RepositoryError raised inside the block)
    propagates unchanged.
    """
    try:
        yield
    except sa_exc.IntegrityError as exc:
        logger.warning("%s.%s violated a constraint: %s", entity_name, operation, exc.orig)
        raise ConstraintViolation(
            f"{operation} {entity_name} violated a constraint: {exc.orig}", exc
        ) from exc
    except CONNECTION_ERRORS as exc:
        logger.warning("%s.%s could not reach the store: %s", entity_name, operation, exc)
        raise StoreConnectionError(
            f"{operation} {entity_name} could not reach the store: {exc}", exc
        ) from exc
