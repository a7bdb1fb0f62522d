"""Database failure translation for repository methods.

``db_operation`` runs a repository method in its own ``transaction.atomic()``
block (a savepoint when nested) so that nothing below the service layer
escapes as an exception:

- an ``AppError`` raised by the method rolls its writes back and is
  returned as ``Err``;
- ``IntegrityError`` becomes ``DATABASE_CONSTRAINT_VIOLATION``;
- any other ``DatabaseError`` becomes ``DATABASE_QUERY_ERROR``;
- anything else is logged with its traceback and becomes
  ``SYSTEM_INTERNAL_ERROR``.

There are no retries; the first failure is surfaced.
"""

from __future__ import annotations

import functools
from typing import Callable, TypeVar

import structlog
from django.db import DatabaseError, IntegrityError, transaction

from shared.domain.errors import (
    AppError,
    constraint_violation,
    database_error,
    internal_error,
)
from shared.domain.result import Err

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable)


def db_operation(operation: str) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                with transaction.atomic():
                    return func(*args, **kwargs)
            except AppError as error:
                return Err(error)
            except IntegrityError as exc:
                logger.warning(
                    "repository.constraint_violation",
                    operation=operation,
                    error=str(exc),
                )
                return Err(constraint_violation(operation, exc))
            except DatabaseError as exc:
                logger.error(
                    "repository.database_error",
                    operation=operation,
                    error=str(exc),
                )
                return Err(database_error(operation, exc))
            except Exception as exc:
                logger.exception("repository.unexpected_error", operation=operation)
                return Err(internal_error(operation, exc))

        return wrapper  # type: ignore[return-value]

    return decorator
