"""Two-variant outcome type for fallible operations.

Services and repositories never raise for expected failures.  They return
``Ok(value)`` or ``Err(error)`` and every caller branches on the outcome
before touching the value::

    result = repository.get_by_id(product_id)
    if result.is_err:
        return result
    product = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, Union

if TYPE_CHECKING:
    from shared.domain.errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a structured ``AppError``."""

    error: AppError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def err(error: AppError) -> Err:
    return Err(error)
