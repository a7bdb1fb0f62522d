"""Generic repository interface.

``IRepository[T]`` is the base contract every entity repository extends.
Services depend on these abstractions, never on the Django ORM directly.
Every method returns a ``Result``: database failures come back as
``Err`` values, never as raised exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from shared.domain.result import Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO

T = TypeVar("T")
F = TypeVar("F")


class IRepository(ABC, Generic[T, F]):
    """Base generic repository contract.

    ``T`` is the entity managed by the repository, ``F`` the filters DTO
    accepted by ``find_many``.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Result[Optional[T]]:
        """Entity by primary key; ``Ok(None)`` when missing or soft-deleted."""

    @abstractmethod
    def find_many(
        self, filters: Optional[F] = None, pagination: Optional[PaginationDTO] = None
    ) -> Result[Page[T]]:
        """Filtered, paginated list."""

    @abstractmethod
    def soft_delete(self, id: str) -> Result[bool]:
        """Flag an entity as deleted; ``Ok(False)`` when it does not exist."""
