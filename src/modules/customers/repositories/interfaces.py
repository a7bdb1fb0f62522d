"""Customer repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository
from shared.domain.result import Result

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerFiltersDTO
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer", "CustomerFiltersDTO"]):
    @abstractmethod
    def get_by_email(
        self, email: str, exclude_id: Optional[str] = None
    ) -> Result[Optional[Customer]]:
        """Non-deleted customer owning ``email`` (case-insensitive)."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Result[Customer]:
        """Insert a customer; a duplicate email yields ``CUSTOMER_EMAIL_EXISTS``."""

    @abstractmethod
    def update(self, id: str, data: Dict[str, Any]) -> Result[Optional[Customer]]:
        """Apply field changes; ``Ok(None)`` when the customer does not exist."""
