"""Order item repository interface.

Items are children of the Order aggregate and are never soft-deleted on
their own, so this contract does not extend ``IRepository``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

from shared.domain.result import Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.order_items.dtos import OrderItemFiltersDTO
    from modules.orders.models import OrderItem


class IOrderItemRepository(ABC):
    @abstractmethod
    def get_by_id(self, id: str) -> Result[Optional[OrderItem]]:
        """Item with its order and product; ``Ok(None)`` when missing."""

    @abstractmethod
    def find_many(
        self,
        filters: Optional[OrderItemFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[OrderItem]]:
        """Filtered page, oldest first."""

    @abstractmethod
    def add_item(
        self, order_id: str, data: Dict[str, Any], tax_rate: Decimal
    ) -> Result[Optional[OrderItem]]:
        """Append a line to a PENDING order, reserve its stock and re-derive
        the order totals in one transaction.  ``Ok(None)`` when the order
        does not exist."""
