"""Order repository interface.

The Order aggregate includes its OrderItem children; creation and
cancellation touch product stock in the same unit of work.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository
from shared.domain.result import Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.orders.dtos import OrderFiltersDTO, OrderStatsDTO
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order", "OrderFiltersDTO"]):
    @abstractmethod
    def create(self, data: Dict[str, Any], items: List[Dict[str, Any]]) -> Result[Order]:
        """Insert order + items and reserve stock, all or nothing.

        ``items`` are dicts with ``product_id``, ``quantity``, ``unit_price``.
        A product whose stock can no longer cover its line fails the whole
        operation with ``PRODUCT_INSUFFICIENT_INVENTORY``.
        """

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Result[Optional[Order]]:
        """Order with customer and items→product loaded."""

    @abstractmethod
    def update(
        self,
        id: str,
        data: Dict[str, Any],
        status: Optional[str] = None,
        status_data: Optional[Dict[str, Any]] = None,
        reason: str = "",
    ) -> Result[Optional[Order]]:
        """Apply field changes and, when ``status`` is given, the status
        change (or cancellation) under one row lock.

        A refused transition rolls the field changes back too.
        """

    @abstractmethod
    def change_status(
        self, id: str, status: str, data: Optional[Dict[str, Any]] = None
    ) -> Result[Optional[Order]]:
        """Move to ``status`` if the transition table allows it (checked
        under a row lock), applying ``data`` in the same write."""

    @abstractmethod
    def cancel(self, id: str, reason: str = "") -> Result[Optional[Order]]:
        """Cancel and restore every item's stock in one transaction."""

    @abstractmethod
    def get_stats(self) -> Result[OrderStatsDTO]:
        """Counts per status, revenue and average value (cancelled excluded)."""

    @abstractmethod
    def find_many(
        self,
        filters: Optional[OrderFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Order]]:
        """Filtered page, newest first."""
