"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository
from shared.domain.result import Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.products.dtos import ProductFiltersDTO, ProductStatsDTO
    from modules.products.models import Product


class IProductRepository(IRepository["Product", "ProductFiltersDTO"]):
    @abstractmethod
    def get_by_ids(self, ids: list[str]) -> Result[Dict[str, Product]]:
        """Non-deleted products keyed by ``str(id)``; missing ids are absent."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Result[Optional[Product]]:
        """Product by SKU, soft-deleted ones included (SKU stays unique)."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Result[Product]:
        """Insert a product.  Duplicate SKU yields a constraint violation."""

    @abstractmethod
    def update(self, id: str, data: Dict[str, Any]) -> Result[Optional[Product]]:
        """Apply field changes; ``Ok(None)`` when the product does not exist."""

    @abstractmethod
    def decrement_stock(self, id: str, quantity: int) -> Result[bool]:
        """Atomically subtract ``quantity`` only if enough stock is available.

        ``Ok(False)`` means the conditional update matched no row.
        """

    @abstractmethod
    def increment_stock(self, id: str, quantity: int) -> Result[bool]:
        """Atomically add ``quantity`` to the available stock."""

    @abstractmethod
    def find_low_stock(self, threshold: int) -> Result[list[Product]]:
        """Active products with ``available_quantity <= threshold``."""

    @abstractmethod
    def get_stats(self, low_stock_threshold: int) -> Result[ProductStatsDTO]:
        """Aggregate counters over non-deleted products."""

    @abstractmethod
    def find_many(
        self,
        filters: Optional[ProductFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Product]]:
        """Filtered page ordered by name then newest first."""
