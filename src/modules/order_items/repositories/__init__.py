"""Order item repositories package."""

from modules.order_items.repositories.django_repository import OrderItemDjangoRepository
from modules.order_items.repositories.interfaces import IOrderItemRepository

__all__ = ["IOrderItemRepository", "OrderItemDjangoRepository"]
