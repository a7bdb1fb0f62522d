"""Composition root.

Repositories and services are stateless, so one instance of each is built
when Django starts (``CoreConfig.ready``) and shared by every request.
Views look their service up here instead of constructing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.order_items.repositories.django_repository import OrderItemDjangoRepository
from modules.order_items.services import OrderItemService
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ServiceContainer:
    products: ProductService
    customers: CustomerService
    order_items: OrderItemService
    orders: OrderService


def build_container() -> ServiceContainer:
    product_repository = ProductDjangoRepository()
    order_repository = OrderDjangoRepository()

    products = ProductService(repository=product_repository)
    customers = CustomerService(repository=CustomerDjangoRepository())
    order_items = OrderItemService(
        repository=OrderItemDjangoRepository(),
        product_repository=product_repository,
        order_repository=order_repository,
    )
    orders = OrderService(
        order_repository=order_repository,
        customer_service=customers,
        order_item_service=order_items,
    )
    return ServiceContainer(
        products=products,
        customers=customers,
        order_items=order_items,
        orders=orders,
    )


_container: Optional[ServiceContainer] = None


def init_container() -> ServiceContainer:
    global _container
    _container = build_container()
    logger.info("container.initialized")
    return _container


def get_container() -> ServiceContainer:
    if _container is None:
        return init_container()
    return _container
