"""Django ORM implementation of the Customer repository.

Look-ups ignore soft-deleted rows.  A concurrent insert that slips past the
service's up-front email check is caught by the partial unique constraint
and reported as ``CUSTOMER_EMAIL_EXISTS``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.core.filters import apply_filters
from modules.core.pagination import Page, PaginationDTO, paginate
from modules.core.repositories.guards import db_operation
from modules.customers.dtos import CustomerFiltersDTO
from modules.customers.errors import customer_email_exists
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository
from shared.domain.errors import ErrorLayer
from shared.domain.result import Err, Ok, Result

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    @db_operation("find customer by ID")
    def get_by_id(self, id: str) -> Result[Optional[Customer]]:
        try:
            return Ok(Customer.objects.alive().filter(id=id).first())
        except (ValueError, ValidationError):
            return Ok(None)

    @db_operation("find customer by email")
    def get_by_email(
        self, email: str, exclude_id: Optional[str] = None
    ) -> Result[Optional[Customer]]:
        queryset = Customer.objects.alive().filter(email__iexact=email.strip())
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return Ok(queryset.first())

    @db_operation("find customers")
    def find_many(
        self,
        filters: Optional[CustomerFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Customer]]:
        queryset = apply_filters(CustomerFilter, Customer.objects.alive(), filters)
        return Ok(paginate(queryset.order_by("-created_at"), pagination))

    @db_operation("create customer")
    def create(self, data: Dict[str, Any]) -> Result[Customer]:
        customer = Customer(**data)
        try:
            with transaction.atomic():
                customer.save()
        except IntegrityError as exc:
            logger.warning("customer.duplicate_email", email=customer.email)
            return Err(customer_email_exists(customer.email, ErrorLayer.REPOSITORY, exc))
        logger.info("customer.created", customer_id=str(customer.id))
        return Ok(customer)

    @db_operation("update customer")
    def update(self, id: str, data: Dict[str, Any]) -> Result[Optional[Customer]]:
        found = self.get_by_id(id)
        if found.is_err or found.value is None:
            return found

        customer = found.value
        for field, value in data.items():
            setattr(customer, field, value)
        try:
            with transaction.atomic():
                customer.save(update_fields=list(data))
        except IntegrityError as exc:
            return Err(customer_email_exists(customer.email, ErrorLayer.REPOSITORY, exc))
        logger.info("customer.updated", customer_id=str(id), fields=sorted(data))
        return Ok(customer)

    @db_operation("delete customer")
    def soft_delete(self, id: str) -> Result[bool]:
        try:
            updated = (
                Customer.objects.alive()
                .filter(id=id)
                .update(is_deleted=True, is_active=False, updated_at=timezone.now())
            )
        except (ValueError, ValidationError):
            return Ok(False)
        if updated:
            logger.info("customer.soft_deleted", customer_id=str(id))
        return Ok(updated == 1)
