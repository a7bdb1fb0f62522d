"""Customer service layer (use cases).

Business rules enforced here:
- Name is required and email must be well-formed.
- Email is unique among non-deleted customers (``CUSTOMER_EMAIL_EXISTS``),
  re-checked on update only when the email actually changes.
- Delete is soft and also deactivates the customer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from modules.customers.dtos import EMAIL_ADAPTER
from modules.customers.errors import (
    customer_email_exists,
    customer_not_found,
    invalid_email,
)
from shared.domain.errors import required_field
from shared.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from modules.core.pagination import Page, PaginationDTO
    from modules.customers.dtos import (
        CreateCustomerDTO,
        CustomerFiltersDTO,
        UpdateCustomerDTO,
    )
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases."""

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    @staticmethod
    def validate_email(email: str) -> Result[str]:
        try:
            EMAIL_ADAPTER.validate_python(email)
        except PydanticValidationError:
            return Err(invalid_email(email))
        return Ok(email)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Result[Customer]:
        result = self._repo.get_by_id(id)
        if result.is_err:
            return result
        if result.value is None:
            return Err(customer_not_found(id))
        return Ok(result.value)

    def get_all(
        self,
        filters: Optional[CustomerFiltersDTO] = None,
        pagination: Optional[PaginationDTO] = None,
    ) -> Result[Page[Customer]]:
        return self._repo.find_many(filters, pagination)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: CreateCustomerDTO) -> Result[Customer]:
        log = logger.bind(email=dto.email)

        if not dto.name:
            return Err(required_field("name"))
        if not dto.email:
            return Err(required_field("email"))
        email = self.validate_email(dto.email)
        if email.is_err:
            log.warning("customer.invalid_email")
            return email

        existing = self._repo.get_by_email(dto.email)
        if existing.is_err:
            return existing
        if existing.value is not None:
            log.warning("customer.duplicate_email")
            return Err(customer_email_exists(dto.email))

        return self._repo.create(dto.model_dump())

    def find_or_create(self, dto: CreateCustomerDTO) -> Result[Customer]:
        """Existing customer with the same email, or a new one."""
        existing = self._repo.get_by_email(dto.email)
        if existing.is_err:
            return existing
        if existing.value is not None:
            logger.info(
                "customer.reused_by_email", customer_id=str(existing.value.id)
            )
            return Ok(existing.value)
        return self.create(dto)

    def update(self, id: str, dto: UpdateCustomerDTO) -> Result[Customer]:
        current = self.get_by_id(id)
        if current.is_err:
            return current

        changes = dto.changes()
        if "name" in changes and not changes["name"]:
            return Err(required_field("name"))

        new_email = changes.get("email")
        if new_email is not None and new_email != current.value.email:
            email = self.validate_email(new_email)
            if email.is_err:
                return email
            taken = self._repo.get_by_email(new_email, exclude_id=id)
            if taken.is_err:
                return taken
            if taken.value is not None:
                logger.warning("customer.duplicate_email", customer_id=str(id))
                return Err(customer_email_exists(new_email))

        result = self._repo.update(id, changes)
        if result.is_err:
            return result
        if result.value is None:
            return Err(customer_not_found(id))
        return Ok(result.value)

    def delete(self, id: str) -> Result[bool]:
        result = self._repo.soft_delete(id)
        if result.is_err:
            return result
        if not result.value:
            return Err(customer_not_found(id))
        return Ok(True)
