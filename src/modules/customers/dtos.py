"""Customer DTOs for the service layer.

``email`` is a plain string here: the service validates it with
``EmailStr`` so that a malformed address surfaces as
``CUSTOMER_INVALID_EMAIL`` rather than a generic validation error.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, TypeAdapter, field_validator

from modules.customers.constants import DEFAULT_COUNTRY

EMAIL_ADAPTER: TypeAdapter[EmailStr] = TypeAdapter(EmailStr)


class CreateCustomerDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    email: str
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY
    tax_id: str = ""
    company_name: str = ""

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()


class UpdateCustomerDTO(BaseModel):
    """Partial update; ``None`` means "leave unchanged"."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    tax_id: str | None = None
    company_name: str | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else v

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class CustomerFiltersDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    is_active: bool | None = None
