from __future__ import annotations

from uuid import uuid4

import pytest
from freezegun import freeze_time

from modules.customers.dtos import CreateCustomerDTO, CustomerFiltersDTO, UpdateCustomerDTO
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from shared.domain.errors import ErrorCode

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CustomerService(repository=CustomerDjangoRepository())


def _dto(**overrides) -> CreateCustomerDTO:
    data = {"name": "Carlos Ruiz", "email": "Carlos@Example.com", "city": "Medellín"}
    data.update(overrides)
    return CreateCustomerDTO(**data)


class TestCreate:
    def test_creates_customer_with_normalised_email(self, service):
        result = service.create(_dto())

        assert result.is_ok
        assert result.value.email == "carlos@example.com"
        assert result.value.is_active is True

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "@b.com"])
    def test_rejects_malformed_email(self, service, email):
        result = service.create(_dto(email=email))
        assert result.error.code is ErrorCode.CUSTOMER_INVALID_EMAIL

    def test_requires_name(self, service):
        result = service.create(_dto(name="   "))
        assert result.error.code is ErrorCode.VALIDATION_REQUIRED_FIELD

    def test_duplicate_email_is_rejected(self, service, customer):
        result = service.create(_dto(email="ANA@example.com"))
        assert result.error.code is ErrorCode.CUSTOMER_EMAIL_EXISTS

    def test_email_of_deleted_customer_can_be_reused(self, service, customer):
        assert service.delete(str(customer.id)).is_ok

        result = service.create(_dto(email="ana@example.com"))

        assert result.is_ok
        assert result.value.id != customer.id


class TestFindOrCreate:
    def test_reuses_customer_with_same_email(self, service, customer):
        result = service.find_or_create(_dto(email="Ana@Example.com", name="Other"))

        assert result.value.id == customer.id
        assert Customer.objects.count() == 1

    def test_creates_when_unknown(self, service):
        result = service.find_or_create(_dto())

        assert result.is_ok
        assert Customer.objects.count() == 1


class TestQueries:
    def test_get_by_id_missing(self, service):
        result = service.get_by_id(str(uuid4()))
        assert result.error.code is ErrorCode.CUSTOMER_NOT_FOUND

    def test_get_all_filters_by_name(self, service, customer, make_customer):
        make_customer(name="Pedro Pérez")

        page = service.get_all(CustomerFiltersDTO(name="gómez")).value

        assert [c.id for c in page.data] == [customer.id]

    def test_get_all_newest_first(self, service, make_customer):
        with freeze_time("2026-03-01 10:00:00") as frozen:
            first = make_customer()
            frozen.tick()
            second = make_customer()

        page = service.get_all().value

        assert [c.id for c in page.data] == [second.id, first.id]


class TestUpdate:
    def test_updates_fields(self, service, customer):
        result = service.update(str(customer.id), UpdateCustomerDTO(phone="3001234567"))
        assert result.value.phone == "3001234567"

    def test_keeping_own_email_is_allowed(self, service, customer):
        result = service.update(str(customer.id), UpdateCustomerDTO(email="ana@example.com"))
        assert result.is_ok

    def test_email_taken_by_other_customer(self, service, customer, make_customer):
        other = make_customer()
        result = service.update(str(other.id), UpdateCustomerDTO(email="ana@example.com"))
        assert result.error.code is ErrorCode.CUSTOMER_EMAIL_EXISTS

    def test_invalid_new_email(self, service, customer):
        result = service.update(str(customer.id), UpdateCustomerDTO(email="broken"))
        assert result.error.code is ErrorCode.CUSTOMER_INVALID_EMAIL

    def test_blank_name(self, service, customer):
        result = service.update(str(customer.id), UpdateCustomerDTO(name=""))
        assert result.error.code is ErrorCode.VALIDATION_REQUIRED_FIELD

    def test_update_missing_customer(self, service):
        result = service.update(str(uuid4()), UpdateCustomerDTO(phone="1"))
        assert result.error.code is ErrorCode.CUSTOMER_NOT_FOUND


class TestDelete:
    def test_soft_deletes_and_deactivates(self, service, customer):
        assert service.delete(str(customer.id)).is_ok

        customer.refresh_from_db()
        assert customer.is_deleted is True
        assert customer.is_active is False
        assert service.get_by_id(str(customer.id)).is_err

    def test_delete_twice(self, service, customer):
        service.delete(str(customer.id))
        assert service.delete(str(customer.id)).error.code is ErrorCode.CUSTOMER_NOT_FOUND

    def test_deleted_customer_is_hidden_from_listing(self, service, customer, make_customer):
        other = make_customer()
        service.delete(str(customer.id))

        page = service.get_all().value

        assert [c.id for c in page.data] == [other.id]
        assert page.pagination.total == 1
