"""Unit tests for BaseModel and SoftDeleteModel, exercised through Customer."""

from __future__ import annotations

import uuid

import pytest

from modules.customers.models import Customer

pytestmark = pytest.mark.unit


class TestBaseModel:
    def test_id_is_uuid_version_7(self, make_customer):
        customer = make_customer()
        assert isinstance(customer.id, uuid.UUID)
        assert customer.id.version == 7

    def test_update_fields_refresh_updated_at(self, make_customer):
        customer = make_customer()
        before = customer.updated_at

        customer.name = "Renamed"
        customer.save(update_fields=["name"])
        customer.refresh_from_db()

        assert customer.name == "Renamed"
        assert customer.updated_at >= before


class TestSoftDeleteModel:
    def test_delete_flags_row(self, make_customer):
        customer = make_customer()

        customer.delete()

        assert Customer.objects.filter(id=customer.id).exists()
        assert not Customer.objects.alive().filter(id=customer.id).exists()
        assert Customer.objects.dead().filter(id=customer.id).exists()

    def test_restore(self, make_customer):
        customer = make_customer()
        customer.delete()

        customer.restore()

        assert Customer.objects.alive().filter(id=customer.id).exists()

    def test_queryset_delete_is_soft(self, make_customer):
        make_customer()
        make_customer()

        count, _ = Customer.objects.all().delete()

        assert count == 2
        assert Customer.objects.count() == 2
        assert Customer.objects.alive().count() == 0

    def test_hard_delete_removes_row(self, make_customer):
        customer = make_customer()
        customer.hard_delete()
        assert not Customer.objects.filter(id=customer.id).exists()
