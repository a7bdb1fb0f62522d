from __future__ import annotations

import pytest
from django.db import DatabaseError, IntegrityError

from modules.core.repositories.guards import db_operation
from modules.customers.models import Customer
from shared.domain.errors import ErrorCode, required_field
from shared.domain.result import Ok

pytestmark = pytest.mark.unit


class TestDbOperation:
    def test_passes_through_ok(self):
        @db_operation("noop")
        def noop():
            return Ok(1)

        assert noop().value == 1

    def test_integrity_error_becomes_constraint_violation(self):
        @db_operation("insert thing")
        def fails():
            raise IntegrityError("UNIQUE constraint failed")

        result = fails()

        assert result.is_err
        assert result.error.code is ErrorCode.DATABASE_CONSTRAINT_VIOLATION
        assert isinstance(result.error.cause, IntegrityError)

    def test_database_error_becomes_query_error(self):
        @db_operation("find things")
        def fails():
            raise DatabaseError("connection reset")

        result = fails()

        assert result.is_err
        assert result.error.code is ErrorCode.DATABASE_QUERY_ERROR
        assert result.error.message == "Database error during find things"

    def test_app_error_rolls_back_writes(self):
        @db_operation("create then fail")
        def create_then_fail():
            Customer.objects.create(name="Temp", email="temp@example.com")
            raise required_field("name")

        result = create_then_fail()

        assert result.is_err
        assert result.error.code is ErrorCode.VALIDATION_REQUIRED_FIELD
        assert not Customer.objects.filter(email="temp@example.com").exists()

    def test_unexpected_error_becomes_internal_error(self):
        @db_operation("store quantity")
        def fails():
            raise OverflowError("Python int too large to convert to SQLite INTEGER")

        result = fails()

        assert result.is_err
        assert result.error.code is ErrorCode.SYSTEM_INTERNAL_ERROR
        assert result.error.message == "Unexpected error during store quantity"
        assert isinstance(result.error.cause, OverflowError)

    def test_unexpected_error_rolls_back_writes(self):
        @db_operation("create then crash")
        def create_then_crash():
            Customer.objects.create(name="Temp", email="crash@example.com")
            raise RuntimeError("boom")

        assert create_then_crash().is_err
        assert not Customer.objects.filter(email="crash@example.com").exists()
