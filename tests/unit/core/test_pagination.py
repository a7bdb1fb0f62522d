from __future__ import annotations

import pytest

from modules.core.pagination import PaginationDTO, paginate
from modules.customers.models import Customer

pytestmark = pytest.mark.unit


@pytest.fixture()
def customers(make_customer):
    return [make_customer() for _ in range(25)]


class TestPaginate:
    def test_first_page(self, customers):
        page = paginate(Customer.objects.order_by("created_at"), PaginationDTO(page=1, limit=10))

        assert len(page.data) == 10
        assert page.pagination.total == 25
        assert page.pagination.total_pages == 3
        assert page.pagination.has_next is True
        assert page.pagination.has_prev is False

    def test_last_page_is_partial(self, customers):
        page = paginate(Customer.objects.order_by("created_at"), PaginationDTO(page=3, limit=10))

        assert len(page.data) == 5
        assert page.pagination.has_next is False
        assert page.pagination.has_prev is True

    def test_page_past_the_end_is_empty(self, customers):
        page = paginate(Customer.objects.all(), PaginationDTO(page=9, limit=10))
        assert page.data == []
        assert page.pagination.total == 25

    def test_empty_queryset(self):
        page = paginate(Customer.objects.all())
        assert page.data == []
        assert page.pagination.total_pages == 0
        assert page.pagination.has_next is False

    def test_default_limit_comes_from_settings(self, settings):
        settings.DEFAULT_PAGE_SIZE = 7
        assert PaginationDTO().limit == 7

    def test_page_must_be_positive(self):
        with pytest.raises(ValueError):
            PaginationDTO(page=0)
