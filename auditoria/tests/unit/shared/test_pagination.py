"""Unit tests for the paged response model."""

import pytest

from auditoria.shared.pagination import PagedResponse


@pytest.mark.unit
class TestPagedResponse:
    """Test suite for PagedResponse."""

    @pytest.mark.parametrize(
        ("total", "page", "page_size", "total_pages", "has_next"),
        [(0, 1, 20, 0, False), (45, 1, 20, 3, True), (45, 3, 20, 3, False), (40, 2, 20, 2, False)],
    )
    def test_totals(self, total, page, page_size, total_pages, has_next):
        """Test derived paging fields."""
        response = PagedResponse[int](items=[], total=total, page=page, page_size=page_size)

        assert response.total_pages == total_pages
        assert response.has_next is has_next

    def test_serializes_computed_fields(self):
        """Test computed fields appear in the dump."""
        data = PagedResponse[str](items=["a"], total=1, page=1, page_size=10).model_dump()

        assert data["total_pages"] == 1
        assert data["has_next"] is False
