"""Tests for shared/models.py."""

import pytest
from dataclasses import dataclass
from pydantic import ValidationError

from shared.models import PageParams, QueryParams, ResultPaging


class TestPageParams:
    def test_defaults(self):
        """PageParams should default to the first page of 25."""
        params = PageParams()
        assert params.limit == 25
        assert params.offset == 0

    def test_satisfies_query_params(self):
        """PageParams should satisfy the QueryParams protocol."""
        assert isinstance(PageParams(), QueryParams)

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_rejects_out_of_range_limit(self, limit):
        """Limit must be between 1 and 100."""
        with pytest.raises(ValidationError):
            PageParams(limit=limit)

    def test_rejects_negative_offset(self):
        """Offset must not be negative."""
        with pytest.raises(ValidationError):
            PageParams(offset=-1)

    def test_is_immutable(self):
        """PageParams should be immutable."""
        params = PageParams()
        with pytest.raises(Exception):  # Pydantic ValidationError
            params.limit = 50


class TestQueryParams:
    def test_any_object_with_limit_and_offset(self):
        """QueryParams is structural: any limit/offset holder qualifies."""

        @dataclass
        class Window:
            limit: int
            offset: int

        assert isinstance(Window(10, 0), QueryParams)

    def test_object_without_offset_does_not_qualify(self):
        class OnlyLimit:
            limit = 10

        assert not isinstance(OnlyLimit(), QueryParams)


class TestResultPaging:
    def test_holds_total_and_items(self):
        page = ResultPaging[int](total=5, items=[1, 2])
        assert page.total == 5
        assert page.items == [1, 2]

    def test_items_default_empty(self):
        page = ResultPaging[str](total=0)
        assert page.items == []

    def test_rejects_negative_total(self):
        with pytest.raises(ValidationError):
            ResultPaging[int](total=-1)
