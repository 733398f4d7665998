import pytest
from pydantic import ValidationError

from pagination_core.models.pagination import PaginationInfo


class TestPaginationInfo:
    def test_valid_info(self) -> None:
        info = PaginationInfo(
            page=2,
            limit=20,
            has_more=True,
            is_loading=False,
            item_count=20,
            next_page=2,
        )

        assert info.keyword is None
        assert info.model_dump()["item_count"] == 20

    def test_rejects_non_int_page(self) -> None:
        with pytest.raises(ValidationError):
            PaginationInfo(
                page="2",  # type: ignore[arg-type]
                limit=20,
                has_more=True,
                is_loading=False,
                item_count=0,
            )
