"""
In-memory implementation of the paginated repositories.

Serves pages from a fixed list of items the way a paginated API would:
page slicing in list order, case-insensitive keyword matching, and an
optional artificial latency.
"""

import asyncio
from typing import Any, TypeVar

from aws_lambda_powertools import Logger

from pagination_core.filters.keyword_filter import KeywordFilter, TextExtractor
from pagination_core.filters.page_pagination import PagePagination
from pagination_core.models.result import Failure, PaginationResult, Success
from pagination_core.repositories.paginated_repository import PaginatedRepositoryWithSearch
from pagination_core.utils.constants import DEFAULT_SEARCH_FIELD

T = TypeVar("T")

logger = Logger(UTC=True)


class InMemoryPaginatedRepository(PaginatedRepositoryWithSearch[T]):
    """Paginated repository backed by a Python list."""

    def __init__(
        self,
        items: list[T],
        *,
        field_name: str = DEFAULT_SEARCH_FIELD,
        text_of: TextExtractor | None = None,
        latency_ms: int = 0,
    ) -> None:
        """
        Args:
            items: Items to serve, in server order
            field_name: Mapping key holding the searchable text
            text_of: Extractor for searchable text of non-mapping items
            latency_ms: Artificial delay before every response
        """
        self._items: list[T] = list(items)
        self._field_name = field_name
        self._text_of = text_of
        self._latency_ms = latency_ms
        self._filter = KeywordFilter()
        self._pagination = PagePagination()

    async def fetch_paginated_items(
        self,
        *,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[T]:
        await self._simulate_latency()
        return self._page_of(self._items, page=page, limit_per_page=limit_per_page)

    async def fetch_paginated_search_items(
        self,
        *,
        keyword: str,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[T]:
        await self._simulate_latency()
        matches = self._filter.apply(
            self._items,
            keyword,
            field_name=self._field_name,
            text_of=self._text_of,
        )
        return self._page_of(matches, page=page, limit_per_page=limit_per_page)

    def _page_of(
        self,
        items: list[Any],
        *,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[T]:
        is_valid, error_message = self._pagination.validate(page, limit_per_page)
        if not is_valid:
            logger.error(
                "Invalid pagination parameters",
                extra={
                    "page": page,
                    "limit_per_page": limit_per_page,
                    "error": error_message,
                },
            )
            return Failure(message=error_message)

        page_items, total_count, _ = self._pagination.paginate(
            items, page, limit_per_page
        )
        logger.debug(
            "Served page from memory",
            extra={"page": page, "count": len(page_items), "total_count": total_count},
        )
        return Success(items=tuple(page_items))

    async def _simulate_latency(self) -> None:
        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000.0)
