"""Accumulator for keyword search pagination."""

from typing import TypeVar

from aws_lambda_powertools import Logger

from pagination_core.models.result import PaginationResult
from pagination_core.pagination.base_accumulator import BaseAccumulator
from pagination_core.repositories.paginated_repository import PaginatedSearchRepository
from pagination_core.utils.constants import DEFAULT_LIMIT_PER_PAGE_IN_SEARCH
from pagination_core.utils.decorators import guard_fetch

T = TypeVar("T")

logger = Logger(UTC=True)


class SearchPageAccumulator(BaseAccumulator[T]):
    """
    Accumulates pages of search results for the current keyword.

    Setting the keyword only stores it. Pages fetched under different
    keywords must not be mixed, so callers reset before changing the keyword:

        accumulator.reset()
        accumulator.set_keyword("cat")
        await accumulator.fetch_next_page_for_current_keyword()
    """

    def __init__(
        self,
        repository: PaginatedSearchRepository[T],
        *,
        limit_per_page: int = DEFAULT_LIMIT_PER_PAGE_IN_SEARCH,
    ) -> None:
        super().__init__(limit_per_page=limit_per_page)
        self.repository = repository
        self._current_keyword: str | None = None

    @property
    def current_keyword(self) -> str | None:
        return self._current_keyword

    def set_keyword(self, keyword: str | None) -> None:
        """Store the keyword without touching page or items."""
        self._current_keyword = keyword

    async def fetch_next_page_for_current_keyword(self) -> PaginationResult[T]:
        """Fetch the next page of results for the current keyword.

        Returns `Success(items)` without calling the repository when the
        keyword is unset or empty, a fetch is in flight, or the last page
        was reached.

        Raises:
            InvalidConfigurationError: If page or limit_per_page is below 1
        """
        self._validate_configuration()
        if not self._current_keyword:
            logger.debug("Skipping search fetch without keyword")
            return self._short_circuit()

        return await self._fetch_next(self._request_page)

    def _keyword_for_info(self) -> str | None:
        return self._current_keyword

    @guard_fetch
    async def _request_page(self, page: int, limit_per_page: int) -> PaginationResult[T]:
        keyword = self._current_keyword or ""
        return await self.repository.fetch_paginated_search_items(
            keyword=keyword,
            page=page,
            limit_per_page=limit_per_page,
        )
