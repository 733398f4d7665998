"""Accumulator for plain (non-search) pagination."""

from typing import TypeVar

from pagination_core.models.result import PaginationResult
from pagination_core.pagination.base_accumulator import BaseAccumulator
from pagination_core.repositories.paginated_repository import PaginatedRepository
from pagination_core.utils.constants import DEFAULT_LIMIT_PER_PAGE
from pagination_core.utils.decorators import guard_fetch

T = TypeVar("T")


class PageAccumulator(BaseAccumulator[T]):
    """Accumulates pages fetched from a `PaginatedRepository`.

    Example:
        accumulator = PageAccumulator(repository, limit_per_page=20)
        result = await accumulator.fetch_next_page()
        result.when(success=render, failure=show_error)
    """

    def __init__(
        self,
        repository: PaginatedRepository[T],
        *,
        limit_per_page: int = DEFAULT_LIMIT_PER_PAGE,
    ) -> None:
        super().__init__(limit_per_page=limit_per_page)
        self.repository = repository

    async def fetch_next_page(self) -> PaginationResult[T]:
        """Fetch the next page and append its items.

        Returns `Success(items)` without calling the repository when a fetch is
        already in flight or the last page was reached. Otherwise returns the
        repository's result as received.

        Raises:
            InvalidConfigurationError: If page or limit_per_page is below 1
        """
        return await self._fetch_next(self._request_page)

    @guard_fetch
    async def _request_page(self, page: int, limit_per_page: int) -> PaginationResult[T]:
        return await self.repository.fetch_paginated_items(
            page=page,
            limit_per_page=limit_per_page,
        )
