"""Abstract contracts for fetching pages of items."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pagination_core.models.result import PaginationResult

T = TypeVar("T")


class PaginatedRepository(ABC, Generic[T]):
    """Contract for fetching pages of items in server order.

    Implementations could be an HTTP API, a database query, a local list, etc.
    Accumulators depend on this interface, not the implementation.
    Calls may be repeated with the same arguments and must be safe to retry.
    """

    @abstractmethod
    async def fetch_paginated_items(
        self,
        *,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[T]:
        """Fetch one page of items.

        Args:
            page: 1-based page number
            limit_per_page: Maximum number of items on the page

        Returns:
            Success with the page items, or Failure with a display message.
            Returning fewer than `limit_per_page` items marks the last page.
        """


class PaginatedSearchRepository(ABC, Generic[T]):
    """Contract for fetching pages of items matching a keyword."""

    @abstractmethod
    async def fetch_paginated_search_items(
        self,
        *,
        keyword: str,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[T]:
        """Fetch one page of items matching `keyword`.

        Args:
            keyword: Non-empty search keyword
            page: 1-based page number
            limit_per_page: Maximum number of items on the page

        Returns:
            Success with the page items, or Failure with a display message.
        """


class PaginatedRepositoryWithSearch(PaginatedRepository[T], PaginatedSearchRepository[T]):
    """Contract for sources that support both plain and keyword pagination."""
