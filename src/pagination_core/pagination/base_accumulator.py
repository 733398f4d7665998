"""
Shared page-accumulation logic.

An accumulator owns one page cursor and the items fetched so far. It drives
one fetch-and-merge step at a time; a fetch requested while another is in
flight, or after the last page, is a no-op that reports the current items.
"""

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from aws_lambda_powertools import Logger

from pagination_core.models.errors import InvalidConfigurationError
from pagination_core.models.pagination import PaginationInfo
from pagination_core.models.result import PaginationResult, Success
from pagination_core.utils.constants import (
    DEFAULT_LIMIT_PER_PAGE,
    FIRST_PAGE,
    MIN_LIMIT_PER_PAGE,
)

T = TypeVar("T")

PageRequest = Callable[[int, int], Awaitable[PaginationResult[T]]]

logger = Logger(UTC=True)


class BaseAccumulator(Generic[T]):
    """
    Page cursor plus accumulated items.

    State:
    - page: page the next fetch requests, starts at 1
    - items: append-only per successful fetch, in arrival order
    - has_more: false once a page shorter than `limit_per_page` arrives
    - is_loading: true only while a fetch is outstanding
    - generation: bumped on every reset and fetch start; a fetch result is
      applied only if the generation it started under is still current
    """

    def __init__(self, *, limit_per_page: int = DEFAULT_LIMIT_PER_PAGE) -> None:
        self.limit_per_page = limit_per_page
        self._page = FIRST_PAGE
        self._items: list[T] = []
        self._has_more = True
        self._is_loading = False
        self._generation = 0

    @property
    def page(self) -> int:
        return self._page

    @property
    def items(self) -> tuple[T, ...]:
        """Immutable view of the accumulated items."""
        return tuple(self._items)

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def can_load_more(self) -> bool:
        return self._has_more and not self._is_loading

    def add_item(self, item: T) -> None:
        self._items.append(item)

    def remove_item(self, item: T) -> bool:
        """Remove the first occurrence of `item`. Returns False if absent."""
        try:
            self._items.remove(item)
        except ValueError:
            return False
        return True

    def remove_at(self, index: int) -> None:
        """Remove the item at `index`; out-of-range indexes are ignored."""
        if 0 <= index < len(self._items):
            del self._items[index]

    def update_item(self, index: int, item: T) -> None:
        """Replace the item at `index`; out-of-range indexes are ignored."""
        if 0 <= index < len(self._items):
            self._items[index] = item

    def reset(self) -> None:
        """Return to page 1 with no items.

        An outstanding fetch is not cancelled; its result is discarded when
        it resolves.
        """
        self._page = FIRST_PAGE
        self._items.clear()
        self._has_more = True
        self._is_loading = False
        self._generation += 1

    def page_info(self) -> PaginationInfo:
        return PaginationInfo(
            page=self._page,
            limit=self.limit_per_page,
            has_more=self._has_more,
            is_loading=self._is_loading,
            item_count=len(self._items),
            next_page=self._page if self._has_more else None,
            keyword=self._keyword_for_info(),
        )

    def _keyword_for_info(self) -> str | None:
        return None

    def _validate_configuration(self) -> None:
        if self._page < FIRST_PAGE or self.limit_per_page < MIN_LIMIT_PER_PAGE:
            logger.error(
                "Invalid page or limit_per_page",
                extra={"page": self._page, "limit_per_page": self.limit_per_page},
            )
            raise InvalidConfigurationError(
                message="Invalid page or limit_per_page",
                details={"page": self._page, "limit_per_page": self.limit_per_page},
            )

    def _short_circuit(self) -> PaginationResult[T]:
        logger.debug(
            "Skipping fetch",
            extra={"is_loading": self._is_loading, "has_more": self._has_more},
        )
        return Success(items=self.items)

    async def _fetch_next(self, request: PageRequest[T]) -> PaginationResult[T]:
        """Fetch the page under the cursor and merge it into the items.

        Raises:
            InvalidConfigurationError: If page or limit_per_page is below 1
        """
        self._validate_configuration()
        if self._is_loading or not self._has_more:
            return self._short_circuit()

        self._generation += 1
        generation = self._generation
        page = self._page
        self._is_loading = True

        logger.debug(
            "Fetching page",
            extra={"page": page, "limit_per_page": self.limit_per_page},
        )

        try:
            result = await request(page, self.limit_per_page)
        finally:
            if generation == self._generation:
                self._is_loading = False

        if generation != self._generation:
            logger.info(
                "Discarding stale page result",
                extra={
                    "page": page,
                    "started_generation": generation,
                    "current_generation": self._generation,
                },
            )
            return Success(items=self.items)

        if isinstance(result, Success):
            self._items.extend(result.items)
            self._page += 1
            if len(result.items) < self.limit_per_page:
                self._has_more = False
            logger.debug(
                "Page merged",
                extra={"page": page, "count": len(result.items), "has_more": self._has_more},
            )
        else:
            logger.warning(
                "Page fetch failed",
                extra={"page": page, "error": result.message},
            )

        return result
