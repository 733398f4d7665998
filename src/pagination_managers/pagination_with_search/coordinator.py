"""
Coordinator for a paginated view with debounced keyword search.
"""

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from aws_lambda_powertools import Logger

from pagination_core.models.result import PaginationResult
from pagination_core.models.settings import PaginationSettings
from pagination_core.pagination.base_accumulator import BaseAccumulator
from pagination_core.pagination.page_accumulator import PageAccumulator
from pagination_core.pagination.search_page_accumulator import SearchPageAccumulator
from pagination_core.repositories.paginated_repository import PaginatedRepositoryWithSearch
from pagination_core.state.state_machine import PaginationStateMachine
from pagination_core.utils.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_LIMIT_PER_PAGE,
    DEFAULT_LIMIT_PER_PAGE_IN_SEARCH,
    FIRST_PAGE,
)
from pagination_core.utils.debounce import Debouncer
from pagination_managers.base import StateEmittingManager

T = TypeVar("T")

logger = Logger(UTC=True)


class DualModeCoordinator(StateEmittingManager, Generic[T]):
    """
    Owns one plain and one search accumulator and switches between them.

    Search mode is derived from the pending keyword: it starts as soon as
    `search()` stores a non-empty keyword, before the debounced fetch runs.
    `committed_keyword` is set only when that fetch starts, so callers can
    tell "search requested" from "search results loaded".

    Debounce:
    - Every `search()` cancels the waiting timer and starts a new one
    - Only the last keyword in a burst is fetched
    - A fetch already issued is never cancelled; its outcome is dropped
      if a newer search, clear or initial fetch superseded it

    Plain page outcomes are emitted only while plain items are displayed.
    Searching or clearing never drops them: returning to plain mode shows
    a plain fetch still in flight as Loading or LoadingMore.
    """

    def __init__(
        self,
        repository: PaginatedRepositoryWithSearch[T],
        *,
        limit_per_page: int = DEFAULT_LIMIT_PER_PAGE,
        limit_per_page_in_search: int = DEFAULT_LIMIT_PER_PAGE_IN_SEARCH,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        state_machine: PaginationStateMachine | None = None,
    ) -> None:
        """
        Raises:
            InvalidConfigurationError: If a page size is below 1 or the
                debounce delay is negative
        """
        self.settings = PaginationSettings.build(
            limit_per_page=limit_per_page,
            limit_per_page_in_search=limit_per_page_in_search,
            debounce_ms=debounce_ms,
        )
        super().__init__(state_machine)

        self.page_accumulator: PageAccumulator[T] = PageAccumulator(
            repository,
            limit_per_page=self.settings.limit_per_page,
        )
        self.search_accumulator: SearchPageAccumulator[T] = SearchPageAccumulator(
            repository,
            limit_per_page=self.settings.limit_per_page_in_search,
        )
        self._debouncer = Debouncer(self.settings.debounce_ms)
        self._committed_keyword: str | None = None
        self._search_epoch = 0

    @classmethod
    def from_settings(
        cls,
        repository: PaginatedRepositoryWithSearch[T],
        settings: PaginationSettings,
        *,
        state_machine: PaginationStateMachine | None = None,
    ) -> "DualModeCoordinator[T]":
        return cls(
            repository,
            limit_per_page=settings.limit_per_page,
            limit_per_page_in_search=settings.limit_per_page_in_search,
            debounce_ms=settings.debounce_ms,
            state_machine=state_machine,
        )

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def pending_keyword(self) -> str | None:
        """Keyword stored by the latest `search()` call."""
        return self.search_accumulator.current_keyword

    @property
    def committed_keyword(self) -> str | None:
        """Keyword whose results are loading or loaded."""
        return self._committed_keyword

    @property
    def is_search_mode(self) -> bool:
        return bool(self.pending_keyword)

    @property
    def is_search_pending(self) -> bool:
        """True while a debounced search is waiting to fire."""
        return self._debouncer.is_pending

    @property
    def is_search_committed(self) -> bool:
        return bool(self._committed_keyword)

    @property
    def active_accumulator(self) -> BaseAccumulator[T]:
        if self.is_search_mode:
            return self.search_accumulator
        return self.page_accumulator

    @property
    def current_items(self) -> tuple[T, ...]:
        return self.active_accumulator.items

    @property
    def can_load_more(self) -> bool:
        if self.is_search_mode:
            return self.is_search_committed and self.search_accumulator.can_load_more
        return self.page_accumulator.can_load_more

    # ------------------------------------------------------------------
    # Plain pagination
    # ------------------------------------------------------------------

    async def fetch_initial_items(self) -> None:
        """Reset both accumulators and fetch the first plain page.

        Any waiting search is cancelled and the keyword cleared: an initial
        fetch always shows plain pagination.
        """
        self._ensure_open("fetch_initial_items")
        epoch = self._begin_epoch()
        self._search_epoch += 1
        self._debouncer.cancel()
        self.page_accumulator.reset()
        self.search_accumulator.reset()
        self.search_accumulator.set_keyword(None)
        self._committed_keyword = None
        self.state_machine.start_loading()

        result = await self.page_accumulator.fetch_next_page()
        if not self._shows_plain_outcome(epoch):
            return

        self.state_machine.apply_initial_result(result, self.page_accumulator.items)

    async def fetch_next_page(self) -> None:
        """Fetch the next plain page.

        States are emitted only while plain items are displayed; a page
        fetched during search mode is merged silently.
        """
        self._ensure_open("fetch_next_page")
        epoch = self._epoch
        await self._fetch_more(
            self.page_accumulator,
            self.page_accumulator.fetch_next_page,
            is_displayed=lambda: self._shows_plain_outcome(epoch),
        )

    # ------------------------------------------------------------------
    # Search pagination
    # ------------------------------------------------------------------

    async def fetch_next_page_for_current_keyword(self) -> None:
        """Fetch the next page of search results for the current keyword."""
        self._ensure_open("fetch_next_page_for_current_keyword")
        if not self.is_search_committed:
            logger.debug("Search results not requested yet", extra={"keyword": self.pending_keyword})
            return

        epoch = self._search_epoch
        await self._fetch_more(
            self.search_accumulator,
            self.search_accumulator.fetch_next_page_for_current_keyword,
            is_displayed=lambda: not self._is_search_superseded(epoch),
        )

    fetch_next_page_for_search = fetch_next_page_for_current_keyword

    async def fetch_next_page_for_active_mode(self) -> None:
        """Fetch the next page of whichever accumulator is displayed."""
        if self.is_search_mode:
            await self.fetch_next_page_for_current_keyword()
        else:
            await self.fetch_next_page()

    async def search(self, keyword: str) -> None:
        """Debounce a search for `keyword`.

        The keyword is stored at once, so search mode starts immediately.
        When the timer fires, an empty keyword restores the plain items
        without fetching; otherwise page 1 of the search is fetched.
        """
        self._ensure_open("search")
        self._search_epoch += 1
        self._debouncer.cancel()
        self.search_accumulator.reset()
        self.search_accumulator.set_keyword(keyword)
        self._committed_keyword = None

        logger.debug("Search requested", extra={"keyword": keyword})
        self._debouncer.schedule(self._run_debounced_search)

    async def clear_search(self) -> None:
        """Cancel any waiting search and return to the plain items."""
        self._ensure_open("clear_search")
        self._search_epoch += 1
        self._debouncer.cancel()
        self.search_accumulator.reset()
        self.search_accumulator.set_keyword(None)
        self._committed_keyword = None

        self._show_plain_items()

    async def wait_for_search(self) -> None:
        """Wait for a waiting or running debounced search to finish.

        Raises:
            Exception: Whatever the debounced search raised
        """
        await self._debouncer.join()

    async def close(self) -> None:
        """Cancel any waiting search and stop emitting states."""
        self._debouncer.cancel()
        self._close_state()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _shows_plain_outcome(self, epoch: int) -> bool:
        if self._is_superseded(epoch):
            return False
        return not self.is_search_mode

    def _is_search_superseded(self, epoch: int) -> bool:
        superseded = self._closed or epoch != self._search_epoch
        if superseded:
            logger.debug(
                "Dropping superseded search outcome",
                extra={"started_epoch": epoch, "current_epoch": self._search_epoch},
            )
        return superseded

    def _show_plain_items(self) -> None:
        """Emit the state of the plain accumulator, including a fetch in flight."""
        if not self.page_accumulator.is_loading:
            self.state_machine.loaded(self.page_accumulator.items)
        elif self.page_accumulator.page == FIRST_PAGE:
            self.state_machine.start_loading()
        else:
            self.state_machine.start_loading_more()

    async def _fetch_more(
        self,
        accumulator: BaseAccumulator[T],
        fetch: Callable[[], Awaitable[PaginationResult[T]]],
        *,
        is_displayed: Callable[[], bool],
    ) -> None:
        if not accumulator.can_load_more:
            logger.debug("No next page to fetch", extra=accumulator.page_info().model_dump())
            return

        if is_displayed():
            self.state_machine.start_loading_more()

        result = await fetch()
        if not is_displayed():
            return

        self.state_machine.apply_next_page_result(result, accumulator.items)

    async def _run_debounced_search(self) -> None:
        if self._closed:
            return

        keyword = self.search_accumulator.current_keyword
        if not keyword:
            self._committed_keyword = None
            self._show_plain_items()
            return

        epoch = self._search_epoch
        self.state_machine.start_loading()
        self._committed_keyword = keyword

        logger.info("Searching", extra={"keyword": keyword})
        result = await self.search_accumulator.fetch_next_page_for_current_keyword()
        if self._is_search_superseded(epoch):
            return

        self.state_machine.apply_initial_result(result, self.search_accumulator.items)
