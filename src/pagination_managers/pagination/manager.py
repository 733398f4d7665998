"""
Single-mode pagination manager.
"""

from typing import Generic, TypeVar

from aws_lambda_powertools import Logger

from pagination_core.models.settings import PaginationSettings
from pagination_core.pagination.page_accumulator import PageAccumulator
from pagination_core.repositories.paginated_repository import PaginatedRepository
from pagination_core.state.state_machine import PaginationStateMachine
from pagination_core.utils.constants import DEFAULT_LIMIT_PER_PAGE
from pagination_managers.base import StateEmittingManager

T = TypeVar("T")

logger = Logger(UTC=True)


class PaginationManager(StateEmittingManager, Generic[T]):
    """Drives one `PageAccumulator` and emits list states for it.

    This manager coordinates:
    - Resetting and fetching the first page (Loading → Loaded | Failed)
    - Fetching further pages (LoadingMore → Loaded, with soft errors)
    """

    def __init__(
        self,
        repository: PaginatedRepository[T],
        *,
        limit_per_page: int = DEFAULT_LIMIT_PER_PAGE,
        state_machine: PaginationStateMachine | None = None,
    ) -> None:
        settings = PaginationSettings.build(limit_per_page=limit_per_page)
        super().__init__(state_machine)
        self.accumulator: PageAccumulator[T] = PageAccumulator(
            repository,
            limit_per_page=settings.limit_per_page,
        )

    @property
    def current_items(self) -> tuple[T, ...]:
        return self.accumulator.items

    @property
    def can_load_more(self) -> bool:
        return self.accumulator.can_load_more

    async def fetch_initial_items(self) -> None:
        """Reset and fetch the first page."""
        self._ensure_open("fetch_initial_items")
        epoch = self._begin_epoch()
        self.accumulator.reset()
        self.state_machine.start_loading()

        result = await self.accumulator.fetch_next_page()
        if self._is_superseded(epoch):
            return

        self.state_machine.apply_initial_result(result, self.accumulator.items)

    async def fetch_next_page(self) -> None:
        """Fetch the next page while keeping the loaded items visible."""
        self._ensure_open("fetch_next_page")
        if not self.accumulator.can_load_more:
            logger.debug("No next page to fetch", extra=self.accumulator.page_info().model_dump())
            return

        epoch = self._epoch
        self.state_machine.start_loading_more()

        result = await self.accumulator.fetch_next_page()
        if self._is_superseded(epoch):
            return

        self.state_machine.apply_next_page_result(result, self.accumulator.items)

    async def close(self) -> None:
        self._close_state()
