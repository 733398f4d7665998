"""
Shared plumbing for managers that drive a state machine.
"""

from aws_lambda_powertools import Logger

from pagination_core.models.errors import ManagerClosedError
from pagination_core.state.models import PaginationState
from pagination_core.state.state_machine import PaginationStateMachine, StateListener

logger = Logger(UTC=True)


class StateEmittingManager:
    """
    Base for managers that emit states for their fetches.

    Keeps an operation epoch: operations that restart the list (initial
    fetch, close) bump it, and a fetch only emits its outcome if the epoch
    it started under is still current.
    """

    def __init__(self, state_machine: PaginationStateMachine | None = None) -> None:
        self.state_machine = state_machine or PaginationStateMachine()
        self._epoch = 0
        self._closed = False

    @property
    def state(self) -> PaginationState:
        return self.state_machine.state

    @property
    def is_closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener):
        """Register the single state listener. See `PaginationStateMachine.subscribe`."""
        return self.state_machine.subscribe(listener)

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ManagerClosedError(details={"operation": operation})

    def _begin_epoch(self) -> int:
        self._epoch += 1
        return self._epoch

    def _is_superseded(self, epoch: int) -> bool:
        superseded = self._closed or epoch != self._epoch
        if superseded:
            logger.debug(
                "Dropping superseded fetch outcome",
                extra={"started_epoch": epoch, "current_epoch": self._epoch},
            )
        return superseded

    def _close_state(self) -> None:
        self._closed = True
        self._epoch += 1
        self.state_machine.close()
