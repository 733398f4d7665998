"""
Observable state holder for a paginated view.

Translates fetch outcomes into the discrete states consumed by one
presentation-layer listener, in strict chronological order.
"""

from collections.abc import Callable, Sequence
from typing import Any

from aws_lambda_powertools import Logger

from pagination_core.models.errors import (
    StateMachineClosedError,
    SubscriberAlreadyRegisteredError,
)
from pagination_core.models.result import PaginationResult
from pagination_core.state.models import (
    FailedState,
    InitialState,
    LoadedState,
    LoadingMoreState,
    LoadingState,
    PaginationState,
)

StateListener = Callable[[PaginationState], None]

logger = Logger(UTC=True)


class PaginationStateMachine:
    """
    Holds the latest state and notifies a single listener of every change.

    Transitions:
    - Initial/Loaded/Failed → Loading on an initial or search fetch
    - Loading → Loaded | Failed when that fetch resolves
    - Loaded → LoadingMore on a next-page fetch
    - LoadingMore → Loaded, with `soft_error` set if the fetch failed

    There is no terminal state. After `close()` no further state may be emitted.
    """

    def __init__(self) -> None:
        self._state: PaginationState = InitialState()
        self._listener: StateListener | None = None
        self._closed = False

    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register the listener and return a function that unregisters it.

        Raises:
            SubscriberAlreadyRegisteredError: If a listener is already registered
        """
        if self._listener is not None:
            raise SubscriberAlreadyRegisteredError()

        self._listener = listener

        def unsubscribe() -> None:
            if self._listener is listener:
                self._listener = None

        return unsubscribe

    def emit(self, state: PaginationState) -> None:
        """Make `state` current and notify the listener.

        Raises:
            StateMachineClosedError: If the machine was closed
        """
        if self._closed:
            raise StateMachineClosedError(
                details={"state": type(state).__name__},
            )

        logger.debug(
            "State transition",
            extra={"from": type(self._state).__name__, "to": type(state).__name__},
        )
        self._state = state
        if self._listener is not None:
            self._listener(state)

    def start_loading(self) -> None:
        self.emit(LoadingState())

    def start_loading_more(self) -> None:
        self.emit(LoadingMoreState())

    def loaded(self, items: Sequence[Any], *, soft_error: str | None = None) -> None:
        self.emit(LoadedState(items=tuple(items), soft_error=soft_error))

    def failed(self, message: str) -> None:
        self.emit(FailedState(message=message))

    def apply_initial_result(
        self,
        result: PaginationResult[Any],
        items: Sequence[Any],
    ) -> None:
        """Emit the outcome of an initial or search fetch.

        Args:
            result: Result of the fetch
            items: Accumulated items to show on success
        """
        result.when(
            success=lambda _: self.loaded(items),
            failure=self.failed,
        )

    def apply_next_page_result(
        self,
        result: PaginationResult[Any],
        items: Sequence[Any],
    ) -> None:
        """Emit the outcome of a next-page fetch; failures become soft errors."""
        result.when(
            success=lambda _: self.loaded(items),
            failure=lambda message: self.loaded(items, soft_error=message),
        )

    def close(self) -> None:
        self._closed = True
        self._listener = None
