"""Custom exception classes for the pagination core.

Fetch failures reported by a repository are NOT exceptions: they travel as
`Failure` results. The classes below cover defects and misuse only.
"""

from typing import Any

from pagination_core.utils.constants import (
    ERROR_CODE_INVALID_CONFIGURATION,
    ERROR_CODE_MANAGER_CLOSED,
    ERROR_CODE_STATE_MACHINE_CLOSED,
    ERROR_CODE_SUBSCRIBER_ALREADY_REGISTERED,
)


class PaginationError(Exception):
    """
    Base exception for all pagination errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class InvalidConfigurationError(PaginationError):
    """Raised when page, page size or settings values are invalid."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INVALID_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class SubscriberAlreadyRegisteredError(PaginationError):
    """Raised when a second listener subscribes to a state machine."""

    def __init__(
        self,
        *,
        message: str = "A state listener is already registered",
        error_code: str = ERROR_CODE_SUBSCRIBER_ALREADY_REGISTERED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StateMachineClosedError(PaginationError):
    """Raised when a state is emitted after the state machine was closed."""

    def __init__(
        self,
        *,
        message: str = "Cannot emit new states after calling close",
        error_code: str = ERROR_CODE_STATE_MACHINE_CLOSED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ManagerClosedError(PaginationError):
    """Raised when a closed manager or coordinator is asked to fetch or search."""

    def __init__(
        self,
        *,
        message: str = "Pagination manager is closed",
        error_code: str = ERROR_CODE_MANAGER_CLOSED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
