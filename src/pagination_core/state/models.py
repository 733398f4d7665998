"""States emitted to the presentation layer of a paginated view."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class PaginationState(BaseModel):
    """Base class for all pagination states."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class InitialState(PaginationState):
    """Nothing has been fetched yet."""


class LoadingState(PaginationState):
    """Initial or search fetch in flight; no items are shown yet."""


class LoadingMoreState(PaginationState):
    """Next-page fetch in flight; existing items stay visible."""


class LoadedState(PaginationState):
    """Items are available.

    `soft_error` is set when a next-page fetch failed and the previously
    loaded items are still valid to display.
    """

    items: tuple[Any, ...] = Field(..., description="Items to display")
    soft_error: StrictStr | None = Field(
        None,
        description="Message of a failed next-page fetch, if any",
    )


class FailedState(PaginationState):
    """Initial or search fetch failed with nothing to fall back on."""

    message: StrictStr = Field(..., description="Failure message suitable for display")
