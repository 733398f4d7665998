"""Result of a single page fetch."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from typing_extensions import TypeAliasType

T = TypeVar("T")
R = TypeVar("R")


class Success(BaseModel, Generic[T]):
    """A page fetch that produced items."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: tuple[T, ...] = Field(..., description="Items returned by the fetch, in server order")

    @property
    def is_success(self) -> bool:
        return True

    def when(
        self,
        *,
        success: Callable[[tuple[T, ...]], R],
        failure: Callable[[str], R],
    ) -> R:
        """Invoke `success` with the items and return its result."""
        return success(self.items)


class Failure(BaseModel):
    """A page fetch that failed with a human-readable message."""

    model_config = ConfigDict(frozen=True)

    message: StrictStr = Field(..., description="Failure message suitable for display")

    @property
    def is_success(self) -> bool:
        return False

    def when(
        self,
        *,
        success: Callable[[tuple[Any, ...]], R],
        failure: Callable[[str], R],
    ) -> R:
        """Invoke `failure` with the message and return its result."""
        return failure(self.message)


PaginationResult = TypeAliasType("PaginationResult", Union[Success[T], Failure], type_params=(T,))


def is_result(value: object) -> bool:
    """Check whether a repository returned one of the two result variants."""
    return isinstance(value, (Success, Failure))
