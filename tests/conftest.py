"""
Pytest configuration and fixtures for pagination tests.
Provides item factories and fake repositories that record calls and can be
scripted, held in flight, or made to raise.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from pagination_core.models.result import Failure, PaginationResult, Success
from pagination_core.repositories.paginated_repository import PaginatedRepositoryWithSearch
from pagination_core.state.models import PaginationState

Item = dict[str, Any]


def make_items(count: int, *, start: int = 1, prefix: str = "Post") -> list[Item]:
    """Build `count` post-like items numbered from `start`."""
    return [
        {"post_id": index, "title": f"{prefix} {index}"}
        for index in range(start, start + count)
    ]


class FakeRepository(PaginatedRepositoryWithSearch[Item]):
    """
    Scriptable repository double.

    Each fetch pops the next scripted response for its kind (plain or search).
    A response may be a result, a callable producing one from the call
    arguments, or an exception instance to raise. When nothing is scripted,
    a full page of generated items is returned.

    Setting `hold()` makes fetches wait until `release()` is called.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.search_calls: list[dict[str, Any]] = []
        self.responses: list[Any] = []
        self.search_responses: list[Any] = []
        self._gate: asyncio.Event | None = None

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    async def fetch_paginated_items(
        self,
        *,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[Item]:
        call = {"page": page, "limit_per_page": limit_per_page}
        self.calls.append(call)
        return await self._respond(self.responses, call, prefix="Post")

    async def fetch_paginated_search_items(
        self,
        *,
        keyword: str,
        page: int,
        limit_per_page: int,
    ) -> PaginationResult[Item]:
        call = {"keyword": keyword, "page": page, "limit_per_page": limit_per_page}
        self.search_calls.append(call)
        return await self._respond(self.search_responses, call, prefix=keyword)

    async def _respond(
        self,
        queue: list[Any],
        call: dict[str, Any],
        *,
        prefix: str,
    ) -> PaginationResult[Item]:
        gate = self._gate
        if gate is not None:
            await gate.wait()

        if queue:
            response = queue.pop(0)
            if isinstance(response, BaseException):
                raise response
            if callable(response):
                return response(call)
            return response

        limit = call["limit_per_page"]
        start = (call["page"] - 1) * limit + 1
        return Success(items=tuple(make_items(limit, start=start, prefix=prefix)))


@pytest.fixture
def fake_repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def page_of() -> Callable[..., Success[Item]]:
    """
    Helper to build a successful page.

    Usage:
        repo.responses.append(page_of(20, start=21))
    """

    def _page(count: int, *, start: int = 1, prefix: str = "Post") -> Success[Item]:
        return Success(items=tuple(make_items(count, start=start, prefix=prefix)))

    return _page


@pytest.fixture
def failure_of() -> Callable[[str], Failure]:
    def _failure(message: str) -> Failure:
        return Failure(message=message)

    return _failure


@pytest.fixture
def recorded_states() -> list[PaginationState]:
    """List that a state listener appends to."""
    return []


@pytest.fixture
def sample_posts() -> list[Item]:
    """Posts for in-memory repository tests."""
    return [
        {"post_id": 1, "title": "Cat care basics"},
        {"post_id": 2, "title": "Dog training"},
        {"post_id": 3, "title": "Category theory"},
        {"post_id": 4, "title": "Sunset photos"},
        {"post_id": 5, "title": "CATS in art"},
    ]
