import asyncio

import pytest

from pagination_core.models.errors import InvalidConfigurationError
from pagination_core.models.result import Failure, Success
from pagination_core.pagination.page_accumulator import PageAccumulator
from pagination_core.utils.constants import MESSAGE_FETCH_UNAVAILABLE


class TestFetchNextPage:
    async def test_full_then_partial_page(self, fake_repository, page_of) -> None:
        fake_repository.responses.extend([page_of(20), page_of(5, start=21)])
        accumulator = PageAccumulator(fake_repository, limit_per_page=20)

        await accumulator.fetch_next_page()

        assert accumulator.has_more is True
        assert accumulator.page == 2

        await accumulator.fetch_next_page()

        assert accumulator.has_more is False
        assert accumulator.page == 3
        assert len(accumulator.items) == 25

        result = await accumulator.fetch_next_page()

        assert result == Success(items=accumulator.items)
        assert len(result.items) == 25
        assert len(fake_repository.calls) == 2

    async def test_requests_successive_pages(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository, limit_per_page=3)

        for _ in range(3):
            await accumulator.fetch_next_page()

        assert fake_repository.calls == [
            {"page": 1, "limit_per_page": 3},
            {"page": 2, "limit_per_page": 3},
            {"page": 3, "limit_per_page": 3},
        ]

    async def test_items_accumulate_in_call_order(self, fake_repository, page_of) -> None:
        fake_repository.responses.extend(
            [page_of(4, start=1), page_of(4, start=100), page_of(2, start=7)]
        )
        accumulator = PageAccumulator(fake_repository, limit_per_page=4)

        for _ in range(3):
            await accumulator.fetch_next_page()

        assert [item["post_id"] for item in accumulator.items] == [
            1, 2, 3, 4, 100, 101, 102, 103, 7, 8,
        ]

    async def test_returns_repository_result_as_received(self, fake_repository, page_of) -> None:
        page = page_of(2)
        fake_repository.responses.append(page)
        accumulator = PageAccumulator(fake_repository, limit_per_page=2)

        result = await accumulator.fetch_next_page()

        assert result is page

    async def test_empty_page_ends_pagination(self, fake_repository) -> None:
        fake_repository.responses.append(Success(items=[]))
        accumulator = PageAccumulator(fake_repository, limit_per_page=10)

        await accumulator.fetch_next_page()

        assert accumulator.has_more is False
        assert accumulator.items == ()

    async def test_has_more_never_flips_back(self, fake_repository, page_of) -> None:
        fake_repository.responses.extend([page_of(1)])
        accumulator = PageAccumulator(fake_repository, limit_per_page=2)

        await accumulator.fetch_next_page()
        await accumulator.fetch_next_page()

        assert accumulator.has_more is False
        assert len(fake_repository.calls) == 1

    async def test_failure_leaves_state_untouched(
        self, fake_repository, page_of, failure_of
    ) -> None:
        fake_repository.responses.extend([page_of(5), failure_of("timeout")])
        accumulator = PageAccumulator(fake_repository, limit_per_page=5)
        await accumulator.fetch_next_page()

        result = await accumulator.fetch_next_page()

        assert result == Failure(message="timeout")
        assert accumulator.page == 2
        assert len(accumulator.items) == 5
        assert accumulator.has_more is True
        assert accumulator.is_loading is False

    async def test_retry_after_failure_requests_same_page(
        self, fake_repository, failure_of
    ) -> None:
        fake_repository.responses.append(failure_of("timeout"))
        accumulator = PageAccumulator(fake_repository, limit_per_page=5)

        await accumulator.fetch_next_page()
        await accumulator.fetch_next_page()

        assert [call["page"] for call in fake_repository.calls] == [1, 1]
        assert len(accumulator.items) == 5

    async def test_repository_exception_becomes_failure(self, fake_repository) -> None:
        fake_repository.responses.append(ConnectionError("refused"))
        accumulator = PageAccumulator(fake_repository, limit_per_page=5)

        result = await accumulator.fetch_next_page()

        assert result == Failure(message=MESSAGE_FETCH_UNAVAILABLE)
        assert accumulator.is_loading is False
        assert accumulator.page == 1


class TestSingleFlight:
    async def test_call_while_loading_is_a_no_op(self, fake_repository, page_of) -> None:
        fake_repository.responses.append(page_of(3))
        accumulator = PageAccumulator(fake_repository, limit_per_page=3)
        fake_repository.hold()

        first = asyncio.create_task(accumulator.fetch_next_page())
        await asyncio.sleep(0)

        assert accumulator.is_loading is True
        assert accumulator.can_load_more is False

        second = await accumulator.fetch_next_page()

        assert second == Success(items=())
        assert len(fake_repository.calls) == 1

        fake_repository.release()
        await first

        assert accumulator.is_loading is False
        assert len(accumulator.items) == 3

    async def test_reset_discards_in_flight_result(self, fake_repository, page_of) -> None:
        fake_repository.responses.extend([page_of(3, prefix="stale"), page_of(3, prefix="fresh")])
        accumulator = PageAccumulator(fake_repository, limit_per_page=3)
        fake_repository.hold()

        stale = asyncio.create_task(accumulator.fetch_next_page())
        await asyncio.sleep(0)
        accumulator.reset()
        fresh = asyncio.create_task(accumulator.fetch_next_page())
        await asyncio.sleep(0)

        fake_repository.release()
        stale_result, fresh_result = await asyncio.gather(stale, fresh)

        assert [item["title"] for item in accumulator.items] == [
            "fresh 1", "fresh 2", "fresh 3",
        ]
        assert accumulator.page == 2
        assert accumulator.is_loading is False
        assert stale_result.is_success is True
        assert fresh_result == page_of(3, prefix="fresh")

    async def test_reset_during_flight_unblocks_new_fetch(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository, limit_per_page=3)
        fake_repository.hold()

        in_flight = asyncio.create_task(accumulator.fetch_next_page())
        await asyncio.sleep(0)
        accumulator.reset()

        assert accumulator.is_loading is False
        assert accumulator.can_load_more is True

        fake_repository.release()
        await in_flight

        assert accumulator.items == ()
        assert accumulator.page == 1


class TestReset:
    async def test_reset_restores_initial_state(self, fake_repository, page_of) -> None:
        fake_repository.responses.extend([page_of(2), page_of(1, start=3)])
        accumulator = PageAccumulator(fake_repository, limit_per_page=2)
        await accumulator.fetch_next_page()
        await accumulator.fetch_next_page()
        generation = accumulator.generation

        accumulator.reset()

        assert accumulator.page == 1
        assert accumulator.items == ()
        assert accumulator.has_more is True
        assert accumulator.is_loading is False
        assert accumulator.generation > generation


class TestConfiguration:
    async def test_zero_limit_is_invalid(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository, limit_per_page=0)

        with pytest.raises(InvalidConfigurationError):
            await accumulator.fetch_next_page()

        assert fake_repository.calls == []

    async def test_negative_limit_is_invalid(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository, limit_per_page=-5)

        with pytest.raises(InvalidConfigurationError) as exc_info:
            await accumulator.fetch_next_page()

        assert exc_info.value.details == {"page": 1, "limit_per_page": -5}


class TestItemEditing:
    def test_add_remove_update(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository)

        accumulator.add_item({"post_id": 1})
        accumulator.add_item({"post_id": 2})
        accumulator.update_item(1, {"post_id": 20})

        assert accumulator.items == ({"post_id": 1}, {"post_id": 20})
        assert accumulator.remove_item({"post_id": 1}) is True
        assert accumulator.remove_item({"post_id": 99}) is False
        assert accumulator.items == ({"post_id": 20},)

    def test_out_of_range_indexes_are_ignored(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository)
        accumulator.add_item("a")

        accumulator.remove_at(5)
        accumulator.remove_at(-1)
        accumulator.update_item(3, "z")

        assert accumulator.items == ("a",)

        accumulator.remove_at(0)

        assert accumulator.items == ()

    def test_items_view_is_immutable(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository)
        accumulator.add_item("a")

        view = accumulator.items
        accumulator.add_item("b")

        assert view == ("a",)


class TestPageInfo:
    async def test_page_info_snapshot(self, fake_repository) -> None:
        accumulator = PageAccumulator(fake_repository, limit_per_page=4)
        await accumulator.fetch_next_page()

        info = accumulator.page_info()

        assert info.page == 2
        assert info.limit == 4
        assert info.has_more is True
        assert info.next_page == 2
        assert info.item_count == 4
        assert info.keyword is None
