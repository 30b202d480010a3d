import asyncio
from dataclasses import dataclass
from typing import List

import pytest

from catalog_client.contracts import FilterState, Page
from catalog_client.listing import PaginatedFilterController


@dataclass
class Item:
    id: int


class DummyFetcher:
    """Serves ids 0..total-1 in pages and records every call."""

    def __init__(self, total: int = 25, delay: float = 0.0):
        self.total = total
        self.delay = delay
        self.calls: List[tuple] = []
        self.call_times: List[float] = []

    async def __call__(self, filters: FilterState, page: int, size: int) -> Page[Item]:
        self.calls.append((filters, page, size))
        self.call_times.append(asyncio.get_running_loop().time())
        if self.delay:
            await asyncio.sleep(self.delay)
        start = page * size
        ids = list(range(start, min(start + size, self.total)))
        return Page(
            content=[Item(i) for i in ids],
            total_elements=self.total,
            total_pages=-(-self.total // size),
            last=start + size >= self.total,
            number=page,
            size=size,
        )


def make_controller(fetcher, **kwargs) -> PaginatedFilterController:
    kwargs.setdefault("page_size", 10)
    kwargs.setdefault("debounce_seconds", 0.05)
    return PaginatedFilterController(fetcher, **kwargs)


@pytest.mark.asyncio
async def test_mount_loads_first_page_without_debounce():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher)

    await controller.mount()

    assert [i.id for i in controller.items] == list(range(10))
    assert controller.has_more is True
    assert controller.loading is False
    assert fetcher.calls[0][1:] == (0, 10)


@pytest.mark.asyncio
async def test_search_typing_burst_triggers_one_debounced_reload():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher)
    await controller.mount()
    loop = asyncio.get_running_loop()

    for text in ("p", "ph", "pho"):
        controller.update_filters(search_text=text)
        last_change = loop.time()
        await asyncio.sleep(0.01)

    assert controller.search_pending
    await controller.wait_idle()

    assert len(fetcher.calls) == 2
    filters, page, _ = fetcher.calls[1]
    assert filters.search_text == "pho"
    assert page == 0
    assert fetcher.call_times[1] - last_change >= 0.05 - 0.005


@pytest.mark.asyncio
async def test_non_search_change_reloads_immediately_and_resets_page():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher)
    await controller.mount()
    await controller.load_more()
    assert controller.page == 1

    controller.update_filters(category="Books")
    await controller.wait_idle()

    assert len(fetcher.calls) == 3
    assert fetcher.calls[-1][0].category == "Books"
    assert fetcher.calls[-1][1] == 0
    assert controller.page == 0
    assert len(controller.items) == 10


@pytest.mark.asyncio
async def test_other_change_cancels_pending_search_timer():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher, debounce_seconds=0.2)
    await controller.mount()

    controller.update_filters(search_text="lap")
    controller.update_filters(category="Electronics")
    await controller.wait_idle()
    await asyncio.sleep(0.25)

    assert len(fetcher.calls) == 2
    assert fetcher.calls[1][0] == FilterState(category="Electronics", search_text="lap")


@pytest.mark.asyncio
async def test_clearing_search_reloads_immediately():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher, initial_filters=FilterState(search_text="mac"), debounce_seconds=1)
    await controller.mount()

    controller.update_filters(search_text="")
    assert not controller.search_pending
    await controller.wait_idle()

    assert len(fetcher.calls) == 2
    assert fetcher.calls[1][0].search_text == ""


@pytest.mark.asyncio
async def test_equal_filters_do_not_reload():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher)
    await controller.mount()

    controller.set_filters(FilterState())
    await controller.wait_idle()

    assert len(fetcher.calls) == 1


@pytest.mark.asyncio
async def test_load_more_appends_until_last_page():
    fetcher = DummyFetcher(total=25)
    controller = make_controller(fetcher)
    await controller.mount()

    await controller.load_more()
    await controller.load_more()
    await controller.load_more()

    assert [i.id for i in controller.items] == list(range(25))
    assert controller.has_more is False
    assert len(fetcher.calls) == 3


@pytest.mark.asyncio
async def test_concurrent_load_more_is_a_no_op():
    fetcher = DummyFetcher(delay=0.02)
    controller = make_controller(fetcher)
    await controller.mount()

    await asyncio.gather(controller.load_more(), controller.load_more())

    assert [call[1] for call in fetcher.calls] == [0, 1]
    assert len(controller.items) == 20


@pytest.mark.asyncio
async def test_duplicate_batch_stops_pagination():
    async def fetch(filters, page, size):
        # a backend that ignores the page parameter
        return Page(content=[Item(1), Item(2), Item(2)], total_elements=100)

    controller = make_controller(fetch, page_size=3)
    await controller.mount()
    assert [i.id for i in controller.items] == [1, 2]
    assert controller.has_more is True

    await controller.load_more()

    assert [i.id for i in controller.items] == [1, 2]
    assert controller.has_more is False


@pytest.mark.asyncio
async def test_has_more_falls_back_to_total_pages_then_batch_size():
    async def with_total_pages(filters, page, size):
        return Page(content=[Item(page * 10 + i) for i in range(size)], total_elements=20, total_pages=2)

    controller = make_controller(with_total_pages)
    await controller.mount()
    assert controller.has_more is True
    await controller.load_more()
    assert controller.has_more is False

    async def size_only(filters, page, size):
        count = size if page == 0 else 4
        return Page(content=[Item(page * 10 + i) for i in range(count)], total_elements=0)

    controller = make_controller(size_only)
    await controller.mount()
    assert controller.has_more is True
    await controller.load_more()
    assert controller.has_more is False
    assert len(controller.items) == 14


@pytest.mark.asyncio
async def test_stale_results_are_discarded():
    async def fetch(filters, page, size):
        if filters.category is None:
            await asyncio.sleep(0.05)
            return Page(content=[Item(100)], total_elements=1)
        return Page(content=[Item(1), Item(2)], total_elements=2)

    controller = make_controller(fetch)

    mount = asyncio.ensure_future(controller.mount())
    await asyncio.sleep(0)
    controller.update_filters(category="Books")
    await controller.wait_idle()
    await mount

    assert [i.id for i in controller.items] == [1, 2]
    assert controller.loading is False


@pytest.mark.asyncio
async def test_fetch_errors_are_stored_not_raised():
    async def failing(filters, page, size):
        raise RuntimeError("boom")

    controller = make_controller(failing)
    await controller.mount()

    assert isinstance(controller.error, RuntimeError)
    assert controller.loading is False
    assert controller.items == []


@pytest.mark.asyncio
async def test_close_cancels_pending_search():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher)
    await controller.mount()

    controller.update_filters(search_text="watch")
    controller.close()
    await asyncio.sleep(0.1)

    assert len(fetcher.calls) == 1


@pytest.mark.asyncio
async def test_refresh_reloads_first_page_with_current_filters():
    fetcher = DummyFetcher()
    controller = make_controller(fetcher, debounce_seconds=1)
    await controller.mount()
    await controller.load_more()

    controller.update_filters(search_text="wat")
    await controller.refresh()

    assert not controller.search_pending
    assert fetcher.calls[-1][0].search_text == "wat"
    assert fetcher.calls[-1][1] == 0
    assert len(controller.items) == 10
    assert len(fetcher.calls) == 3
