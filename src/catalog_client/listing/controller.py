"""
PaginatedFilterController: filter state + paged, append-only result list.

Used for the product list and for a product's review list. A change that only
touches a non-empty search text is debounced; every other change reloads page
0 right away. Each reset starts a new load generation, and results belonging
to an older generation are dropped when they arrive.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Hashable, List, Optional, Set, TypeVar

from catalog_client.concurrency.timers import Debouncer
from catalog_client.contracts.models import FilterState, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[FilterState, int, int], Awaitable[Page[T]]]

SEARCH_TIMER = "search"


def _item_id(item: Any) -> Hashable:
    return item.id


class PaginatedFilterController(Generic[T]):
    def __init__(
        self,
        fetch_page: PageFetcher,
        *,
        page_size: int = 20,
        initial_filters: Optional[FilterState] = None,
        debounce_seconds: float = 0.5,
        key: Callable[[T], Hashable] = _item_id,
        name: str = "list",
    ):
        self.fetch_page = fetch_page
        self.page_size = page_size
        self.debounce_seconds = debounce_seconds
        self.key = key
        self.name = name

        self.filters: FilterState = initial_filters or FilterState()
        self.items: List[T] = []
        self.page = 0
        self.has_more = True
        self.loading = False
        self.error: Optional[Exception] = None
        self.total_elements: Optional[int] = None

        self._seen: Set[Hashable] = set()
        self._generation = 0
        self._debouncer = Debouncer()
        self._tasks: Set[asyncio.Task] = set()

    # --- Public API -----------------------------------------------------------

    async def mount(self) -> None:
        """Initial load of page 0 with the current filters, no debounce."""
        await self._load(0, reset=True)

    async def refresh(self) -> None:
        self._debouncer.cancel(SEARCH_TIMER)
        await self._load(0, reset=True)

    def set_filters(self, new: FilterState) -> None:
        previous = self.filters
        if new == previous:
            return
        self.filters = new

        if new.differs_only_in_search(previous) and new.search_text.strip():
            self._debouncer.schedule(SEARCH_TIMER, self.debounce_seconds, lambda: self._load(0, reset=True))
            return

        self._debouncer.cancel(SEARCH_TIMER)
        self._spawn(self._load(0, reset=True))

    def update_filters(self, **changes: Any) -> None:
        self.set_filters(self.filters.with_changes(**changes))

    async def load_more(self) -> None:
        if self.loading or not self.has_more:
            return
        await self._load(self.page + 1, reset=False)

    async def wait_idle(self) -> None:
        """Wait until no search timer is pending and no load is in flight."""
        while True:
            timer = self._debouncer.timer(SEARCH_TIMER)
            if timer is not None and not timer.done:
                await timer.wait()
                continue
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        self._debouncer.cancel_all()
        self._generation += 1

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending(SEARCH_TIMER)

    # --- Internals ------------------------------------------------------------

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load(self, page: int, *, reset: bool) -> None:
        if reset:
            self._generation += 1
        generation = self._generation
        filters = self.filters

        self.loading = True
        self.error = None
        try:
            result = await self.fetch_page(filters, page, self.page_size)
        except Exception as e:
            if generation == self._generation:
                logger.error("%s: failed to load page %s: %s", self.name, page, e, exc_info=True)
                self.error = e
                self.loading = False
            return

        if generation != self._generation:
            logger.debug("%s: discarding stale page %s", self.name, page)
            return

        if reset:
            self.items = []
            self._seen = set()

        added = 0
        for item in result.content:
            item_key = self.key(item)
            if item_key in self._seen:
                continue
            self._seen.add(item_key)
            self.items.append(item)
            added += 1

        self.page = page
        self.total_elements = result.total_elements
        self.has_more = added > 0 and self._has_more(result, page)
        self.loading = False

    def _has_more(self, result: Page[T], page: int) -> bool:
        if result.last is not None:
            return not result.last
        if result.total_pages is not None:
            return page + 1 < result.total_pages
        return len(result.content) == self.page_size
