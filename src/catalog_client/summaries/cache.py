"""
SummaryCache: per-product review summaries with staleness detection.

An entry is reused only while the product's review count and the requested
language match what it was computed for. Concurrent requests for the same
(product, language, review count) share one computation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Tuple

from catalog_client.contracts.models import (
    FilterState,
    Product,
    ReviewSummary,
    SortDirection,
    SummaryCacheEntry,
    SummarySource,
)
from catalog_client.gateway import RequestGateway
from catalog_client.summaries.heuristic import local_summary, normalize_language

logger = logging.getLogger(__name__)

NEWEST_FIRST = FilterState(sort_by="createdAt", sort_dir=SortDirection.DESC)


class SummaryCache:
    def __init__(self, gateway: RequestGateway, review_limit: int = 30):
        self.gateway = gateway
        self.review_limit = review_limit
        self._entries: Dict[Tuple[int, str], SummaryCacheEntry] = {}
        self._inflight: Dict[Tuple[int, str, int], asyncio.Future] = {}
        self._categories: Dict[int, str] = {}
        self._review_counts: Dict[int, int] = {}

    async def get(self, product_id: int, language: str = "en", review_count: Optional[int] = None) -> SummaryCacheEntry:
        lang = normalize_language(language)
        if review_count is not None:
            self._review_counts[product_id] = review_count
        else:
            review_count = self._review_counts.get(product_id)
        if review_count is None:
            detail = (await self.gateway.get_product(product_id)).value
            self.remember(detail.product)
            review_count = detail.product.review_count

        entry = self._entries.get((product_id, lang))
        if entry is not None and entry.matches(review_count, lang):
            logger.debug("Summary cache hit for product %s (%s)", product_id, lang)
            return entry

        key = (product_id, lang, review_count)
        pending = self._inflight.get(key)
        if pending is not None:
            return await asyncio.shield(pending)

        task = asyncio.get_running_loop().create_task(self._compute(product_id, lang, review_count))
        self._inflight[key] = task
        task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    def remember(self, product: Product) -> None:
        """Record the latest review count and category seen for a product."""
        self._review_counts[product.id] = product.review_count
        self._categories[product.id] = product.category

    def invalidate(self, product_id: int) -> None:
        self._review_counts.pop(product_id, None)
        for key in [k for k in self._entries if k[0] == product_id]:
            del self._entries[key]

    def peek(self, product_id: int, language: str = "en") -> Optional[SummaryCacheEntry]:
        return self._entries.get((product_id, normalize_language(language)))

    async def _compute(self, product_id: int, lang: str, review_count: int) -> SummaryCacheEntry:
        if review_count == 0:
            entry = SummaryCacheEntry(
                product_id=product_id,
                review_count_at_fetch=0,
                language=lang,
                summary=ReviewSummary(review_count_used=0),
                source=SummarySource.LOCAL,
            )
        else:
            outcome = await self.gateway.get_summary(
                product_id,
                self.review_limit,
                lang,
                fallback=lambda: self._local(product_id, lang),
            )
            entry = SummaryCacheEntry(
                product_id=product_id,
                review_count_at_fetch=review_count,
                language=lang,
                summary=outcome.value,
                source=SummarySource.LOCAL if outcome.is_fallback else SummarySource.REMOTE,
            )
            logger.info("Summary for product %s (%s) computed from %s", product_id, lang, entry.source.value)

        self._entries[(product_id, lang)] = entry
        return entry

    async def _local(self, product_id: int, lang: str) -> ReviewSummary:
        page = (await self.gateway.get_reviews(product_id, NEWEST_FIRST, 0, self.review_limit)).value
        return local_summary(page.content, lang, self._categories.get(product_id))
