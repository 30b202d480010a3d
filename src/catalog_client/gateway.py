"""
RequestGateway: live-first execution with demo fallback.

Every catalog/review operation goes through here:
- the live call is bounded by a per-kind timeout (read / write / summary)
- Timeout, NetworkError and non-surfaced HTTP statuses switch Mode to demo
  and serve the same operation from the DemoDataset
- MalformedResponse is served from the fallback but keeps Mode=live (the
  backend is reachable, only its payload was unusable)
- NotFound / Forbidden / ValidationError from the backend are answers: Mode
  stays live and the error is raised to the caller

Results are tagged Live(...) / Fallback(...); live and demo data are never
merged.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional

from catalog_client.clients.live_http import LiveCatalogClient
from catalog_client.concurrency.outcomes import Outcome, first_success_or
from catalog_client.config import TimeoutConfig
from catalog_client.contracts.errors import LiveCallFailed, MalformedResponse
from catalog_client.contracts.models import (
    FilterState,
    HelpfulToggleResult,
    Mode,
    Page,
    Product,
    ProductDetail,
    Review,
    ReviewDraft,
    ReviewSummary,
    TranslationResult,
)
from catalog_client.demo.dataset import DemoDataset
from catalog_client.storage.mode_store import ModeStore

logger = logging.getLogger(__name__)


class RequestGateway:
    def __init__(
        self,
        live: LiveCatalogClient,
        demo: DemoDataset,
        mode_store: ModeStore,
        timeouts: Optional[TimeoutConfig] = None,
    ):
        self.live = live
        self.demo = demo
        self.mode_store = mode_store
        self.timeouts = timeouts or TimeoutConfig()

    @property
    def mode(self) -> Mode:
        return self.mode_store.get()

    # --- Reads ----------------------------------------------------------------

    async def list_products(self, filters: FilterState, page: int, size: int) -> Outcome[Page[Product]]:
        return await self._run(
            "list_products",
            self.live.list_products(filters, page, size),
            lambda: self.demo.list_products(filters, page, size),
            self.timeouts.read_seconds,
        )

    async def get_product(self, product_id: int) -> Outcome[ProductDetail]:
        return await self._run(
            "get_product",
            self.live.get_product(product_id),
            lambda: self.demo.get_product(product_id),
            self.timeouts.read_seconds,
        )

    async def get_reviews(
        self, product_id: int, filters: FilterState, page: int, size: int
    ) -> Outcome[Page[Review]]:
        return await self._run(
            "get_reviews",
            self.live.get_reviews(product_id, filters, page, size),
            lambda: self.demo.list_reviews(product_id, filters, page, size),
            self.timeouts.read_seconds,
        )

    async def get_summary(
        self,
        product_id: int,
        limit: int,
        lang: str,
        fallback: Callable[[], Any],
    ) -> Outcome[ReviewSummary]:
        """Remote summary; the local heuristic is supplied by the caller."""
        return await self._run(
            "get_summary",
            self.live.get_summary(product_id, limit, lang),
            fallback,
            self.timeouts.summary_seconds,
        )

    # --- Writes ---------------------------------------------------------------

    async def create_review(self, product_id: int, draft: ReviewDraft) -> Outcome[Review]:
        return await self._run(
            "create_review",
            self.live.create_review(product_id, draft),
            lambda: self.demo.add_review(product_id, draft),
            self.timeouts.write_seconds,
        )

    async def update_review(self, review_id: int, draft: ReviewDraft) -> Outcome[Review]:
        return await self._run(
            "update_review",
            self.live.update_review(review_id, draft),
            lambda: self.demo.update_review(review_id, draft),
            self.timeouts.write_seconds,
        )

    async def delete_review(self, review_id: int, device_id: str) -> Outcome[None]:
        return await self._run(
            "delete_review",
            self.live.delete_review(review_id, device_id),
            lambda: self.demo.delete_review(review_id, device_id),
            self.timeouts.write_seconds,
        )

    async def toggle_helpful(self, review_id: int, device_id: str) -> Outcome[HelpfulToggleResult]:
        return await self._run(
            "toggle_helpful",
            self.live.toggle_helpful(review_id, device_id),
            lambda: self.demo.toggle_helpful(review_id, device_id),
            self.timeouts.write_seconds,
        )

    async def translate(self, texts: List[str], lang: str) -> Outcome[TranslationResult]:
        # no offline translator: the fallback hands back the original texts
        return await self._run(
            "translate",
            self.live.translate(texts, lang),
            lambda: TranslationResult(lang=lang, source="fallback", translations=list(texts)),
            self.timeouts.read_seconds,
        )

    # --- Internals ------------------------------------------------------------

    async def _run(
        self,
        operation: str,
        live_call: Awaitable[Any],
        fallback: Callable[[], Any],
        seconds: float,
    ) -> Outcome:
        return await first_success_or(
            live_call,
            fallback,
            seconds=seconds,
            operation=operation,
            on_live_settled=lambda: self.mode_store.set(Mode.LIVE),
            on_live_failed=self._on_live_failed,
        )

    def _on_live_failed(self, error: LiveCallFailed) -> None:
        if isinstance(error, MalformedResponse):
            logger.warning("Malformed backend payload for %s, using fallback: %s", error.operation, error)
            self.mode_store.set(Mode.LIVE)
            return
        logger.warning("Live %s failed, switching to demo data: %s", error.operation, error)
        self.mode_store.set(Mode.DEMO)
