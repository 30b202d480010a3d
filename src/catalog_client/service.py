"""
CatalogService: the single entry point screens use for catalog data.

Purpose:
- Hide which source (live backend or demo dataset) served a call; every
  method returns the same shapes either way
- Expose the current Mode as a side channel for the "offline / demo" banner
- Build list controllers bound to this service

Composition happens in build_catalog_service() only.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from catalog_client.clients.live_http import LiveCatalogClient
from catalog_client.clients.probe import ConnectivityProbe
from catalog_client.config import ClientSettings, load_client_settings
from catalog_client.contracts.models import (
    FilterState,
    Mode,
    Page,
    Product,
    ProductDetail,
    Review,
    SortDirection,
    SummaryCacheEntry,
    TranslationResult,
)
from catalog_client.demo.dataset import DemoDataset
from catalog_client.gateway import RequestGateway
from catalog_client.listing.controller import PaginatedFilterController
from catalog_client.reviews.coordinator import ReviewMutationCoordinator
from catalog_client.storage import ClientPreferences, KeyValueStore, ModeStore, key_value_store_from_env
from catalog_client.summaries.cache import SummaryCache

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_FILTERS = FilterState(sort_by="createdAt", sort_dir=SortDirection.DESC)


class CatalogService:
    def __init__(
        self,
        settings: ClientSettings,
        gateway: RequestGateway,
        preferences: ClientPreferences,
        probe: ConnectivityProbe,
    ):
        self.settings = settings
        self.gateway = gateway
        self.preferences = preferences
        self.probe = probe
        self.reviews = ReviewMutationCoordinator(gateway, review_page_size=settings.listing.review_page_size)
        self.summaries = SummaryCache(gateway, review_limit=settings.summaries.review_limit)

    @property
    def current_mode(self) -> Mode:
        return self.gateway.mode

    # --- Catalog --------------------------------------------------------------

    async def list_products(
        self, filters: Optional[FilterState] = None, page: int = 0, size: Optional[int] = None
    ) -> Page[Product]:
        outcome = await self.gateway.list_products(
            filters or FilterState(), page, size or self.settings.listing.product_page_size
        )
        for product in outcome.value.content:
            self.summaries.remember(product)
        return outcome.value

    async def get_product(self, product_id: int) -> ProductDetail:
        detail = (await self.gateway.get_product(product_id)).value
        self.summaries.remember(detail.product)
        return detail

    async def get_reviews(
        self,
        product_id: int,
        page: int = 0,
        filters: Optional[FilterState] = None,
        size: Optional[int] = None,
    ) -> Page[Review]:
        outcome = await self.gateway.get_reviews(
            product_id,
            filters or DEFAULT_REVIEW_FILTERS,
            page,
            size or self.settings.listing.review_page_size,
        )
        return outcome.value

    # --- Review mutations -----------------------------------------------------

    async def create_review(
        self,
        product_id: int,
        rating: Any,
        comment: Any = None,
        reviewer_name: Any = None,
        *,
        device_id: Optional[str] = None,
    ) -> Review:
        outcome = await self.reviews.create(
            product_id, rating, comment, reviewer_name, device_id=device_id or self.device_id()
        )
        self.summaries.invalidate(product_id)
        return outcome.value

    async def update_review(
        self,
        review_id: int,
        rating: Any,
        comment: Any = None,
        reviewer_name: Any = None,
        *,
        device_id: Optional[str] = None,
    ) -> Review:
        outcome = await self.reviews.update(
            review_id, rating, comment, reviewer_name, device_id=device_id or self.device_id()
        )
        self.summaries.invalidate(outcome.value.product_id)
        return outcome.value

    async def delete_review(
        self, review_id: int, *, product_id: Optional[int] = None, device_id: Optional[str] = None
    ) -> None:
        await self.reviews.delete(review_id, device_id=device_id or self.device_id())
        if product_id is not None:
            self.summaries.invalidate(product_id)

    async def toggle_helpful(self, review_id: int, product_id: int, *, device_id: Optional[str] = None) -> Page[Review]:
        return await self.reviews.toggle_helpful(review_id, product_id, device_id=device_id or self.device_id())

    # --- Summaries / translation ----------------------------------------------

    async def get_summary(
        self, product_id: int, lang: Optional[str] = None, review_count: Optional[int] = None
    ) -> SummaryCacheEntry:
        """Cached summary; ``review_count`` is the count the caller already shows, if any."""
        return await self.summaries.get(
            product_id, lang or self.settings.summaries.default_language, review_count
        )

    async def translate(self, texts: List[str], lang: str) -> TranslationResult:
        if not texts:
            return TranslationResult(lang=lang, source="fallback", translations=[])
        return (await self.gateway.translate(list(texts), lang)).value

    # --- Settings -------------------------------------------------------------

    async def test_connection(self, base_url: Optional[str] = None) -> bool:
        url = (base_url or self.preferences.get_base_url()).strip()
        if not url:
            return False
        ok = await self.probe.test(url)
        logger.info("Connection test for %s: %s", url, "ok" if ok else "failed")
        return ok

    def set_base_url(self, url: str) -> None:
        self.preferences.set_base_url(url)

    def device_id(self) -> str:
        return self.preferences.get_device_id()

    # --- Controllers ----------------------------------------------------------

    def product_list_controller(self, initial_filters: Optional[FilterState] = None) -> PaginatedFilterController:
        return PaginatedFilterController(
            self.list_products,
            page_size=self.settings.listing.product_page_size,
            initial_filters=initial_filters,
            debounce_seconds=self.settings.listing.debounce_seconds,
            name="products",
        )

    def review_list_controller(
        self, product_id: int, initial_filters: Optional[FilterState] = None
    ) -> PaginatedFilterController:
        async def fetch(filters: FilterState, page: int, size: int) -> Page[Review]:
            return await self.get_reviews(product_id, page, filters, size)

        return PaginatedFilterController(
            fetch,
            page_size=self.settings.listing.review_page_size,
            initial_filters=initial_filters or DEFAULT_REVIEW_FILTERS,
            debounce_seconds=self.settings.listing.debounce_seconds,
            name=f"reviews:{product_id}",
        )


def build_catalog_service(
    settings: Optional[ClientSettings] = None,
    *,
    store: Optional[KeyValueStore] = None,
    demo: Optional[DemoDataset] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CatalogService:
    """Wire storage, live client, demo dataset and gateway into a CatalogService.

    ``transport`` is handed to every httpx client (tests use ASGITransport /
    MockTransport).
    """
    settings = settings or load_client_settings()
    store = store or key_value_store_from_env(settings.storage.redis_url, settings.storage.namespace)

    preferences = ClientPreferences(store, settings.backend.base_url)
    live = LiveCatalogClient(preferences.get_base_url, api_prefix=settings.backend.api_prefix, transport=transport)
    gateway = RequestGateway(
        live=live,
        demo=demo or DemoDataset.seeded(),
        mode_store=ModeStore(store),
        timeouts=settings.timeouts,
    )
    probe = ConnectivityProbe(
        timeout_seconds=settings.timeouts.probe_seconds,
        api_prefix=settings.backend.api_prefix,
        transport=transport,
    )
    return CatalogService(settings, gateway, preferences, probe)
