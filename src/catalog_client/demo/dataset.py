"""
Demo dataset (local catalog source).

Purpose:
- Serves every catalog/review operation in-process when the backend is
  unreachable, with the same filtering, sorting and paging semantics.
- Keeps product aggregates (average_rating, review_count) consistent with the
  review set after every mutation.

The dataset is an explicitly constructed instance owned by whoever composes
the client; nothing here is module-level state. Returned records are copies,
so callers cannot mutate the dataset behind its back.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from catalog_client.contracts.errors import Forbidden, NotFound
from catalog_client.contracts.models import (
    FilterState,
    HelpfulToggleResult,
    Page,
    Product,
    ProductDetail,
    Review,
    ReviewDraft,
    SortDirection,
    average_rating,
)
from catalog_client.demo.seed import SEED_PRODUCTS, SEED_REVIEWS

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"

_PRODUCT_SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "price": "price",
    "category": "category",
    "averageRating": "average_rating",
    "average_rating": "average_rating",
    "reviewCount": "review_count",
    "review_count": "review_count",
}

_REVIEW_SORT_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "rating": "rating",
    "helpfulCount": "helpful_count",
    "helpful_count": "helpful_count",
    "id": "id",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sorted(items: List[Any], attr: str, direction: SortDirection) -> List[Any]:
    """Sort by ``attr``; None values always go last, ties keep their order."""
    present = [i for i in items if getattr(i, attr) is not None]
    missing = [i for i in items if getattr(i, attr) is None]
    present = sorted(present, key=lambda i: getattr(i, attr), reverse=direction == SortDirection.DESC)
    return present + missing


def _paginate(items: List[Any], page: int, size: int) -> Page:
    if page < 0:
        raise ValueError("page must be >= 0")
    if size < 1:
        raise ValueError("size must be >= 1")
    start = page * size
    end = start + size
    return Page(
        content=items[start:end],
        total_elements=len(items),
        total_pages=math.ceil(len(items) / size),
        last=end >= len(items),
        number=page,
        size=size,
    )


class DemoDataset:
    def __init__(
        self,
        products: Optional[Iterable[Dict[str, Any]]] = None,
        reviews: Optional[Dict[int, List[Dict[str, Any]]]] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self._now = now
        self._products: Dict[int, Product] = {}
        self._reviews: Dict[int, List[Review]] = {}
        self._votes: Dict[int, Set[str]] = {}

        created = now()
        for raw in products or []:
            product = Product(
                id=int(raw["id"]),
                name=raw["name"],
                description=raw.get("description", ""),
                category=raw.get("category", ""),
                price=float(raw.get("price", 0.0)),
                image_urls=list(raw.get("image_urls", [])),
            )
            self._products[product.id] = product
            self._reviews[product.id] = []

        for product_id, items in (reviews or {}).items():
            if product_id not in self._products:
                raise ValueError(f"Seed reviews reference unknown product {product_id}")
            for raw in items:
                self._reviews[product_id].append(
                    Review(
                        id=int(raw["id"]),
                        product_id=product_id,
                        rating=int(raw["rating"]),
                        device_id=raw.get("device_id", ""),
                        created_at=raw.get("created_at") or created - timedelta(days=raw.get("days_ago", 0)),
                        reviewer_name=raw.get("reviewer_name"),
                        comment=raw.get("comment"),
                        helpful_count=int(raw.get("helpful_count", 0)),
                    )
                )

        for product_id in self._products:
            self._recalculate_aggregates(product_id)

        all_ids = [r.id for items in self._reviews.values() for r in items]
        self._next_review_id = max(all_ids, default=0) + 1

    @classmethod
    def seeded(cls, now: Callable[[], datetime] = _utcnow) -> "DemoDataset":
        return cls(products=SEED_PRODUCTS, reviews=SEED_REVIEWS, now=now)

    # --- Products -------------------------------------------------------------

    def list_products(self, filters: FilterState, page: int = 0, size: int = 20) -> Page[Product]:
        items = list(self._products.values())

        if filters.category:
            items = [p for p in items if p.category == filters.category]
        search = (filters.search_text or "").strip().lower()
        if search:
            items = [p for p in items if search in p.name.lower() or search in p.description.lower()]
        if filters.min_rating is not None:
            items = [p for p in items if p.average_rating is not None and p.average_rating >= filters.min_rating]
        if filters.min_price is not None:
            items = [p for p in items if p.price >= filters.min_price]
        if filters.max_price is not None:
            items = [p for p in items if p.price <= filters.max_price]

        attr = _PRODUCT_SORT_FIELDS.get(filters.sort_by)
        if attr is None:
            logger.warning("Unknown product sort field %r, sorting by id", filters.sort_by)
            attr = "id"
        items = _sorted(items, attr, SortDirection.coerce(filters.sort_dir))

        result = _paginate(items, page, size)
        result.content = [self._copy_product(p) for p in result.content]
        return result

    def get_product(self, product_id: int) -> ProductDetail:
        product = self._products.get(product_id)
        if product is None:
            raise NotFound("Product", product_id)
        return ProductDetail(
            product=self._copy_product(product),
            reviews=[replace(r) for r in self._reviews[product_id]],
        )

    def product_ids(self) -> List[int]:
        return list(self._products)

    # --- Reviews --------------------------------------------------------------

    def reviews_for(self, product_id: int) -> List[Review]:
        if product_id not in self._products:
            raise NotFound("Product", product_id)
        return [replace(r) for r in self._reviews[product_id]]

    def list_reviews(
        self,
        product_id: int,
        filters: Optional[FilterState] = None,
        page: int = 0,
        size: int = 10,
    ) -> Page[Review]:
        if product_id not in self._products:
            raise NotFound("Product", product_id)
        filters = filters or FilterState(sort_by="createdAt", sort_dir=SortDirection.DESC)

        items = list(self._reviews[product_id])
        if filters.min_rating is not None:
            items = [r for r in items if r.rating >= filters.min_rating]

        attr = _REVIEW_SORT_FIELDS.get(filters.sort_by, "created_at")
        items = _sorted(items, attr, SortDirection.coerce(filters.sort_dir))

        result = _paginate(items, page, size)
        result.content = [replace(r) for r in result.content]
        return result

    def add_review(self, product_id: int, draft: ReviewDraft) -> Review:
        if product_id not in self._products:
            raise NotFound("Product", product_id)

        review = Review(
            id=self._next_review_id,
            product_id=product_id,
            rating=draft.rating,
            device_id=draft.device_id,
            created_at=self._now(),
            reviewer_name=(draft.reviewer_name or "").strip() or ANONYMOUS,
            comment=draft.comment,
        )
        self._next_review_id += 1
        self._reviews[product_id].insert(0, review)
        self._recalculate_aggregates(product_id)
        logger.info("Demo review %s added to product %s", review.id, product_id)
        return replace(review)

    def update_review(self, review_id: int, draft: ReviewDraft) -> Review:
        review = self._owned_review(review_id, draft.device_id)
        review.rating = draft.rating
        review.comment = draft.comment
        review.reviewer_name = (draft.reviewer_name or "").strip() or ANONYMOUS
        self._recalculate_aggregates(review.product_id)
        return replace(review)

    def delete_review(self, review_id: int, device_id: str) -> None:
        review = self._owned_review(review_id, device_id)
        reviews = self._reviews[review.product_id]
        reviews[:] = [r for r in reviews if r.id != review_id]
        self._votes.pop(review_id, None)
        self._recalculate_aggregates(review.product_id)
        logger.info("Demo review %s deleted from product %s", review_id, review.product_id)

    def toggle_helpful(self, review_id: int, device_id: str) -> HelpfulToggleResult:
        """First toggle by a device adds its vote, the next one removes it."""
        review = self._find_review(review_id)
        voters = self._votes.setdefault(review_id, set())
        if device_id in voters:
            voters.discard(device_id)
            review.helpful_count = max(0, review.helpful_count - 1)
            voted = False
        else:
            voters.add(device_id)
            review.helpful_count += 1
            voted = True
        return HelpfulToggleResult(review_id=review_id, helpful_count=review.helpful_count, voted=voted)

    # --- Internals ------------------------------------------------------------

    def _find_review(self, review_id: int) -> Review:
        for reviews in self._reviews.values():
            for review in reviews:
                if review.id == review_id:
                    return review
        raise NotFound("Review", review_id)

    def _owned_review(self, review_id: int, device_id: str) -> Review:
        review = self._find_review(review_id)
        if not review.device_id or review.device_id != device_id:
            raise Forbidden()
        return review

    def _recalculate_aggregates(self, product_id: int) -> None:
        product = self._products[product_id]
        reviews = self._reviews[product_id]
        product.review_count = len(reviews)
        product.average_rating = average_rating(r.rating for r in reviews)

    @staticmethod
    def _copy_product(product: Product) -> Product:
        return replace(product, image_urls=list(product.image_urls))
