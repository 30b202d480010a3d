"""
ReviewMutationCoordinator: create / update / delete / helpful-toggle.

Validates input locally, then runs the mutation through the RequestGateway.
Ownership is decided by whoever serves the mutation (backend or demo); a
Forbidden or NotFound answer is surfaced and never retried against the
fallback.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from catalog_client.concurrency.outcomes import Outcome
from catalog_client.contracts.errors import ValidationError
from catalog_client.contracts.models import FilterState, Page, Review, SortDirection
from catalog_client.gateway import RequestGateway
from catalog_client.reviews.validation import validate_review_input

logger = logging.getLogger(__name__)

HELPFUL_SORT = FilterState(sort_by="helpfulCount", sort_dir=SortDirection.DESC)


class ReviewMutationCoordinator:
    def __init__(self, gateway: RequestGateway, review_page_size: int = 10):
        self.gateway = gateway
        self.review_page_size = review_page_size

    async def create(
        self,
        product_id: int,
        rating: Any,
        comment: Any = None,
        reviewer_name: Any = None,
        *,
        device_id: Any,
    ) -> Outcome[Review]:
        draft = validate_review_input(rating, comment, reviewer_name, device_id)
        outcome = await self.gateway.create_review(product_id, draft)
        logger.info("Review %s created for product %s (fallback=%s)", outcome.value.id, product_id, outcome.is_fallback)
        return outcome

    async def update(
        self,
        review_id: int,
        rating: Any,
        comment: Any = None,
        reviewer_name: Any = None,
        *,
        device_id: Any,
    ) -> Outcome[Review]:
        draft = validate_review_input(rating, comment, reviewer_name, device_id)
        return await self.gateway.update_review(review_id, draft)

    async def delete(self, review_id: int, *, device_id: Any) -> Outcome[None]:
        device = _require_device(device_id)
        return await self.gateway.delete_review(review_id, device)

    async def toggle_helpful(
        self,
        review_id: int,
        product_id: int,
        *,
        device_id: Any,
        page_size: Optional[int] = None,
    ) -> Page[Review]:
        """Toggle the device's vote, then reload the most helpful reviews.

        The new vote state is never inferred locally; the returned page is
        whatever the serving source reports after the toggle.
        """
        device = _require_device(device_id)
        toggle = await self.gateway.toggle_helpful(review_id, device)
        logger.debug("Helpful toggle on review %s -> %s", review_id, toggle.value)

        reloaded = await self.gateway.get_reviews(
            product_id, HELPFUL_SORT, 0, page_size or self.review_page_size
        )
        return reloaded.value


def _require_device(device_id: Any) -> str:
    device = "" if device_id is None else str(device_id).strip()
    if not device:
        raise ValidationError({"device_id": "Device id is required"})
    return device
