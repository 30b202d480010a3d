"""
Live catalog HTTP client.

Purpose:
- Talks to the product/review backend REST API
- Normalizes every payload into the contracts in catalog_client.contracts

Implementation notes:
- Uses httpx for async requests
- Transport problems become NetworkError/Timeout, unusable payloads become
  MalformedResponse; the gateway falls back on all of them
- 404 (for a specific record), 403 and 400/422 (for mutations) are definitive
  backend answers and are raised as NotFound/Forbidden/ValidationError

Important:
- Keep this client as the ONLY place where backend HTTP calls are made.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx

from catalog_client.contracts.errors import (
    Forbidden,
    MalformedResponse,
    NetworkError,
    NotFound,
    Timeout,
    UpstreamError,
    ValidationError,
)
from catalog_client.contracts.models import (
    FilterState,
    HelpfulToggleResult,
    Page,
    Product,
    ProductDetail,
    Review,
    ReviewDraft,
    ReviewSummary,
    SortDirection,
    TranslationResult,
)
from catalog_client.contracts.wire import (
    parse_helpful_toggle,
    parse_page,
    parse_product,
    parse_product_detail,
    parse_review,
    parse_summary,
    parse_translation,
)

logger = logging.getLogger(__name__)

BaseUrl = Union[str, Callable[[], str]]


def product_query_params(filters: FilterState, page: int, size: int) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "page": page,
        "size": size,
        "sortBy": filters.sort_by,
        "sortDir": SortDirection.coerce(filters.sort_dir).value,
    }
    if filters.category:
        params["category"] = filters.category
    if filters.search_text and filters.search_text.strip():
        params["search"] = filters.search_text.strip()
    if filters.min_rating is not None:
        params["minRating"] = filters.min_rating
    if filters.min_price is not None:
        params["minPrice"] = filters.min_price
    if filters.max_price is not None:
        params["maxPrice"] = filters.max_price
    return params


def review_query_params(filters: FilterState, page: int, size: int) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "page": page,
        "size": size,
        "sortBy": filters.sort_by,
        "sortDir": SortDirection.coerce(filters.sort_dir).value,
    }
    if filters.min_rating is not None:
        params["minRating"] = int(filters.min_rating)
    return params


def review_payload(draft: ReviewDraft, product_id: Optional[int] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "rating": draft.rating,
        "comment": draft.comment,
        "reviewerName": draft.reviewer_name,
        "deviceId": draft.device_id,
    }
    if product_id is not None:
        payload["productId"] = product_id
    return payload


class LiveCatalogClient:
    def __init__(
        self,
        base_url: BaseUrl,
        api_prefix: str = "/api",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        value = self._base_url() if callable(self._base_url) else self._base_url
        return value.rstrip("/")

    # --- Products -------------------------------------------------------------

    async def list_products(self, filters: FilterState, page: int, size: int) -> Page[Product]:
        data = await self._request(
            "GET", "/products", params=product_query_params(filters, page, size), operation="list_products"
        )
        return parse_page(data, parse_product, requested_size=size)

    async def get_product(self, product_id: int) -> ProductDetail:
        data = await self._request(
            "GET", f"/products/{product_id}", operation="get_product", not_found=("Product", product_id)
        )
        return parse_product_detail(data)

    async def get_summary(self, product_id: int, limit: int, lang: str) -> ReviewSummary:
        data = await self._request(
            "GET",
            f"/products/{product_id}/review-summary",
            params={"limit": limit, "lang": lang},
            operation="get_summary",
            not_found=("Product", product_id),
        )
        return parse_summary(data)

    # --- Reviews --------------------------------------------------------------

    async def get_reviews(self, product_id: int, filters: FilterState, page: int, size: int) -> Page[Review]:
        data = await self._request(
            "GET",
            f"/reviews/product/{product_id}",
            params=review_query_params(filters, page, size),
            operation="get_reviews",
            not_found=("Product", product_id),
        )
        return parse_page(data, parse_review, requested_size=size)

    async def create_review(self, product_id: int, draft: ReviewDraft) -> Review:
        data = await self._request(
            "POST",
            "/reviews",
            json=review_payload(draft, product_id),
            operation="create_review",
            not_found=("Product", product_id),
            mutation=True,
        )
        return parse_review(data)

    async def update_review(self, review_id: int, draft: ReviewDraft) -> Review:
        data = await self._request(
            "PUT",
            f"/reviews/{review_id}",
            json=review_payload(draft),
            operation="update_review",
            not_found=("Review", review_id),
            mutation=True,
        )
        return parse_review(data)

    async def delete_review(self, review_id: int, device_id: str) -> None:
        await self._request(
            "DELETE",
            f"/reviews/{review_id}",
            params={"deviceId": device_id},
            operation="delete_review",
            not_found=("Review", review_id),
            mutation=True,
        )

    async def toggle_helpful(self, review_id: int, device_id: str) -> HelpfulToggleResult:
        data = await self._request(
            "POST",
            f"/reviews/{review_id}/helpful",
            params={"deviceId": device_id},
            operation="toggle_helpful",
            not_found=("Review", review_id),
            mutation=True,
        )
        return parse_helpful_toggle(data, review_id=review_id)

    # --- Translation ----------------------------------------------------------

    async def translate(self, texts: List[str], lang: str) -> TranslationResult:
        data = await self._request(
            "POST", "/translate", json={"lang": lang, "texts": texts}, operation="translate"
        )
        return parse_translation(data, expected=len(texts))

    # --- Transport ------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        operation: str,
        not_found: Optional[Tuple[str, Any]] = None,
        mutation: bool = False,
    ) -> Any:
        base_url = self.base_url
        if not base_url:
            raise NetworkError("Backend base URL is not configured.", operation=operation)

        url = f"{base_url}{self.api_prefix}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(
                    method, url, params=params, json=json, headers={"Content-Type": "application/json"}
                )
        except httpx.TimeoutException as exc:
            raise Timeout(self.timeout_seconds, operation=operation) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}", operation=operation) from exc
        except Exception as exc:
            # bad URLs surface from the transport as InvalidURL, ValueError or an ExceptionGroup
            raise NetworkError(f"{type(exc).__name__}: {exc}", operation=operation) from exc

        self._raise_for_status(response, operation=operation, not_found=not_found, mutation=mutation)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse("Response body is not valid JSON", operation=operation) from exc

    @staticmethod
    def _raise_for_status(
        response: httpx.Response,
        *,
        operation: str,
        not_found: Optional[Tuple[str, Any]],
        mutation: bool,
    ) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return
        if status == 404 and not_found is not None:
            raise NotFound(*not_found)
        if mutation and status == 403:
            raise Forbidden(response.text or "You can only modify your own review.")
        if mutation and status in (400, 422):
            raise ValidationError({"request": response.text or f"HTTP {status}"}, message="Backend rejected the request")
        raise UpstreamError(status, operation=operation)
