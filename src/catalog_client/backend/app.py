"""
Reference catalog backend (FastAPI).

Serves the same REST contract the live client talks to, backed by a
DemoDataset instance. Used for local development (scripts/run_backend.py)
and as the in-process live backend in tests via httpx.ASGITransport.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from catalog_client.contracts.errors import Forbidden, NotFound
from catalog_client.contracts.models import FilterState, ReviewDraft, SortDirection
from catalog_client.contracts.wire import (
    page_to_wire,
    product_to_wire,
    review_to_wire,
    summary_to_wire,
)
from catalog_client.demo.dataset import ANONYMOUS, DemoDataset
from catalog_client.summaries.heuristic import local_summary, normalize_language

logger = logging.getLogger(__name__)


class CreateReviewRequest(BaseModel):
    product_id: int = Field(..., alias="productId")
    rating: int = Field(..., ge=1, le=5, description="Star rating 1-5")
    comment: Optional[str] = Field(default=None, max_length=2000)
    reviewer_name: Optional[str] = Field(default=None, alias="reviewerName", max_length=100)
    device_id: str = Field(..., alias="deviceId", min_length=1)


class UpdateReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)
    reviewer_name: Optional[str] = Field(default=None, alias="reviewerName", max_length=100)
    device_id: str = Field(..., alias="deviceId", min_length=1)


class TranslateRequest(BaseModel):
    lang: str = "en"
    texts: List[str] = Field(default_factory=list, max_length=50)


def _draft(request) -> ReviewDraft:
    return ReviewDraft(
        rating=request.rating,
        device_id=request.device_id,
        comment=(request.comment or "").strip() or None,
        reviewer_name=(request.reviewer_name or "").strip() or ANONYMOUS,
    )


def build_router(dataset: DemoDataset) -> APIRouter:
    api = APIRouter()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @api.get("/products", tags=["Products"])
    async def list_products(
        page: int = Query(0, ge=0),
        size: int = Query(20, ge=1, le=100),
        sort_by: str = Query("id", alias="sortBy"),
        sort_dir: str = Query("ASC", alias="sortDir"),
        category: Optional[str] = None,
        search: Optional[str] = None,
        min_rating: Optional[float] = Query(None, alias="minRating"),
        min_price: Optional[float] = Query(None, alias="minPrice"),
        max_price: Optional[float] = Query(None, alias="maxPrice"),
    ):
        filters = FilterState(
            category=category or None,
            sort_by=sort_by,
            sort_dir=SortDirection.coerce(sort_dir),
            search_text=search or "",
            min_rating=min_rating,
            min_price=min_price,
            max_price=max_price,
        )
        return page_to_wire(dataset.list_products(filters, page, size), product_to_wire)

    @api.get("/products/{product_id}", tags=["Products"])
    async def get_product(product_id: int):
        detail = dataset.get_product(product_id)
        payload = product_to_wire(detail.product)
        payload["reviews"] = [review_to_wire(r) for r in detail.reviews]
        return payload

    @api.get("/products/{product_id}/review-summary", tags=["Products"])
    async def review_summary(
        product_id: int,
        limit: int = Query(30, ge=1, le=100),
        lang: str = Query("en"),
    ):
        newest = FilterState(sort_by="createdAt", sort_dir=SortDirection.DESC)
        product = dataset.get_product(product_id).product
        reviews = dataset.list_reviews(product_id, newest, 0, limit).content
        summary = local_summary(reviews, normalize_language(lang), product.category)
        return summary_to_wire(product_id, len(reviews), summary, source="heuristic", product=product)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    @api.get("/reviews/product/{product_id}", tags=["Reviews"])
    async def list_reviews(
        product_id: int,
        page: int = Query(0, ge=0),
        size: int = Query(10, ge=1, le=100),
        sort_by: str = Query("createdAt", alias="sortBy"),
        sort_dir: str = Query("DESC", alias="sortDir"),
        min_rating: Optional[int] = Query(None, alias="minRating", ge=1, le=5),
    ):
        filters = FilterState(sort_by=sort_by, sort_dir=SortDirection.coerce(sort_dir), min_rating=min_rating)
        return page_to_wire(dataset.list_reviews(product_id, filters, page, size), review_to_wire)

    @api.post("/reviews", status_code=201, tags=["Reviews"])
    async def create_review(request: CreateReviewRequest):
        review = dataset.add_review(request.product_id, _draft(request))
        return review_to_wire(review)

    @api.put("/reviews/{review_id}", tags=["Reviews"])
    async def update_review(review_id: int, request: UpdateReviewRequest):
        return review_to_wire(dataset.update_review(review_id, _draft(request)))

    @api.delete("/reviews/{review_id}", status_code=204, tags=["Reviews"])
    async def delete_review(review_id: int, device_id: str = Query(..., alias="deviceId", min_length=1)):
        dataset.delete_review(review_id, device_id)
        return Response(status_code=204)

    @api.post("/reviews/{review_id}/helpful", tags=["Reviews"])
    async def toggle_helpful(review_id: int, device_id: str = Query(..., alias="deviceId", min_length=1)):
        result = dataset.toggle_helpful(review_id, device_id)
        return {"reviewId": result.review_id, "helpfulCount": result.helpful_count, "voted": result.voted}

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    @api.post("/translate", tags=["Translation"])
    async def translate(request: TranslateRequest):
        # no translation provider is configured here; texts are echoed back
        return {"lang": normalize_language(request.lang), "source": "identity", "translations": list(request.texts)}

    return api


def create_app(dataset: Optional[DemoDataset] = None, api_prefix: str = "/api") -> FastAPI:
    dataset = dataset or DemoDataset.seeded()

    app = FastAPI(
        title="Catalog Reference Backend",
        description="Product catalog and review API backed by the demo dataset",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(Forbidden)
    async def forbidden_handler(request: Request, exc: Forbidden):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok", "products": len(dataset.product_ids())}

    app.include_router(build_router(dataset), prefix=api_prefix)
    app.state.dataset = dataset
    return app
