"""Wire-format normalization for backend payloads.

The backend speaks camelCase JSON. Everything coming off the wire is validated
here with pydantic and converted into the dataclasses in ``models``; anything
that does not validate becomes ``MalformedResponse`` so the gateway can treat
it like any other failed live call.

The ``*_to_wire`` helpers go the other way and are used by the reference
backend to produce the same payloads the real one does.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from catalog_client.contracts.errors import MalformedResponse
from catalog_client.contracts.models import (
    HelpfulToggleResult,
    Page,
    Product,
    ProductDetail,
    Review,
    ReviewSummary,
    TranslationResult,
)

T = TypeVar("T")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProductModel(_WireModel):
    id: int
    name: str
    description: str = ""
    category: str = ""
    price: float = Field(ge=0)
    average_rating: Optional[float] = Field(default=None, alias="averageRating", ge=0, le=5)
    review_count: int = Field(default=0, alias="reviewCount", ge=0)
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")


class ReviewModel(_WireModel):
    id: int
    product_id: int = Field(alias="productId")
    rating: int = Field(ge=1, le=5)
    device_id: str = Field(default="", alias="deviceId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    reviewer_name: Optional[str] = Field(default=None, alias="reviewerName")
    comment: Optional[str] = None
    helpful_count: int = Field(default=0, alias="helpfulCount", ge=0)


class PageModel(_WireModel):
    content: List[Dict[str, Any]]
    total_elements: Optional[int] = Field(default=None, alias="totalElements")
    total_pages: Optional[int] = Field(default=None, alias="totalPages")
    last: Optional[bool] = None
    number: Optional[int] = None
    size: Optional[int] = None


class ReviewSummaryModel(_WireModel):
    takeaway: str
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    top_topics: List[str] = Field(default_factory=list, alias="topTopics")


class ReviewSummaryResponseModel(_WireModel):
    product_id: Optional[int] = Field(default=None, alias="productId")
    average_rating: Optional[float] = Field(default=None, alias="averageRating", ge=0, le=5)
    review_count: Optional[int] = Field(default=None, alias="reviewCount", ge=0)
    review_count_used: Optional[int] = Field(default=None, alias="reviewCountUsed", ge=0)
    source: Optional[str] = None
    generated_at: Optional[datetime] = Field(default=None, alias="generatedAt")


class HelpfulToggleModel(_WireModel):
    review_id: Optional[int] = Field(default=None, alias="reviewId")
    helpful_count: Optional[int] = Field(default=None, alias="helpfulCount")
    voted: Optional[bool] = None


class TranslationModel(_WireModel):
    lang: str
    source: str = "remote"
    translations: List[str]


# ---------------------------------------------------------------------------
# Backend -> domain
# ---------------------------------------------------------------------------

def parse_product(raw: Any) -> Product:
    m = _build_model(ProductModel, raw)
    return Product(
        id=m.id,
        name=m.name,
        description=m.description,
        category=m.category,
        price=m.price,
        average_rating=m.average_rating if m.review_count > 0 else None,
        review_count=m.review_count,
        image_urls=list(m.image_urls),
    )


def parse_review(raw: Any) -> Review:
    m = _build_model(ReviewModel, raw)
    return Review(
        id=m.id,
        product_id=m.product_id,
        rating=m.rating,
        device_id=m.device_id,
        created_at=_as_utc(m.created_at),
        reviewer_name=m.reviewer_name,
        comment=m.comment,
        helpful_count=m.helpful_count,
    )


def parse_product_detail(raw: Any) -> ProductDetail:
    product = parse_product(raw)
    reviews_raw = raw.get("reviews") if isinstance(raw, dict) else None
    reviews = [parse_review(r) for r in reviews_raw] if isinstance(reviews_raw, list) else []
    return ProductDetail(product=product, reviews=reviews)


def parse_page(raw: Any, item_parser: Callable[[Any], T], *, requested_size: int = 0) -> Page[T]:
    m = _build_model(PageModel, raw)
    content = [item_parser(item) for item in m.content]
    return Page(
        content=content,
        total_elements=m.total_elements if m.total_elements is not None else len(content),
        total_pages=m.total_pages,
        last=m.last,
        number=m.number or 0,
        size=m.size if m.size is not None else requested_size,
    )


def parse_summary(raw: Any) -> ReviewSummary:
    """Accepts both ``{"summary": {...}}`` and the flat layout.

    Envelope fields (``reviewCountUsed``, ``source``, ``generatedAt`` ...) are
    read from the top level in either case.
    """
    body = raw.get("summary") if isinstance(raw, dict) and isinstance(raw.get("summary"), dict) else raw
    m = _build_model(ReviewSummaryModel, body)
    meta = _build_model(ReviewSummaryResponseModel, raw)
    return ReviewSummary(
        takeaway=m.takeaway.strip(),
        pros=[p.strip() for p in m.pros if p and p.strip()][:3],
        cons=[c.strip() for c in m.cons if c and c.strip()][:3],
        top_topics=[t.strip() for t in m.top_topics if t and t.strip()][:5],
        review_count_used=meta.review_count_used,
        average_rating=meta.average_rating,
        source=meta.source.strip() if meta.source and meta.source.strip() else None,
        generated_at=meta.generated_at,
    )


def parse_helpful_toggle(raw: Any, *, review_id: int) -> HelpfulToggleResult:
    if not raw:
        return HelpfulToggleResult(review_id=review_id)
    m = _build_model(HelpfulToggleModel, raw)
    return HelpfulToggleResult(
        review_id=m.review_id if m.review_id is not None else review_id,
        helpful_count=m.helpful_count,
        voted=m.voted,
    )


def parse_translation(raw: Any, *, expected: int) -> TranslationResult:
    m = _build_model(TranslationModel, raw)
    if len(m.translations) != expected:
        raise MalformedResponse(
            f"Expected {expected} translations, got {len(m.translations)}",
            payload=raw,
        )
    return TranslationResult(lang=m.lang, source=m.source, translations=list(m.translations))


# ---------------------------------------------------------------------------
# Domain -> backend
# ---------------------------------------------------------------------------

def product_to_wire(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": product.price,
        "averageRating": product.average_rating,
        "reviewCount": product.review_count,
        "imageUrls": list(product.image_urls),
    }


def review_to_wire(review: Review) -> Dict[str, Any]:
    return {
        "id": review.id,
        "productId": review.product_id,
        "rating": review.rating,
        "comment": review.comment,
        "reviewerName": review.reviewer_name,
        "deviceId": review.device_id,
        "createdAt": review.created_at.isoformat(),
        "helpfulCount": review.helpful_count,
    }


def page_to_wire(page: Page[T], item_to_wire: Callable[[T], Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "content": [item_to_wire(item) for item in page.content],
        "totalElements": page.total_elements,
        "totalPages": page.total_pages,
        "last": page.last,
        "number": page.number,
        "size": page.size,
        "first": page.number == 0,
    }


def summary_to_wire(
    product_id: int,
    review_count: int,
    summary: ReviewSummary,
    source: str,
    *,
    product: Optional[Product] = None,
) -> Dict[str, Any]:
    return {
        "productId": product_id,
        "averageRating": product.average_rating if product is not None else summary.average_rating,
        "reviewCount": product.review_count if product is not None else review_count,
        "reviewCountUsed": review_count,
        "summary": {
            "takeaway": summary.takeaway,
            "pros": list(summary.pros),
            "cons": list(summary.cons),
            "topTopics": list(summary.top_topics),
        },
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "source": source,
    }


def _as_utc(value: Optional[datetime]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _build_model(model_type, raw: Any):
    if not isinstance(raw, dict):
        raise MalformedResponse(f"Expected a JSON object for {model_type.__name__}, got {type(raw).__name__}", payload=raw)
    try:
        return model_type.model_validate(raw)
    except PydanticValidationError as exc:
        raise MalformedResponse(f"Response validation failed: {exc}", payload=raw) from exc
