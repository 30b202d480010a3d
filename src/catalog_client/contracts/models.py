"""
Domain models shared by the live client, the demo dataset and the controllers.

Both data sources (backend and demo) must return these shapes so that callers
never see which path served a request.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Mode(str, Enum):
    LIVE = "live"
    DEMO = "demo"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def coerce(cls, value) -> "SortDirection":
        if isinstance(value, cls):
            return value
        return cls(str(value or "ASC").strip().upper())


class SummarySource(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------

@dataclass
class Product:
    id: int
    name: str
    description: str
    category: str
    price: float
    average_rating: Optional[float] = None     # None while review_count == 0
    review_count: int = 0
    image_urls: List[str] = field(default_factory=list)


@dataclass
class Review:
    id: int
    product_id: int
    rating: int                                # 1..5
    device_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    reviewer_name: Optional[str] = None
    comment: Optional[str] = None
    helpful_count: int = 0


@dataclass
class ProductDetail:
    product: Product
    reviews: List[Review] = field(default_factory=list)


@dataclass
class Page(Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: Optional[int] = None
    last: Optional[bool] = None
    number: int = 0
    size: int = 0


@dataclass(frozen=True)
class FilterState:
    """Value-compared filter set; two equal states never trigger a reload."""

    category: Optional[str] = None
    sort_by: str = "id"
    sort_dir: SortDirection = SortDirection.ASC
    search_text: str = ""
    min_rating: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def with_changes(self, **changes) -> "FilterState":
        return replace(self, **changes)

    def differs_only_in_search(self, other: "FilterState") -> bool:
        return self != other and replace(other, search_text=self.search_text) == self


# ---------------------------------------------------------------------------
# Review inputs and results
# ---------------------------------------------------------------------------

@dataclass
class ReviewDraft:
    """Normalized review input, produced by the coordinator's validation."""

    rating: int
    device_id: str
    comment: Optional[str] = None
    reviewer_name: Optional[str] = None


@dataclass
class HelpfulToggleResult:
    review_id: int
    helpful_count: Optional[int] = None     # None when the backend sends no body
    voted: Optional[bool] = None


@dataclass
class TranslationResult:
    lang: str
    source: str
    translations: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

@dataclass
class ReviewSummary:
    takeaway: str = ""
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)
    top_topics: List[str] = field(default_factory=list)
    review_count_used: Optional[int] = None
    average_rating: Optional[float] = None
    source: Optional[str] = None
    generated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not (self.takeaway or self.pros or self.cons)


@dataclass
class SummaryCacheEntry:
    product_id: int
    review_count_at_fetch: int
    language: str
    summary: ReviewSummary
    source: SummarySource
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def matches(self, review_count: int, language: str) -> bool:
        return self.review_count_at_fetch == review_count and self.language == language


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place (4.25 -> 4.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def average_rating(ratings: Iterable[int]) -> Optional[float]:
    values = list(ratings)
    if not values:
        return None
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
