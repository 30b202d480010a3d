"""
Contracts (data models, wire normalization, errors).

Both the live HTTP client and the demo dataset return these shapes, so callers
rely on stable models rather than ad-hoc dicts and never see which source
served a request.
"""

from .errors import (
    CatalogClientError,
    Forbidden,
    LiveCallFailed,
    MalformedResponse,
    NetworkError,
    NotFound,
    Timeout,
    UpstreamError,
    ValidationError,
)
from .models import (
    FilterState,
    HelpfulToggleResult,
    Mode,
    Page,
    Product,
    ProductDetail,
    Review,
    ReviewDraft,
    ReviewSummary,
    SortDirection,
    SummaryCacheEntry,
    SummarySource,
    TranslationResult,
    average_rating,
    round_one_decimal,
)

__all__ = [
    # errors
    "CatalogClientError", "Forbidden", "LiveCallFailed", "MalformedResponse",
    "NetworkError", "NotFound", "Timeout", "UpstreamError", "ValidationError",
    # models
    "FilterState", "HelpfulToggleResult", "Mode", "Page", "Product",
    "ProductDetail", "Review", "ReviewDraft", "ReviewSummary", "SortDirection",
    "SummaryCacheEntry", "SummarySource", "TranslationResult",
    "average_rating", "round_one_decimal",
]
