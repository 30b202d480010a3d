"""
catalog_client: resilient data-access layer for the product catalog / review app.

Key rule:
- UI code MUST NOT call the backend directly.
- Screens go through CatalogService, which tries the live backend first and
  falls back to the in-process DemoDataset when it is unreachable.

Composition happens in ONE place: catalog_client.service.build_catalog_service.
"""

from .contracts import (
    CatalogClientError,
    FilterState,
    Forbidden,
    Mode,
    NotFound,
    Page,
    Product,
    Review,
    ReviewSummary,
    SortDirection,
    ValidationError,
)
from .service import CatalogService, build_catalog_service

__all__ = [
    "CatalogClientError", "CatalogService", "FilterState", "Forbidden", "Mode",
    "NotFound", "Page", "Product", "Review", "ReviewSummary", "SortDirection",
    "ValidationError", "build_catalog_service",
]

__version__ = "1.0.0"
