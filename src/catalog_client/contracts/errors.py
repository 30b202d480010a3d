"""Error taxonomy for the catalog data layer.

Two families:
- LiveCallFailed and its subclasses describe a live backend attempt that did
  not produce a usable answer. The RequestGateway absorbs these and serves the
  operation from the demo dataset instead.
- NotFound, Forbidden and ValidationError are answers, not outages. They are
  always surfaced to the caller and never retried against the fallback.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CatalogClientError(Exception):
    """Base class for every error raised by catalog_client."""


class LiveCallFailed(CatalogClientError):
    """A live backend call failed in a way that permits fallback."""

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class Timeout(LiveCallFailed):
    def __init__(self, seconds: float, *, operation: Optional[str] = None) -> None:
        super().__init__(f"Live call exceeded {seconds:.1f}s", operation=operation)
        self.seconds = seconds


class NetworkError(LiveCallFailed):
    pass


class UpstreamError(LiveCallFailed):
    """Non-2xx status that is not one of the surfaced answers (404/403/400/422)."""

    def __init__(self, status_code: int, message: str = "", *, operation: Optional[str] = None) -> None:
        super().__init__(message or f"Backend responded with HTTP {status_code}", operation=operation)
        self.status_code = status_code


class MalformedResponse(LiveCallFailed):
    """Payload missing required fields or failing validation."""

    def __init__(self, message: str, *, payload: Optional[Any] = None, operation: Optional[str] = None) -> None:
        super().__init__(message, operation=operation)
        self.payload = payload


class NotFound(CatalogClientError):
    def __init__(self, kind: str, identifier: Any) -> None:
        super().__init__(f"{kind} not found with id: {identifier}")
        self.kind = kind
        self.identifier = identifier


class Forbidden(CatalogClientError):
    """A review mutation was attempted by a device that does not own the review."""

    def __init__(self, message: str = "You can only modify your own review.") -> None:
        super().__init__(message)


class ValidationError(CatalogClientError):
    """Client-side contract violation, rejected before any network attempt.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
    """

    def __init__(self, field_errors: Dict[str, str], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.field_errors = dict(field_errors)
        self.message = message

    def __str__(self) -> str:
        details = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        return f"{self.message} ({details})" if details else self.message
