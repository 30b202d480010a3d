"""Client-side validation for review submissions.

Runs before any network attempt. On failure raise ValidationError with
structured `field_errors` so the screen can highlight individual fields.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from catalog_client.contracts.errors import ValidationError
from catalog_client.contracts.models import ReviewDraft

MIN_COMMENT_LENGTH = 10
MAX_COMMENT_LENGTH = 2000
MIN_RATING = 1
MAX_RATING = 5


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def validate_rating(value: Any, errors: Dict[str, str]) -> int:
    # bool is an int subclass; True is not a rating
    if isinstance(value, bool) or not isinstance(value, int):
        add_error(errors, "rating", "Rating must be a whole number between 1 and 5")
        return 0
    if value < MIN_RATING:
        add_error(errors, "rating", f"Rating must be at least {MIN_RATING}")
    elif value > MAX_RATING:
        add_error(errors, "rating", f"Rating must be at most {MAX_RATING}")
    return value


def normalize_comment(value: Any, errors: Dict[str, str]) -> Optional[str]:
    """Trim the comment; an empty comment is treated as absent."""
    comment = _strip(value)
    if not comment:
        return None
    if len(comment) < MIN_COMMENT_LENGTH:
        add_error(errors, "comment", f"Comment must be at least {MIN_COMMENT_LENGTH} characters")
    elif len(comment) > MAX_COMMENT_LENGTH:
        add_error(errors, "comment", f"Comment must be at most {MAX_COMMENT_LENGTH} characters")
    return comment


def validate_review_input(
    rating: Any,
    comment: Any = None,
    reviewer_name: Any = None,
    device_id: Any = None,
) -> ReviewDraft:
    errors: Dict[str, str] = {}

    rating_value = validate_rating(rating, errors)
    comment_value = normalize_comment(comment, errors)
    device = _strip(device_id)
    if not device:
        add_error(errors, "device_id", "Device id is required")

    if errors:
        raise ValidationError(errors)

    return ReviewDraft(
        rating=rating_value,
        device_id=device,
        comment=comment_value,
        reviewer_name=_strip(reviewer_name) or None,
    )
