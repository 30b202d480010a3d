from .outcomes import (
    Failure,
    Fallback,
    Live,
    Outcome,
    Result,
    Success,
    first_success_or,
    with_timeout,
)
from .timers import CancellableTimer, Debouncer

__all__ = [
    "CancellableTimer", "Debouncer", "Failure", "Fallback", "Live", "Outcome",
    "Result", "Success", "first_success_or", "with_timeout",
]
