from .coordinator import ReviewMutationCoordinator
from .validation import validate_review_input

__all__ = ["ReviewMutationCoordinator", "validate_review_input"]
