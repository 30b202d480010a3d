from .cache import SummaryCache
from .heuristic import local_summary, normalize_language

__all__ = ["SummaryCache", "local_summary", "normalize_language"]
