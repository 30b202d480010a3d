"""
Demo (offline) data source.

Returns data shaped exactly like the live backend so the RequestGateway can
substitute it for any operation without callers noticing the difference.
"""

from .dataset import DemoDataset
from .seed import CATEGORIES

__all__ = ["CATEGORIES", "DemoDataset"]
