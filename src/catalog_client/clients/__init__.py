from .live_http import LiveCatalogClient
from .probe import ConnectivityProbe

__all__ = ["ConnectivityProbe", "LiveCatalogClient"]
