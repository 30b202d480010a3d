"""
Connectivity probe for the explicit "test connection" action.

Not used on the hot path and never changes the data-source mode.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class ConnectivityProbe:
    def __init__(
        self,
        timeout_seconds: float = 5.0,
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self._transport = transport

    async def test(self, base_url: str) -> bool:
        """Return True when one tiny product-list request succeeds in time."""
        url = f"{base_url.rstrip('/')}{self.api_prefix}/products"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, params={"page": 0, "size": 1})
        except Exception as e:
            logger.warning("Connection test failed for %s: %s: %s", base_url, type(e).__name__, e)
            return False

        if not response.is_success:
            logger.warning("Connection test for %s returned HTTP %s", base_url, response.status_code)
            return False
        return True
