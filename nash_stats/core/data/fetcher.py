"""HTTP fetcher for the upstream latest-orders endpoint."""

from __future__ import annotations

import httpx

from nash_stats.core.config import DEFAULT_ENDPOINT_URL
from nash_stats.core.exceptions import ErrorCode, FetchError
from nash_stats.core.models import Order, decode_orders_response


class OrderFetcher:
    """Issues one GET per call and decodes the response envelope.

    There is no retry here: a failure surfaces as :class:`FetchError` for
    the current cycle only. Timeouts are whatever the client enforces.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint_url: str = DEFAULT_ENDPOINT_URL) -> None:
        self.client = client
        self.endpoint_url = endpoint_url

    async def fetch(self) -> set[Order]:
        try:
            response = await self.client.get(self.endpoint_url)
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Request to {self.endpoint_url} failed: {exc}",
                error_code=ErrorCode.NETWORK_ERROR,
                details={"endpoint": self.endpoint_url},
            ) from exc

        # The status code is not consulted; the body decides success or failure.
        return decode_orders_response(response.text)


def create_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Create the client used for polling."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": "nash-stats/0.1.0", "Accept": "application/json"},
    )


__all__ = ["OrderFetcher", "create_http_client"]
