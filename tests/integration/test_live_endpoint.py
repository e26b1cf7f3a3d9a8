"""Live check against the upstream endpoint."""

from __future__ import annotations

import pytest

from nash_stats.core.data import OrderFetcher, create_http_client
from nash_stats.core.exceptions import ErrorCode, FetchError


@pytest.mark.integration
@pytest.mark.asyncio
async def test_live_endpoint_decodes():
    async with create_http_client(timeout=15.0) as client:
        try:
            orders = await OrderFetcher(client).fetch()
        except FetchError as exc:
            # An upstream failure payload is still a well-formed answer.
            assert exc.error_code is ErrorCode.UPSTREAM_FAILURE
            return

    assert all(order.crypto_symbol for order in orders)
