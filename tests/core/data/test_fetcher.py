"""Tests for the upstream order fetcher."""

from __future__ import annotations

import json

import httpx
import pytest

from nash_stats.core.config import DEFAULT_ENDPOINT_URL
from nash_stats.core.data import OrderFetcher, create_http_client
from nash_stats.core.exceptions import ErrorCode, FetchError


def _fetcher(handler) -> OrderFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OrderFetcher(client, "https://upstream.test/latest")


@pytest.mark.asyncio
async def test_fetch_returns_order_set(raw_order):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"latestOrders": [raw_order(), raw_order(), raw_order(type="sell")]})

    fetcher = _fetcher(handler)
    orders = await fetcher.fetch()
    await fetcher.client.aclose()

    assert len(orders) == 2
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://upstream.test/latest"


@pytest.mark.asyncio
async def test_fetch_surfaces_upstream_message():
    fetcher = _fetcher(lambda request: httpx.Response(503, json={"message": "down"}))

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch()
    await fetcher.client.aclose()

    assert exc_info.value.message == "down"
    assert exc_info.value.error_code is ErrorCode.UPSTREAM_FAILURE


@pytest.mark.asyncio
async def test_fetch_decodes_body_regardless_of_status(raw_order):
    body = json.dumps({"latestOrders": [raw_order()]})
    fetcher = _fetcher(lambda request: httpx.Response(500, text=body))

    assert len(await fetcher.fetch()) == 1
    await fetcher.client.aclose()


@pytest.mark.asyncio
async def test_fetch_reports_raw_body_when_unparseable():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="Bad Gateway"))

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch()
    await fetcher.client.aclose()

    assert exc_info.value.error_code is ErrorCode.MALFORMED_RESPONSE
    assert exc_info.value.body == "Bad Gateway"


@pytest.mark.asyncio
async def test_fetch_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = _fetcher(handler)

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch()
    await fetcher.client.aclose()

    assert exc_info.value.error_code is ErrorCode.NETWORK_ERROR
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_create_http_client_applies_timeout():
    client = create_http_client(timeout=5.0)
    try:
        assert client.timeout.read == 5.0
        assert client.headers["Accept"] == "application/json"
    finally:
        await client.aclose()


def test_default_endpoint():
    fetcher = OrderFetcher(httpx.AsyncClient())

    assert fetcher.endpoint_url == DEFAULT_ENDPOINT_URL
