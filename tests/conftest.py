"""Pytest configuration for the nash-stats test suite."""

from __future__ import annotations

from typing import Any

import pytest

from nash_stats.core.logging import configure_logging, logger
from nash_stats.core.models import Order, OrderType


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--nash-stats-run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that reach the live upstream endpoint.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--nash-stats-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --nash-stats-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging()


@pytest.fixture
def captured_logs() -> list[dict[str, Any]]:
    """Collect loguru records emitted during the test."""

    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def _make_order(
    crypto_amount: float = 0.5,
    *,
    order_type: OrderType = OrderType.BUY,
    blockchain: str = "bitcoin",
    crypto_symbol: str = "BTC",
    fiat_amount: float = 100.0,
    fiat_price: float = 200.0,
    fiat_symbol: str = "EUR",
) -> Order:
    return Order(
        order_type=order_type,
        blockchain=blockchain,
        crypto_amount=crypto_amount,
        crypto_symbol=crypto_symbol,
        fiat_amount=fiat_amount,
        fiat_price=fiat_price,
        fiat_symbol=fiat_symbol,
    )


def _raw_order(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "type": "buy",
        "blockchain": "bitcoin",
        "cryptoAmount": "0.5",
        "cryptoSymbol": "BTC",
        "fiatAmount": "100",
        "fiatPrice": "200",
        "fiatSymbol": "EUR",
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def make_order():
    """Factory building an :class:`Order` with sensible defaults."""

    return _make_order


@pytest.fixture
def raw_order():
    """Factory building an upstream order payload."""

    return _raw_order
