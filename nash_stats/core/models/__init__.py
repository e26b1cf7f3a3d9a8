"""Data models."""

from nash_stats.core.models.envelope import (
    FailureEnvelope,
    LatestOrdersEnvelope,
    decode_orders_response,
)
from nash_stats.core.models.order import (
    AMOUNT_TOLERANCE,
    Order,
    OrderType,
    amounts_equal,
    parse_amount,
)

__all__ = [
    "AMOUNT_TOLERANCE",
    "FailureEnvelope",
    "LatestOrdersEnvelope",
    "Order",
    "OrderType",
    "amounts_equal",
    "decode_orders_response",
    "parse_amount",
]
