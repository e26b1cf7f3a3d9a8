"""nash-stats - collector for completed Nash cash orders."""

from nash_stats.core.data import OrderFetcher, OrderStore
from nash_stats.core.exceptions import FetchError, NashStatsError, ParseError, StoreError
from nash_stats.core.models import Order, OrderType
from nash_stats.core.services import OrderPoller, detect_new_orders

__version__ = "0.1.0"

__all__ = [
    "FetchError",
    "NashStatsError",
    "Order",
    "OrderFetcher",
    "OrderPoller",
    "OrderStore",
    "OrderType",
    "ParseError",
    "StoreError",
    "detect_new_orders",
]
