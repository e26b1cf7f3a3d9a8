"""Services layer."""

from nash_stats.core.services.poller import CycleResult, OrderPoller, PollerState, detect_new_orders

__all__ = ["CycleResult", "OrderPoller", "PollerState", "detect_new_orders"]
