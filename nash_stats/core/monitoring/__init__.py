"""Monitoring module - metrics."""

from nash_stats.core.monitoring.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
