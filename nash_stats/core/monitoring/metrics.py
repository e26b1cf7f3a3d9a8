"""Prometheus metrics for the order poller."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server


class MetricsCollector:
    """Collects and exposes poller metrics on its own registry."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.cycles_total = Counter(
            "nash_stats_cycles_total",
            "Total count of poll cycles.",
            ("outcome",),
            registry=self.registry,
        )
        self.fetch_latency_seconds = Histogram(
            "nash_stats_fetch_latency_seconds",
            "Latency distribution for upstream fetches.",
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
            registry=self.registry,
        )
        self.fetch_failures_total = Counter(
            "nash_stats_fetch_failures_total",
            "Failed fetch cycles grouped by error code.",
            ("error_code",),
            registry=self.registry,
        )
        self.new_orders_total = Counter(
            "nash_stats_new_orders_total",
            "Orders observed for the first time.",
            registry=self.registry,
        )
        self.store_failures_total = Counter(
            "nash_stats_store_failures_total",
            "Orders that could not be persisted.",
            registry=self.registry,
        )
        self.missed_order_warnings_total = Counter(
            "nash_stats_missed_order_warnings_total",
            "Cycles where every fetched order was new.",
            registry=self.registry,
        )
        self.baseline_size = Gauge(
            "nash_stats_baseline_size",
            "Number of orders in the current baseline.",
            registry=self.registry,
        )

    def observe_fetch(self, latency_seconds: float, *, error_code: str | None = None) -> None:
        """Record one fetch attempt and its outcome."""

        self.fetch_latency_seconds.observe(latency_seconds)
        if error_code is None:
            self.cycles_total.labels(outcome="success").inc()
        else:
            self.cycles_total.labels(outcome="fetch_error").inc()
            self.fetch_failures_total.labels(error_code=error_code).inc()

    def record_new_orders(self, count: int) -> None:
        if count:
            self.new_orders_total.inc(count)

    def record_store_failure(self) -> None:
        self.store_failures_total.inc()

    def record_missed_warning(self) -> None:
        self.missed_order_warnings_total.inc()

    def set_baseline_size(self, size: int) -> None:
        self.baseline_size.set(size)

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:
        """Expose the registry over HTTP on ``port``."""

        start_http_server(port, addr=addr, registry=self.registry)


__all__ = ["MetricsCollector"]
