"""Change detection and persistence loop for upstream orders.

Each cycle fetches the latest orders, works out which ones were not in the
previous cycle's batch (the baseline), persists those and then replaces the
baseline with the batch just fetched.

The baseline is replaced rather than merged. If the upstream window rotates
faster than the poll interval, orders can drop out before they are ever
seen; the "possibly missed" warning is the only signal of that.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Collection, Iterable
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Protocol

from nash_stats.core.config import DEFAULT_BASELINE_LIMIT, DEFAULT_FETCH_INTERVAL
from nash_stats.core.exceptions import ErrorCode, FetchError, StoreError
from nash_stats.core.logging import get_logger, log_context
from nash_stats.core.models import Order
from nash_stats.core.monitoring import MetricsCollector

_logger = get_logger("poller")


class Fetcher(Protocol):
    async def fetch(self) -> set[Order]: ...


class Store(Protocol):
    def initialize(self) -> None: ...

    def load_recent(self, limit: int = ...) -> list[Order]: ...

    def append(self, order: Order) -> object: ...


class PollerState(str, Enum):
    """Lifecycle of an :class:`OrderPoller`."""

    BOOTSTRAPPING = "bootstrapping"
    POLLING = "polling"


@dataclass(slots=True, frozen=True)
class CycleResult:
    """Outcome of a single poll cycle."""

    cycle: int
    fetched: int = 0
    new_orders: tuple[Order, ...] = ()
    persisted: int = 0
    store_failures: int = 0
    missed_warning: bool = False
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def detect_new_orders(current: Iterable[Order], baseline: Collection[Order]) -> list[Order]:
    """Return the orders of ``current`` that are not in ``baseline``.

    Membership is checked with ``Order.__eq__`` by scanning the baseline, so
    amounts that differ only within tolerance still count as seen even when
    their hashes differ.
    """
    seen = list(baseline)
    return [order for order in current if order not in seen]


class OrderPoller:
    """Single-writer polling loop: fetch, diff, persist, sleep."""

    def __init__(
        self,
        fetcher: Fetcher,
        store: Store,
        *,
        interval: float = DEFAULT_FETCH_INTERVAL,
        baseline_limit: int = DEFAULT_BASELINE_LIMIT,
        metrics: MetricsCollector | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.interval = interval
        self.baseline_limit = baseline_limit
        self.metrics = metrics or MetricsCollector()
        self._sleep = sleep
        self.state = PollerState.BOOTSTRAPPING
        self._baseline: set[Order] = set()
        self._cycles = 0
        self._successful_cycles = 0

    @property
    def baseline(self) -> frozenset[Order]:
        return frozenset(self._baseline)

    def bootstrap(self) -> None:
        """Initialise the store and seed the baseline from stored history.

        A :class:`StoreError` here is fatal and propagates to the caller.
        """
        self.store.initialize()
        recent = self.store.load_recent(self.baseline_limit)
        self._baseline = set(recent)
        self.metrics.set_baseline_size(len(self._baseline))
        self.state = PollerState.POLLING
        _logger.info("Loaded {} stored orders as baseline", len(recent))

    async def poll_once(self) -> CycleResult:
        """Run one fetch, diff and persist cycle."""

        if self.state is not PollerState.POLLING:
            raise RuntimeError("bootstrap() must complete before polling")

        self._cycles += 1
        with log_context(cycle=self._cycles):
            return await self._run_cycle(self._cycles)

    async def run(self, max_cycles: int | None = None) -> None:
        """Bootstrap, then poll every ``interval`` seconds.

        Runs forever unless ``max_cycles`` is given.
        """
        self.bootstrap()
        _logger.info("Polling every {} seconds", self.interval)

        completed = 0
        while True:
            await self.poll_once()
            completed += 1
            if max_cycles is not None and completed >= max_cycles:
                return
            await self._sleep(self.interval)

    async def _run_cycle(self, cycle: int) -> CycleResult:
        started = perf_counter()
        try:
            current = await self.fetcher.fetch()
        except FetchError as exc:
            self.metrics.observe_fetch(perf_counter() - started, error_code=exc.error_code.value)
            _logger.bind(error_code=exc.error_code.value, **exc.details).error("{}", exc.message)
            return CycleResult(cycle=cycle, error=exc)
        self.metrics.observe_fetch(perf_counter() - started)

        new_orders = detect_new_orders(current, self._baseline)
        missed = bool(current) and len(new_orders) == len(current) and self._successful_cycles > 0
        self._successful_cycles += 1
        if missed:
            self.metrics.record_missed_warning()
            _logger.bind(error_code=ErrorCode.ORDERS_POSSIBLY_MISSED.value, fetched=len(current)).warning(
                "New orders possibly missed"
            )

        persisted = 0
        failures = 0
        for order in new_orders:
            _logger.bind(order=order.to_dict()).info("New order: {}", order)
            try:
                self.store.append(order)
            except StoreError as exc:
                failures += 1
                self.metrics.record_store_failure()
                _logger.bind(error_code=exc.error_code.value).error("Failed to insert order: {}", exc.message)
            else:
                persisted += 1
        self.metrics.record_new_orders(len(new_orders))

        self._baseline = set(current)
        self.metrics.set_baseline_size(len(self._baseline))

        return CycleResult(
            cycle=cycle,
            fetched=len(current),
            new_orders=tuple(new_orders),
            persisted=persisted,
            store_failures=failures,
            missed_warning=missed,
        )


__all__ = ["CycleResult", "OrderPoller", "PollerState", "detect_new_orders"]
