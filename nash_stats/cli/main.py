"""Main entry point for the nash-stats command line interface."""

from __future__ import annotations

import asyncio
import json

import httpx
import typer

from nash_stats.core.config import DEFAULT_BASELINE_LIMIT, NashStatsSettings, load_settings
from nash_stats.core.data import OrderFetcher, OrderStore, create_http_client
from nash_stats.core.exceptions import ConfigurationError, StoreError
from nash_stats.core.logging import configure_logging, logger
from nash_stats.core.monitoring import MetricsCollector
from nash_stats.core.services import OrderPoller

from .utils import CONFIG_EXIT_CODE, STORE_EXIT_CODE, emit_error


def get_http_client(timeout: float) -> httpx.AsyncClient:
    """Factory hook for the client used to reach the upstream endpoint."""

    return create_http_client(timeout)


async def run_poller(settings: NashStatsSettings, *, max_cycles: int | None = None) -> None:
    """Wire the poller from ``settings`` and run it."""

    metrics = MetricsCollector()
    if settings.metrics_port is not None:
        metrics.serve(settings.metrics_port)
        logger.info("Serving metrics on port {}", settings.metrics_port)

    async with get_http_client(settings.request_timeout) as client:
        poller = OrderPoller(
            OrderFetcher(client, settings.endpoint_url),
            OrderStore(settings.persist_path),
            interval=settings.fetch_interval,
            baseline_limit=settings.baseline_limit,
            metrics=metrics,
        )
        await poller.run(max_cycles=max_cycles)


def _settings_or_exit(**overrides: object) -> NashStatsSettings:
    try:
        return load_settings(**overrides)
    except ConfigurationError as error:
        emit_error(error.message, error.error_code.value, details=error.details)
        raise typer.Exit(code=CONFIG_EXIT_CODE) from error


def create_app() -> typer.Typer:
    """Create the Typer application."""

    app = typer.Typer(add_completion=False, help="Collect completed Nash orders into DuckDB.")

    @app.command("run")
    def run_command(
        persist_path: str | None = typer.Option(
            None, "--persist-path", help="DuckDB file for observed orders [env: PERSIST_PATH]."
        ),
        fetch_interval: float | None = typer.Option(
            None, "--fetch-interval", help="Seconds between polls [env: FETCH_INTERVAL, default: 2]."
        ),
        endpoint_url: str | None = typer.Option(
            None, "--endpoint-url", help="Upstream endpoint [env: ENDPOINT_URL]."
        ),
        log_level: str | None = typer.Option(None, "--log-level", help="Log level [env: LOG_LEVEL]."),
        log_file: str | None = typer.Option(
            None, "--log-file", help="Also append JSON log lines to this file [env: LOG_FILE]."
        ),
        metrics_port: int | None = typer.Option(
            None, "--metrics-port", help="Serve Prometheus metrics on this port [env: METRICS_PORT]."
        ),
        max_cycles: int | None = typer.Option(None, "--max-cycles", hidden=True),
    ) -> None:
        """Poll the upstream endpoint and persist new orders."""

        settings = _settings_or_exit(
            persist_path=persist_path,
            fetch_interval=fetch_interval,
            endpoint_url=endpoint_url,
            log_level=log_level,
            log_file=log_file,
            metrics_port=metrics_port,
        )
        configure_logging(
            settings.log_level,
            file_output=settings.log_file is not None,
            file_path=settings.log_file,
        )
        logger.info("Start server...")

        try:
            asyncio.run(run_poller(settings, max_cycles=max_cycles))
        except StoreError as error:
            logger.bind(error_code=error.error_code.value).critical("{}", error.message)
            emit_error(error.message, error.error_code.value, details=error.details)
            raise typer.Exit(code=STORE_EXIT_CODE) from error
        except KeyboardInterrupt:
            logger.info("Shutting down")

    @app.command("recent")
    def recent_command(
        persist_path: str | None = typer.Option(
            None, "--persist-path", help="DuckDB file for observed orders [env: PERSIST_PATH]."
        ),
        limit: int = typer.Option(DEFAULT_BASELINE_LIMIT, "--limit", min=1, help="Number of orders to show."),
    ) -> None:
        """Print the most recently stored orders as JSON lines, newest first."""

        settings = _settings_or_exit(persist_path=persist_path)
        store = OrderStore(settings.persist_path)
        try:
            store.initialize()
            orders = store.load_recent(limit)
        except StoreError as error:
            emit_error(error.message, error.error_code.value, details=error.details)
            raise typer.Exit(code=STORE_EXIT_CODE) from error

        for order in orders:
            typer.echo(json.dumps(order.to_dict()))

    return app


app = create_app()


def main() -> None:
    app()
