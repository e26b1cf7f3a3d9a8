"""Command line interface for nash-stats."""

from nash_stats.cli.main import app, create_app

__all__ = ["app", "create_app"]
