"""Utility helpers shared across CLI commands."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

import typer

CONFIG_EXIT_CODE = 2
STORE_EXIT_CODE = 3


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Mapping):
            sanitized[key] = {str(k): str(v) for k, v in value.items()}
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["CONFIG_EXIT_CODE", "STORE_EXIT_CODE", "emit_error"]
