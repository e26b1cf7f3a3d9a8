"""Decoding of the upstream latest-orders response envelope.

The endpoint answers with either ``{"latestOrders": [...]}`` or
``{"message": "..."}``. Neither carries a discriminant, so the success
shape is tried first and the failure shape second.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from nash_stats.core.exceptions import ErrorCode, FetchError, ParseError
from nash_stats.core.models.order import Order


class LatestOrdersEnvelope(BaseModel):
    """Success payload listing the most recent completed orders."""

    latest_orders: list[dict[str, Any]] = Field(alias="latestOrders")

    def to_set(self) -> set[Order]:
        """Parse every order, collapsing duplicates within the response.

        A single bad order rejects the whole batch.
        """
        return {Order.parse(raw) for raw in self.latest_orders}


class FailureEnvelope(BaseModel):
    """Failure payload carrying a human readable message."""

    message: str


def _success_errors(exc: ValidationError | ParseError) -> list[str]:
    if isinstance(exc, ValidationError):
        return [error["msg"] for error in exc.errors()]
    return [exc.message]


def decode_orders_response(body: str | bytes) -> set[Order]:
    """Decode a response body into the set of orders it reports.

    Raises:
        FetchError: With ``UPSTREAM_FAILURE`` for a failure payload, or
            ``MALFORMED_RESPONSE`` when the body matches neither shape.
    """
    try:
        return LatestOrdersEnvelope.model_validate_json(body).to_set()
    except (ValidationError, ParseError) as success_error:
        try:
            failure = FailureEnvelope.model_validate_json(body)
        except ValidationError:
            text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
            raise FetchError(
                f"Failed to deserialize '{text}'",
                error_code=ErrorCode.MALFORMED_RESPONSE,
                body=text,
                details={"errors": _success_errors(success_error)},
            ) from success_error

    raise FetchError(
        failure.message,
        error_code=ErrorCode.UPSTREAM_FAILURE,
        upstream_message=failure.message,
    )
