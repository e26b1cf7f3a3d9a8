"""Standardised error codes shared across the collector."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes attached to every :class:`NashStatsError`."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Parsing
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ORDER_TYPE = "INVALID_ORDER_TYPE"

    # Fetching
    FETCH_ERROR = "FETCH_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

    # Storage
    STORAGE_ERROR = "STORAGE_ERROR"
    STORAGE_INIT_ERROR = "STORAGE_INIT_ERROR"
    STORAGE_READ_ERROR = "STORAGE_READ_ERROR"
    STORAGE_WRITE_ERROR = "STORAGE_WRITE_ERROR"

    # Poller
    ORDERS_POSSIBLY_MISSED = "ORDERS_POSSIBLY_MISSED"
