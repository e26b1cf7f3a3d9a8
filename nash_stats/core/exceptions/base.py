"""Core exception hierarchy for nash-stats."""

from typing import Any

from nash_stats.core.exceptions.codes import ErrorCode


class NashStatsError(Exception):
    """Base class for every error raised by the collector."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.GENERAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: Human readable description.
            error_code: Standardised error code.
            details: Extra diagnostic payload.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(NashStatsError):
    """Settings are missing or invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ParseError(NashStatsError):
    """A raw order could not be turned into an :class:`Order`."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: ErrorCode = ErrorCode.PARSE_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if field is not None:
            super_details["field"] = field
        super().__init__(message, error_code, super_details)
        self.field = field


class FetchError(NashStatsError):
    """A fetch cycle produced no usable batch of orders."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FETCH_ERROR,
        body: str | None = None,
        upstream_message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if body is not None:
            super_details["body"] = body
        if upstream_message is not None:
            super_details["upstream_message"] = upstream_message
        super().__init__(message, error_code, super_details)
        self.body = body
        self.upstream_message = upstream_message


class StoreError(NashStatsError):
    """The durable order table could not be initialised, read or written."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.STORAGE_ERROR,
        persist_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if persist_path is not None:
            super_details["persist_path"] = persist_path
        super().__init__(message, error_code, super_details)
        self.persist_path = persist_path
