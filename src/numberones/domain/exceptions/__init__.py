"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so handlers can read it without
    # parsing str(exc). Don't raise this directly - pick a subclass so callers can catch
    # precisely (backfill only swallows FetchError, for example).
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationError(DomainException, ValueError):
    """Data failed a model invariant.

    HTTP Status: 422

    Example:
        raise ValidationError("Chart entry date 1990-6-15 does not match key 1990-06-15")
    """

    pass


class ParseError(DomainException, ValueError):
    """A date string could not be parsed.

    Raised for unrecognised month names or malformed date strings. This is never
    silently recovered - on a scraped page it means the provider changed its format.

    HTTP Status: 422
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    HTTP Status: 503 (Service Unavailable)

    Example:
        raise ConfigurationError("Backfill concurrency must be at least 1")
    """

    pass


class ExternalServiceError(DomainException):
    """External service returned an error.

    HTTP Status: 502 (Bad Gateway)
    """

    pass


class FetchError(ExternalServiceError):
    """Fetching one date's chart from the live source failed.

    Covers transport errors, non-200 responses and pages missing the elements we
    scrape. Batch callers treat it as "no data for this date".
    """

    # Yo, date_key is the YYYY-MM-DD key we tried to fetch and status_code is only set
    # when the server actually answered. Both are for logging, not control flow.
    def __init__(
        self,
        message: str,
        date_key: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.date_key = date_key
        self.status_code = status_code


class ChartLookupError(DomainException, LookupError):
    """Neither the cache nor the live source had an entry for a date.

    HTTP Status: 404
    """

    def __init__(self, date_key: str, reason: str | None = None) -> None:
        message = f"No chart entry for {date_key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.date_key = date_key


__all__ = [
    "ChartLookupError",
    "ConfigurationError",
    "DomainException",
    "ExternalServiceError",
    "FetchError",
    "ParseError",
    "ValidationError",
]
