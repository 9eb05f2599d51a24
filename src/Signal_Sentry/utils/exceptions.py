"""Custom exception hierarchy for the Signal Sentry application.

Data-retrieval failures inherit from DataFetchError, which carries contextual
information about which symbol and which source were involved. Startup
configuration problems raise ConfigurationError.
"""


class DataFetchError(Exception):
    """Base exception for all data-fetching failures.

    Attributes:
        ticker: The ticker symbol involved in the failure ("*" for universe-wide calls).
        source: The data source that failed (e.g., "finnhub").
        http_status: The HTTP status code, if the failure was HTTP-related.
    """

    def __init__(
        self,
        message: str,
        *,
        ticker: str,
        source: str,
        http_status: int | None = None,
    ) -> None:
        self.ticker = ticker
        self.source = source
        self.http_status = http_status
        super().__init__(message)


class DataSourceUnavailableError(DataFetchError):
    """Raised when a data source is unreachable or returning errors."""


class InsufficientDataError(DataFetchError):
    """Raised when a response carries no usable price data."""


class RateLimitExceededError(DataFetchError):
    """Raised when the data source rate limit has been hit.

    ``retry_after`` holds the server-suggested wait in seconds, when given.
    """

    def __init__(
        self,
        message: str,
        *,
        ticker: str,
        source: str,
        http_status: int | None = 429,
        retry_after: float | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, ticker=ticker, source=source, http_status=http_status)


class ConfigurationError(Exception):
    """Raised when required process configuration is missing or invalid.

    Attributes:
        missing: Names of required settings that were absent.
        invalid: Names of settings whose values could not be parsed.
    """

    def __init__(
        self,
        message: str,
        *,
        missing: tuple[str, ...] = (),
        invalid: tuple[str, ...] = (),
    ) -> None:
        self.missing = missing
        self.invalid = invalid
        super().__init__(message)
