"""Custom exceptions for fxrates.

Every error raised by the store, resolver, parsers and loader lives here
to avoid circular imports between modules.
"""

from datetime import date


class FxRatesError(Exception):
    """Base exception for all fxrates errors."""


class ExchangeRateError(FxRatesError):
    """Raised when the rate table cannot answer a lookup."""


class NoRatesAvailable(ExchangeRateError):
    """Raised when a most-recent date is needed but nothing has been loaded."""

    def __init__(self, message: str = "No exchange rates have been loaded") -> None:
        super().__init__(message)


class NoRateForDate(ExchangeRateError):
    """Raised when a specific date was requested and no rates exist for it."""

    def __init__(self, rate_date: date) -> None:
        self.rate_date = rate_date
        super().__init__(f"No exchange rates available for {rate_date.isoformat()}")


class CurrencyConversionFailed(FxRatesError):
    """Raised when a cross rate cannot be triangulated through the base currency."""

    def __init__(self, base: str, term: str, rate_date: date | None = None) -> None:
        self.base = base
        self.term = term
        self.rate_date = rate_date
        when = f" on {rate_date.isoformat()}" if rate_date is not None else ""
        super().__init__(f"Cannot convert {base} to {term}{when}")


class NullRateNotReversible(FxRatesError, ValueError):
    """Raised when reversal is attempted on a missing rate."""

    def __init__(self) -> None:
        super().__init__("Rate null is not reversible")


class FeedParseError(FxRatesError):
    """Raised by a feed parser when the raw document is malformed."""


class UnknownResourceError(FxRatesError, KeyError):
    """Raised when the loader is asked for a data id nobody registered."""

    def __init__(self, data_id: str) -> None:
        self.data_id = data_id
        super().__init__(f"No resource registered for data id {data_id!r}")

    def __str__(self) -> str:
        return self.args[0]
