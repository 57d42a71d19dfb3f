"""fxrates -- historic FX rate resolution over a EUR-based rate table."""

from fxrates.exceptions import (
    CurrencyConversionFailed,
    ExchangeRateError,
    FeedParseError,
    FxRatesError,
    NoRateForDate,
    NoRatesAvailable,
    NullRateNotReversible,
    UnknownResourceError,
)
from fxrates.ingestion import FeedParser, RateIngestor
from fxrates.loader import LoaderService
from fxrates.models import (
    BASE_CURRENCY,
    ConversionContext,
    ConversionQuery,
    ExchangeRate,
    ProviderContext,
    RateType,
)
from fxrates.providers import (
    ECBHistoric90RateProvider,
    ECBHistoricRateProvider,
    ECBRateProvider,
)
from fxrates.resolver import RateResolver
from fxrates.reversal import reverse_rate
from fxrates.store import RateStore

__all__ = [
    "BASE_CURRENCY",
    "ConversionContext",
    "ConversionQuery",
    "CurrencyConversionFailed",
    "ECBHistoric90RateProvider",
    "ECBHistoricRateProvider",
    "ECBRateProvider",
    "ExchangeRate",
    "ExchangeRateError",
    "FeedParseError",
    "FeedParser",
    "FxRatesError",
    "LoaderService",
    "NoRateForDate",
    "NoRatesAvailable",
    "NullRateNotReversible",
    "ProviderContext",
    "RateIngestor",
    "RateResolver",
    "RateStore",
    "RateType",
    "UnknownResourceError",
    "reverse_rate",
]
