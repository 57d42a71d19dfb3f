"""European Central Bank rate providers.

Each provider owns its own RateStore, the RateResolver that reads it and the
RateIngestor that grows it. Construction registers the ingestor with the
LoaderService for the provider's data id and, unless disabled, triggers an
asynchronous load. Queries made before that load completes resolve to None.

Providers:
- ECBRateProvider: today's reference rates (data id "ECB")
- ECBHistoric90RateProvider: the last 90 days (data id "ECB-HIST90")
- ECBHistoricRateProvider: the full history since 1999 (data id "ECB-HIST")
"""

from concurrent.futures import Future
from datetime import date, datetime

from fxrates.config import ProviderSettings
from fxrates.ingestion import Document, RateIngestor
from fxrates.loader import LoaderService
from fxrates.logging import get_logger
from fxrates.models import (
    BASE_CURRENCY,
    ConversionQuery,
    CurrencyCode,
    ExchangeRate,
    ProviderContext,
    RateType,
)
from fxrates.parsers.ecb import ECBFeedParser
from fxrates.resolver import RateResolver
from fxrates.store import RateStore

logger = get_logger(__name__)


class BaseECBRateProvider:
    """Shared wiring for the ECB providers; subclasses set the data id."""

    DATA_ID: str = ""
    PROVIDER_NAME: str = ""

    BASE_CURRENCY: CurrencyCode = BASE_CURRENCY

    def __init__(
        self,
        loader: LoaderService,
        settings: ProviderSettings | None = None,
    ) -> None:
        settings = settings or ProviderSettings()
        self._context = ProviderContext(
            provider=self.PROVIDER_NAME,
            rate_types=(RateType.HISTORIC,),
        )
        self._store = RateStore()
        self._resolver = RateResolver(self._store, self._context)
        self._ingestor = RateIngestor(self._store, ECBFeedParser(), self._context)
        self._loader = loader
        self._pending_load: Future[int] | None = None

        loader.add_listener(self.DATA_ID, self._ingestor)
        if settings.autoload:
            self._pending_load = loader.load_data_async(self.DATA_ID)
        logger.info(
            "rate_provider_created",
            provider=self.PROVIDER_NAME,
            data_id=self.DATA_ID,
            autoload=settings.autoload,
        )

    @property
    def context(self) -> ProviderContext:
        return self._context

    @property
    def store(self) -> RateStore:
        return self._store

    @property
    def pending_load(self) -> "Future[int] | None":
        """Future of the load triggered at construction, if any."""
        return self._pending_load

    def on_data_loaded(self, resource_id: str, document: Document) -> int:
        """Ingest ``document`` directly, bypassing the loader."""
        return self._ingestor.on_data_loaded(resource_id, document)

    def resolve(self, query: ConversionQuery) -> ExchangeRate | None:
        return self._resolver.resolve(query)

    def get_exchange_rate(
        self,
        base: CurrencyCode,
        term: CurrencyCode,
        when: date | datetime | None = None,
    ) -> ExchangeRate | None:
        return self._resolver.get_exchange_rate(base, term, when)

    def is_available(self, query: ConversionQuery) -> bool:
        return self._resolver.is_available(query)

    def get_reversed(self, rate: ExchangeRate) -> ExchangeRate | None:
        return self._resolver.get_reversed(rate)

    def close(self) -> None:
        """Stop listening for new documents for this provider's data id."""
        self._loader.remove_listener(self.DATA_ID, self._ingestor)


class ECBRateProvider(BaseECBRateProvider):
    """Current-day ECB reference rates."""

    DATA_ID = "ECB"
    PROVIDER_NAME = "ECB"


class ECBHistoric90RateProvider(BaseECBRateProvider):
    """ECB reference rates for the last 90 days."""

    DATA_ID = "ECB-HIST90"
    PROVIDER_NAME = "ECB-HIST90"


class ECBHistoricRateProvider(BaseECBRateProvider):
    """Full ECB reference rate history."""

    DATA_ID = "ECB-HIST"
    PROVIDER_NAME = "ECB-HIST"
