"""Ingestion port -- the single entry point that writes into a RateStore.

A loader hands over raw feed documents; a FeedParser turns them into
base-currency rates and writes them into the store as it goes. Ingestion is
not atomic: a document that fails half-way leaves the days parsed before the
failure in the store.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

from fxrates.logging import get_logger, ingestion_context
from fxrates.models import ProviderContext
from fxrates.store import RateStore

logger = get_logger(__name__)

Document = bytes | str | BinaryIO


class FeedParser(ABC):
    """Turns a raw rate document into entries in a RateStore."""

    @abstractmethod
    def parse(self, document: Document, store: RateStore, provider_context: ProviderContext) -> None:
        """Parse ``document`` and ``put`` every rate it contains into ``store``.

        Each stored rate must be ``BASE_CURRENCY -> code`` with a historic
        context for its date. Implementations raise FeedParseError on
        malformed input.
        """


class RateIngestor:
    """Listener that feeds loaded documents through a parser into a store.

    Instances are callable so they can be registered directly with a
    LoaderService.

    Args:
        store: The rate table to grow.
        parser: Parser for the provider's document format.
        provider_context: Identity stamped onto parsed rates.
    """

    def __init__(
        self,
        store: RateStore,
        parser: FeedParser,
        provider_context: ProviderContext,
    ) -> None:
        self._store = store
        self._parser = parser
        self._context = provider_context

    def on_data_loaded(self, resource_id: str, document: Document) -> int:
        """Parse ``document`` into the store and return the number of new days.

        Parse failures are logged and swallowed; whatever was stored before
        the failure stays. The day count is a diagnostic only: ingestions
        running at the same time on the same store each see the other's days.
        """
        old_size = len(self._store)
        try:
            with ingestion_context(resource_id, self._context.provider):
                self._parser.parse(document, self._store, self._context)
        except Exception:
            logger.warning(
                "rate_feed_parse_failed",
                resource_id=resource_id,
                provider=self._context.provider,
                exc_info=True,
            )
        added = len(self._store) - old_size
        logger.info(
            "rates_loaded",
            resource_id=resource_id,
            provider=self._context.provider,
            days=added,
        )
        return added

    __call__ = on_data_loaded
