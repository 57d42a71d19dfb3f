"""Parser for the European Central Bank ``eurofxref`` XML feeds.

The daily, 90-day and full-history feeds share one layout::

    <gesmes:Envelope ...>
      <Cube>
        <Cube time="2020-01-02">
          <Cube currency="USD" rate="1.1193"/>
          <Cube currency="JPY" rate="121.75"/>
        </Cube>
        ...
      </Cube>
    </gesmes:Envelope>

All rates are quoted as 1 EUR = rate units of the currency. The document is
streamed with iterparse and each day is written to the store when its
``Cube`` closes, so the full-history file never has to sit in memory as a tree.
"""

import io
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal, InvalidOperation

from fxrates.exceptions import FeedParseError
from fxrates.ingestion import Document, FeedParser
from fxrates.logging import get_logger
from fxrates.models import BASE_CURRENCY, ConversionContext, ExchangeRate, ProviderContext
from fxrates.store import RateStore

logger = get_logger(__name__)

CUBE = "Cube"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class ECBFeedParser(FeedParser):
    """Streams an ECB eurofxref document into a RateStore."""

    def parse(self, document: Document, store: RateStore, provider_context: ProviderContext) -> None:
        if isinstance(document, str):
            document = document.encode("utf-8")
        if isinstance(document, bytes):
            document = io.BytesIO(document)

        current_date: date | None = None
        pending: dict[str, ExchangeRate] = {}
        days = 0

        try:
            for event, element in ET.iterparse(document, events=("start", "end")):
                if _local_name(element.tag) != CUBE:
                    continue

                if event == "start":
                    if "time" in element.attrib:
                        current_date = self._parse_date(element.attrib["time"])
                        pending = {}
                    elif "currency" in element.attrib:
                        rate = self._parse_rate(element.attrib, current_date, provider_context)
                        pending[rate.term] = rate
                    continue

                # end event
                if "time" in element.attrib and current_date is not None:
                    if pending:
                        store.put_all(current_date, pending)
                        days += 1
                    current_date = None
                    pending = {}
                    element.clear()
        except ET.ParseError as exc:
            raise FeedParseError(f"Malformed ECB document: {exc}") from exc

        logger.debug("ecb_feed_parsed", provider=provider_context.provider, days=days)

    @staticmethod
    def _parse_date(raw: str) -> date:
        try:
            return date.fromisoformat(raw)
        except ValueError as exc:
            raise FeedParseError(f"Invalid rate date {raw!r}") from exc

    @staticmethod
    def _parse_rate(
        attrib: dict[str, str],
        rate_date: date | None,
        provider_context: ProviderContext,
    ) -> ExchangeRate:
        currency = attrib["currency"]
        if rate_date is None:
            raise FeedParseError(f"Rate for {currency} appears outside a dated Cube")
        raw = attrib.get("rate")
        try:
            factor = Decimal(raw) if raw is not None else None
        except InvalidOperation:
            factor = None
        if factor is None or not factor.is_finite() or factor <= 0:
            raise FeedParseError(f"Invalid rate {raw!r} for {currency} on {rate_date.isoformat()}")
        return ExchangeRate(
            base=BASE_CURRENCY,
            term=currency,
            factor=factor,
            context=ConversionContext.historic(provider_context, rate_date),
        )
