"""Rate resolution over a base-currency rate table.

Every stored rate is ``BASE_CURRENCY -> X``. Any other pair is derived:

- base -> base:  factor 1
- X -> base:     reverse of the stored base -> X rate
- base -> X:     the stored rate, returned as-is
- X -> Y:        (X -> base) * (base -> Y), both legs resolved recursively
                 on the same date and kept as the result's rate chain

Missing data has two outcomes. A date that cannot be found raises; a pair
that has no stored leg on a found date returns None, except for the cross
case, which raises CurrencyConversionFailed.
"""

from dataclasses import replace
from datetime import date, datetime

from fxrates.arithmetic import ONE, multiply
from fxrates.exceptions import CurrencyConversionFailed, FxRatesError, NoRateForDate
from fxrates.logging import get_logger
from fxrates.models import (
    BASE_CURRENCY,
    ConversionContext,
    ConversionQuery,
    CurrencyCode,
    ExchangeRate,
    ProviderContext,
)
from fxrates.reversal import reverse_rate
from fxrates.store import RateStore

logger = get_logger(__name__)


class RateResolver:
    """Resolves conversion queries against a RateStore.

    The resolver holds no state of its own beyond the store it reads and the
    provider context it stamps onto results, so a single instance can serve
    any number of threads.

    Args:
        store: The rate table to read.
        provider_context: Identity stamped onto every resolved rate.
    """

    def __init__(self, store: RateStore, provider_context: ProviderContext) -> None:
        self._store = store
        self._context = provider_context

    @property
    def context(self) -> ProviderContext:
        return self._context

    def resolve(self, query: ConversionQuery) -> ExchangeRate | None:
        """Return the rate for ``query`` or None when the pair has no rate.

        Returns None without raising while the store is still empty.

        Raises:
            NoRateForDate: The query names a date with no stored rates.
            CurrencyConversionFailed: A cross rate is missing one of its legs.
        """
        if self._store.is_empty():
            return None

        if query.rate_date is None:
            rate_date = self._store.most_recent_date()
        else:
            rate_date = query.rate_date
        targets = self._store.rates_for(rate_date)
        if targets is None:
            raise NoRateForDate(rate_date)

        context = ConversionContext.historic(self._context, rate_date)
        source_rate = targets.get(query.base)
        target_rate = targets.get(query.term)

        if query.base == BASE_CURRENCY and query.term == BASE_CURRENCY:
            return ExchangeRate(
                base=BASE_CURRENCY,
                term=BASE_CURRENCY,
                factor=ONE,
                context=context,
            )

        if query.term == BASE_CURRENCY:
            if source_rate is None:
                return None
            return replace(reverse_rate(source_rate), context=context)

        if query.base == BASE_CURRENCY:
            return target_rate

        return self._triangulate(query.on(rate_date), context)

    def _triangulate(self, query: ConversionQuery, context: ConversionContext) -> ExchangeRate:
        to_base = self.resolve(query.with_currencies(term=BASE_CURRENCY))
        from_base = self.resolve(query.with_currencies(base=BASE_CURRENCY))
        if to_base is None or from_base is None:
            raise CurrencyConversionFailed(query.base, query.term, query.rate_date)

        logger.debug(
            "rate_triangulated",
            base=query.base,
            term=query.term,
            rate_date=query.rate_date,
        )
        return ExchangeRate(
            base=query.base,
            term=query.term,
            factor=multiply(to_base.factor, from_base.factor),
            context=context,
            rate_chain=(to_base, from_base),
        )

    # ──────────────────────────────────────────────
    # Convenience lookups
    # ──────────────────────────────────────────────

    def get_exchange_rate(
        self,
        base: CurrencyCode,
        term: CurrencyCode,
        when: date | datetime | None = None,
    ) -> ExchangeRate | None:
        """Resolve ``base -> term`` on ``when`` (a date or datetime), or the latest date."""
        return self.resolve(ConversionQuery.of(base, term, when))

    def is_available(self, query: ConversionQuery) -> bool:
        """Return True if ``query`` resolves to a rate without raising."""
        try:
            return self.resolve(query) is not None
        except FxRatesError:
            return False

    def get_reversed(self, rate: ExchangeRate) -> ExchangeRate | None:
        """Reverse ``rate`` if it was produced by this provider, else None."""
        if rate.context.provider != self._context.provider:
            return None
        return reverse_rate(rate)
