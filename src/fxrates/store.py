"""In-memory, date-indexed table of base-currency rates.

Holds ``date -> {currency code -> ExchangeRate}`` for the lifetime of the
owning provider. Every stored rate is expressed from the base currency to the
currency it is keyed under.

Concurrency: writers serialize on a lock; readers never take it. A day's
mapping is never modified in place. Each write builds a new dict holding the
complete set of entries and publishes it with a single assignment, so a
reader sees either the old mapping or the new one, never a half-built one.

The set of known dates is published the same way: a sorted tuple rebuilt by
the writer after the new day is in place and swapped in by one assignment.
Readers only ever iterate that immutable tuple, never the live dict, so they
do not depend on the GIL to avoid "dict changed size during iteration".
"""

import bisect
import threading
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType

from fxrates.exceptions import NoRatesAvailable
from fxrates.models import CurrencyCode, ExchangeRate


class RateStore:
    """Concurrency-safe mapping from historic date to per-currency rates."""

    def __init__(self) -> None:
        self._rates: dict[date, Mapping[CurrencyCode, ExchangeRate]] = {}
        self._dates: tuple[date, ...] = ()
        self._write_lock = threading.Lock()

    # ──────────────────────────────────────────────
    # Write methods
    # ──────────────────────────────────────────────

    def put(self, rate_date: date, code: CurrencyCode, rate: ExchangeRate) -> None:
        """Insert or overwrite the rate for ``code`` on ``rate_date``."""
        self.put_all(rate_date, {code: rate})

    def put_all(self, rate_date: date, rates: Mapping[CurrencyCode, ExchangeRate]) -> None:
        """Insert or overwrite several rates for one day in a single publish."""
        if not rates:
            return
        with self._write_lock:
            current = self._rates.get(rate_date)
            is_new_day = current is None
            merged = {**(current or {}), **rates}
            self._rates[rate_date] = MappingProxyType(merged)
            if is_new_day:
                days = list(self._dates)
                bisect.insort(days, rate_date)
                self._dates = tuple(days)

    # ──────────────────────────────────────────────
    # Read methods
    # ──────────────────────────────────────────────

    def rates_for(self, rate_date: date) -> Mapping[CurrencyCode, ExchangeRate] | None:
        """Return the read-only rates for exactly ``rate_date``, or None."""
        return self._rates.get(rate_date)

    def most_recent_date(self) -> date:
        """Return the latest date with stored rates.

        Raises:
            NoRatesAvailable: If nothing has been stored yet.
        """
        days = self._dates
        if not days:
            raise NoRatesAvailable("There is no most recent exchange rate date: no rates loaded")
        return days[-1]

    def dates(self) -> tuple[date, ...]:
        """Return a sorted snapshot of every date with stored rates."""
        return self._dates

    def is_empty(self) -> bool:
        return not self._dates

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, rate_date: object) -> bool:
        return rate_date in self._rates
