"""Shared data models for rate resolution.

CRITICAL: All factors use Decimal. Never use float for rates or amounts.
Every model is a frozen dataclass: a resolved rate is built in one step and
never mutated afterwards, so entries can be shared freely across threads.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

CurrencyCode = str

BASE_CURRENCY: CurrencyCode = "EUR"


class RateType(str, Enum):
    """How fresh a rate is."""

    ANY = "any"
    REALTIME = "realtime"
    DELAYED = "delayed"
    HISTORIC = "historic"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class ProviderContext:
    """Identity of a rate provider and the rate types it serves."""

    provider: str
    rate_types: tuple[RateType, ...] = (RateType.HISTORIC,)


@dataclass(frozen=True)
class ConversionContext:
    """Where a rate came from and which day it is valid for."""

    provider: str
    rate_type: RateType
    rate_date: date | None = None

    @classmethod
    def historic(cls, provider_context: ProviderContext, rate_date: date) -> "ConversionContext":
        """Build a historic context stamped with ``rate_date``."""
        return cls(
            provider=provider_context.provider,
            rate_type=RateType.HISTORIC,
            rate_date=rate_date,
        )


@dataclass(frozen=True)
class ExchangeRate:
    """A directed conversion factor from ``base`` to ``term``.

    ``amount_in_term = amount_in_base * factor``. ``rate_chain`` is empty for
    stored and reversed rates; a triangulated rate holds its two legs in the
    order they were applied.
    """

    base: CurrencyCode
    term: CurrencyCode
    factor: Decimal
    context: ConversionContext
    rate_chain: tuple["ExchangeRate", ...] = ()

    @property
    def rate_date(self) -> date | None:
        return self.context.rate_date

    @property
    def is_derived(self) -> bool:
        """True when the factor was computed from a chain of other rates."""
        return bool(self.rate_chain)

    def convert(self, amount: Decimal) -> Decimal:
        """Convert ``amount`` of the base currency into the term currency."""
        return amount * self.factor


@dataclass(frozen=True)
class ConversionQuery:
    """A request for the ``base`` to ``term`` rate, optionally on a given day.

    ``rate_date`` of None means "the most recent date available". A datetime
    passed as ``rate_date`` is truncated to its calendar date on construction.
    """

    base: CurrencyCode
    term: CurrencyCode
    rate_date: date | None = None

    def __post_init__(self) -> None:
        # datetime is a subclass of date, so test it explicitly
        if isinstance(self.rate_date, datetime):
            object.__setattr__(self, "rate_date", self.rate_date.date())

    @classmethod
    def of(
        cls,
        base: CurrencyCode,
        term: CurrencyCode,
        when: date | datetime | None = None,
    ) -> "ConversionQuery":
        """Build a query from a date, a datetime or nothing."""
        return cls(base=base, term=term, rate_date=when)

    def with_currencies(
        self,
        base: CurrencyCode | None = None,
        term: CurrencyCode | None = None,
    ) -> "ConversionQuery":
        """Return a copy with the base and/or term currency replaced."""
        return replace(
            self,
            base=self.base if base is None else base,
            term=self.term if term is None else term,
        )

    def on(self, rate_date: date) -> "ConversionQuery":
        """Return a copy pinned to ``rate_date``."""
        return replace(self, rate_date=rate_date)
