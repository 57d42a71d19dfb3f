"""Reversal of a rate: base -> X into X -> base."""

from dataclasses import replace

from fxrates.arithmetic import DECIMAL64, ONE, divide
from fxrates.exceptions import NullRateNotReversible
from fxrates.models import ExchangeRate


def reverse_rate(rate: ExchangeRate | None) -> ExchangeRate:
    """Return the inverse of ``rate`` with base and term swapped.

    The factor is ``1 / rate.factor`` rounded to 16 significant digits
    (round-half-even). The conversion context is kept and the rate chain is
    dropped: a reversed rate is a single rate, not a derivation.

    Args:
        rate: The rate to invert.

    Returns:
        A new ExchangeRate from ``rate.term`` to ``rate.base``.

    Raises:
        NullRateNotReversible: If ``rate`` is None.
    """
    if rate is None:
        raise NullRateNotReversible()
    return replace(
        rate,
        base=rate.term,
        term=rate.base,
        factor=divide(ONE, rate.factor, DECIMAL64),
        rate_chain=(),
    )
