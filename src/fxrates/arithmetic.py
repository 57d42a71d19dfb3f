"""Decimal contexts and helpers used for rate arithmetic.

All calculations use Decimal arithmetic exclusively -- no float conversions anywhere.

DECIMAL64 (16 significant digits, round-half-even) is the precision of every
division. Products of two rates are taken under DECIMAL128: two 16-digit
operands have at most 32 significant digits, so the product is exact.
"""

from decimal import ROUND_HALF_EVEN, Context, Decimal

ONE = Decimal(1)

DECIMAL64 = Context(prec=16, rounding=ROUND_HALF_EVEN)
DECIMAL128 = Context(prec=34, rounding=ROUND_HALF_EVEN)


def divide(dividend: Decimal, divisor: Decimal, context: Context = DECIMAL64) -> Decimal:
    """Divide under an explicit context instead of the thread's current one."""
    return context.divide(dividend, divisor)


def multiply(multiplicand: Decimal, multiplier: Decimal, context: Context = DECIMAL128) -> Decimal:
    """Multiply under an explicit context instead of the thread's current one."""
    return context.multiply(multiplicand, multiplier)
