"""
{#!filepath: mint_schedule/schedule/numeric.py}

Fixed-point arithmetic for emission amounts.

Rounding rule:
- every amount is a Decimal carrying at most 18 fractional digits (1 wei)
- the per-second emission of a cycle and the decayed tick supply are
  truncated toward zero to that quantum
- accrual (elapsed seconds * per-second emission) is exact

The context is private to this module, so results never depend on the
caller's thread-local decimal settings.
"""
from __future__ import annotations

from decimal import ROUND_DOWN, Context, Decimal
from typing import Union

AMOUNT_QUANTUM = Decimal("1e-18")

# uint256 fits in 78 decimal digits
CONTEXT = Context(prec=78, rounding=ROUND_DOWN)

ZERO = Decimal(0)
ONE = Decimal(1)

Numeric = Union[Decimal, int, str, float]


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert config / call-site input to Decimal.

    Floats go through repr (0.1 -> Decimal("0.1")), never through their
    binary value.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric amount")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def truncate(value: Decimal) -> Decimal:
    return value.quantize(AMOUNT_QUANTUM, context=CONTEXT)


def mul(a: Decimal, b: Decimal) -> Decimal:
    return CONTEXT.multiply(a, b)


def add(a: Decimal, b: Decimal) -> Decimal:
    # plain "+" would use the thread context (28 digits by default)
    return CONTEXT.add(a, b)


def per_second(tick_supply: Decimal, output_rate: Decimal, share: Decimal) -> Decimal:
    """
    Pool emission for one second of the current cycle.
    """
    return truncate(mul(mul(tick_supply, output_rate), share))


def decay(tick_supply: Decimal, multiplier: Decimal) -> Decimal:
    return truncate(mul(tick_supply, multiplier))


def accrue(elapsed: int, rate: Decimal) -> Decimal:
    return CONTEXT.multiply(Decimal(elapsed), rate)
