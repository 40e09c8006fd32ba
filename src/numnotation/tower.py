# -----------------------------------------------------------------------------
#  tower.py
#  Magnitude regimes and power-tower derivation for the prime notation
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Decimal
from typing import Literal

from numnotation.magnitude import floor_int, log10

# The largest integer a float holds exactly; factorization stays below it.
MAX_INT = 2**53 - 1
MAX_INT_DECIMAL = Decimal(MAX_INT)
MAX_INT_LOG_10 = math.log10(MAX_INT)

Regime = Literal["ZERO", "ONE", "DIRECT", "TOWER2", "TOWER3"]


def _js_round(x: float) -> int:
    # Half-up rounding; round() would use banker's rounding and x + 0.5
    # is inexact near 2**53
    f = math.floor(x)
    return f + 1 if x - f >= 0.5 else f


def _ceil_exponent(x: float) -> int:
    # Just above MAX_INT the float ratio can come out as exactly 1.0; a
    # tower level of 1 has no factorization, so exponents start at 2
    return max(math.ceil(x), 2)


def outer_exponent(value: Decimal) -> float:
    """E such that MAX_INT ** E == value."""
    return log10(value) / MAX_INT_LOG_10


def classify(value: Decimal) -> Regime:
    """
    Pick how a non-negative magnitude is rendered.

    ZERO and ONE look at floor(value), so fractions below 1 collapse to ZERO.
    Anything up to MAX_INT is factored DIRECTly. Above that, the outer exponent
    E decides: E <= MAX_INT gives a height-2 tower, otherwise height 3.
    """
    if value <= MAX_INT_DECIMAL:
        floored = floor_int(value)
        if floored <= 0:
            return "ZERO"
        if floored == 1:
            return "ONE"
        return "DIRECT"
    if outer_exponent(value) <= MAX_INT:
        return "TOWER2"
    return "TOWER3"


def build_tower(value: Decimal) -> tuple[int, ...]:
    """
    Levels of a power tower approximating value (> MAX_INT), bottom-up.

    Height 2: (base, e) with base ** e ≈ value, e = ceil(E) and
    base = MAX_INT ** (E / e) <= MAX_INT.

    Height 3, when E > MAX_INT: E itself is reduced the same way to
    MAX_INT ** (E2 / e2) with e2 = ceil(E2), and the tower is
    (base, e, e2) read as base ** (e ** e2). Higher towers are not built.

    The float operations follow a fixed order so results stay comparable
    with previously displayed values.
    """
    exp = outer_exponent(value)
    base = math.pow(MAX_INT, exp / _ceil_exponent(exp))
    if exp <= MAX_INT:
        return (_js_round(base), _ceil_exponent(exp))

    exp2 = math.log10(exp) / MAX_INT_LOG_10
    exp2_ceil = _ceil_exponent(exp2)
    exp = math.pow(MAX_INT, exp2 / exp2_ceil)
    base = math.pow(MAX_INT, exp / math.ceil(exp))
    return (_js_round(base), math.ceil(exp), exp2_ceil)
