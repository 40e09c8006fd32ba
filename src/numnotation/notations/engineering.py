# -----------------------------------------------------------------------------
#  engineering.py
#  Mantissa in [1, 1000) with an exponent that is a multiple of 3
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Decimal

from numnotation.magnitude import exponent, mantissa
from numnotation.notations.base import Notation
from numnotation.registry import notation


def to_fixed_engineering(value: Decimal, places: int) -> tuple[float, int]:
    """
    Split value into (mantissa, exponent) with exponent % 3 == 0.

    If printing the mantissa with `places` decimals would show 1000, the pair
    moves up one step instead: 999.999 at 2 places is (1.0, e+3), not 1000.00.
    """
    e = exponent(value)
    offset = e % 3
    m = mantissa(value) * 10**offset
    e -= offset
    pow10 = 10**places
    if math.floor(m * pow10 + 0.5) >= 1000 * pow10:
        return 1.0, e + 3
    return m, e


@notation(key="engineering", description="Scientific notation with exponents in steps of 3: 12.35e9.")
class EngineeringNotation(Notation):

    @property
    def name(self) -> str:
        return "Engineering"

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        m, e = to_fixed_engineering(value, places)
        return f"{m:.{places}f}e{self.format_exponent(e)}"
