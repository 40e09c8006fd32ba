# -----------------------------------------------------------------------------
#  greek_letters.py
#  Thousands exponent written in base 49 with Greek letters
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Decimal

from numnotation.magnitude import exponent, log10
from numnotation.notations.base import Notation
from numnotation.registry import notation

# ά is the zero digit
GREEK = "ά" + "αβγδεζηθικλμνξοπρστυφχψω" + "ΑΒΓΔΕΖΗΘΙΚΛΜΝΞΟΠΡΣΤΥΦΧΨΩ"


def greek_digits(n: int) -> str:
    """Write n >= 0 in base len(GREEK), most significant letter first."""
    base = len(GREEK)
    step = 1
    while step * base <= n:
        step *= base
    out = []
    while step >= 1:
        ordinal = n // step
        out.append(GREEK[ordinal])
        n -= step * ordinal
        step //= base
    return "".join(out)


@notation(key="greek_letters", description="Mantissa and the thousands exponent in Greek letters: 1.00 β = 10⁶.")
class GreekLettersNotation(Notation):

    @property
    def name(self) -> str:
        return "Greek Letters"

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        suffix = greek_digits(exponent(value) // 3)
        m = math.pow(10, log10(value) % 3)
        return f"{m:.{places}f} {suffix}"
