# -----------------------------------------------------------------------------
#  custom_base.py
#  Positional notation in an arbitrary base with custom digit glyphs
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Decimal

from numnotation.magnitude import floor_int, log10
from numnotation.notations.base import Notation
from numnotation.registry import notation

# Integers with at most this many digits in the base are written out in full
CUSTOM_BASE_MAX_DIGITS = 20


class CustomBaseNotation(Notation):
    """
    Integers below base ** CUSTOM_BASE_MAX_DIGITS are written exactly; larger
    values as <d.ddd>b<exponent>, mantissa and exponent both in the base.
    """

    def __init__(self, digits: str):
        if len(digits) < 2:
            raise ValueError("a custom base needs at least 2 digits")
        self.digits = digits
        self.base = len(digits)
        self.limit = self.base**CUSTOM_BASE_MAX_DIGITS

    def to_base(self, n: int) -> str:
        if n == 0:
            return self.digits[0]
        out = []
        while n > 0:
            n, r = divmod(n, self.base)
            out.append(self.digits[r])
        return "".join(reversed(out))

    def format_under_1000(self, value: float, places: int = 0) -> str:
        return self.to_base(math.floor(value))

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        if value < self.limit:
            return self.to_base(floor_int(value))

        log_base = math.log10(self.base)
        log = log10(value)
        exp = math.floor(log / log_base)
        m = math.pow(10, log - exp * log_base)
        # float error on huge logs can leave m outside [1, base)
        while m >= self.base:
            m /= self.base
            exp += 1
        while m < 1:
            m *= self.base
            exp -= 1

        scaled = math.floor(m * self.base**places + 0.5)
        if scaled >= self.base ** (places + 1):
            scaled //= self.base
            exp += 1
        digits = self.to_base(scaled)
        text = digits[0] + (f".{digits[1:]}" if places else "")
        return f"{text}b{self.to_base(exp)}"


@notation(key="binary", description="Base 2; huge values as mantissa and exponent in binary.")
class BinaryNotation(CustomBaseNotation):

    def __init__(self):
        super().__init__("01")

    @property
    def name(self) -> str:
        return "Binary"
