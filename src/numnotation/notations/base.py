# -----------------------------------------------------------------------------
#  base.py
#  The contract every notation implements
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal

from numnotation.magnitude import MagnitudeLike, is_infinite, to_magnitude
from numnotation.runtime import CFG


class Notation:
    """
    A way of writing a magnitude as a short string.

    Subclasses provide name and format_decimal(); they may override
    infinite, format_under_1000() and format_exponent(). Callers use format(),
    which deals with sign, infinities and the below/above 1000 split.

    With exact_under_1000 set, values below 1000 skip the float conversion
    and go to format_decimal() as well.
    """

    key: str = ""
    description: str = ""
    exact_under_1000: bool = False

    @property
    def name(self) -> str:
        raise NotImplementedError

    @property
    def infinite(self) -> str:
        return "Infinite"

    @property
    def negative_infinite(self) -> str:
        return f"-{self.infinite}"

    def format(self, value: MagnitudeLike, places: int = 0, places_under_1000: int = 0) -> str:
        dec = to_magnitude(value)
        if is_infinite(dec):
            return self.negative_infinite if dec.is_signed() and not dec.is_nan() else self.infinite

        if dec.copy_abs() < 1000 and not self.exact_under_1000:
            number = float(dec)
            if number < 0:
                return f"-{self.format_under_1000(-number, places_under_1000)}"
            return self.format_under_1000(number, places_under_1000)

        if dec < 0:
            return f"-{self.format_decimal(dec.copy_negate(), places)}"
        return self.format_decimal(dec, places)

    def format_under_1000(self, value: float, places: int = 0) -> str:
        return f"{value:.{places}f}"

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        raise NotImplementedError

    def format_exponent(self, exponent: int) -> str:
        commas = bool(CFG("FORMATTING.EXPONENT_COMMAS", True))
        threshold = int(CFG("FORMATTING.EXPONENT_COMMAS_MIN", 100_000))
        if commas and abs(exponent) >= threshold:
            return f"{exponent:,}"
        return str(exponent)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
