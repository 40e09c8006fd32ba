# -----------------------------------------------------------------------------
#  custom.py
#  Engineering mantissa followed by the exponent spelled with custom glyphs
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from numnotation.notations.base import Notation
from numnotation.notations.engineering import to_fixed_engineering
from numnotation.registry import notation

CANCER = [
    "😠", "🎂", "🎄", "💀", "🍆", "👪", "🌈", "💯", "🍦", "🎃", "💋", "😂", "🌙",
    "⛔", "🐙", "💩", "❓", "☢", "🙈", "👍", "☂", "✌", "⚠", "❌", "😋", "⚡",
]


class CustomNotation(Notation):
    """
    exponent / 3 in bijective base len(letters): with a..z, 1e3 is 1a,
    1e78 is 1z and 1e81 is 1aa.
    """

    def __init__(self, letters: Sequence[str], mantissa_exponent_separator: str = "", separator: str = ""):
        if len(letters) < 2:
            raise ValueError("a custom notation needs at least 2 letters")
        self.letters = list(letters)
        self.mantissa_exponent_separator = mantissa_exponent_separator
        self.separator = separator

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        m, e = to_fixed_engineering(value, places)
        letters = self.separator.join(self.transcribe(e))
        return f"{m:.{places}f}{self.mantissa_exponent_separator}{letters}"

    def transcribe(self, exponent: int) -> list[str]:
        n = exponent // 3
        base = len(self.letters)
        out: list[str] = []
        while n > 0:
            n -= 1
            out.append(self.letters[n % base])
            n //= base
        return out[::-1]


@notation(key="cancer", description="Engineering mantissa with the exponent spelled in emoji.")
class CancerNotation(CustomNotation):

    def __init__(self):
        super().__init__(CANCER)

    @property
    def name(self) -> str:
        return "Cancer"
