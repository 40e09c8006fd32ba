# -----------------------------------------------------------------------------
#  prime.py
#  Prime factorization notation
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from numnotation.factor import FACTOR_BOUND, factorize
from numnotation.fmt import TOWER_SEP, format_factors, maybe_parenthesize, superscript
from numnotation.magnitude import floor_int, to_magnitude
from numnotation.notations.base import Notation
from numnotation.registry import notation
from numnotation.runtime import CFG
from numnotation.tower import build_tower, classify


@dataclass(frozen=True)
class LevelStyle:
    parenthesize: bool
    as_superscript: bool    # appended to the level below instead of joined with '^'


def tower_styles(factorizations: Sequence[Sequence[int]]) -> list[LevelStyle]:
    """
    Decide, per tower level, how its factorization is written.

    A level is parenthesized unless it is a power of a single prime. When the
    top level is a single prime it becomes a superscript on the level below;
    that level is then also parenthesized if it has more than one factor,
    so 2²³ reads as (2²)³ and 2×3⁵ as (2×3)⁵.
    """
    top = len(factorizations) - 1
    superscript_last = len(factorizations[top]) == 1
    styles = []
    for i, f in enumerate(factorizations):
        mixed = f[0] != f[-1]
        below_superscript = i == top - 1 and len(f) > 1 and superscript_last
        styles.append(LevelStyle(
            parenthesize=mixed or below_superscript,
            as_superscript=i == top and superscript_last,
        ))
    return styles


@notation(
    key="prime",
    description="Product of prime factors; power towers of factorizations beyond 2⁵³.",
)
class PrimeNotation(Notation):
    """
    Writes an integer as its prime factorization, 12 → 2²×3.

    Values above MAX_INT are first turned into a power tower of two or three
    levels (see numnotation.tower) and every level is factored on its own:
    10^20000 → (…)^(2×3×11×19).
    """

    # float(999.99999999999999999) is 1000.0
    exact_under_1000 = True

    @property
    def name(self) -> str:
        return "Prime"

    @property
    def infinite(self) -> str:
        return "Primefinity?"

    def format_under_1000(self, value: float, places: int = 0) -> str:
        return self.primify(to_magnitude(value))

    def format_decimal(self, value: Decimal, places: int = 0) -> str:
        # places is part of the contract only; factorizations have no decimals
        return self.primify(value)

    @staticmethod
    def factor_bound() -> int:
        return int(CFG("PRIME.FACTOR_BOUND", FACTOR_BOUND))

    def primify(self, value: Decimal) -> str:
        regime = classify(value)
        if regime == "ZERO":
            return "0"
        if regime == "ONE":
            return "1"
        if regime == "DIRECT":
            return format_factors(factorize(floor_int(value), self.factor_bound()))
        return self.format_power_tower(build_tower(value))

    def format_power_tower(self, levels: Sequence[int]) -> str:
        bound = self.factor_bound()
        factorizations = [factorize(x, bound) for x in levels]
        parts: list[str] = []
        for f, style in zip(factorizations, tower_styles(factorizations)):
            text = superscript(f[0]) if style.as_superscript else format_factors(f)
            text = maybe_parenthesize(text, style.parenthesize)
            if style.as_superscript:
                parts[-1] += text
            else:
                parts.append(text)
        return TOWER_SEP.join(parts)
