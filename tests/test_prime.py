# tests/test_prime.py
"""
Tests for the prime notation: factorization, superscripts, regimes, towers.

Run: pytest -v
"""

from __future__ import annotations

import math
import random
import re
from decimal import Decimal

import pytest
from sympy import factorint

from numnotation.factor import FACTOR_BOUND, factorize, residual_is_prime
from numnotation.fmt import SUPERSCRIPT_DIGITS, format_factors, superscript
from numnotation.notations.prime import PrimeNotation, tower_styles
from numnotation.runtime import APPLY
from numnotation.tower import MAX_INT, build_tower, classify

PRIME = PrimeNotation()

# ---------- helpers -----------------------------------------------------------

_TERM_RE = re.compile(rf"^(\d+)([{SUPERSCRIPT_DIGITS}]*)$")


def _expand(fac: dict[int, int]) -> list[int]:
    return [p for p in sorted(fac) for _ in range(fac[p])]


def _product_of(expr: str) -> int:
    """Evaluate a rendered factor product such as '(2²×3)' back to an int."""
    out = 1
    for term in expr.strip("()").split("×"):
        m = _TERM_RE.match(term)
        assert m, f"unexpected term {term!r} in {expr!r}"
        count = int(m.group(2).translate(str.maketrans(SUPERSCRIPT_DIGITS, "0123456789")) or "1")
        out *= int(m.group(1)) ** count
    return out


# ---------- factorization -----------------------------------------------------


@pytest.mark.parametrize("n", range(2, 3000))
def test_factorize_small_matches_sympy(n):
    assert factorize(n) == _expand(factorint(n))


def test_factorize_exact_below_bound_squared():
    rng = random.Random(20240601)
    for n in rng.sample(range(2, FACTOR_BOUND**2 + 1), 300):
        got = factorize(n)
        assert got == sorted(got)
        assert math.prod(got) == n
        assert got == _expand(factorint(n)), n


@pytest.mark.parametrize("n", [FACTOR_BOUND**2, 9973 * 9967, 9973**2, 2**26, 3**16, 99_999_989])
def test_factorize_edges_of_the_bound(n):
    assert factorize(n) == _expand(factorint(n))


def test_factorize_keeps_large_residual_unsplit():
    # both primes are above the bound, so the product stays one factor
    n = 2 * 10007 * 10009
    assert factorize(n) == [2, 100160063]
    assert not residual_is_prime(factorize(n))


def test_factorize_max_int_residual():
    # 2^53 - 1 = 6361 × 69431 × 20394401; the last two are beyond the bound
    got = factorize(MAX_INT)
    assert got == [6361, 69431 * 20394401]
    assert math.prod(got) == MAX_INT
    assert not residual_is_prime(got)


def test_factorize_custom_bound():
    assert factorize(11 * 13 * 17, bound=10) == [2431]
    assert factorize(11 * 13 * 17, bound=13) == [11, 13, 17]


def test_residual_is_prime_for_true_primes():
    assert residual_is_prime(factorize(997))
    assert residual_is_prime(factorize(2 * 1_000_000_007))
    assert residual_is_prime([])


def test_factor_module_imports_without_gmpy2():
    import numnotation.factor as factor_module

    assert "gmpy2" not in vars(factor_module)


def test_factorize_rejects_below_two():
    with pytest.raises(ValueError):
        factorize(1)


# ---------- superscripts & products ------------------------------------------


@pytest.mark.parametrize("count,expected", [
    (0, "⁰"),
    (1, "¹"),
    (7, "⁷"),
    (10, "¹⁰"),
    (213, "²¹³"),
    (9876543210, "⁹⁸⁷⁶⁵⁴³²¹⁰"),
])
def test_superscript(count, expected):
    assert superscript(count) == expected


@pytest.mark.parametrize("factors,expected", [
    ([2, 2, 3], "2²×3"),
    ([7], "7"),
    ([2, 2, 2, 2, 2, 2, 5, 5, 5, 5, 5, 5], "2⁶×5⁶"),
    ([2, 3, 5, 7], "2×3×5×7"),
    ([3] * 12, "3¹²"),
    ([2, 3, 3, 100160063], "2×3²×100160063"),
])
def test_format_factors(factors, expected):
    assert format_factors(factors) == expected


# ---------- end-to-end: small magnitudes --------------------------------------

TEST_CASES = [
    (12, "2²×3"),
    (1000000, "2⁶×5⁶"),
    (997, "997"),
    (0, "0"),
    (1, "1"),
    (360, "2³×3²×5"),
    (1024, "2¹⁰"),
    (2431, "11×13×17"),
    (12.7, "2²×3"),
    (1.9, "1"),
    (0.5, "0"),
    (Decimal("1000000.75"), "2⁶×5⁶"),
    ("9007199254740991", "6361×1416003655831"),
    (-12, "-2²×3"),
    (Decimal("999.99999999999999999"), "3³×37"),
    ("999.99999999999999999", "3³×37"),
    (Decimal("-999.99999999999999999"), "-3³×37"),
]

TEST_IDS = [f"{v!r}" for v, _ in TEST_CASES]


@pytest.mark.parametrize("value,expected", TEST_CASES, ids=TEST_IDS)
def test_prime_format(value, expected):
    assert PRIME.format(value) == expected


def test_name_and_infinity_labels():
    assert PRIME.name == "Prime"
    assert PRIME.infinite == "Primefinity?"
    assert PRIME.format(Decimal("Infinity")) == "Primefinity?"
    assert PRIME.format(float("inf")) == "Primefinity?"
    assert PRIME.format(float("-inf")) == "-Primefinity?"
    assert PRIME.format(Decimal("NaN")) == "Primefinity?"


def test_places_are_ignored():
    assert PRIME.format(1000000, places=5) == PRIME.format(1000000)
    assert PRIME.format_under_1000(12.0, 3) == "2²×3"


def test_format_is_repeatable():
    for v in (12, 123456789, Decimal("1e20000"), Decimal("1e500000000000000000")):
        assert PRIME.format(v) == PRIME.format(v)


def test_factor_bound_from_profile():
    APPLY({"PRIME": {"FACTOR_BOUND": 10}})
    assert PRIME.format(2431) == "2431"


# ---------- regimes & towers --------------------------------------------------


@pytest.mark.parametrize("value,regime", [
    (Decimal(0), "ZERO"),
    (Decimal("0.999"), "ZERO"),
    (Decimal(1), "ONE"),
    (Decimal("1.5"), "ONE"),
    (Decimal(2), "DIRECT"),
    (Decimal(MAX_INT), "DIRECT"),
    (Decimal(MAX_INT + 1), "TOWER2"),
    (Decimal("1e20000"), "TOWER2"),
    (Decimal("1e100000000000000000"), "TOWER2"),
    (Decimal("1e500000000000000000"), "TOWER3"),
])
def test_classify(value, regime):
    assert classify(value) == regime


def test_tower_height_two_for_1e20000():
    levels = build_tower(Decimal("1e20000"))
    assert len(levels) == 2
    base, exp = levels
    assert exp == 1254
    assert 1 < base <= MAX_INT
    assert exp * math.log10(base) == pytest.approx(20000, rel=1e-9)


def test_tower_just_above_max_int():
    levels = build_tower(Decimal(MAX_INT + 1))
    assert len(levels) == 2
    base, exp = levels
    assert exp >= 2
    assert exp * math.log10(base) == pytest.approx(math.log10(MAX_INT + 1), rel=1e-9)


def test_tower_height_three():
    value = Decimal("1e500000000000000000")
    levels = build_tower(value)
    assert len(levels) == 3
    base, exp, exp2 = levels
    assert exp2 == 2
    # value = base ** (exp ** exp2)  <=>  log10(value) = exp**exp2 * log10(base)
    assert exp**exp2 * math.log10(base) == pytest.approx(5e17, rel=1e-6)


def test_format_1e20000():
    out = PRIME.format(Decimal("1e20000"))
    assert out.count("^") == 1
    bottom, top = out.split("^")
    assert top == "(2×3×11×19)"
    base = _product_of(bottom)
    assert 1254 * math.log10(base) == pytest.approx(20000, rel=1e-9)
    assert out == PRIME.format("1e20000")


def test_format_height_three_uses_superscript():
    out = PRIME.format(Decimal("1e500000000000000000"))
    assert out.count("^") == 1
    assert out.endswith("²")
    base, exp, _ = build_tower(Decimal("1e500000000000000000"))
    bottom, top = out.split("^")
    assert _product_of(bottom) == base
    assert _product_of(top[:-1]) == exp


def test_beyond_range_is_infinite():
    assert PRIME.format(Decimal("1e999999999999999999")) == "Primefinity?"


# ---------- parenthesization rules -------------------------------------------

TOWER_CASES = [
    ((7, 3), "7³"),                       # prime base, prime top → plain superscript
    ((6, 5), "(2×3)⁵"),                  # product under a superscript
    ((4, 3), "(2²)³"),                    # 2²³ would read as a single exponent
    ((8, 6), "2³^(2×3)"),                 # prime power needs no parentheses
    ((12, 4), "(2²×3)^2²"),
    ((10, 9, 3), "(2×5)^(3²)³"),
    ((10, 6, 4), "(2×5)^(2×3)^2²"),
    ((9, 11, 13), "3²^11¹³"),
]


@pytest.mark.parametrize("levels,expected", TOWER_CASES, ids=[str(lv) for lv, _ in TOWER_CASES])
def test_format_power_tower(levels, expected):
    assert PRIME.format_power_tower(levels) == expected


def test_tower_styles_table():
    styles = tower_styles([[2, 3], [3, 3], [3]])
    assert [(s.parenthesize, s.as_superscript) for s in styles] == [
        (True, False),
        (True, False),
        (False, True),
    ]
    styles = tower_styles([[2, 2], [2, 3]])
    assert [(s.parenthesize, s.as_superscript) for s in styles] == [
        (False, False),
        (True, False),
    ]
