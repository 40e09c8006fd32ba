# -----------------------------------------------------------------------------
#  magnitude.py
#  Big-decimal helpers: magnitudes are decimal.Decimal values evaluated under
#  a context whose exponent range reaches 10^(10^18).
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import MAX_EMAX, MIN_EMIN, ROUND_FLOOR, Context, Decimal

MAGNITUDE_CONTEXT = Context(prec=34, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Finite values at or above 10^INFINITY_EXPONENT display as infinite.
INFINITY_EXPONENT = MAX_EMAX

MagnitudeLike = int | float | str | Decimal


def to_magnitude(value: MagnitudeLike) -> Decimal:
    """
    Convert value to a Decimal magnitude.

    Floats go through their shortest repr so 0.1 stays 0.1. Strings are parsed
    exactly (no rounding to the context precision).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    raise TypeError(f"cannot use {type(value).__name__} as a magnitude")


def is_infinite(value: Decimal) -> bool:
    if not value.is_finite():
        return True
    return not value.is_zero() and value.adjusted() >= INFINITY_EXPONENT


def log10(value: Decimal) -> float:
    """log10 of a positive magnitude as a native float."""
    return float(value.log10(context=MAGNITUDE_CONTEXT))


def exponent(value: Decimal) -> int:
    """floor(log10(|value|)) for a non-zero magnitude; 0 for zero."""
    if value.is_zero():
        return 0
    return value.adjusted()


def mantissa(value: Decimal) -> float:
    """|value| / 10^exponent(value), in [1, 10)."""
    if value.is_zero():
        return 0.0
    return float(value.copy_abs().scaleb(-value.adjusted(), context=MAGNITUDE_CONTEXT))


def floor_int(value: Decimal) -> int:
    """Exact floor of a finite magnitude."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))
