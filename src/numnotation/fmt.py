# src/numnotation/fmt.py
from __future__ import annotations

import re
from collections.abc import Sequence

# Unicode superscript digits 0-9
SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
_SUPERSCRIPT_TABLE = str.maketrans("0123456789", SUPERSCRIPT_DIGITS)

TIMES = "×"
TOWER_SEP = "^"

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def superscript(count: int) -> str:
    """
    Render a non-negative integer with superscript digits, most significant first.

    >>> superscript(0), superscript(213)
    ('⁰', '²¹³')
    """
    return str(int(count)).translate(_SUPERSCRIPT_TABLE)


def _group(value: int, count: int) -> str:
    return f"{value}{superscript(count)}" if count > 1 else str(value)


def format_factors(factors: Sequence[int]) -> str:
    """
    Turn an ascending factor list into a compact product: [2, 2, 3] -> '2²×3'.

    Runs of equal values collapse into one term with a superscript count; a
    run is flushed when the value changes and once more after the scan.
    """
    parts: list[str] = []
    last = None
    count = 0
    for p in factors:
        if p == last:
            count += 1
            continue
        if last is not None:
            parts.append(_group(last, count))
        last, count = p, 1
    if last is not None:
        parts.append(_group(last, count))
    return TIMES.join(parts)


def maybe_parenthesize(s: str, flag: bool) -> str:
    return f"({s})" if flag else s


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"
