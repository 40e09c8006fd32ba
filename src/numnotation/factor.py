# -----------------------------------------------------------------------------
#  factor.py
#  Bounded trial-division factorization
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import isqrt

# Largest trial divisor. Anything left after dividing out every candidate up
# to min(FACTOR_BOUND, isqrt(n)) is kept as one final factor.
FACTOR_BOUND = 10000


def factorize(n: int, bound: int = FACTOR_BOUND) -> list[int]:
    """
    Return the prime factors of n (n >= 2) in ascending order, with multiplicity.

    2 and 3 are divided out first, then candidates 6k±1 (5, 7, 11, 13, ...) up to
    min(bound, isqrt(n)), where n is taken after removing the 2s and 3s. The
    search also stops once a candidate reaches the shrinking cofactor.

    The residual cofactor, if > 1, is appended as-is. It is prime whenever the
    true largest prime factor is <= bound or the cofactor is below bound²; beyond
    that it may be composite. The product of the result always equals n.

    >>> factorize(360)
    [2, 2, 2, 3, 3, 5]
    >>> factorize(10007 * 10009)     # both primes above the bound
    [100160063]
    """
    if n < 2:
        raise ValueError(f"factorize() needs n >= 2, got {n}")
    out: list[int] = []
    for k in (2, 3):
        while n % k == 0:
            out.append(k)
            n //= k

    lim = min(bound, isqrt(n))

    # All primes > 3 are of the form 6k±1: steps alternate +2, +4
    a, step = 5, 2
    while a <= lim and a < n:
        while n % a == 0:
            out.append(a)
            n //= a
        a += step
        step = 6 - step

    if n > 1:
        out.append(n)
    return out


def residual_is_prime(factors: list[int], bound: int = FACTOR_BOUND) -> bool:
    """
    True when the factor list is a true prime factorization.

    Only the last element can be a composite residual, and only when it
    exceeds bound², so that is the only one checked.
    """
    if not factors:
        return True
    last = factors[-1]
    if last <= bound * bound:
        return True
    # lazy; the CLI reports a missing gmpy2 via ensure_runtime_deps()
    import gmpy2

    return bool(gmpy2.is_prime(last))
