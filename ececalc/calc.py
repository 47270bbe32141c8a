"""
Shared closed-form formulas.

Small numeric helpers used across the calculators: resistor combination,
voltage division, the ordinal index over a standard-value table and the
complete elliptic integral of the first kind used by the stripline models.
"""

import math
from typing import Sequence

# Beyond this magnitude x * 2**40 is already an integer in double precision
_ROUND_LIMIT = 2.0 ** 13


def elliptic(k: float, terms: int = 24) -> float:
    """
    Complete elliptic integral of the first kind K(k) by power series.

    K(k) = π/2 · Σ ((2i-1)!! / (2i)!!)² · k^(2i)

    The series converges slowly as k approaches 1; 24 terms is enough for
    the modulus range produced by practical stripline geometries.

    Args:
        k: elliptic modulus, |k| < 1
        terms: number of series terms including the leading 1

    Returns:
        K(k)
    """
    total = 1.0
    k_pow = 1.0
    numerator = 1.0
    denominator = 1.0
    for i in range(1, terms):
        idx = 2 * i
        k_pow *= k * k
        numerator *= idx - 1
        denominator *= idx
        ratio = numerator / denominator
        total += k_pow * ratio * ratio
    return total * math.pi * 0.5


def ieee_round(value: float) -> float:
    """
    Round to 40 fractional bits, removing trigonometric noise.

    ieee_round(1e-17) → 0.0, ieee_round(0.5000000000000001) → 0.5
    """
    if not math.isfinite(value) or abs(value) >= _ROUND_LIMIT:
        return value
    return math.ldexp(round(math.ldexp(value, 40)), -40)


def ordinal_resistor(index: int, table: Sequence[float]) -> float:
    """
    Value at ``index`` in the ordered list of all standard values.

    Index 0 is 0 Ω; index 1 is the first table entry scaled to 0.1 (the
    tables hold three-digit significands), and each run of ``len(table)``
    indices covers one decade.
    """
    if index == 0:
        return 0.0
    count = len(table)
    base = table[(index - 1) % count]
    exponent = (index - 1) // count - 3
    if exponent >= 0:
        return base * 10.0 ** exponent
    return base / 10.0 ** -exponent


def parallel_resistance(r1: float, r2: float) -> float:
    """
    Two resistances in parallel.

    An infinite resistance is an open circuit and leaves the other one;
    two zeros give zero.
    """
    if r1 + r2 == 0.0:
        return 0.0
    if math.isinf(r1):
        return r2
    if math.isinf(r2):
        return r1
    return r1 * r2 / (r1 + r2)


def voltage_divide(r1: float, r2: float) -> float:
    """
    Output ratio Vout/Vin of a divider with ``r1`` on top and ``r2`` to ground.
    """
    if r2 == 0.0 or math.isinf(r1):
        return 0.0
    if math.isinf(r2) or r1 == 0.0:
        return 1.0
    return r2 / (r1 + r2)
