"""
EIA standard component values (IEC 60063 E-series).

Tables hold the three-digit significands of one decade (100..999). Lookups
normalize any positive value onto that decade, so the same tables serve
resistors, capacitors and inductors.

Reference: IEC 60063:2015, "Preferred number series for resistors and
capacitors".
"""

import bisect
import enum
import math
from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

from ececalc.calc import ordinal_resistor
from ececalc.errors import InvalidArgumentError
from ececalc.units import RESISTANCE, TOL_10P, TOL_1P, TOL_20P, TOL_2P, TOL_5P
from ececalc.values import DEFAULT_SIGFIGS, EngineeringValue, tolerance_to_string


class ESeries(enum.Enum):
    """Standard value series; the number is the count of values per decade."""
    E6 = 'E6'
    E12 = 'E12'
    E24 = 'E24'
    E48 = 'E48'
    E96 = 'E96'


E6_VALUES = [100, 150, 220, 330, 470, 680]

E12_VALUES = [100, 120, 150, 180, 220, 270, 330, 390, 470, 560, 680, 820]

E24_VALUES = [
    100, 110, 120, 130, 150, 160, 180, 200, 220, 240, 270, 300,
    330, 360, 390, 430, 470, 510, 560, 620, 680, 750, 820, 910,
]

E48_VALUES = [
    100, 105, 110, 115, 121, 127, 133, 140, 147, 154, 162, 169,
    178, 187, 196, 205, 215, 226, 237, 249, 261, 274, 287, 301,
    316, 332, 348, 365, 383, 402, 422, 442, 464, 487, 511, 536,
    562, 590, 619, 649, 681, 715, 750, 787, 825, 866, 909, 953,
]

E96_VALUES = [
    100, 102, 105, 107, 110, 113, 115, 118, 121, 124, 127, 130,
    133, 137, 140, 143, 147, 150, 154, 158, 162, 165, 169, 174,
    178, 182, 187, 191, 196, 200, 205, 210, 215, 221, 226, 232,
    237, 243, 249, 255, 261, 267, 274, 280, 287, 294, 301, 309,
    316, 324, 332, 340, 348, 357, 365, 374, 383, 392, 402, 412,
    422, 432, 442, 453, 464, 475, 487, 499, 511, 523, 536, 549,
    562, 576, 590, 604, 619, 634, 649, 665, 681, 698, 715, 732,
    750, 768, 787, 806, 825, 845, 866, 887, 909, 931, 953, 976,
]

_TABLES = {
    ESeries.E6: E6_VALUES,
    ESeries.E12: E12_VALUES,
    ESeries.E24: E24_VALUES,
    ESeries.E48: E48_VALUES,
    ESeries.E96: E96_VALUES,
}

_TOLERANCES = {
    ESeries.E6: TOL_20P,
    ESeries.E12: TOL_10P,
    ESeries.E24: TOL_5P,
    ESeries.E48: TOL_2P,
    ESeries.E96: TOL_1P,
}

# Decades spanned by the ordinal index (0.1 Ω up to the top of the 1 MΩ decade)
ORDINAL_DECADES = 8

# Relative distance under which a value counts as standard
STANDARD_MATCH = 1e-5

# EIA-96 SMD multiplier letters
_SMD_MULTIPLIERS = {
    'Z': 0.001,
    'Y': 0.01, 'R': 0.01,
    'X': 0.1, 'S': 0.1,
    'A': 1.0,
    'B': 10.0, 'H': 10.0,
    'C': 100.0,
    'D': 1000.0,
    'E': 1e4,
    'F': 1e5,
}

SeriesLike = Union[ESeries, str]


def resolve_series(series: SeriesLike) -> ESeries:
    """Accept an ESeries or its name ('E24')."""
    if isinstance(series, ESeries):
        return series
    try:
        return ESeries(str(series).upper())
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown series '{series}'. Must be one of: {[s.value for s in ESeries]}")


def _scale(significand: float, exponent: int) -> float:
    # Dividing by an exact power of ten keeps 4.7 instead of 4.7000000000000002
    if exponent >= 0:
        return significand * 10.0 ** exponent
    return significand / 10.0 ** -exponent


def series_values(series: SeriesLike) -> List[int]:
    """Copy of the three-digit significand table for ``series``."""
    return list(_TABLES[resolve_series(series)])


def series_tolerance(series: SeriesLike) -> float:
    return _TOLERANCES[resolve_series(series)]


def series_for_tolerance(tolerance: float) -> ESeries:
    """Tightest series whose nominal tolerance is at least ``tolerance``."""
    for series in (ESeries.E96, ESeries.E48, ESeries.E24, ESeries.E12):
        if tolerance <= _TOLERANCES[series]:
            return series
    return ESeries.E6


def nearest_value(value: float, series: SeriesLike = ESeries.E24) -> float:
    """
    Closest standard value to ``value``.

    The value is rounded (half up) to a three-digit significand first, then
    the table is searched. Between two neighbours the lower one is picked only
    when it is strictly closer. Zero, negative and non-finite inputs are
    returned unchanged.
    """
    table = _TABLES[resolve_series(series)]
    if not math.isfinite(value) or value <= 0.0:
        return value
    exponent = math.floor(math.log10(value)) - 2
    significand = math.floor(value / _scale(1.0, exponent) + 0.5)
    index = bisect.bisect_left(table, significand)
    if index < len(table) and table[index] == significand:
        return _scale(table[index], exponent)
    below = table[index - 1] if index > 0 else table[-1] / 10.0
    above = table[index] if index < len(table) else 1000
    if above - significand > significand - below:
        return _scale(below, exponent)
    return _scale(above, exponent)


def is_standard_value(value: float, series: SeriesLike = ESeries.E24) -> bool:
    """True if ``value`` is (within 10 ppm) a member of ``series``."""
    return value >= 0.0 and abs(nearest_value(value, series) - value) <= value * STANDARD_MATCH


def ordinal_count(series: SeriesLike) -> int:
    """Number of ordinal indices, including the zero at index 0."""
    return ORDINAL_DECADES * len(_TABLES[resolve_series(series)]) + 1


def ordinal_value(index: int, series: SeriesLike = ESeries.E24) -> float:
    """Standard value at ``index`` in ascending order; 0 is 0 Ω, 1 is 0.1 Ω."""
    return ordinal_resistor(index, _TABLES[resolve_series(series)])


def ordinal_values(series: SeriesLike = ESeries.E24) -> np.ndarray:
    """
    All ordinal values of ``series`` in ascending order.

    Returns:
        float array of length 8n + 1 starting with 0.0
    """
    table = np.asarray(_TABLES[resolve_series(series)], dtype=float)
    count = len(table)
    index = np.arange(ORDINAL_DECADES * count)
    exponent = index // count - 3
    decade = np.power(10.0, np.abs(exponent))
    base = table[index % count]
    values = np.where(exponent >= 0, base * decade, base / decade)
    return np.concatenate(([0.0], values))


def e96_smd_code(code: int) -> int:
    """Significand for an EIA-96 SMD code (01 → 100 ... 96 → 976), or 0 if out of range."""
    if 1 <= code <= len(E96_VALUES):
        return E96_VALUES[code - 1]
    return 0


def letter_to_multiplier(letter: str) -> float:
    """EIA-96 SMD multiplier letter, or 0 if unknown."""
    return _SMD_MULTIPLIERS.get(letter.upper(), 0.0)


def snap_to_e_series(value: float, series: SeriesLike = ESeries.E24) -> Tuple[float, float]:
    """
    Snap a value to the nearest standard E-series value.

    Args:
        value: The target value (any unit: resistors in Ohms, capacitors in F, etc.)
        series: Which E-series to use

    Returns:
        Tuple of (snapped_value, error_percentage)
        error_percentage is signed: positive means snapped value is higher.
    """
    if not value > 0:
        raise InvalidArgumentError(f"Value must be positive, got {value}")
    snapped = nearest_value(value, series)
    error_pct = (snapped - value) / value * 100.0
    return snapped, round(error_pct, 4)


class EIAValue(EngineeringValue):
    """
    A component value tagged with the E-series it was chosen from.

    The tolerance defaults to the series tolerance and units to ohms.
    """

    __slots__ = ('_series',)

    def __init__(self, value: float, series: SeriesLike = ESeries.E24, tolerance: float = None,
                 sigfigs: int = DEFAULT_SIGFIGS, units: str = RESISTANCE):
        series = resolve_series(series)
        if tolerance is None:
            tolerance = _TOLERANCES[series]
        super().__init__(value, tolerance, sigfigs, units)
        self._series = series

    @property
    def series(self) -> ESeries:
        return self._series

    def new_value(self, value: float) -> 'EIAValue':
        return EIAValue(value, self._series, self._tolerance, self._sigfigs, self._units)

    def nearest(self) -> 'EIAValue':
        """This value moved to the closest member of its series."""
        return self.new_value(nearest_value(self._raw, self._series))

    def is_standard(self) -> bool:
        return is_standard_value(self._raw, self._series)

    def __repr__(self):
        return (f'EIAValue({self._raw!r}, {self._series.value}, tolerance={self._tolerance!r}, '
                f'sigfigs={self._sigfigs!r}, units={self._units!r})')


@dataclass
class StandardValueCheck:
    """Result of checking a value against its series."""
    is_standard: bool
    nearest: float
    error_pct: float
    message: str


def check_standard_value(value: EIAValue) -> StandardValueCheck:
    """
    Compare a value against its own series.

    Examples:
        EIAValue(470, 'E24')  → 'Standard 5% value'
        EIAValue(473, 'E24')  → 'Nearest 5% value is 470 Ω [-0.6%]'
    """
    raw = value.value
    nearest = nearest_value(raw, value.series)
    tolerance = tolerance_to_string(series_tolerance(value.series))
    error_pct = (nearest - raw) / raw * 100.0 if raw != 0.0 else 0.0
    if is_standard_value(raw, value.series):
        return StandardValueCheck(True, nearest, error_pct, f'Standard {tolerance}% value')
    nearest_text = str(EngineeringValue(nearest, 0.0, value.sigfigs, value.units))
    return StandardValueCheck(
        False, nearest, error_pct,
        f'Nearest {tolerance}% value is {nearest_text} [{error_pct:+.1f}%]',
    )
