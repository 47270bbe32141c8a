"""
Engineering-notation values.

An EngineeringValue is an immutable number with units, an optional
tolerance and a display precision in significant figures. The SI prefix and
significand used for display are derived once at construction:

    4700 Ω, 5% , 3 sig figs  →  '4.70 kΩ ±5%'

Identity is the raw value and units only; tolerance, precision and prefix
are display metadata. Arithmetic never mutates: every operation returns a
new value carrying the left operand's metadata.
"""

import bisect
import math
import numbers
import re
from typing import Optional

from ececalc.errors import DivisionByZeroError, InvalidArgumentError

# SI prefix table (thresholds must stay sorted)
ENGR_NAMES = ['f', 'p', 'n', 'µ', 'm', '', 'k', 'M', 'G', 'T', 'P']
ENGR_THRESHOLD = [1e-15, 1e-12, 1e-9, 1e-6, 1e-3, 1.0, 1e3, 1e6, 1e9, 1e12, 1e15]
UNIT_PREFIX_INDEX = 5

# Largest value with a prefix is just under 1000 P
_MAX_PREFIXED = ENGR_THRESHOLD[-1] * 1000.0

PM_SYMBOL = '±'
INFINITY_SYMBOL = '∞'

DEFAULT_SIGFIGS = 3
MAX_SIGFIGS = 14

# Accepted spellings when parsing user entry
_PREFIX_ALIASES = {name: i for i, name in enumerate(ENGR_NAMES)}
_PREFIX_ALIASES.update({'μ': 3, 'u': 3, 'K': 6})

_PARSE_RE = re.compile(
    r'^\s*(?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'
    r'\s*(?P<rest>.*?)'
    r'\s*(?:' + PM_SYMBOL + r'\s*(?P<tol>\d+(?:\.\d*)?)\s*%)?\s*$'
)


def _split_engineering(value: float):
    """Return (prefix index, significand) for a raw value."""
    abs_value = abs(value)
    if abs_value == 0.0 or math.isinf(value):
        return UNIT_PREFIX_INDEX, value
    if abs_value >= _MAX_PREFIXED:
        # Infinite enough
        return UNIT_PREFIX_INDEX, math.copysign(math.inf, value)
    if abs_value < ENGR_THRESHOLD[0]:
        # Flush to zero
        return UNIT_PREFIX_INDEX, 0.0
    index = bisect.bisect_right(ENGR_THRESHOLD, abs_value) - 1
    return index, value / ENGR_THRESHOLD[index]


def _check_sigfigs(sigfigs) -> int:
    if not isinstance(sigfigs, numbers.Integral) or not 1 <= sigfigs <= MAX_SIGFIGS:
        raise InvalidArgumentError(f'significant figures must be 1..{MAX_SIGFIGS}, got {sigfigs}')
    return int(sigfigs)


def _real_pow(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0.0:
        return math.inf
    try:
        return math.pow(base, exponent)
    except OverflowError:
        # Odd integer powers keep the sign
        if base < 0.0 and float(exponent).is_integer() and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        raise InvalidArgumentError(f'{base} ** {exponent} has no real value')


def _significand_decimals(abs_sig: float, sf: int) -> int:
    # Digits after the point so a significand in [0, 1000) shows sf digits
    if abs_sig >= 100.0:
        decimals = sf - 3
    elif abs_sig >= 10.0:
        decimals = sf - 2
    elif abs_sig >= 1.0:
        decimals = sf - 1
    else:
        decimals = sf
    return max(decimals, 0)


def tolerance_to_string(tolerance: float) -> str:
    """
    Format a fractional tolerance as a percentage without spurious digits.

    Examples:
        tolerance_to_string(0.05)   → '5'
        tolerance_to_string(0.005)  → '0.5'
        tolerance_to_string(0.0025) → '0.25'
    """
    percent = tolerance * 100.0
    hundredths = int(math.floor(100.0 * percent + 0.5))
    if hundredths % 100 == 0:
        places = 0
    elif hundredths % 10 == 0:
        places = 1
    else:
        places = 2
    return f'{percent:.{places}f}'


def value_from_sig_exp(significand: float, prefix_index: int) -> float:
    """
    Build a raw value from a significand and an SI prefix index.

    The significand need not be in [1, 1000).
    """
    if not isinstance(prefix_index, numbers.Integral) or not 0 <= prefix_index < len(ENGR_THRESHOLD):
        raise InvalidArgumentError(f'prefix code out of range: {prefix_index}')
    return significand * ENGR_THRESHOLD[prefix_index]


class EngineeringValue:
    """
    Immutable value in engineering notation.

    Args:
        value: raw value in base units (NaN is rejected)
        tolerance: fractional tolerance (0.05 = 5%), 0 to suppress, must be in [0, 1)
        sigfigs: significant figures shown, 1..14
        units: unit suffix without prefix ('' if unitless)
    """

    __slots__ = ('_raw', '_tolerance', '_sigfigs', '_units', '_prefix', '_significand')

    is_complex = False

    def __init__(self, value: float, tolerance: float = 0.0, sigfigs: int = DEFAULT_SIGFIGS,
                 units: str = ''):
        value = float(value)
        if math.isnan(value):
            raise InvalidArgumentError(f'value: {value}')
        if units is None:
            raise InvalidArgumentError('units must not be None')
        tolerance = float(tolerance)
        if not 0.0 <= tolerance < 1.0:
            raise InvalidArgumentError(f'tolerance must be in [0, 1), got {tolerance}')
        self._raw = value
        self._tolerance = tolerance
        self._sigfigs = _check_sigfigs(sigfigs)
        self._units = units
        self._prefix, self._significand = _split_engineering(value)

    # --- Accessors ---

    @property
    def value(self) -> float:
        return self._raw

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @property
    def sigfigs(self) -> int:
        return self._sigfigs

    @property
    def units(self) -> str:
        return self._units

    @property
    def significand(self) -> float:
        return self._significand

    @property
    def prefix_index(self) -> int:
        return self._prefix

    @property
    def si_prefix(self) -> str:
        return ENGR_NAMES[self._prefix]

    @property
    def real(self) -> float:
        return self._raw

    @property
    def imaginary(self) -> float:
        return 0.0

    @property
    def magnitude(self) -> float:
        return abs(self._raw)

    @property
    def angle(self) -> float:
        return 180.0 if self._raw < 0.0 else 0.0

    def new_value(self, value: float) -> 'EngineeringValue':
        """Copy this value's units, tolerance and precision onto a new raw value."""
        return EngineeringValue(value, self._tolerance, self._sigfigs, self._units)

    # --- Arithmetic ---

    def _coerce(self, other) -> 'EngineeringValue':
        if isinstance(other, EngineeringValue):
            return other
        if isinstance(other, numbers.Real):
            return EngineeringValue(float(other))
        raise TypeError(f'cannot combine EngineeringValue with {type(other).__name__}')

    def _promote(self, other: 'EngineeringValue') -> 'EngineeringValue':
        # Mixed real/complex operations run in the complex domain
        return type(other).from_value(self)

    def add(self, other) -> 'EngineeringValue':
        other = self._coerce(other)
        if other.is_complex:
            return self._promote(other).add(other)
        return self.new_value(self._raw + other.value)

    def subtract(self, other) -> 'EngineeringValue':
        other = self._coerce(other)
        if other.is_complex:
            return self._promote(other).subtract(other)
        return self.new_value(self._raw - other.value)

    def multiply(self, other) -> 'EngineeringValue':
        other = self._coerce(other)
        if other.is_complex:
            return self._promote(other).multiply(other)
        return self.new_value(self._raw * other.value)

    def divide(self, other) -> 'EngineeringValue':
        other = self._coerce(other)
        if other.is_complex:
            return self._promote(other).divide(other)
        if other.real == 0.0:
            raise DivisionByZeroError('division by a value with zero real part')
        return self.new_value(self._raw / other.value)

    def pow(self, exponent: float) -> 'EngineeringValue':
        return self.new_value(_real_pow(self._raw, float(exponent)))

    def negate(self) -> 'EngineeringValue':
        return self.new_value(-self._raw)

    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    def __radd__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.new_value(float(other)).add(self)

    def __sub__(self, other):
        try:
            return self.subtract(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.new_value(float(other)).subtract(self)

    def __mul__(self, other):
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.new_value(float(other)).multiply(self)

    def __truediv__(self, other):
        try:
            return self.divide(other)
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other):
        if not isinstance(other, numbers.Real):
            return NotImplemented
        return self.new_value(float(other)).divide(self)

    def __pow__(self, exponent):
        if not isinstance(exponent, numbers.Real):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self):
        return self.negate()

    def __float__(self):
        return self._raw

    # --- Identity ---

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, EngineeringValue):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._raw == other._raw and self._units == other._units

    def __hash__(self):
        return hash((self._raw, self._units))

    # --- Formatting ---

    def significand_to_string(self, sigfigs: Optional[int] = None) -> str:
        """
        Render the significand (no exponent) rounded to ``sigfigs`` places.

        The decimal point moves so the digit count is kept across the
        1..1000 range: 3 sig figs gives '1.23', '12.3', '123'. A
        significand that rounds up to 1000 is shown as '1.00' of the next
        prefix, as in to_string().
        """
        sf = self._sigfigs if sigfigs is None else _check_sigfigs(sigfigs)
        return self._display_parts(sf)[0]

    def _display_parts(self, sf: int):
        """Return (significand text, prefix index) after rounding to ``sf`` places."""
        sig, prefix = self._significand, self._prefix
        if math.isinf(sig):
            return (INFINITY_SYMBOL if sig > 0 else '-' + INFINITY_SYMBOL), prefix
        rounded = round(sig, _significand_decimals(abs(sig), sf))
        if abs(rounded) >= 1000.0 and prefix < len(ENGR_NAMES) - 1:
            # 999.96 V at 3 sig figs carries into 1.00 kV
            sig, prefix = rounded / 1000.0, prefix + 1
            rounded = sig
        return f'{sig:.{_significand_decimals(abs(rounded), sf)}f}', prefix

    def value_to_string(self, sigfigs: Optional[int] = None) -> str:
        """Raw value rounded to ``sigfigs`` significant digits, no prefix or units."""
        sf = self._sigfigs if sigfigs is None else _check_sigfigs(sigfigs)
        raw = self._raw
        if math.isinf(raw):
            return INFINITY_SYMBOL if raw > 0 else '-' + INFINITY_SYMBOL
        if raw == 0.0:
            return f'{0.0:.{sf - 1}f}'
        decimals = sf - 1 - int(math.floor(math.log10(abs(raw))))
        return f'{round(raw, decimals):.{max(decimals, 0)}f}'

    def to_exponential_string(self, sigfigs: Optional[int] = None) -> str:
        """Raw value in scientific notation with ``sigfigs`` significant digits."""
        sf = self._sigfigs if sigfigs is None else _check_sigfigs(sigfigs)
        if math.isinf(self._raw):
            return INFINITY_SYMBOL if self._raw > 0 else '-' + INFINITY_SYMBOL
        return f'{self._raw:.{sf - 1}e}'

    def _tolerance_suffix(self) -> str:
        if self._tolerance > 0.0:
            return f' {PM_SYMBOL}{tolerance_to_string(self._tolerance)}%'
        return ''

    def to_string(self) -> str:
        significand, prefix = self._display_parts(self._sigfigs)
        text = f'{significand} {ENGR_NAMES[prefix]}{self._units}'.rstrip()
        return text + self._tolerance_suffix()

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return (f'{type(self).__name__}({self._raw!r}, tolerance={self._tolerance!r}, '
                f'sigfigs={self._sigfigs!r}, units={self._units!r})')


def engineering_notation(value: float, unit: str = '', sigfigs: int = DEFAULT_SIGFIGS) -> str:
    """
    Format a raw value with an SI prefix.

    Examples:
        engineering_notation(4700, 'Ω')  → '4.70 kΩ'
        engineering_notation(1e-4, 'F')  → '100 µF'
    """
    return str(EngineeringValue(value, 0.0, sigfigs, unit))


def parse_value(text: str, units: str = '', tolerance: float = 0.0,
                sigfigs: int = DEFAULT_SIGFIGS) -> EngineeringValue:
    """
    Parse user entry such as '4.7k', '4.70 kΩ' or '100 nF ±10%'.

    Args:
        text: the entry to parse
        units: expected unit suffix; when given, the entry may include or omit it
        tolerance: tolerance to use when the entry does not carry one
        sigfigs: display precision of the result

    Raises:
        InvalidArgumentError: if the entry is not a number with an optional
            known SI prefix and the expected units.
    """
    if text is None:
        raise InvalidArgumentError('nothing to parse')
    match = _PARSE_RE.match(text)
    if match is None:
        raise InvalidArgumentError(f'not a number: {text!r}')
    rest = match.group('rest')
    if units and rest.endswith(units):
        rest = rest[:-len(units)].rstrip()
    if rest not in _PREFIX_ALIASES:
        raise InvalidArgumentError(f'unknown prefix or units {rest!r} in {text!r}')
    if match.group('tol') is not None:
        tolerance = float(match.group('tol')) / 100.0
    raw = value_from_sig_exp(float(match.group('number')), _PREFIX_ALIASES[rest])
    return EngineeringValue(raw, tolerance, sigfigs, units)
