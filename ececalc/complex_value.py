"""
Phasor values: an EngineeringValue with a phase angle.

The raw value is the (non-negative) magnitude. Angles are in degrees,
normalized to [0, 360). Rectangular projections are rounded to 40 fractional
bits so that, for example, 1∠90° has a real part of exactly 0.
"""

import math
import numbers

from ececalc.calc import ieee_round
from ececalc.errors import DivisionByZeroError, InvalidArgumentError
from ececalc.values import DEFAULT_SIGFIGS, EngineeringValue


def _project(magnitude: float, trig: float) -> float:
    if trig == 0.0:
        return 0.0
    return ieee_round(magnitude * trig)


class ComplexValue(EngineeringValue):
    """
    Immutable complex value in polar form.

    Args:
        magnitude: phasor magnitude; a negative magnitude adds 180° of phase
        angle: phase in degrees
        tolerance, sigfigs, units: as for EngineeringValue
    """

    __slots__ = ('_angle', '_real', '_imaginary')

    is_complex = True

    def __init__(self, magnitude: float, angle: float = 0.0, tolerance: float = 0.0,
                 sigfigs: int = DEFAULT_SIGFIGS, units: str = ''):
        magnitude = float(magnitude)
        angle = float(angle)
        if not math.isfinite(angle):
            raise InvalidArgumentError(f'angle: {angle}')
        super().__init__(abs(magnitude), tolerance, sigfigs, units)
        if magnitude < 0.0:
            angle += 180.0
        angle %= 360.0
        if angle >= 360.0:
            # Tiny negative angles wrap to exactly 360
            angle = 0.0
        self._angle = angle
        radians = math.radians(angle)
        self._real = _project(self._raw, math.cos(radians))
        self._imaginary = _project(self._raw, math.sin(radians))

    @classmethod
    def from_value(cls, value: EngineeringValue) -> 'ComplexValue':
        """Promote any EngineeringValue, keeping its metadata."""
        return cls(value.magnitude, value.angle, value.tolerance, value.sigfigs, value.units)

    @classmethod
    def from_rectangular(cls, real: float, imaginary: float, tolerance: float = 0.0,
                         sigfigs: int = DEFAULT_SIGFIGS, units: str = '') -> 'ComplexValue':
        return cls(math.hypot(real, imaginary), _phase(real, imaginary), tolerance, sigfigs, units)

    @property
    def magnitude(self) -> float:
        return self._raw

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def real(self) -> float:
        return self._real

    @property
    def imaginary(self) -> float:
        return self._imaginary

    def new_value(self, magnitude: float, angle: float = 0.0) -> 'ComplexValue':
        return ComplexValue(magnitude, angle, self._tolerance, self._sigfigs, self._units)

    def new_rectangular_value(self, real: float, imaginary: float) -> 'ComplexValue':
        return self.new_value(math.hypot(real, imaginary), _phase(real, imaginary))

    def to_complex(self) -> complex:
        return complex(self._real, self._imaginary)

    def _coerce(self, other) -> EngineeringValue:
        if isinstance(other, numbers.Complex) and not isinstance(other, numbers.Real):
            return ComplexValue.from_rectangular(other.real, other.imag)
        return super()._coerce(other)

    # --- Arithmetic ---

    def add(self, other) -> 'ComplexValue':
        other = self._coerce(other)
        return self.new_rectangular_value(self._real + other.real, self._imaginary + other.imaginary)

    def subtract(self, other) -> 'ComplexValue':
        other = self._coerce(other)
        return self.new_rectangular_value(self._real - other.real, self._imaginary - other.imaginary)

    def multiply(self, other) -> 'ComplexValue':
        other = self._coerce(other)
        return self.new_value(self._raw * other.magnitude, self._angle + other.angle)

    def divide(self, other) -> 'ComplexValue':
        other = self._coerce(other)
        if other.magnitude == 0.0:
            raise DivisionByZeroError('division by a zero-magnitude value')
        return self.new_value(self._raw / other.magnitude, self._angle - other.angle)

    def pow(self, exponent: float) -> 'ComplexValue':
        """
        Raise to a real power: magnitude ** |e| at angle × |e|, inverted for e < 0.
        """
        exponent = float(exponent)
        if exponent == 0.0:
            return self.new_value(1.0, 0.0)
        abs_exponent = abs(exponent)
        try:
            magnitude = math.pow(self._raw, abs_exponent)
        except OverflowError:
            magnitude = math.inf
        result = self.new_value(magnitude, self._angle * abs_exponent)
        if exponent < 0.0:
            result = self.new_value(1.0, 0.0).divide(result)
        return result

    def negate(self) -> 'ComplexValue':
        return self.new_value(self._raw, self._angle + 180.0)

    def __complex__(self):
        return self.to_complex()

    # --- Identity ---

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ComplexValue):
            return NotImplemented
        return (self._raw == other._raw and self._units == other._units
                and self._angle == other._angle)

    def __hash__(self):
        return hash((self._raw, self._units, self._angle))

    def to_string(self) -> str:
        return f'{super().to_string()} @ {self._angle:.1f}°'

    def __repr__(self):
        return (f'ComplexValue({self._raw!r}, {self._angle!r}, tolerance={self._tolerance!r}, '
                f'sigfigs={self._sigfigs!r}, units={self._units!r})')


def _phase(real: float, imaginary: float) -> float:
    angle = math.degrees(math.atan2(imaginary, real))
    if angle < 0.0:
        angle += 360.0
    return angle
