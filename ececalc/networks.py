"""
Basic network relations: delta-wye transforms, Ohm's law and reactance.

Delta-wye transforms work on complex impedances so that mixed R/L/C
networks transform correctly:

    wye → delta:  Ra = (R1·R2 + R2·R3 + R3·R1) / R1  (and cyclic)
    delta → wye:  R1 = Rb·Rc / (Ra + Rb + Rc)         (and cyclic)

Reactance uses the angular frequency ω = 2πf; capacitive reactance is
negative so that Z = R + jX holds for both element types.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ececalc.complex_value import ComplexValue
from ececalc.errors import InvalidArgumentError
from ececalc.units import RESISTANCE
from ececalc.values import EngineeringValue

ImpedanceLike = Union[EngineeringValue, complex, float]

TWO_PI = 2.0 * math.pi


def _as_impedance(value: ImpedanceLike) -> ComplexValue:
    if isinstance(value, ComplexValue):
        return value
    if isinstance(value, EngineeringValue):
        return ComplexValue.from_value(value)
    if isinstance(value, numbers.Complex):
        return ComplexValue.from_rectangular(value.real, value.imag, units=RESISTANCE)
    raise InvalidArgumentError(f'not an impedance: {value!r}')


def wye_to_delta(r1: ImpedanceLike, r2: ImpedanceLike,
                 r3: ImpedanceLike) -> Tuple[ComplexValue, ComplexValue, ComplexValue]:
    """
    Delta equivalent of a wye network.

    Ra is opposite the node of R1 (and so on).

    Raises:
        DivisionByZeroError: if any wye branch is zero
    """
    r1, r2, r3 = _as_impedance(r1), _as_impedance(r2), _as_impedance(r3)
    rp = r1.multiply(r2).add(r2.multiply(r3)).add(r3.multiply(r1))
    return rp.divide(r1), rp.divide(r2), rp.divide(r3)


def delta_to_wye(ra: ImpedanceLike, rb: ImpedanceLike,
                 rc: ImpedanceLike) -> Tuple[ComplexValue, ComplexValue, ComplexValue]:
    """
    Wye equivalent of a delta network.

    Raises:
        DivisionByZeroError: if the delta branches sum to zero
    """
    ra, rb, rc = _as_impedance(ra), _as_impedance(rb), _as_impedance(rc)
    rd = ra.add(rb).add(rc)
    return rb.multiply(rc).divide(rd), ra.multiply(rc).divide(rd), ra.multiply(rb).divide(rd)


def _ratio(numerator: float, denominator: float) -> float:
    # IEEE semantics: x/0 is ±inf, 0/0 is NaN
    if denominator == 0.0:
        return math.nan if numerator == 0.0 else math.copysign(math.inf, numerator)
    return numerator / denominator


@dataclass
class OhmsLawResult:
    voltage: float
    current: float
    resistance: float
    power: float

    @property
    def power_is_defined(self) -> bool:
        """False when the power is infinite or undefined (e.g. a short across a source)."""
        return math.isfinite(self.power)


def ohms_law(voltage: Optional[float] = None, current: Optional[float] = None,
             resistance: Optional[float] = None) -> OhmsLawResult:
    """
    Solve V = I·R for the one quantity left as None, plus the power.

    Raises:
        InvalidArgumentError: unless exactly two quantities are given
    """
    given = [x is not None for x in (voltage, current, resistance)]
    if sum(given) != 2:
        raise InvalidArgumentError('exactly two of voltage, current and resistance are required')
    if voltage is None:
        voltage = current * resistance
        power = current * current * resistance
    elif current is None:
        current = _ratio(voltage, resistance)
        power = _ratio(voltage * voltage, resistance)
    else:
        resistance = _ratio(voltage, current)
        power = math.nan if current == 0.0 else voltage * current
    return OhmsLawResult(voltage, current, resistance, power)


def _check_frequency(frequency: float):
    if not frequency > 0.0 or math.isinf(frequency):
        raise InvalidArgumentError(f'frequency must be positive and finite, got {frequency}')


def capacitive_reactance(capacitance: float, frequency: float) -> float:
    """X_C = -1 / (2πfC) (Ω); -∞ for zero capacitance."""
    _check_frequency(frequency)
    return -_ratio(1.0, TWO_PI * frequency * capacitance)


def inductive_reactance(inductance: float, frequency: float) -> float:
    """X_L = 2πfL (Ω)."""
    _check_frequency(frequency)
    return TWO_PI * frequency * inductance


def capacitance_for_reactance(reactance: float, frequency: float) -> float:
    """Capacitance (F) with reactance ``reactance`` (negative Ω) at ``frequency``."""
    _check_frequency(frequency)
    return _ratio(-1.0, TWO_PI * frequency * reactance)


def inductance_for_reactance(reactance: float, frequency: float) -> float:
    _check_frequency(frequency)
    return reactance / (TWO_PI * frequency)


def capacitor_frequency(reactance: float, capacitance: float) -> float:
    """Frequency (Hz) at which ``capacitance`` has reactance ``reactance``."""
    return _ratio(-1.0, TWO_PI * capacitance * reactance)


def inductor_frequency(reactance: float, inductance: float) -> float:
    return _ratio(reactance, TWO_PI * inductance)


def series_impedance(resistance: float, reactance: float) -> ComplexValue:
    """Z = R + jX as a phasor in ohms."""
    return ComplexValue.from_rectangular(resistance, reactance, units=RESISTANCE)


def rc_impedance(resistance: float, capacitance: float, frequency: float) -> ComplexValue:
    """Impedance of a resistor in series with a capacitor."""
    return series_impedance(resistance, capacitive_reactance(capacitance, frequency))


def rl_impedance(resistance: float, inductance: float, frequency: float) -> ComplexValue:
    """Impedance of a resistor in series with an inductor."""
    return series_impedance(resistance, inductive_reactance(inductance, frequency))
