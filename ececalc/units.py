"""
Unit symbols, standard tolerances, physical constants and custom units.
"""

import math

from ececalc.errors import InvalidArgumentError
from ececalc.values import EngineeringValue

# Unit suffixes
CAPACITANCE = 'F'
CURRENT = 'A'
INDUCTANCE = 'H'
POWER = 'W'
RESISTANCE = 'Ω'
VOLTAGE = 'V'
FREQUENCY = 'Hz'
TIME = 's'
TRANSCONDUCTANCE = CURRENT + '/' + VOLTAGE

# Standard tolerances
TOL_20P = 0.2
TOL_10P = 0.1
TOL_5P = 0.05
TOL_2P = 0.02
TOL_1P = 0.01
TOL_P1 = 0.001

PI_INV = 1.0 / math.pi
# Impedance of free space divided by pi
Z_0 = 119.9169832


class CustomUnit:
    """
    A named unit with a multiplicative conversion factor to a base unit.

    A value in this unit is *multiplied* by ``factor`` to get the base unit,
    e.g. ``CustomUnit('mil', 0.0254, 'mm')``.
    """

    __slots__ = ('_unit', '_factor', '_base_unit')

    def __init__(self, unit: str, factor: float, base_unit: str = ''):
        if unit is None or base_unit is None:
            raise InvalidArgumentError('unit must not be None')
        if not (factor > 0.0) or math.isinf(factor):
            raise InvalidArgumentError(f'conversion factor must be positive and finite, got {factor}')
        self._unit = unit
        self._factor = float(factor)
        self._base_unit = base_unit

    @property
    def unit(self) -> str:
        return self._unit

    @property
    def factor(self) -> float:
        return self._factor

    @property
    def base_unit(self) -> str:
        return self._base_unit

    def to_base(self, value):
        """Convert from this unit to the base unit (float or EngineeringValue)."""
        if isinstance(value, EngineeringValue):
            # Tolerance is relative, so it is carried over unscaled
            return EngineeringValue(value.value * self._factor, value.tolerance, value.sigfigs,
                                    self._base_unit)
        return value * self._factor

    def from_base(self, value):
        """Convert from the base unit to this unit (float or EngineeringValue)."""
        if isinstance(value, EngineeringValue):
            return EngineeringValue(value.value / self._factor, value.tolerance, value.sigfigs,
                                    self._unit)
        return value / self._factor

    def __eq__(self, other):
        return isinstance(other, CustomUnit) and other._unit == self._unit

    def __hash__(self):
        return hash(self._unit)

    def __repr__(self):
        return f'CustomUnit({self._unit!r}, {self._factor!r}, {self._base_unit!r})'

    def __str__(self):
        return self._unit
