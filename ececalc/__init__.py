"""
ECECalc Compute Engine

Numeric core of an electronics calculator toolbox: engineering-notation
values with tolerance and phase, standard component series, closed-form
circuit formulas, a Brent root finder for transcendental models (PCB trace
impedance), best-fit standard resistor pair searches and byte-level
conversions.

Everything here is pure and synchronous; values are immutable.
"""

import logging

from ececalc.values import EngineeringValue, engineering_notation, parse_value
from ececalc.complex_value import ComplexValue
from ececalc.eia import (
    ESeries, EIAValue, nearest_value, is_standard_value, snap_to_e_series, check_standard_value,
)
from ececalc.calc import elliptic, ieee_round, parallel_resistance, voltage_divide
from ececalc.solver import EquationSolver, FunctionEquation, solve
from ececalc.pcb_trace import (
    TraceScenario, single_ended_impedance, trace_width_for_impedance,
    differential_impedance, trace_spacing_for_impedance,
)
from ececalc.candidates import CombineRule, find_best_pair, find_best_divider
from ececalc.digital import ByteWord, reverse_bytes, sign_extend
from ececalc.settings import EngineSettings, DEFAULT_SETTINGS, load_settings
from ececalc.errors import (
    ECECalcError, InvalidArgumentError, InvalidGeometryError, InvalidIntervalError,
    DivisionByZeroError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
