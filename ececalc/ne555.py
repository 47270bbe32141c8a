"""
NE555 timer design equations.

Monostable: t = ln(3) · R · C.

Astable, standard circuit (duty > 50%):
    f = 1 / (ln 2 · C · (R1 + 2·R2)),  duty = (R1 + R2) / (R1 + 2·R2)

Astable with a diode across R2 (duty <= 50%), R1 charging and R2
discharging:
    f = 1 / (ln 2 · C · (R1 + R2)),    duty = R1 / (R1 + R2)
"""

import enum
import logging
import math
from dataclasses import dataclass

from ececalc.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

CHARGE_FACTOR = 0.693147180559945
MONO_FACTOR = 1.09861228866811
DUTY_THRESHOLD = 0.5

# Usable timing resistor ranges (Ω)
MIN_TIMING_R = 1.0e3
MAX_TIMING_R_MONO = 1.0e6
MAX_TIMING_R_ASTABLE = 10.0e6


class AstableTopology(enum.Enum):
    STANDARD = 'standard'
    DIODE = 'diode'


def astable_topology(duty: float) -> AstableTopology:
    """Circuit needed for a duty cycle (fraction in (0, 1))."""
    _check_duty(duty)
    return AstableTopology.STANDARD if duty > DUTY_THRESHOLD else AstableTopology.DIODE


def _check_duty(duty: float):
    if not 0.0 < duty < 1.0:
        raise InvalidArgumentError(f'duty cycle must be between 0 and 1 exclusive, got {duty}')


def _check_positive(name: str, value: float):
    if not value > 0.0:
        raise InvalidArgumentError(f'{name} must be positive, got {value}')


def monostable_delay(r: float, c: float) -> float:
    """Output pulse width (s)."""
    return MONO_FACTOR * r * c


def monostable_resistance(delay: float, c: float) -> float:
    """Timing resistor for a pulse width, NaN when ``c`` is not positive."""
    return delay / (MONO_FACTOR * c) if c > 0.0 else math.nan


def monostable_capacitance(delay: float, r: float) -> float:
    """Timing capacitor for a pulse width, NaN when ``r`` is not positive."""
    return delay / (MONO_FACTOR * r) if r > 0.0 else math.nan


def astable_capacitance(frequency: float, duty: float, r1: float, r2: float) -> float:
    """Timing capacitor for ``frequency`` given both resistors."""
    _check_positive('frequency', frequency)
    if astable_topology(duty) is AstableTopology.STANDARD:
        return 1.0 / (frequency * CHARGE_FACTOR * (r1 + 2.0 * r2))
    return 1.0 / (frequency * CHARGE_FACTOR * (r1 + r2))


@dataclass
class AstableTiming:
    frequency: float
    duty: float
    topology: AstableTopology


def astable_timing(r1: float, r2: float, c: float,
                   topology: AstableTopology = AstableTopology.STANDARD) -> AstableTiming:
    """Frequency (Hz) and duty cycle (fraction) of an astable circuit."""
    _check_positive('capacitance', c)
    topology = AstableTopology(topology)
    if topology is AstableTopology.STANDARD:
        r_total = r1 + 2.0 * r2
        r_high = r1 + r2
    else:
        r_total = r1 + r2
        r_high = r1
    _check_positive('total timing resistance', r_total)
    duty = r_high / max(1.0, r_total)
    return AstableTiming(1.0 / (CHARGE_FACTOR * c * r_total), duty, topology)


@dataclass
class AstableResistors:
    r1: float
    r2: float
    topology: AstableTopology


def astable_resistors(frequency: float, duty: float, c: float) -> AstableResistors:
    """
    Timing resistors for a frequency and duty cycle.

    Duty cycles of 50% or less cannot be built with the standard circuit
    (R1 would be zero or negative); the diode-steered circuit is used instead.
    """
    _check_positive('frequency', frequency)
    _check_positive('capacitance', c)
    topology = astable_topology(duty)
    if topology is AstableTopology.STANDARD:
        r_sum2 = 1.0 / (frequency * CHARGE_FACTOR * c)
        r_sum = duty * r_sum2
        r2 = r_sum2 - r_sum
        r1 = r_sum - r2
    else:
        logger.warning('Duty cycle %.1f%% needs a diode across R2', duty * 100.0)
        r_sum = 1.0 / (frequency * CHARGE_FACTOR * c)
        r1 = duty * r_sum
        r2 = r_sum - r1
    return AstableResistors(r1, r2, topology)


def timing_resistor_ok(r: float, monostable: bool = False) -> bool:
    """True if ``r`` is in the range the 555 datasheet recommends."""
    upper = MAX_TIMING_R_MONO if monostable else MAX_TIMING_R_ASTABLE
    return math.isfinite(r) and MIN_TIMING_R <= r <= upper
