"""
Pierce crystal oscillator design.

Reference: ST AN2867, "Oscillator design guide for STM8AF/AL/S, STM32 MCUs
and MPUs".

    CL1 = CL2 = 2 · (C_rated - C_stray)
    gm_crit = 4 · ESR · (2πf)² · (C0 + C_rated)²

The oscillator's transconductance should be at least five times gm_crit.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ececalc.eia import EIAValue, ESeries, StandardValueCheck, check_standard_value
from ececalc.errors import InvalidArgumentError
from ececalc.settings import DEFAULT_SETTINGS, EngineSettings
from ececalc.units import CAPACITANCE, TRANSCONDUCTANCE
from ececalc.values import EngineeringValue

# Capacitances below this are treated as missing entries
MIN_CAPACITANCE = 1.0e-12
MIN_GAIN_MARGIN = 5.0


def _check_capacitances(c_rated: float, c_stray: float, c0: float = MIN_CAPACITANCE):
    if c_stray >= c_rated:
        raise InvalidArgumentError('stray capacitance must be below the rated load capacitance')
    if c_rated < MIN_CAPACITANCE or c0 < MIN_CAPACITANCE:
        raise InvalidArgumentError('capacitances must be at least 1 pF')


def load_capacitor(c_rated: float, c_stray: float) -> float:
    """Capacitor (F) for each crystal pin to reach the rated load capacitance."""
    _check_capacitances(c_rated, c_stray)
    return (c_rated - c_stray) * 2.0


def critical_transconductance(frequency: float, c_rated: float, c0: float, esr: float) -> float:
    """Minimum transconductance (A/V) that sustains oscillation."""
    c_total = (c_rated + c0) * frequency
    return (16.0 * math.pi * math.pi) * c_total * c_total * esr


def gain_margin(gm_oscillator: float, gm_critical: float) -> float:
    """Ratio of the driver's transconductance to the critical value."""
    if not gm_critical > 0.0:
        raise InvalidArgumentError(f'critical transconductance must be positive, got {gm_critical}')
    return gm_oscillator / gm_critical


@dataclass
class PierceDesign:
    load_capacitance: EngineeringValue
    transconductance: EngineeringValue
    standard: StandardValueCheck

    def is_reliable(self, gm_oscillator: float) -> bool:
        """True if a driver with ``gm_oscillator`` (A/V) meets the AN2867 gain margin."""
        return gain_margin(gm_oscillator, self.transconductance.value) >= MIN_GAIN_MARGIN


def pierce_design(frequency: float, c_rated: float, c0: float, c_stray: float, esr: float,
                  settings: Optional[EngineSettings] = None) -> PierceDesign:
    """
    Load capacitors and critical gm for a crystal.

    Args:
        frequency: crystal frequency (Hz)
        c_rated: rated load capacitance from the crystal datasheet (F)
        c0: crystal shunt capacitance (F)
        c_stray: pin and trace capacitance per pin (F)
        esr: crystal equivalent series resistance (Ω)

    Raises:
        InvalidArgumentError: if c_stray >= c_rated or a capacitance is below 1 pF
    """
    sigfigs = (settings or DEFAULT_SETTINGS).default_sigfigs
    _check_capacitances(c_rated, c_stray, c0)
    cl = load_capacitor(c_rated, c_stray)
    gm = critical_transconductance(frequency, c_rated, c0, esr)
    return PierceDesign(
        load_capacitance=EngineeringValue(cl, 0.0, sigfigs, CAPACITANCE),
        transconductance=EngineeringValue(gm, 0.0, sigfigs, TRANSCONDUCTANCE),
        standard=check_standard_value(EIAValue(cl, ESeries.E24, sigfigs=sigfigs, units=CAPACITANCE)),
    )
