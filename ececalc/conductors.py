"""
Current capacity of wires and PCB traces.

- American Wire Gauge (AWG) conversions: gauge n has diameter
  0.127 mm × 92^((36 - n) / 39); gauges 0, 00, 000 and 0000 are -0 .. -3.
- NEC chassis-wiring ampacity table for 4/0 through 40 AWG.
- IPC-2221 external trace width from current and temperature rise:
  I = k · ΔT^0.44 · A^0.725, A in mil².
- Resistance, power loss and voltage drop of a conductor run.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ececalc.errors import InvalidArgumentError
from ececalc.settings import DEFAULT_SETTINGS, EngineSettings
from ececalc.units import POWER, RESISTANCE, VOLTAGE
from ececalc.values import EngineeringValue

logger = logging.getLogger(__name__)

AWG_MULT = 39.0 / math.log(92.0)
# Radius of 36 AWG (mm)
AWG_36_RADIUS = 0.0635

# Area (mm²) of 1000 circular mils; wire sizing allows 500 cmil per amp
KCMIL_MM2 = 0.5067

IPC_B = 0.44
IPC_C = 1.0 / 0.725
IPC_K = 0.048
MM_PER_MIL = 0.0254

# Range over which the IPC-2221 curve fit holds
IPC_MAX_CURRENT = 35.0
IPC_MAX_WIDTH = 10.16
IPC_MIN_RISE = 10.0
IPC_MAX_RISE = 100.0
IPC_MIN_THICKNESS = 0.017
IPC_MAX_THICKNESS = 0.105

# NEC chassis wiring, gauges 4/0 (-3) through 40
NEC_MIN_GAUGE = -3
NEC_DIAMETER = [
    11.68, 10.40, 9.27, 8.25, 7.35, 6.54, 5.83, 5.19, 4.62, 4.11, 3.67, 3.26, 2.91, 2.59,
    2.30, 2.05, 1.83, 1.63, 1.45, 1.29, 1.15, 1.02, 0.91, 0.81, 0.72, 0.65, 0.57, 0.51,
    0.45, 0.40, 0.36, 0.32, 0.29, 0.25, 0.23, 0.20, 0.18, 0.16, 0.14, 0.13, 0.11, 0.10,
    0.09, 0.08,
]
NEC_AMPS = [
    380.00, 328.00, 283.00, 245.00, 211.00, 181.00, 158.00, 135.00, 118.00, 101.00, 89.00,
    73.00, 64.00, 55.00, 47.00, 41.00, 35.00, 32.00, 28.00, 22.00, 19.00, 16.00, 14.00,
    11.00, 9.00, 7.00, 4.70, 3.50, 2.70, 2.20, 1.70, 1.40, 1.20, 0.86, 0.70, 0.53, 0.43,
    0.33, 0.27, 0.21, 0.17, 0.13, 0.11, 0.09,
]
NEC_MAX_GAUGE = NEC_MIN_GAUGE + len(NEC_AMPS) - 1


class Material(enum.Enum):
    """Conductor materials by bulk resistivity at 20 °C (Ω·m)."""
    ALUMINUM = 2.82e-8
    COPPER = 1.68e-8
    STEEL = 1.43e-7
    GOLD = 2.44e-8
    SILVER = 1.59e-8

    @property
    def resistivity(self) -> float:
        return self.value


def _resolve_material(material: Union[Material, str]) -> Material:
    if isinstance(material, Material):
        return material
    try:
        return Material[str(material).upper()]
    except KeyError:
        raise InvalidArgumentError(f"Unknown material '{material}'")


def _require_positive(name: str, value: float):
    if not value > 0.0 or math.isinf(value):
        raise InvalidArgumentError(f'{name} must be positive and finite, got {value}')


def gauge_from_radius(radius: float) -> int:
    """Smallest AWG number whose wire is at least ``radius`` (mm)."""
    _require_positive('radius', radius)
    return int(math.ceil(36.0 - AWG_MULT * math.log(radius / AWG_36_RADIUS)))


def radius_from_gauge(gauge: float) -> float:
    """Wire radius (mm) of an AWG number (may be fractional)."""
    return AWG_36_RADIUS * math.exp((36.0 - gauge) / AWG_MULT)


@dataclass
class WireSize:
    """A round wire: AWG number, diameter (mm) and cross-section (mm²)."""
    gauge: float
    diameter: float
    area: float


def wire_from_gauge(gauge: float) -> WireSize:
    radius = radius_from_gauge(gauge)
    return WireSize(gauge, radius * 2.0, math.pi * radius * radius)


def wire_from_diameter(diameter: float) -> WireSize:
    _require_positive('diameter', diameter)
    radius = diameter / 2.0
    return WireSize(gauge_from_radius(radius), diameter, math.pi * radius * radius)


def wire_from_area(area: float) -> WireSize:
    _require_positive('area', area)
    radius = math.sqrt(area / math.pi)
    return WireSize(gauge_from_radius(radius), radius * 2.0, area)


def wire_from_current(current: float) -> WireSize:
    """
    Wire sized at 500 circular mils per amp (chassis wiring rule of thumb).

    The gauge is rounded to the next thinner whole gauge; diameter and area
    are the exact values for the current.
    """
    _require_positive('current', current)
    area = current * 0.5 * KCMIL_MM2
    radius = math.sqrt(area / math.pi)
    return WireSize(gauge_from_radius(radius), radius * 2.0, area)


def _nec_index(gauge: int) -> int:
    if gauge != int(gauge) or not NEC_MIN_GAUGE <= gauge <= NEC_MAX_GAUGE:
        raise InvalidArgumentError(
            f'NEC table covers whole gauges {NEC_MIN_GAUGE}..{NEC_MAX_GAUGE}, got {gauge}')
    return int(gauge) - NEC_MIN_GAUGE


def nec_ampacity(gauge: int) -> float:
    """NEC chassis-wiring current limit (A) for a whole AWG number (-3 is 4/0)."""
    return NEC_AMPS[_nec_index(gauge)]


def nec_diameter(gauge: int) -> float:
    """Tabulated NEC conductor diameter (mm)."""
    return NEC_DIAMETER[_nec_index(gauge)]


@dataclass
class TraceWidth:
    """IPC-2221 sizing result; ``warnings`` lists inputs outside the curve-fit range."""
    width: float
    area_mil2: float
    warnings: List[str] = field(default_factory=list)

    @property
    def in_range(self) -> bool:
        return not self.warnings


def ipc2221_trace_width(current: float, temp_rise: float, thickness: float,
                        material: Union[Material, str] = Material.COPPER) -> TraceWidth:
    """
    Minimum external trace width for a current (IPC-2221).

    Args:
        current: trace current (A)
        temp_rise: allowed temperature rise (°C)
        thickness: copper thickness (mm), 0.035 for 1 oz
        material: trace material; width scales with resistivity relative to copper

    Returns:
        TraceWidth with the width in mm and any range warnings
    """
    material = _resolve_material(material)
    _require_positive('current', current)
    _require_positive('temperature rise', temp_rise)
    _require_positive('thickness', thickness)
    area_mil2 = (current / (IPC_K * temp_rise ** IPC_B)) ** IPC_C
    width = area_mil2 * MM_PER_MIL * MM_PER_MIL * material.resistivity / \
        (Material.COPPER.resistivity * thickness)

    warnings = []
    if current > IPC_MAX_CURRENT:
        warnings.append(f'current {current:g} A is above {IPC_MAX_CURRENT:g} A')
    if width > IPC_MAX_WIDTH:
        warnings.append(f'width {width:.3g} mm is above {IPC_MAX_WIDTH:g} mm')
    if not IPC_MIN_RISE <= temp_rise <= IPC_MAX_RISE:
        warnings.append(f'temperature rise {temp_rise:g} °C is outside '
                        f'{IPC_MIN_RISE:g}..{IPC_MAX_RISE:g} °C')
    if not IPC_MIN_THICKNESS <= thickness <= IPC_MAX_THICKNESS:
        warnings.append(f'thickness {thickness:g} mm is outside '
                        f'{IPC_MIN_THICKNESS:g}..{IPC_MAX_THICKNESS:g} mm')
    for warning in warnings:
        logger.warning('IPC-2221 trace width outside fitted range: %s', warning)
    return TraceWidth(width, area_mil2, warnings)


def ohms_per_meter(area: float, material: Union[Material, str] = Material.COPPER) -> float:
    """Resistance per metre of a conductor with cross-section ``area`` (mm²)."""
    _require_positive('area', area)
    return _resolve_material(material).resistivity * 1e6 / area


@dataclass
class ConductorLoss:
    resistance: EngineeringValue
    power: EngineeringValue
    voltage_drop: EngineeringValue

    def __str__(self):
        return (f'Resistance: {self.resistance}\nPower loss: {self.power}\n'
                f'Voltage drop: {self.voltage_drop}')


def conductor_loss(current: float, length: float, area: float,
                   material: Union[Material, str] = Material.COPPER,
                   settings: Optional[EngineSettings] = None) -> ConductorLoss:
    """
    Losses of a conductor run.

    Args:
        current: current through the conductor (A)
        length: run length (m)
        area: cross-section (mm²); for a trace, width × thickness
        material: conductor material

    Returns:
        ConductorLoss with resistance (Ω), power (W) and voltage drop (V)
    """
    sigfigs = (settings or DEFAULT_SETTINGS).default_sigfigs
    if length < 0.0:
        raise InvalidArgumentError(f'length must not be negative, got {length}')
    resistance = length * ohms_per_meter(area, material)
    drop = resistance * current
    return ConductorLoss(
        resistance=EngineeringValue(resistance, 0.0, sigfigs, RESISTANCE),
        power=EngineeringValue(current * drop, 0.0, sigfigs, POWER),
        voltage_drop=EngineeringValue(drop, 0.0, sigfigs, VOLTAGE),
    )
