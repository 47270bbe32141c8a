"""
Controlled-impedance PCB trace models.

Single-ended:
    Microstrip: Wheeler (1977) closed form with finite trace thickness.
    Stripline: symmetric stripline, IPC-2141 narrow-strip approximation.

Differential:
    Edge-coupled microstrip: Kirschning & Jansen (1984) odd-mode model.
    Edge-coupled stripline: Cohn (1955) coupled-strip model using complete
    elliptic integrals.

All dimensions are in mm. Each model is an Equation in the free variable
(trace width for single-ended, trace spacing for differential) so it can be
evaluated forward or inverted with the Brent solver:

    eq = MicrostripEquation(height=1.6, thickness=0.035, dielectric=4.5, desired=50.0)
    width = solve(eq, 0.01, 100.0)

Models return NaN outside their domain; helpers map NaN and non-positive
results to NaN ("no solution").
"""

import enum
import math
from typing import Optional

from ececalc.calc import elliptic
from ececalc.errors import InvalidGeometryError
from ececalc.settings import DEFAULT_SETTINGS, EngineSettings
from ececalc.solver import EquationSolver
from ececalc.units import PI_INV, Z_0

SQRT_8 = 2.8284271247461902
LOG10_40 = 1.6020599913279624


class TraceScenario(enum.Enum):
    """Board stackup: outer layer (microstrip) or inner layer (stripline), single or pair."""
    MICROSTRIP = 0
    STRIPLINE = 1
    DIFF_MICROSTRIP = 2
    DIFF_STRIPLINE = 3

    @property
    def is_microstrip(self) -> bool:
        return self in (TraceScenario.MICROSTRIP, TraceScenario.DIFF_MICROSTRIP)


def _check_geometry(height: float, thickness: float, dielectric: float, desired: float):
    if not dielectric > 1.0:
        raise InvalidGeometryError(f'dielectric constant must be above 1, got {dielectric}')
    if not thickness > 0.0:
        raise InvalidGeometryError(f'trace thickness must be positive, got {thickness}')
    if not height > 0.0:
        raise InvalidGeometryError(f'dielectric height must be positive, got {height}')
    if not desired >= 0.0:
        raise InvalidGeometryError(f'desired impedance must not be negative, got {desired}')


class TraceEquation:
    """
    Base for impedance models: ``eval(x) = impedance(x) - desired``.

    Subclasses implement ``_impedance`` for x > 0.
    """

    def __init__(self, height: float, thickness: float, dielectric: float, desired: float = 0.0):
        _check_geometry(height, thickness, dielectric, desired)
        self.height = float(height)
        self.thickness = float(thickness)
        self.dielectric = float(dielectric)
        self.desired = float(desired)

    def _impedance(self, x: float) -> float:
        raise NotImplementedError

    def impedance(self, x: float) -> float:
        """Impedance (Ω) at free variable ``x`` (mm), NaN for x <= 0."""
        if x <= 0.0:
            return math.nan
        try:
            return self._impedance(x)
        except (ArithmeticError, ValueError):
            # math domain error or overflow far outside the fitted range
            return math.nan

    def eval(self, x: float) -> float:
        return self.impedance(x) - self.desired


class MicrostripEquation(TraceEquation):
    """Single-ended microstrip; x is the trace width."""

    def __init__(self, height: float, thickness: float, dielectric: float, desired: float = 0.0):
        super().__init__(height, thickness, dielectric, desired)
        er, t = self.dielectric, self.thickness
        self._we_mul = t * (1.0 + 1.0 / er) * 0.5 * PI_INV
        self._we_add = self._we_mul * LOG10_40
        self._z_denom = math.sqrt(1.0 + er) * SQRT_8
        self._z_x2_add = (1.0 + 1.0 / er) * 0.5 * math.pi * math.pi

    def _impedance(self, x: float) -> float:
        h, t, er = self.height, self.thickness, self.dielectric
        w_coeff = PI_INV / (1.1 + x / t)
        # 4h / effective width
        w_eff_4h = 4.0 * h / (x + self._we_add - self._we_mul * 0.5 * math.log(
            (t * t) / (h * h) + w_coeff * w_coeff))
        x1 = (14.0 + 8.0 / er) * w_eff_4h / 11.0
        return Z_0 * math.log(1.0 + w_eff_4h * (x1 + math.sqrt(x1 * x1 + self._z_x2_add))) / \
            self._z_denom


class StriplineEquation(TraceEquation):
    """Single-ended symmetric stripline; x is the trace width, height is plane to plane."""

    def __init__(self, height: float, thickness: float, dielectric: float, desired: float = 0.0):
        super().__init__(height, thickness, dielectric, desired)
        self._z_num = 60.0 / math.sqrt(self.dielectric)

    def _impedance(self, x: float) -> float:
        h, t = self.height, self.thickness
        d = math.pi * 0.5 * x * (1.0 + t * PI_INV * (1.0 + math.log(4.0 * math.pi * x / t)) / x +
                                 0.551 * t * t / (x * x))
        return max(0.0, self._z_num * math.log((8.0 * h + 4.0 * t) / d))


class DiffMicrostripEquation(TraceEquation):
    """Edge-coupled microstrip pair; x is the spacing between the traces."""

    def __init__(self, height: float, width: float, thickness: float, dielectric: float,
                 desired: float = 0.0):
        super().__init__(height, thickness, dielectric, desired)
        if not width > 0.0:
            raise InvalidGeometryError(f'trace width must be positive, got {width}')
        self.width = float(width)
        h, w, t, er = self.height, self.width, self.thickness, self.dielectric
        # Effective dielectric constant of one strip
        er_base = math.sqrt(w / (w + 12.0 * h))
        if w < h:
            p = 1.0 - w / h
            er_base += 0.04 * p * p
        er_eff = (er + 1.0) * 0.5 + (er - 1.0) * 0.5 * er_base
        u = w / h
        self._er_eff = er_eff
        self._u = u
        self._a0 = 0.7287 * (er_eff - 0.5 * (er + 1.0)) * (1.0 - math.exp(-0.179 * u))
        b0 = (0.747 * er) / (0.15 + er)
        self._c0 = b0 - (b0 - 0.207) * math.exp(-0.414 * u)
        self._d0 = 0.593 + 0.694 * math.exp(-0.562 * u)
        # Thickness correction to the width
        p = t / (math.pi * (w + 1.1 * t))
        er2 = (er_eff + 1.0) / (2.0 * er_eff)
        w_eff = w + (t / math.pi) * (4.0 - 0.5 * math.log(t * t / (h * h) + p * p)) * er2
        hw = 4.0 * h / w_eff
        er_mul = (14.0 * er_eff + 8.0) / (11.0 * er_eff)
        he = h * er_mul / w_eff
        # Single-strip impedance
        self._zo_surf = Z_0 * math.log1p(hw * hw * er_mul + math.sqrt(
            16.0 * he * he + er2 * math.pi * math.pi) * hw) / (SQRT_8 * math.sqrt(er_eff + 1.0))
        self._q1 = 0.8695 * u ** 0.194
        self._zom = self._zo_surf * math.sqrt(er_eff) / (Z_0 * math.pi)

    def _impedance(self, x: float) -> float:
        er, u, er_eff = self.dielectric, self._u, self._er_eff
        g = x / self.height
        emg = math.exp(-g)
        lg = math.log(g)
        er_eff_o = (0.5 * er + 0.5 + self._a0 - er_eff) * math.exp(-self._c0 * g ** self._d0) + \
            er_eff
        q2 = 1.0 + 0.7519 * g + 0.189 * g ** 2.31
        uq3 = u ** ((16.6 + (8.4 / g) ** 6.0) ** -0.387 + 0.004149377593360996 * (
            10.0 * lg - math.log1p((g * 0.294117647058823529) ** 10)) + 0.1975)
        q4 = 2.0 * self._q1 / (q2 * (emg * uq3 + (2.0 - emg) / uq3))
        q5 = 1.794 + 1.14 * math.log1p(0.638 / (g + 0.517 * g ** 2.43))
        q6 = 0.2305 + (10.0 * lg - math.log1p((g * 0.172413793103448276) ** 10.0)) * \
            0.003554923569143263 + math.log1p(0.598 * g ** 1.154) * 0.19607843137254902
        q7 = (10.0 + 190.0 * g * g) / (1.0 + 82.3 * g * g * g)
        # q8 folded in
        q9 = math.log(q7) * (math.exp(-6.5 - 0.95 * lg - (g * 6.666666666666666667) ** 5.0) +
                             0.060606060606060606)
        q10 = q4 - q5 * u ** (q6 * u ** -q9) / q2
        return (self._zo_surf * 2.0 * math.sqrt(er_eff / er_eff_o)) / (1.0 - self._zom * q10)


class DiffStriplineEquation(TraceEquation):
    """Edge-coupled stripline pair; x is the spacing between the traces."""

    CF0 = 2.0 * math.log(2.0)

    def __init__(self, height: float, width: float, thickness: float, dielectric: float,
                 desired: float = 0.0):
        super().__init__(height, thickness, dielectric, desired)
        if not width > 0.0:
            raise InvalidGeometryError(f'trace width must be positive, got {width}')
        self.width = float(width)
        h, w, t, er = self.height, self.width, self.thickness, self.dielectric
        b = 2.0 * h + t
        ht = b - t
        self._b = b
        self._k_mul = math.tanh(0.5 * math.pi * w / b)
        self._z0_mul = 30.0 * math.pi / math.sqrt(er)
        self._z0_ss = StriplineEquation(h, t, er).impedance(w)
        # Ideal (zero thickness) odd-mode impedance
        kir = elliptic(1.0 / math.cosh(math.pi * w / (2.0 * b))) / \
            elliptic(math.tanh(math.pi * w / (2.0 * b)))
        self._z0_i = Z_0 * math.pi * 0.25 * kir / math.sqrt(er)
        # Fringing capacitance
        bht = b / ht
        self._cf_tb = 2.0 * bht * math.log1p(bht) - t * math.log(bht * bht - 1.0) / ht

    def _impedance(self, x: float) -> float:
        ko = self._k_mul / math.tanh(0.5 * math.pi * (self.width + x) / self._b)
        ko_prime = math.sqrt(1.0 - ko * ko)
        z0_o = self._z0_mul * elliptic(ko_prime) / elliptic(ko)
        if x / self.thickness >= 5.0:
            # Wide spacing
            return 2.0 / (1.0 / self._z0_ss - self._cf_tb * (1.0 / z0_o - 1.0 / self._z0_i) / self.CF0)
        return 1.0 / (1.0 / z0_o - 0.5 / self._z0_i - (
            0.0885 * (self._cf_tb - self.CF0) / math.pi - 1.0 / x) / (Z_0 * math.pi))


def single_ended_equation(scenario: TraceScenario, height: float, thickness: float,
                          dielectric: float, desired: float = 0.0) -> TraceEquation:
    """Microstrip for outer-layer scenarios, stripline otherwise."""
    if TraceScenario(scenario).is_microstrip:
        return MicrostripEquation(height, thickness, dielectric, desired)
    return StriplineEquation(height, thickness, dielectric, desired)


def differential_equation(scenario: TraceScenario, height: float, width: float,
                          thickness: float, dielectric: float,
                          desired: float = 0.0) -> TraceEquation:
    """Edge-coupled microstrip for DIFF_MICROSTRIP, edge-coupled stripline otherwise."""
    if TraceScenario(scenario) is TraceScenario.DIFF_MICROSTRIP:
        return DiffMicrostripEquation(height, width, thickness, dielectric, desired)
    return DiffStriplineEquation(height, width, thickness, dielectric, desired)


def _positive_or_nan(value: float) -> float:
    if math.isnan(value) or value <= 0.0:
        return math.nan
    return value


def _solve_width(equation: TraceEquation, settings: Optional[EngineSettings]) -> float:
    settings = settings if settings is not None else DEFAULT_SETTINGS
    solver = EquationSolver(equation, settings.solver)
    return _positive_or_nan(solver.solve(settings.trace.min_width, settings.trace.max_width))


def single_ended_impedance(width: float, height: float, thickness: float, dielectric: float,
                           scenario: TraceScenario = TraceScenario.MICROSTRIP) -> float:
    """
    Characteristic impedance (Ω) of a single trace.

    Args:
        width: trace width (mm)
        height: dielectric height (mm); for stripline the plane spacing
        thickness: copper thickness (mm)
        dielectric: relative permittivity of the board (> 1)
        scenario: stackup

    Returns:
        impedance, or NaN if the model has no positive solution

    Raises:
        InvalidGeometryError: on non-physical geometry
    """
    equation = single_ended_equation(scenario, height, thickness, dielectric)
    return _positive_or_nan(equation.eval(width))


def trace_width_for_impedance(impedance: float, height: float, thickness: float,
                              dielectric: float,
                              scenario: TraceScenario = TraceScenario.MICROSTRIP,
                              settings: Optional[EngineSettings] = None) -> float:
    """Trace width (mm) giving ``impedance``, or NaN if none exists in the search interval."""
    equation = single_ended_equation(scenario, height, thickness, dielectric, impedance)
    return _solve_width(equation, settings)


def differential_impedance(spacing: float, width: float, height: float, thickness: float,
                           dielectric: float,
                           scenario: TraceScenario = TraceScenario.DIFF_MICROSTRIP) -> float:
    """Differential impedance (Ω) of a trace pair, or NaN if the model has no positive solution."""
    equation = differential_equation(scenario, height, width, thickness, dielectric)
    return _positive_or_nan(equation.eval(spacing))


def trace_spacing_for_impedance(impedance: float, width: float, height: float, thickness: float,
                                dielectric: float,
                                scenario: TraceScenario = TraceScenario.DIFF_MICROSTRIP,
                                settings: Optional[EngineSettings] = None) -> float:
    """Pair spacing (mm) giving differential ``impedance``, or NaN if none exists."""
    equation = differential_equation(scenario, height, width, thickness, dielectric, impedance)
    return _solve_width(equation, settings)
