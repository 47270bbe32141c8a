"""
Best-fit standard resistor pairs.

Given a target, find two standard values whose series or parallel
combination (or whose voltage divider ratio) is closest to it.

Both searches are linear in the number of standard values. For series and
parallel pairs the candidate list is sorted so that combining with a later
entry moves the result monotonically; a single partner pointer sweeps from
the far end toward the current value, and only the last feasible partner
and its neighbour need to be tried for each value:

    candidates = [0, 0.1, 0.11, ... , 9.1M]   (8 decades of E24)
    target 1234 Ω, series: 1.2k + 33 → 1233 Ω, error -0.08%
"""

import enum
import logging
import math
from typing import List, Optional, Union

import numpy as np

from ececalc.calc import ieee_round, parallel_resistance, voltage_divide
from ececalc.eia import ESeries, SeriesLike, ordinal_values
from ececalc.errors import InvalidArgumentError
from ececalc.settings import DEFAULT_SETTINGS, DividerPolicy
from ececalc.units import RESISTANCE
from ececalc.values import EngineeringValue

logger = logging.getLogger(__name__)


def relative_error(value: float, target: float) -> float:
    """(value - target) / target rounded to 40 bits; absolute difference when target is 0."""
    difference = value - target
    if target == 0.0:
        return ieee_round(difference)
    return ieee_round(difference / target)


def _compare(a: float, b: float) -> int:
    return (a > b) - (a < b)


class CombineRule(enum.Enum):
    SERIES = 'series'
    PARALLEL = 'parallel'


class ResCandidate:
    """
    A resistor pair (r1, r2) combined into ``value`` and scored against ``target``.

    Candidates order by |error|. On equal error a pair of identical
    resistors wins over a mixed pair (one part number instead of two).
    """

    __slots__ = ('r1', 'r2', 'target', 'value', 'error')

    def __init__(self, r1: float, r2: float, target: float):
        self.r1 = r1
        self.r2 = r2
        self.target = target
        self.value = self.combine(r1, r2)
        self.error = relative_error(self.value, target)

    @staticmethod
    def combine(r1: float, r2: float) -> float:
        raise NotImplementedError

    def possible(self, value: Optional[float] = None) -> bool:
        """True if ``value`` (default: this pair's value) is on the near side of the target."""
        raise NotImplementedError

    @classmethod
    def candidate_values(cls, series: SeriesLike, target: float) -> List[float]:
        """Standard values worth pairing, in search order."""
        raise NotImplementedError

    def create(self, r1: float, r2: float) -> 'ResCandidate':
        return type(self)(r1, r2, self.target)

    def compare(self, other: 'ResCandidate') -> int:
        result = _compare(abs(self.error), abs(other.error))
        if result == 0:
            matched = self.r1 == self.r2
            other_matched = other.r1 == other.r2
            if matched and not other_matched:
                result = -1
            elif other_matched and not matched:
                result = 1
        return result

    def __lt__(self, other: 'ResCandidate') -> bool:
        return self.compare(other) < 0

    def __str__(self):
        return f'{EngineeringValue(self.value, units=RESISTANCE)} [{100.0 * self.error:+.1f}%]'

    def __repr__(self):
        return f'{type(self).__name__}(r1={self.r1!r}, r2={self.r2!r}, target={self.target!r})'


class SeriesCandidate(ResCandidate):
    """r1 + r2; a partner is feasible while the sum stays at or below the target."""

    __slots__ = ()

    @staticmethod
    def combine(r1: float, r2: float) -> float:
        return r1 + r2

    def possible(self, value: Optional[float] = None) -> bool:
        return (self.value if value is None else value) <= self.target

    @classmethod
    def candidate_values(cls, series: SeriesLike, target: float) -> List[float]:
        values = ordinal_values(series)
        # Ascending, up to and including the first value above the target
        count = int(np.searchsorted(values, target, side='right'))
        return values[:count + 1].tolist()


class ParallelCandidate(ResCandidate):
    """r1 ∥ r2; a partner is feasible while the result stays at or above the target."""

    __slots__ = ()

    @staticmethod
    def combine(r1: float, r2: float) -> float:
        return parallel_resistance(r1, r2)

    def possible(self, value: Optional[float] = None) -> bool:
        return (self.value if value is None else value) >= self.target

    @classmethod
    def candidate_values(cls, series: SeriesLike, target: float) -> List[float]:
        values = ordinal_values(series)
        # Descending, down to and including the first value below the target
        first = int(np.searchsorted(values, target, side='left'))
        return values[max(first - 1, 0):][::-1].tolist()


_CANDIDATE_TYPES = {
    CombineRule.SERIES: SeriesCandidate,
    CombineRule.PARALLEL: ParallelCandidate,
}


def search_pairs(template: ResCandidate, candidates: List[float]) -> ResCandidate:
    """
    Best pair from ``candidates`` for the rule and target of ``template``.

    For each value in list order the partner pointer ``end`` moves toward
    the front while the pair is infeasible; the pair at ``end`` and the one
    just past it bracket the target.
    """
    last = len(candidates) - 1
    end = last
    best = template.create(candidates[0], candidates[0])
    i = 0
    while i <= end:
        value = candidates[i]
        low = None
        while end >= i:
            low = template.create(value, candidates[end])
            if low.possible():
                break
            end -= 1
        if low is not None:
            if low < best:
                best = low
            if end < last:
                high = template.create(value, candidates[end + 1])
                if high < best:
                    best = high
        i += 1
    return best


def find_best_pair(target: float, series: SeriesLike = ESeries.E24,
                   rule: Union[CombineRule, str] = CombineRule.SERIES) -> ResCandidate:
    """
    Two standard resistors whose series or parallel combination is closest to ``target``.

    Args:
        target: desired resistance (Ω), finite and >= 0
        series: E-series to draw both resistors from
        rule: 'series' or 'parallel'

    Returns:
        the winning candidate; ``r1``, ``r2``, ``value`` and ``error`` describe it
    """
    target = float(target)
    if not math.isfinite(target) or target < 0.0:
        raise InvalidArgumentError(f'target must be finite and non-negative, got {target}')
    try:
        candidate_type = _CANDIDATE_TYPES[CombineRule(rule)]
    except ValueError:
        raise InvalidArgumentError(f"Unknown rule '{rule}'. Must be 'series' or 'parallel'")
    template = candidate_type(0.0, 0.0, target)
    best = search_pairs(template, candidate_type.candidate_values(series, target))
    logger.debug('Best %s pair for %g: %g + %g (error %g)', CombineRule(rule).value, target,
                 best.r1, best.r2, best.error)
    return best


class DividerCandidate:
    """
    A voltage divider: ``r1`` on top, ``r2`` to ground, optional ``load`` across r2.

    Pairs drawing more than the policy's maximum current always lose. Otherwise
    the smaller |ratio error| wins, then the current closer to the ideal.
    """

    __slots__ = ('r1', 'r2', 'target', 'load', 'voltage', 'policy', 'value', 'error', 'current')

    def __init__(self, r1: float, r2: float, target: float, load: float = math.inf,
                 voltage: float = 1.0, policy: Optional[DividerPolicy] = None):
        self.r1 = r1
        self.r2 = r2
        self.target = target
        self.load = load
        self.voltage = voltage
        self.policy = policy if policy is not None else DEFAULT_SETTINGS.divider
        self.value = voltage_divide(r1, parallel_resistance(load, r2))
        self.error = relative_error(self.value, target)
        r_total = r1 + r2
        if r_total == 0.0:
            self.current = math.copysign(math.inf, voltage) if voltage != 0.0 else math.nan
        else:
            self.current = voltage / r_total

    def create(self, r1: float, r2: float) -> 'DividerCandidate':
        return DividerCandidate(r1, r2, self.target, self.load, self.voltage, self.policy)

    @property
    def distance_from_ideal(self) -> float:
        return abs(self.current - self.policy.ideal_current)

    @property
    def output_voltage(self) -> float:
        return self.voltage * self.value

    def compare(self, other: 'DividerCandidate') -> int:
        if self.current > self.policy.max_current:
            return 1
        if other.current > self.policy.max_current:
            return -1
        result = _compare(abs(self.error), abs(other.error))
        if result == 0:
            result = _compare(self.distance_from_ideal, other.distance_from_ideal)
        return result

    def __lt__(self, other: 'DividerCandidate') -> bool:
        return self.compare(other) < 0

    def __repr__(self):
        return (f'DividerCandidate(r1={self.r1!r}, r2={self.r2!r}, target={self.target!r}, '
                f'load={self.load!r}, voltage={self.voltage!r})')


def search_divider(template: DividerCandidate, candidates: List[float]) -> DividerCandidate:
    """
    Best divider with both resistors from ascending ``candidates``.

    For each bottom resistor in ascending order, the top-resistor pointer
    only moves forward: the ratio grows with r2, so the first r1 giving a
    ratio below the target can only move up.
    """
    start = 1
    best = template.create(0.0, math.inf)
    for value in candidates:
        high = None
        while start < len(candidates):
            high = template.create(candidates[start], value)
            if high.value < template.target:
                break
            start += 1
        if high is not None:
            if high < best:
                best = high
            low = template.create(candidates[start - 1], value)
            if low < best:
                best = low
    return best


def find_best_divider(vin: float, vout: float, series: SeriesLike = ESeries.E24,
                      load: float = math.inf,
                      policy: Optional[DividerPolicy] = None) -> DividerCandidate:
    """
    Standard resistor pair dividing ``vin`` down to ``vout``.

    Args:
        vin: input voltage
        vout: desired output voltage
        series: E-series for both resistors
        load: load resistance across the bottom resistor (Ω), infinite if none
        policy: current limits used to break ties

    Returns:
        the best candidate; (0, ∞) when vout >= vin and (∞, 0) when either
        voltage is not positive
    """
    if math.isnan(vin) or math.isnan(vout):
        raise InvalidArgumentError('voltages must be numbers')
    if not load > 0.0:
        raise InvalidArgumentError(f'load must be positive, got {load}')
    target = vout / vin if vin > 0.0 else 0.0
    template = DividerCandidate(0.0, math.inf, target, load, vin, policy)
    if vin <= vout:
        return template
    if vout <= 0.0 or vin <= 0.0:
        return template.create(math.inf, 0.0)
    best = search_divider(template, ordinal_values(series).tolist())
    logger.debug('Best divider for %g V -> %g V: %g / %g (error %g)', vin, vout,
                 best.r1, best.r2, best.error)
    return best
