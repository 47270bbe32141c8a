"""
Root finding for one-dimensional equations by Brent's method.

Brent's method keeps a bracket [b, c] around a sign change and, at each
step, takes an inverse quadratic interpolation or secant step when it is
safely inside the bracket, falling back to bisection otherwise. It always
converges for a continuous function with a bracketed root.

Reference: R. P. Brent, "Algorithms for Minimization without Derivatives",
Prentice-Hall, 1973, chapter 4.

A root that cannot be found is not an error: ``solve`` returns NaN so the
caller can show "no solution".
"""

import logging
import math
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from ececalc.errors import InvalidArgumentError, InvalidIntervalError
from ececalc.settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class Equation(Protocol):
    """An equation of the form f(x) - desired = 0."""

    def eval(self, x: float) -> float:
        ...


class FunctionEquation:
    """Adapts a plain callable ``f(x)`` to the Equation interface."""

    def __init__(self, function: Callable[[float], float]):
        self._function = function

    def eval(self, x: float) -> float:
        return float(self._function(x))


EquationLike = Union[Equation, Callable[[float], float]]


def _as_equation(equation: EquationLike) -> Equation:
    if equation is None:
        raise InvalidArgumentError('equation must not be None')
    if isinstance(equation, Equation):
        return equation
    if callable(equation):
        return FunctionEquation(equation)
    raise InvalidArgumentError(f'not an equation: {equation!r}')


class EquationSolver:
    """
    Solves an equation on an interval.

    Args:
        equation: object with ``eval(x)`` or a plain callable
        settings: tolerance and iteration cap
    """

    def __init__(self, equation: EquationLike, settings: Optional[SolverSettings] = None):
        self._equation = _as_equation(equation)
        self._settings = settings if settings is not None else DEFAULT_SETTINGS.solver

    @property
    def equation(self) -> Equation:
        return self._equation

    @property
    def settings(self) -> SolverSettings:
        return self._settings

    def solve(self, low: float, high: float, guess: Optional[float] = None) -> float:
        """
        Find x in [low, high] with |f(x)| below the tolerance.

        Args:
            low: lower end of the interval
            high: upper end of the interval
            guess: starting point strictly inside the interval (default midpoint)

        Returns:
            the root, or NaN when neither [low, guess] nor [guess, high]
            brackets a sign change or the iteration cap is reached

        Raises:
            InvalidIntervalError: on non-finite bounds, low >= high, or a
                guess outside (low, high)
        """
        if guess is None:
            guess = (low + high) * 0.5
        if not (math.isfinite(low) and math.isfinite(high) and math.isfinite(guess)):
            raise InvalidIntervalError(f'interval must be finite: [{low}, {high}], guess {guess}')
        if low >= high:
            raise InvalidIntervalError(f'interval is empty: [{low}, {high}]')
        if not low < guess < high:
            raise InvalidIntervalError(f'guess {guess} is not inside ({low}, {high})')

        tolerance = self._settings.tolerance
        f_low = self._equation.eval(low)
        if abs(f_low) < tolerance:
            logger.debug('Solved at interval start x=%g', low)
            return low
        f_high = self._equation.eval(high)
        if abs(f_high) < tolerance:
            logger.debug('Solved at interval end x=%g', high)
            return high
        f_guess = self._equation.eval(guess)
        if abs(f_guess) < tolerance:
            logger.debug('Solved at initial guess x=%g', guess)
            return guess

        if f_low * f_guess < 0.0:
            return self._brent(low, f_low, guess, f_guess)
        if f_high * f_guess < 0.0:
            return self._brent(guess, f_guess, high, f_high)
        logger.debug('No sign change on [%g, %g]', low, high)
        return math.nan

    def _brent(self, low: float, f_low: float, high: float, f_high: float) -> float:
        """Brent iteration on a bracket known to contain a sign change."""
        eps = self._settings.tolerance
        a, fa = low, f_low
        b, fb = high, f_high
        c, fc = a, fa
        d = b - a
        e = d
        for iteration in range(self._settings.max_iterations):
            if abs(fc) < abs(fb):
                a, b, c = b, c, b
                fa, fb, fc = fb, fc, fb
            tol = 2.0 * eps * abs(b) + eps
            m = 0.5 * (c - b)
            if abs(m) <= tol or abs(fb) < eps:
                logger.debug('Converged to x=%g after %d iterations', b, iteration)
                return b
            if abs(e) < tol or abs(fa) <= abs(fb):
                # Bisection
                d = m
                e = m
            else:
                s = fb / fa
                if a == c:
                    # Secant
                    p = 2.0 * m * s
                    q = 1.0 - s
                else:
                    # Inverse quadratic interpolation
                    q = fa / fc
                    r = fb / fc
                    p = s * (2.0 * m * q * (q - r) - (b - a) * (r - 1.0))
                    q = (q - 1.0) * (r - 1.0) * (s - 1.0)
                if p > 0.0:
                    q = -q
                else:
                    p = -p
                s = e
                e = d
                if p >= 1.5 * m * q - abs(tol * q) or p >= abs(0.5 * s * q):
                    # Interpolation would leave the bracket or converge too slowly
                    d = m
                    e = m
                else:
                    d = p / q
            a, fa = b, fb
            if abs(d) > tol:
                b += d
            elif m > 0.0:
                b += tol
            else:
                b -= tol
            fb = self._equation.eval(b)
            if (fb > 0.0 and fc > 0.0) or (fb <= 0.0 and fc <= 0.0):
                c, fc = a, fa
                d = b - a
                e = d
        logger.warning('No convergence after %d iterations (last x=%g)',
                       self._settings.max_iterations, b)
        return math.nan


def solve(equation: EquationLike, low: float, high: float, guess: Optional[float] = None,
          settings: Optional[SolverSettings] = None) -> float:
    """Shorthand for ``EquationSolver(equation, settings).solve(low, high, guess)``."""
    return EquationSolver(equation, settings).solve(low, high, guess)
