"""
Tests for the Brent root finder.

Validates:
1. Roots of simple polynomials and transcendental functions
2. Early exits at the interval ends and the guess
3. NaN when there is no sign change or no convergence
4. Interval validation
"""

import logging
import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.errors import InvalidArgumentError, InvalidIntervalError
from ececalc.settings import SolverSettings
from ececalc.solver import Equation, EquationSolver, FunctionEquation, solve


class Linear:
    """Equation object with eval(), not a plain callable."""

    def __init__(self, slope, offset):
        self.slope = slope
        self.offset = offset

    def eval(self, x):
        return self.slope * x + self.offset


class TestRoots:
    """Test root finding."""

    def test_linear_off_center_guess(self):
        assert solve(lambda x: x - 5.0, 0.0, 10.0, guess=2.0) == pytest.approx(5.0)

    def test_root_at_midpoint(self):
        assert solve(lambda x: x - 5.0, 0.0, 10.0) == 5.0

    def test_sqrt_two(self):
        assert solve(lambda x: x * x - 2.0, 0.0, 2.0, guess=0.5) == pytest.approx(math.sqrt(2.0))

    def test_cosine(self):
        assert solve(math.cos, 0.0, 3.0) == pytest.approx(math.pi / 2)

    def test_equation_object(self):
        solver = EquationSolver(Linear(2.0, -3.0))
        assert solver.solve(-10.0, 10.0, 1.0) == pytest.approx(1.5)

    def test_function_equation(self):
        eq = FunctionEquation(lambda x: x ** 3 - 8.0)
        assert isinstance(eq, Equation)
        assert solve(eq, 0.0, 5.0) == pytest.approx(2.0)


class TestEarlyExit:
    """Test roots found without iterating."""

    def test_root_at_low(self):
        assert solve(lambda x: x, 0.0, 1.0) == 0.0

    def test_root_at_high(self):
        assert solve(lambda x: x - 1.0, 0.0, 1.0) == 1.0


class TestNoSolution:
    """Test NaN results."""

    def test_no_sign_change(self):
        assert math.isnan(solve(lambda x: x + 1.0, 0.0, 10.0))

    def test_iteration_cap(self, caplog):
        settings = SolverSettings(max_iterations=1)
        with caplog.at_level(logging.WARNING, logger='ececalc.solver'):
            result = solve(lambda x: x ** 3 - 2.0, 0.0, 2.0, settings=settings)
        assert math.isnan(result)
        assert 'No convergence' in caplog.text


class TestValidation:
    """Test interval checks."""

    def test_reversed_interval(self):
        with pytest.raises(InvalidIntervalError):
            solve(lambda x: x, 1.0, 0.0)

    def test_empty_interval(self):
        with pytest.raises(InvalidIntervalError):
            solve(lambda x: x, 1.0, 1.0)

    def test_guess_outside(self):
        with pytest.raises(InvalidIntervalError):
            solve(lambda x: x, 0.0, 1.0, guess=2.0)
        with pytest.raises(InvalidIntervalError):
            solve(lambda x: x, 0.0, 1.0, guess=0.0)

    def test_infinite_bounds(self):
        with pytest.raises(InvalidIntervalError):
            solve(lambda x: x, 0.0, math.inf)

    def test_not_an_equation(self):
        with pytest.raises(InvalidArgumentError):
            EquationSolver(None)
        with pytest.raises(InvalidArgumentError):
            EquationSolver(42)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
