"""
Tests for phasor values.

Validates:
1. Angle normalization and negative magnitudes
2. Rectangular projections without trigonometric noise
3. Polar and rectangular arithmetic
4. Mixing real and complex operands
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.complex_value import ComplexValue
from ececalc.errors import DivisionByZeroError, InvalidArgumentError
from ececalc.values import EngineeringValue


class TestConstruction:
    """Test ComplexValue construction."""

    def test_right_angle_projection(self):
        """1∠90° has an exactly zero real part."""
        c = ComplexValue(1.0, 90.0)
        assert c.real == 0.0
        assert c.imaginary == 1.0

    def test_negative_magnitude_rotates(self):
        c = ComplexValue(-2.0, 0.0)
        assert c.magnitude == 2.0
        assert c.angle == 180.0
        assert c.real == -2.0

    def test_angle_normalized(self):
        assert ComplexValue(1.0, -90.0).angle == 270.0
        assert ComplexValue(1.0, 450.0).angle == 90.0
        assert ComplexValue(1.0, 360.0).angle == 0.0

    def test_from_rectangular(self):
        c = ComplexValue.from_rectangular(3.0, 4.0)
        assert c.magnitude == pytest.approx(5.0)
        assert c.angle == pytest.approx(53.130102354)

    def test_from_value(self):
        c = ComplexValue.from_value(EngineeringValue(-5.0, 0.05, 4, 'V'))
        assert c.magnitude == 5.0
        assert c.angle == 180.0
        assert c.units == 'V'
        assert c.tolerance == 0.05
        assert c.sigfigs == 4

    def test_non_finite_angle(self):
        with pytest.raises(InvalidArgumentError):
            ComplexValue(1.0, math.inf)
        with pytest.raises(InvalidArgumentError):
            ComplexValue(1.0, math.nan)

    def test_nan_magnitude(self):
        with pytest.raises(InvalidArgumentError):
            ComplexValue(math.nan, 0.0)

    def test_to_complex(self):
        assert complex(ComplexValue(2.0, 90.0)) == complex(0.0, 2.0)


class TestArithmetic:
    """Test ComplexValue arithmetic."""

    def test_multiply_polar(self):
        result = ComplexValue(2.0, 30.0).multiply(ComplexValue(3.0, 60.0))
        assert result.magnitude == pytest.approx(6.0)
        assert result.angle == pytest.approx(90.0)

    def test_divide_polar(self):
        result = ComplexValue(6.0, 90.0) / ComplexValue(3.0, 60.0)
        assert result.magnitude == pytest.approx(2.0)
        assert result.angle == pytest.approx(30.0)

    def test_multiply_by_conjugate_angle(self):
        """m∠a times 1∠-a lands on the real axis."""
        for angle in (0.0, 30.0, 135.0, 270.0, 359.5):
            result = ComplexValue(4.0, angle) * ComplexValue(1.0, -angle)
            assert result.magnitude == pytest.approx(4.0)
            assert result.imaginary == pytest.approx(0.0, abs=1e-9)
            assert result.real == pytest.approx(4.0)

    def test_divide_by_zero_magnitude(self):
        with pytest.raises(DivisionByZeroError):
            ComplexValue(1.0, 0.0).divide(ComplexValue(0.0, 45.0))

    def test_add_rectangular(self):
        result = ComplexValue.from_rectangular(3.0, 4.0) + ComplexValue.from_rectangular(1.0, -1.0)
        assert result.real == pytest.approx(4.0)
        assert result.imaginary == pytest.approx(3.0)
        assert result.magnitude == pytest.approx(5.0)

    def test_subtract_to_zero(self):
        c = ComplexValue(3.0, 45.0)
        assert (c - c).magnitude == 0.0

    def test_add_python_complex(self):
        result = ComplexValue(0.0) + complex(1.0, 1.0)
        assert result.magnitude == pytest.approx(math.sqrt(2.0))
        assert result.angle == pytest.approx(45.0)

    def test_real_promotes_to_complex(self):
        result = EngineeringValue(3.0, units='Ω').add(ComplexValue.from_rectangular(0.0, 4.0))
        assert result.is_complex
        assert result.magnitude == pytest.approx(5.0)
        assert result.units == 'Ω'

    def test_pow(self):
        result = ComplexValue(2.0, 45.0).pow(2)
        assert result.magnitude == pytest.approx(4.0)
        assert result.angle == pytest.approx(90.0)

    def test_pow_negative(self):
        result = ComplexValue(2.0, 45.0) ** -1
        assert result.magnitude == pytest.approx(0.5)
        assert result.angle == pytest.approx(315.0)

    def test_pow_zero(self):
        result = ComplexValue(7.0, 123.0).pow(0)
        assert result.magnitude == 1.0
        assert result.angle == 0.0

    def test_negate(self):
        result = -ComplexValue(1.0, 30.0)
        assert result.magnitude == 1.0
        assert result.angle == pytest.approx(210.0)


class TestIdentity:
    """Test equality and formatting."""

    def test_equality_includes_angle(self):
        assert ComplexValue(1.0, 30.0) == ComplexValue(1.0, 30.0)
        assert ComplexValue(1.0, 30.0) != ComplexValue(1.0, 60.0)

    def test_complex_never_equals_real(self):
        assert ComplexValue(1.0, 0.0) != EngineeringValue(1.0)
        assert EngineeringValue(1.0) != ComplexValue(1.0, 0.0)

    def test_str(self):
        assert str(ComplexValue(100.0, 45.0, units='Ω')) == '100 Ω @ 45.0°'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
