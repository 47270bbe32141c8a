"""
Tests for network relations.

Validates:
1. Wye-delta transforms, including complex impedances
2. Ohm's law with IEEE division semantics
3. Reactance with angular frequency and signed capacitive reactance
4. Series RC/RL impedance
"""

import math

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.complex_value import ComplexValue
from ececalc.errors import DivisionByZeroError, InvalidArgumentError
from ececalc.networks import (
    capacitance_for_reactance,
    capacitive_reactance,
    capacitor_frequency,
    delta_to_wye,
    inductance_for_reactance,
    inductive_reactance,
    inductor_frequency,
    ohms_law,
    rc_impedance,
    rl_impedance,
    wye_to_delta,
)


class TestWyeDelta:
    """Test delta-wye transforms."""

    def test_balanced(self):
        ra, rb, rc = wye_to_delta(10.0, 10.0, 10.0)
        for r in (ra, rb, rc):
            assert r.magnitude == pytest.approx(30.0)
        r1, r2, r3 = delta_to_wye(30.0, 30.0, 30.0)
        for r in (r1, r2, r3):
            assert r.magnitude == pytest.approx(10.0)

    def test_unbalanced_round_trip(self):
        wye = (10.0, 20.0, 30.0)
        back = delta_to_wye(*wye_to_delta(*wye))
        for original, result in zip(wye, back):
            assert result.magnitude == pytest.approx(original)

    def test_complex_round_trip(self):
        wye = (ComplexValue(10.0, 45.0), ComplexValue(20.0, 300.0), complex(5.0, 5.0))
        back = delta_to_wye(*wye_to_delta(*wye))
        for original, result in zip(wye, back):
            assert result.real == pytest.approx(original.real, abs=1e-9)
            assert result.imaginary == pytest.approx(original.imag if isinstance(
                original, complex) else original.imaginary, abs=1e-9)

    def test_zero_branch(self):
        with pytest.raises(DivisionByZeroError):
            wye_to_delta(0.0, 10.0, 10.0)

    def test_not_an_impedance(self):
        with pytest.raises(InvalidArgumentError):
            wye_to_delta('10', 10.0, 10.0)


class TestOhmsLaw:
    """Test ohms_law()."""

    def test_current(self):
        result = ohms_law(voltage=10.0, resistance=5.0)
        assert result.current == 2.0
        assert result.power == 20.0

    def test_voltage(self):
        result = ohms_law(current=2.0, resistance=5.0)
        assert result.voltage == 10.0
        assert result.power == 20.0

    def test_resistance(self):
        result = ohms_law(voltage=10.0, current=2.0)
        assert result.resistance == 5.0
        assert result.power_is_defined

    def test_open_circuit(self):
        result = ohms_law(voltage=10.0, current=0.0)
        assert math.isinf(result.resistance)
        assert not result.power_is_defined

    def test_short_circuit(self):
        result = ohms_law(voltage=10.0, resistance=0.0)
        assert math.isinf(result.current)
        assert not result.power_is_defined

    def test_needs_two(self):
        with pytest.raises(InvalidArgumentError):
            ohms_law(voltage=1.0)
        with pytest.raises(InvalidArgumentError):
            ohms_law(voltage=1.0, current=1.0, resistance=1.0)


class TestReactance:
    """Test reactance formulas."""

    def test_capacitive(self):
        assert capacitive_reactance(1e-6, 1000.0) == pytest.approx(-159.155, rel=1e-5)

    def test_inductive(self):
        assert inductive_reactance(1e-3, 1000.0) == pytest.approx(6.28319, rel=1e-5)

    def test_inverses(self):
        x_c = capacitive_reactance(1e-6, 1000.0)
        assert capacitance_for_reactance(x_c, 1000.0) == pytest.approx(1e-6)
        assert capacitor_frequency(x_c, 1e-6) == pytest.approx(1000.0)
        x_l = inductive_reactance(1e-3, 1000.0)
        assert inductance_for_reactance(x_l, 1000.0) == pytest.approx(1e-3)
        assert inductor_frequency(x_l, 1e-3) == pytest.approx(1000.0)

    def test_zero_capacitance(self):
        assert capacitive_reactance(0.0, 1000.0) == -math.inf

    def test_bad_frequency(self):
        with pytest.raises(InvalidArgumentError):
            capacitive_reactance(1e-6, 0.0)
        with pytest.raises(InvalidArgumentError):
            inductive_reactance(1e-3, math.inf)


class TestImpedance:
    """Test series RC and RL impedance."""

    def test_rc(self):
        z = rc_impedance(100.0, 1e-6, 1000.0)
        assert z.magnitude == pytest.approx(187.96, rel=1e-4)
        assert z.angle == pytest.approx(360.0 - 57.86, abs=0.01)
        assert z.units == 'Ω'

    def test_pure_inductor(self):
        z = rl_impedance(0.0, 1e-3, 1000.0)
        assert z.angle == pytest.approx(90.0)
        assert z.real == 0.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
