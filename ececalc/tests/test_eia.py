"""
Tests for E-series standard values.

Validates:
1. Series tables have the right sizes and are sorted
2. nearest_value() rounding and tie-break
3. snap_to_e_series() error percentage
4. Ordinal index and EIA-96 SMD helpers
5. EIAValue and check_standard_value()
"""

import math

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.eia import (
    E6_VALUES,
    E12_VALUES,
    E24_VALUES,
    E48_VALUES,
    E96_VALUES,
    EIAValue,
    ESeries,
    check_standard_value,
    e96_smd_code,
    is_standard_value,
    letter_to_multiplier,
    nearest_value,
    ordinal_count,
    ordinal_value,
    ordinal_values,
    resolve_series,
    series_for_tolerance,
    series_tolerance,
    series_values,
    snap_to_e_series,
)
from ececalc.errors import InvalidArgumentError
from ececalc.values import EngineeringValue


class TestTables:
    """Test series tables."""

    def test_sizes(self):
        assert len(E6_VALUES) == 6
        assert len(E12_VALUES) == 12
        assert len(E24_VALUES) == 24
        assert len(E48_VALUES) == 48
        assert len(E96_VALUES) == 96

    def test_sorted_three_digit(self):
        for table in (E6_VALUES, E12_VALUES, E24_VALUES, E48_VALUES, E96_VALUES):
            assert table == sorted(table)
            assert table[0] == 100
            assert table[-1] < 1000

    def test_resolve_by_name(self):
        assert resolve_series('e24') is ESeries.E24
        assert resolve_series(ESeries.E96) is ESeries.E96

    def test_resolve_unknown(self):
        with pytest.raises(InvalidArgumentError):
            resolve_series('E7')

    def test_tolerances(self):
        assert series_tolerance('E24') == 0.05
        assert series_tolerance(ESeries.E96) == 0.01
        assert series_for_tolerance(0.01) is ESeries.E96
        assert series_for_tolerance(0.05) is ESeries.E24
        assert series_for_tolerance(0.2) is ESeries.E6


class TestNearestValue:
    """Test nearest_value()."""

    def test_rounds_to_neighbour(self):
        assert nearest_value(473.0, 'E24') == pytest.approx(470.0)
        assert nearest_value(930.0, 'E24') == pytest.approx(910.0)

    def test_exact_member(self):
        assert nearest_value(4700.0, 'E24') == 4700.0
        assert nearest_value(0.47, 'E24') == 0.47

    def test_tie_goes_up(self):
        """105 is equally far from 100 and 110."""
        assert nearest_value(105.0, 'E24') == pytest.approx(110.0)

    def test_wraps_to_next_decade(self):
        assert nearest_value(960.0, 'E24') == pytest.approx(1000.0)

    def test_three_digit_rounding(self):
        assert nearest_value(99.96, 'E24') == pytest.approx(100.0)

    def test_non_positive_unchanged(self):
        assert nearest_value(0.0) == 0.0
        assert nearest_value(-10.0) == -10.0
        assert math.isinf(nearest_value(math.inf))

    def test_every_table_value_is_standard(self):
        for series in ESeries:
            for exponent in (-2, 0, 3):
                for significand in series_values(series):
                    assert is_standard_value(significand * 10.0 ** exponent, series)

    def test_is_standard(self):
        assert is_standard_value(4700.0, 'E24')
        assert is_standard_value(4.7e-9, 'E12')
        assert not is_standard_value(4750.0, 'E24')
        assert is_standard_value(4750.0, 'E48') is False
        assert is_standard_value(4750.0, 'E96')


class TestSnap:
    """Test snap_to_e_series()."""

    def test_e24(self):
        snapped, error = snap_to_e_series(5000.0, ESeries.E24)
        assert snapped == pytest.approx(5100.0)
        assert error == pytest.approx(2.0)

    def test_e12(self):
        snapped, error = snap_to_e_series(5000.0, ESeries.E12)
        assert snapped == pytest.approx(4700.0)
        assert error == pytest.approx(-6.0)

    def test_e96(self):
        snapped, _ = snap_to_e_series(5000.0, ESeries.E96)
        assert snapped == pytest.approx(4990.0)

    def test_capacitor_range(self):
        snapped, _ = snap_to_e_series(95e-9, ESeries.E12)
        assert snapped == pytest.approx(100e-9)

    def test_non_positive(self):
        with pytest.raises(InvalidArgumentError):
            snap_to_e_series(0.0)
        with pytest.raises(InvalidArgumentError):
            snap_to_e_series(-47.0)


class TestOrdinal:
    """Test ordinal index helpers."""

    def test_count(self):
        assert ordinal_count('E24') == 8 * 24 + 1

    def test_values_array(self):
        values = ordinal_values('E24')
        assert isinstance(values, np.ndarray)
        assert len(values) == ordinal_count('E24')
        assert values[0] == 0.0
        assert values[1] == pytest.approx(0.1)
        assert values[-1] == pytest.approx(9.1e6)
        assert np.all(np.diff(values) > 0)

    def test_array_matches_scalar(self):
        values = ordinal_values('E12')
        for index in (0, 1, 13, 50, len(values) - 1):
            assert values[index] == pytest.approx(ordinal_value(index, 'E12'))


class TestSmdHelpers:
    """Test EIA-96 SMD lookups."""

    def test_code_bounds(self):
        assert e96_smd_code(1) == 100
        assert e96_smd_code(96) == 976
        assert e96_smd_code(0) == 0
        assert e96_smd_code(97) == 0

    def test_multiplier_letters(self):
        assert letter_to_multiplier('C') == 100.0
        assert letter_to_multiplier('x') == 0.1
        assert letter_to_multiplier('Q') == 0.0


class TestEIAValue:
    """Test EIAValue and check_standard_value()."""

    def test_defaults_to_series_tolerance(self):
        v = EIAValue(4700.0, 'E24')
        assert v.tolerance == 0.05
        assert v.units == 'Ω'
        assert str(v) == '4.70 kΩ ±5%'

    def test_new_value_keeps_series(self):
        v = EIAValue(4700.0, 'E96').new_value(1000.0)
        assert isinstance(v, EIAValue)
        assert v.series is ESeries.E96

    def test_equality_requires_same_type(self):
        assert EIAValue(470.0, 'E24') == EIAValue(470.0, 'E96')
        assert EIAValue(470.0, 'E24') != EngineeringValue(470.0, units='Ω')
        assert EngineeringValue(470.0, units='Ω') != EIAValue(470.0, 'E24')

    def test_nearest(self):
        v = EIAValue(473.0, 'E24').nearest()
        assert v.value == pytest.approx(470.0)
        assert v.series is ESeries.E24

    def test_standard_message(self):
        result = check_standard_value(EIAValue(470.0, 'E24'))
        assert result.is_standard
        assert result.message == 'Standard 5% value'

    def test_nonstandard_message(self):
        result = check_standard_value(EIAValue(473.0, 'E24'))
        assert not result.is_standard
        assert result.nearest == pytest.approx(470.0)
        assert result.message == 'Nearest 5% value is 470 Ω [-0.6%]'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
