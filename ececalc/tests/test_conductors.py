"""
Tests for wire and trace current capacity.

Validates:
1. AWG gauge/diameter conversions
2. NEC ampacity table lookups
3. IPC-2221 trace width and range warnings
4. Conductor resistance, power loss and voltage drop
"""

import logging

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.conductors import (
    Material,
    conductor_loss,
    ipc2221_trace_width,
    nec_ampacity,
    nec_diameter,
    ohms_per_meter,
    radius_from_gauge,
    wire_from_current,
    wire_from_diameter,
    wire_from_gauge,
)
from ececalc.errors import InvalidArgumentError


class TestAWG:
    """Test AWG conversions."""

    def test_36_awg(self):
        assert radius_from_gauge(36) == pytest.approx(0.0635)
        assert wire_from_gauge(36).diameter == pytest.approx(0.127)

    def test_0_awg(self):
        assert wire_from_gauge(0).diameter == pytest.approx(8.251, rel=1e-3)

    def test_10_awg(self):
        wire = wire_from_gauge(10)
        assert wire.diameter == pytest.approx(2.588, rel=1e-3)
        assert wire.area == pytest.approx(5.26, rel=1e-2)

    def test_gauge_from_diameter(self):
        """A diameter between gauges maps to the next thinner whole gauge."""
        assert wire_from_diameter(2.6).gauge == 10

    def test_wire_from_current(self):
        wire = wire_from_current(10.0)
        assert wire.area == pytest.approx(2.5335)
        assert wire.gauge == 14

    def test_non_positive(self):
        with pytest.raises(InvalidArgumentError):
            wire_from_diameter(0.0)
        with pytest.raises(InvalidArgumentError):
            wire_from_current(-1.0)


class TestNEC:
    """Test NEC chassis-wiring table."""

    def test_ampacity(self):
        assert nec_ampacity(-3) == 380.0
        assert nec_ampacity(10) == 55.0
        assert nec_ampacity(40) == 0.09

    def test_diameter(self):
        assert nec_diameter(10) == 2.59

    def test_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            nec_ampacity(41)
        with pytest.raises(InvalidArgumentError):
            nec_ampacity(-4)

    def test_fractional_gauge(self):
        with pytest.raises(InvalidArgumentError):
            nec_ampacity(2.5)


class TestIPC2221:
    """Test IPC-2221 trace width."""

    def test_one_amp(self):
        result = ipc2221_trace_width(1.0, 10.0, 0.035)
        assert result.width == pytest.approx(0.3004, rel=1e-2)
        assert result.in_range
        assert result.warnings == []

    def test_more_current_is_wider(self):
        assert ipc2221_trace_width(2.0, 10.0, 0.035).width > \
            ipc2221_trace_width(1.0, 10.0, 0.035).width

    def test_aluminum_scales_with_resistivity(self):
        copper = ipc2221_trace_width(1.0, 10.0, 0.035).width
        aluminum = ipc2221_trace_width(1.0, 10.0, 0.035, 'aluminum').width
        ratio = Material.ALUMINUM.resistivity / Material.COPPER.resistivity
        assert aluminum == pytest.approx(copper * ratio)

    def test_out_of_range_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger='ececalc.conductors'):
            result = ipc2221_trace_width(40.0, 10.0, 0.035)
        assert not result.in_range
        assert any('current' in w for w in result.warnings)
        assert 'outside fitted range' in caplog.text

    def test_unknown_material(self):
        with pytest.raises(InvalidArgumentError):
            ipc2221_trace_width(1.0, 10.0, 0.035, 'unobtainium')


class TestConductorLoss:
    """Test conductor_loss()."""

    def test_one_square_mm(self):
        assert ohms_per_meter(1.0) == pytest.approx(0.0168)
        loss = conductor_loss(1.0, 1.0, 1.0)
        assert loss.resistance.value == pytest.approx(0.0168)
        assert loss.voltage_drop.value == pytest.approx(0.0168)
        assert loss.power.value == pytest.approx(0.0168)
        assert str(loss.resistance) == '16.8 mΩ'

    def test_power_scales_with_square_of_current(self):
        loss = conductor_loss(2.0, 1.0, 1.0)
        assert loss.power.value == pytest.approx(4 * 0.0168)

    def test_negative_length(self):
        with pytest.raises(InvalidArgumentError):
            conductor_loss(1.0, -1.0, 1.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
