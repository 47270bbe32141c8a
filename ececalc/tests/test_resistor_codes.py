"""
Tests for resistor marking decoders.

Validates:
1. 3-character SMD codes (digits, R notation, EIA-96)
2. 4-character SMD codes
3. Underlined sub-ohm codes
4. Color band decoding, including 3-band and 5-band parts
5. Invalid markings raise
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from ececalc.eia import ESeries
from ececalc.errors import InvalidArgumentError
from ececalc.resistor_codes import BandColor, band_color, decode_color_bands, parse_smd_code


class TestSmdCodes:
    """Test parse_smd_code()."""

    def test_three_digit(self):
        v = parse_smd_code('472')
        assert v.value == 4700.0
        assert v.series is ESeries.E24
        assert v.tolerance == 0.05

    def test_r_notation(self):
        assert parse_smd_code('4R7').value == 4.7
        assert parse_smd_code('r47').value == 0.47

    def test_eia96(self):
        v = parse_smd_code('01C')
        assert v.value == pytest.approx(10000.0)
        assert v.series is ESeries.E96
        assert parse_smd_code('68X').value == pytest.approx(49.9)

    def test_four_digit(self):
        v = parse_smd_code('4701')
        assert v.value == 4700.0
        assert v.series is ESeries.E96
        assert v.tolerance == 0.01

    def test_four_char_r_notation(self):
        v = parse_smd_code('33R0')
        assert v.value == 33.0
        assert v.series is ESeries.E96

    def test_underlined(self):
        assert parse_smd_code('47', underlined=True).value == 0.47

    def test_invalid(self):
        for code in ('4R7R', '12345', '99Z', '478', 'ABC', '12'):
            with pytest.raises(InvalidArgumentError):
                parse_smd_code(code)

    def test_none(self):
        with pytest.raises(InvalidArgumentError):
            parse_smd_code(None)


class TestColorBands:
    """Test decode_color_bands()."""

    def test_four_band(self):
        v = decode_color_bands(['yellow', 'violet', 'red', 'gold'])
        assert v.value == 4700.0
        assert v.tolerance == 0.05
        assert v.series is ESeries.E24
        assert str(v) == '4.70 kΩ ±5%'

    def test_five_band(self):
        v = decode_color_bands(['brown', 'black', 'black', 'red', 'brown'])
        assert v.value == 10000.0
        assert v.tolerance == 0.01
        assert v.series is ESeries.E96

    def test_three_band(self):
        v = decode_color_bands(['brown', 'black', 'red'])
        assert v.value == 1000.0
        assert v.tolerance == 0.2
        assert v.series is ESeries.E6

    def test_fractional_multiplier(self):
        assert decode_color_bands(['yellow', 'violet', 'gold', 'gold']).value == 4.7
        assert decode_color_bands(['yellow', 'violet', 'silver', 'gold']).value == 0.47

    def test_indices_and_enums(self):
        assert decode_color_bands([4, 7, 2, 11]).value == 4700.0
        bands = [BandColor.YELLOW, BandColor.VIOLET, BandColor.RED, BandColor.GOLD]
        assert decode_color_bands(bands).value == 4700.0

    def test_aliases(self):
        assert band_color('grey') is BandColor.GRAY
        assert band_color('Purple') is BandColor.VIOLET

    def test_grey_multiplier(self):
        assert decode_color_bands(['brown', 'black', 'grey', 'gold']).value == 1e9

    def test_empty_multiplier(self):
        with pytest.raises(InvalidArgumentError):
            decode_color_bands(['red', 'red', 'none', 'gold'])

    def test_non_digit_band(self):
        with pytest.raises(InvalidArgumentError):
            decode_color_bands(['gold', 'black', 'red', 'gold'])

    def test_band_count(self):
        with pytest.raises(InvalidArgumentError):
            decode_color_bands(['red', 'red'])
        with pytest.raises(InvalidArgumentError):
            decode_color_bands(['red'] * 6)

    def test_unknown_color(self):
        with pytest.raises(InvalidArgumentError):
            band_color('pink')
        with pytest.raises(InvalidArgumentError):
            band_color(13)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
