"""
Resistor marking decoders.

SMD codes:
    3 characters: '472' = 47 × 10² Ω (E24), '4R7' = 4.7 Ω (E24),
                  '01C' = EIA-96 code 01 (100) × 100 = 10 kΩ (E96)
    4 characters: '4701' = 470 × 10¹ Ω (E96), '33R0' = 33.0 Ω (E96)
    An underlined code is a sub-ohm value: underlined '47' = 'R47' = 0.47 Ω.

Color bands (IEC 60062): 3 bands (2 digits, multiplier, 20%), 4 bands
(2 digits, multiplier, tolerance) or 5 bands (3 digits, multiplier,
tolerance). The series of the result follows the tolerance band.
"""

import enum
from typing import List, Sequence, Union

from ececalc.eia import EIAValue, ESeries, e96_smd_code, letter_to_multiplier, series_for_tolerance
from ececalc.errors import InvalidArgumentError
from ececalc.units import TOL_10P, TOL_1P, TOL_20P, TOL_2P, TOL_5P, TOL_P1


def _r_value(code: str) -> float:
    # 'R' marks the decimal point and must appear once
    if code.count('R') != 1 or not code.replace('R', '').isdigit():
        raise InvalidArgumentError(f'invalid resistor code {code!r}')
    return float(code.replace('R', '.'))


def _power_of_ten(digit: str) -> float:
    # Multiplier digits 8 and 9 are not used on SMD parts
    if not digit.isdigit() or digit >= '8':
        return 0.0
    return 10.0 ** int(digit)


def parse_3_char_code(code: str) -> EIAValue:
    """Decode a 3-character SMD code ('472', '4R7' or EIA-96 '01C')."""
    code = code.strip().upper()
    if len(code) != 3 or not code.isascii():
        raise InvalidArgumentError(f'not a 3-character code: {code!r}')
    if 'R' in code:
        return EIAValue(_r_value(code), ESeries.E24)
    prefix = code[:2]
    if not prefix.isdigit():
        raise InvalidArgumentError(f'invalid resistor code {code!r}')
    multiplier = _power_of_ten(code[2])
    if multiplier > 0.0:
        return EIAValue(int(prefix) * multiplier, ESeries.E24)
    value = e96_smd_code(int(prefix)) * letter_to_multiplier(code[2])
    if value == 0.0:
        raise InvalidArgumentError(f'invalid EIA-96 code {code!r}')
    return EIAValue(value, ESeries.E96)


def parse_4_char_code(code: str) -> EIAValue:
    """Decode a 4-character (1%) SMD code ('4701' or '33R0')."""
    code = code.strip().upper()
    if len(code) != 4 or not code.isascii():
        raise InvalidArgumentError(f'not a 4-character code: {code!r}')
    if 'R' in code:
        return EIAValue(_r_value(code), ESeries.E96)
    prefix = code[:3]
    multiplier = _power_of_ten(code[3])
    if not prefix.isdigit() or multiplier == 0.0:
        raise InvalidArgumentError(f'invalid resistor code {code!r}')
    return EIAValue(int(prefix) * multiplier, ESeries.E96)


def parse_smd_code(code: str, underlined: bool = False) -> EIAValue:
    """
    Decode an SMD resistor marking.

    Args:
        code: the printed code
        underlined: True if the marking is underlined (sub-ohm value)

    Raises:
        InvalidArgumentError: if the code is not a valid 3 or 4 character code
    """
    if code is None:
        raise InvalidArgumentError('no code given')
    code = code.strip().upper()
    if underlined:
        code = 'R' + code
    if len(code) == 3:
        return parse_3_char_code(code)
    if len(code) == 4:
        return parse_4_char_code(code)
    raise InvalidArgumentError(f'resistor codes have 3 or 4 characters, got {code!r}')


class BandColor(enum.IntEnum):
    BLACK = 0
    BROWN = 1
    RED = 2
    ORANGE = 3
    YELLOW = 4
    GREEN = 5
    BLUE = 6
    VIOLET = 7
    GRAY = 8
    WHITE = 9
    NONE = 10
    GOLD = 11
    SILVER = 12


# Powers of ten; no multiplier for an empty band
MULTIPLIER_EXPONENT = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, None, -1, -2]

TOLERANCE = [
    0.0, TOL_1P, TOL_2P, 0.0, 0.0, 0.005, 0.0025, TOL_P1, 0.0005,
    0.0, TOL_20P, TOL_5P, TOL_10P,
]

_COLOR_ALIASES = {'GREY': BandColor.GRAY, 'PURPLE': BandColor.VIOLET}

BandLike = Union[BandColor, str, int]


def band_color(band: BandLike) -> BandColor:
    """Accept a BandColor, its index (0 = black ... 12 = silver) or its name."""
    if isinstance(band, BandColor):
        return band
    if isinstance(band, str):
        name = band.strip().upper()
        if name in _COLOR_ALIASES:
            return _COLOR_ALIASES[name]
        try:
            return BandColor[name]
        except KeyError:
            raise InvalidArgumentError(f'unknown band color {band!r}')
    try:
        return BandColor(band)
    except ValueError:
        raise InvalidArgumentError(f'band index must be 0..12, got {band!r}')


def _digit(band: BandColor) -> int:
    if band > BandColor.WHITE:
        raise InvalidArgumentError(f'{band.name.lower()} is not a digit band')
    return int(band)


def decode_color_bands(bands: Sequence[BandLike]) -> EIAValue:
    """
    Decode a resistor color code.

    Examples:
        ['yellow', 'violet', 'red', 'gold']           → 4.70 kΩ ±5% (E24)
        ['brown', 'black', 'black', 'red', 'brown']   → 10.0 kΩ ±1% (E96)

    Raises:
        InvalidArgumentError: on a band count other than 3..5 or a color
            that cannot appear in its position
    """
    colors: List[BandColor] = [band_color(b) for b in bands]
    if not 3 <= len(colors) <= 5:
        raise InvalidArgumentError(f'resistors have 3, 4 or 5 bands, got {len(colors)}')
    if len(colors) == 3:
        colors.append(BandColor.NONE)
    *digits, multiplier, tolerance_band = colors
    value = 0
    for band in digits:
        value = value * 10 + _digit(band)
    exponent = MULTIPLIER_EXPONENT[multiplier]
    if exponent is None:
        raise InvalidArgumentError('the multiplier band cannot be empty')
    resistance = value * 10.0 ** exponent if exponent >= 0 else value / 10.0 ** -exponent
    tolerance = TOLERANCE[tolerance_band]
    return EIAValue(resistance, series_for_tolerance(tolerance), tolerance)
