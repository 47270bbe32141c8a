"""
Byte-level conversions for 1 to 8 byte words.

A word is held as its raw memory bytes read most significant first. The
binary, octal, hex and text views show those bytes as stored. The decimal
and floating-point views interpret them in the word's byte order:

    raw 0x0000803F, 4 bytes, little-endian  →  value 0x3F800000  →  1.0

Floating-point views use IEEE-754 half, single or double precision for
2, 4 and 8 byte words.
"""

import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ececalc.errors import InvalidArgumentError

MIN_BYTES = 1
MAX_BYTES = 8

RADIX_NAMES = {2: 'binary', 8: 'octal', 10: 'decimal', 16: 'hex'}
_RADIX_FORMAT = {2: 'b', 8: 'o', 10: 'd', 16: 'X'}

# Code page with a printable glyph in most of 0x80..0x9F
TEXT_ENCODING = 'cp1252'

_FLOAT_TYPES = {
    2: (np.float16, np.uint16),
    4: (np.float32, np.uint32),
    8: (np.float64, np.uint64),
}


def _check_width(width) -> int:
    if not isinstance(width, numbers.Integral) or not MIN_BYTES <= width <= MAX_BYTES:
        raise InvalidArgumentError(f'byte width must be {MIN_BYTES}..{MAX_BYTES}, got {width}')
    return int(width)


def _check_radix(radix) -> int:
    if radix not in _RADIX_FORMAT:
        raise InvalidArgumentError(f'radix must be one of {sorted(_RADIX_FORMAT)}, got {radix}')
    return radix


def _float_types(width: int):
    try:
        return _FLOAT_TYPES[width]
    except KeyError:
        raise InvalidArgumentError(f'no IEEE-754 format is {width} bytes wide') from None


def mask(value: int, width: int) -> int:
    """Keep the low ``width`` bytes of ``value`` as an unsigned integer."""
    return value & ((1 << (8 * _check_width(width))) - 1)


def reverse_bytes(value: int, width: int) -> int:
    """
    Swap the byte order of the low ``width`` bytes of ``value``.

    Higher bytes are dropped, so the result is unsigned:
        reverse_bytes(0x12345678, 4) → 0x78563412
        reverse_bytes(0x123456, 2)   → 0x5634
    """
    width = _check_width(width)
    result = 0
    for _ in range(width):
        result = (result << 8) | (value & 0xFF)
        value >>= 8
    return result


def sign_extend(value: int, width: int) -> int:
    """
    Read the low ``width`` bytes of ``value`` as a two's complement integer.

    Bit ``8 * width - 1`` is the sign; anything above the word is discarded.
    """
    bits = 8 * _check_width(width)
    value = value & ((1 << bits) - 1)
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def to_radix(value: int, radix: int, width: int = MAX_BYTES) -> str:
    """Render the low ``width`` bytes of ``value`` unsigned in base 2, 8, 10 or 16."""
    return format(mask(value, width), _RADIX_FORMAT[_check_radix(radix)])


def from_radix(text: str, radix: int, width: int = MAX_BYTES) -> int:
    """
    Parse an integer in base 2, 8, 10 or 16 and keep its low ``width`` bytes.

    Negative entries wrap to their two's complement pattern.

    Raises:
        InvalidArgumentError: if ``text`` is not a number in ``radix``.
    """
    radix = _check_radix(radix)
    try:
        value = int(text.strip(), radix)
    except (AttributeError, ValueError):
        raise InvalidArgumentError(f'not a {RADIX_NAMES[radix]} number: {text!r}') from None
    return mask(value, width)


def float_to_bits(value: float, width: int = 4, big_endian: bool = True) -> int:
    """
    Raw IEEE-754 bit pattern of ``value`` in a 2, 4 or 8 byte word.

    Values beyond the format's range become infinities. Little-endian words
    come back byte-swapped, as they would sit in memory.
    """
    width = _check_width(width)
    float_type, int_type = _float_types(width)
    with np.errstate(over='ignore'):
        bits = int(np.array([value], dtype=float_type).view(int_type)[0])
    return bits if big_endian else reverse_bytes(bits, width)


def _float_scalar(bits: int, width: int, big_endian: bool):
    float_type, int_type = _float_types(width)
    bits = mask(bits, width)
    if not big_endian:
        bits = reverse_bytes(bits, width)
    return np.array([bits], dtype=int_type).view(float_type)[0]


def bits_to_float(bits: int, width: int = 4, big_endian: bool = True) -> float:
    """Inverse of float_to_bits()."""
    return float(_float_scalar(bits, _check_width(width), big_endian))


def text_to_bytes(text: str, width: int = MAX_BYTES) -> int:
    """
    Pack the first ``width`` characters of ``text`` into an integer, first
    character most significant. Unencodable characters become '?'.
    """
    data = text.encode(TEXT_ENCODING, errors='replace')[:_check_width(width)]
    return int.from_bytes(data, 'big')


def bytes_to_text(value: int, width: int = MAX_BYTES) -> str:
    data = mask(value, width).to_bytes(width, 'big')
    return data.decode(TEXT_ENCODING, errors='replace')


@dataclass(frozen=True)
class ByteWord:
    """
    A word of ``width`` bytes with a byte order and a signedness flag.

    ``raw`` is masked to the width on construction.
    """
    raw: int
    width: int = 4
    big_endian: bool = True
    signed: bool = False

    def __post_init__(self):
        if not isinstance(self.raw, numbers.Integral):
            raise InvalidArgumentError(f'raw word must be an integer, got {self.raw!r}')
        object.__setattr__(self, 'raw', mask(int(self.raw), self.width))

    @classmethod
    def from_radix(cls, text: str, radix: int, width: int = 4, big_endian: bool = True,
                   signed: bool = False) -> 'ByteWord':
        """
        Build a word from typed digits.

        Decimal entry is a number and is stored in the word's byte order;
        binary, octal and hex entry give the raw bytes directly.
        """
        value = from_radix(text, radix, width)
        if radix == 10 and not big_endian:
            value = reverse_bytes(value, width)
        return cls(value, width, big_endian, signed)

    @classmethod
    def from_float(cls, value: float, width: int = 4, big_endian: bool = True,
                   signed: bool = False) -> 'ByteWord':
        return cls(float_to_bits(value, width, big_endian), width, big_endian, signed)

    @classmethod
    def from_text(cls, text: str, width: int = 4, big_endian: bool = True,
                  signed: bool = False) -> 'ByteWord':
        return cls(text_to_bytes(text, width), width, big_endian, signed)

    @property
    def value(self) -> int:
        """Unsigned integer value in the word's byte order."""
        return self.raw if self.big_endian else reverse_bytes(self.raw, self.width)

    @property
    def decimal(self) -> int:
        return sign_extend(self.value, self.width) if self.signed else self.value

    @property
    def has_float(self) -> bool:
        return self.width in _FLOAT_TYPES

    def to_float(self) -> Optional[float]:
        """IEEE-754 reading of the word, or None for widths without a format."""
        if not self.has_float:
            return None
        return bits_to_float(self.raw, self.width, self.big_endian)

    def to_radix(self, radix: int) -> str:
        if radix == 10:
            return str(self.decimal)
        return to_radix(self.raw, radix, self.width)

    def to_text(self) -> str:
        return bytes_to_text(self.raw, self.width)

    def views(self) -> dict:
        """
        Every rendering of the word.

        Returns:
            Dict with 'binary', 'octal', 'decimal', 'hex', 'float' and
            'text'; 'float' is None when the width has no IEEE-754 format.
        """
        result = {name: self.to_radix(radix) for radix, name in RADIX_NAMES.items()}
        if self.has_float:
            result['float'] = str(_float_scalar(self.raw, self.width, self.big_endian))
        else:
            result['float'] = None
        result['text'] = self.to_text()
        return result
