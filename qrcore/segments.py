# -*- coding: utf-8 -*-
"""
QR Code Segments Module

Classifies input data and packs it into mode-tagged bit runs (segments).
A symbol's data bit stream is the concatenation of its segments, each one
prefixed with a 4-bit mode indicator and a character count field.

Functions:
    make_numeric: Digits only, 10/7/4 bits per group of 3/2/1 digits
    make_alphanumeric: 45-symbol charset, 11 bits per pair of characters
    make_bytes: Arbitrary binary data, 8 bits per byte
    make_kanji: Shift JIS double-byte characters, 13 bits each
    make_eci: Extended Channel Interpretation designator
    make_segments: Automatic single-mode selection for a text string
"""

import enum
import re
from dataclasses import dataclass
from typing import List, Union

from .bitbuffer import BitBuffer
from .constants import MIN_VERSION, MAX_VERSION


ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

_ALPHANUMERIC_INDEX = {ch: i for i, ch in enumerate(ALPHANUMERIC_CHARSET)}
_NUMERIC_RE = re.compile(r'[0-9]*')
_ALPHANUMERIC_RE = re.compile(r'[A-Z0-9 $%*+./:-]*')


class Mode(enum.Enum):
    """
    Segment mode: 4-bit mode indicator plus the character count field widths
    for versions 1-9, 10-26 and 27-40.
    """

    NUMERIC = (0x1, (10, 12, 14))
    ALPHANUMERIC = (0x2, (9, 11, 13))
    BYTE = (0x4, (8, 16, 16))
    KANJI = (0x8, (8, 10, 12))
    ECI = (0x7, (0, 0, 0))

    def __init__(self, mode_bits, char_count_bits):
        self.mode_bits = mode_bits
        self._char_count_bits = char_count_bits

    def num_char_count_bits(self, version: int) -> int:
        """Width of the character count field at ``version``, in [0, 16]."""
        if not MIN_VERSION <= version <= MAX_VERSION:
            raise ValueError(f"Version out of range: {version}")
        return self._char_count_bits[(version + 7) // 17]


@dataclass(frozen=True)
class Segment:
    """
    An immutable run of encoded data in a single mode.

    ``num_chars`` counts characters for numeric, alphanumeric and kanji mode,
    bytes for byte mode and is 0 for ECI. It is not the bit length. Whether it
    fits the character count field is only checked once a version is known.
    The bit buffer is copied on the way in, and ``data`` hands out copies, so
    a segment can never be changed through an alias.
    """

    mode: Mode
    num_chars: int
    _data: BitBuffer

    def __init__(self, mode: Mode, num_chars: int, data: BitBuffer):
        if num_chars < 0:
            raise ValueError(f"Character count must be non-negative: {num_chars}")
        object.__setattr__(self, 'mode', mode)
        object.__setattr__(self, 'num_chars', num_chars)
        object.__setattr__(self, '_data', data.copy())

    def __hash__(self):
        return hash((self.mode, self.num_chars, tuple(self._data)))

    @property
    def data(self) -> BitBuffer:
        return self._data.copy()

    @property
    def bit_length(self) -> int:
        return len(self._data)


def is_numeric(text: str) -> bool:
    return _NUMERIC_RE.fullmatch(text) is not None


def is_alphanumeric(text: str) -> bool:
    return _ALPHANUMERIC_RE.fullmatch(text) is not None


def is_kanji(text: str) -> bool:
    try:
        _kanji_values(text)
    except ValueError:
        return False
    return True


def make_numeric(digits: str) -> Segment:
    """
    Encode a string of decimal digits in numeric mode.

    Digits are taken in groups of three; a group of g digits is packed into
    g * 3 + 1 bits (10, 7 or 4).

    Raises:
        ValueError: If the string contains anything but ASCII digits
    """
    if not is_numeric(digits):
        raise ValueError("String contains non-numeric characters")
    bb = BitBuffer()
    for i in range(0, len(digits), 3):
        group = digits[i:i + 3]
        bb.append_bits(int(group), len(group) * 3 + 1)
    return Segment(Mode.NUMERIC, len(digits), bb)


def make_alphanumeric(text: str) -> Segment:
    """
    Encode text in alphanumeric mode (0-9, A-Z, space and $%*+-./:).

    Pairs are packed as ``45 * first + second`` into 11 bits, a trailing
    single character into 6 bits.

    Raises:
        ValueError: If the text contains characters outside the charset
    """
    if not is_alphanumeric(text):
        raise ValueError("String contains unencodable characters in alphanumeric mode")
    bb = BitBuffer()
    for i in range(0, len(text) - 1, 2):
        value = _ALPHANUMERIC_INDEX[text[i]] * 45 + _ALPHANUMERIC_INDEX[text[i + 1]]
        bb.append_bits(value, 11)
    if len(text) % 2 == 1:
        bb.append_bits(_ALPHANUMERIC_INDEX[text[-1]], 6)
    return Segment(Mode.ALPHANUMERIC, len(text), bb)


def make_bytes(data: Union[bytes, bytearray]) -> Segment:
    bb = BitBuffer()
    for b in data:
        bb.append_bits(b, 8)
    return Segment(Mode.BYTE, len(data), bb)


def _kanji_values(text: str) -> List[int]:
    values = []
    for ch in text:
        try:
            encoded = ch.encode('shift_jis')
        except UnicodeEncodeError:
            raise ValueError(f"Character {ch!r} cannot be encoded in kanji mode") from None
        if len(encoded) != 2:
            raise ValueError(f"Character {ch!r} is not a double-byte Shift JIS character")
        code = (encoded[0] << 8) | encoded[1]
        if 0x8140 <= code <= 0x9FFC:
            code -= 0x8140
        elif 0xE040 <= code <= 0xEBBF:
            code -= 0xC140
        else:
            raise ValueError(f"Character {ch!r} is outside the kanji mode ranges")
        values.append((code >> 8) * 0xC0 + (code & 0xFF))
    return values


def make_kanji(text: str) -> Segment:
    """
    Encode text in kanji mode, 13 bits per Shift JIS double-byte character.

    Raises:
        ValueError: If a character has no double-byte Shift JIS form in the
            ranges 0x8140-0x9FFC or 0xE040-0xEBBF
    """
    bb = BitBuffer()
    for value in _kanji_values(text):
        bb.append_bits(value, 13)
    return Segment(Mode.KANJI, len(text), bb)


def make_eci(assign_value: int) -> Segment:
    """
    Return an ECI designator segment for the given assignment number
    (for example 26 for UTF-8).

    Raises:
        ValueError: If the value is negative or not below 1 000 000
    """
    bb = BitBuffer()
    if assign_value < 0:
        raise ValueError("ECI assignment value out of range")
    elif assign_value < (1 << 7):
        bb.append_bits(assign_value, 8)
    elif assign_value < (1 << 14):
        bb.append_bits(0b10, 2)
        bb.append_bits(assign_value, 14)
    elif assign_value < 1000000:
        bb.append_bits(0b110, 3)
        bb.append_bits(assign_value, 21)
    else:
        raise ValueError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, bb)


def make_segments(text: str) -> List[Segment]:
    """
    Pick the most compact single mode for the whole text.

    Returns an empty list for empty text, otherwise exactly one numeric,
    alphanumeric or byte (UTF-8) segment. No mode switching is attempted.
    """
    if text == "":
        return []
    if is_numeric(text):
        return [make_numeric(text)]
    if is_alphanumeric(text):
        return [make_alphanumeric(text)]
    return [make_bytes(text.encode('utf-8'))]
