# -*- coding: utf-8 -*-
"""
QR Code Generator Module

Top-level encoder: version search, error correction boosting, bit stream
assembly and padding, and construction of the final immutable symbol.

Functions:
    encode_text: Encode a Unicode string (high level)
    encode_binary: Encode raw bytes (high level)
    encode_segments: Encode a list of segments with full control (mid level)
    build_symbol: Build a symbol from pre-packed data codewords (low level)
    build_layer: Unmasked layer with function patterns and codewords
    get_total_bits: Bits needed to encode segments at a version
    pack_data_codewords: Header, data and padding packed into data codewords
    make_qr: String-parameter front door used by the web app and the CLI
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .bitbuffer import BitBuffer
from .constants import MIN_VERSION, MAX_VERSION, ErrorCorrectionLevel
from .errors import DataTooLongError
from .functional_areas import draw_function_patterns, symbol_size
from .layer import Layer
from .masking import AUTO_MASK, choose_and_apply_mask
from .placement import add_ecc_and_interleave, draw_codewords
from .segments import (
    Mode, Segment, make_alphanumeric, make_bytes, make_eci, make_kanji, make_numeric, make_segments,
)
from .tables import get_num_data_codewords


logger = logging.getLogger(__name__)

PAD_BYTES = (0xEC, 0x11)
ECI_UTF8 = 26


class QrCode:
    """
    An immutable QR Code symbol: a square grid of dark and light modules.

    Only the version, error correction level, applied mask and a frozen copy
    of the module colors survive construction.

    Attributes:
        version (int): 1..40
        error_correction (ErrorCorrectionLevel): Level actually used (may be boosted)
        mask (int): Mask pattern applied, 0..7
    """

    def __init__(self, version: int, error_correction: ErrorCorrectionLevel, mask: int, modules: np.ndarray):
        if not MIN_VERSION <= version <= MAX_VERSION:
            raise ValueError(f"Version out of range: {version}")
        size = symbol_size(version)
        if modules.shape != (size, size):
            raise ValueError(f"Module grid must be {size}x{size}")
        self._version = version
        self._error_correction = error_correction
        self._mask = mask
        self._modules = np.array(modules, dtype=bool)
        self._modules.setflags(write=False)

    @property
    def version(self) -> int:
        return self._version

    @property
    def error_correction(self) -> ErrorCorrectionLevel:
        return self._error_correction

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def size(self) -> int:
        return symbol_size(self._version)

    def get(self, x: int, y: int) -> bool:
        """Color of the module at column x, row y; False (light) when out of bounds."""
        size = self.size
        return 0 <= x < size and 0 <= y < size and bool(self._modules[y, x])

    @property
    def matrix(self) -> Tuple[Tuple[bool, ...], ...]:
        """Rows of module colors (True=dark), top to bottom."""
        return tuple(tuple(row) for row in self._modules.tolist())

    def __eq__(self, other):
        if not isinstance(other, QrCode):
            return NotImplemented
        return (self._version == other._version
                and self._error_correction is other._error_correction
                and self._mask == other._mask
                and np.array_equal(self._modules, other._modules))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"QrCode(version={self._version}, error_correction={self._error_correction.name}, "
                f"mask={self._mask})")


def _check_mask_argument(mask: Optional[int]) -> int:
    if mask is None:
        return AUTO_MASK
    if not (mask == AUTO_MASK or 0 <= mask <= 7):
        raise ValueError(f"Mask value out of range: {mask}")
    return mask


def build_layer(version: int, ecc_level: ErrorCorrectionLevel, data_codewords: Sequence[int]) -> Layer:
    """
    Draw the function patterns and place the codewords (with ECC) of a
    symbol, leaving the data area unmasked.

    Raises:
        ValueError: If the version or the codeword count is invalid
    """
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version out of range: {version}")
    layer = Layer.blank(symbol_size(version))
    draw_function_patterns(layer, version, ecc_level)
    all_codewords = add_ecc_and_interleave(data_codewords, version, ecc_level)
    draw_codewords(layer, all_codewords, version)
    return layer


def build_symbol(version: int, ecc_level: ErrorCorrectionLevel, data_codewords: Sequence[int],
                 mask: Optional[int] = AUTO_MASK) -> QrCode:
    """
    Build a symbol from data codewords that already include mode headers,
    terminator and padding (low level, no version search).

    Args:
        version (int): QR code version (1-40)
        ecc_level (ErrorCorrectionLevel): Error correction level
        data_codewords: Exactly ``get_num_data_codewords(version, ecc_level)`` bytes
        mask (int): 0..7 to force a mask, -1 or None to choose automatically

    Returns:
        QrCode: The finished symbol

    Raises:
        ValueError: If version, mask or the codeword count is invalid
    """
    mask = _check_mask_argument(mask)
    layer = build_layer(version, ecc_level, data_codewords)
    chosen = choose_and_apply_mask(layer, ecc_level, mask)
    return QrCode(version, ecc_level, chosen, layer.canvas)


def get_total_bits(segments: Sequence[Segment], version: int) -> Optional[int]:
    """
    Number of bits needed to encode the segments at ``version``.

    Returns None when a segment's character count does not fit its count
    field, or when the total would not fit a signed 32-bit integer.
    """
    result = 0
    for seg in segments:
        ccbits = seg.mode.num_char_count_bits(version)
        if seg.num_chars >= 1 << ccbits:
            return None
        result += 4 + ccbits + seg.bit_length
        if result > 2 ** 31 - 1:
            return None
    return result


def _find_version(segments: Sequence[Segment], ecc_level: ErrorCorrectionLevel,
                  min_version: int, max_version: int) -> Tuple[int, int]:
    for version in range(min_version, max_version + 1):
        capacity_bits = get_num_data_codewords(version, ecc_level) * 8
        used_bits = get_total_bits(segments, version)
        if used_bits is not None and used_bits <= capacity_bits:
            return version, used_bits

    if used_bits is not None:
        msg = f"Data length = {used_bits} bits, Max capacity = {capacity_bits} bits"
    else:
        msg = "Segment too long"
    raise DataTooLongError(msg)


def encode_segments(segments: Sequence[Segment], ecc_level: ErrorCorrectionLevel,
                    min_version: int = MIN_VERSION, max_version: int = MAX_VERSION,
                    mask: Optional[int] = AUTO_MASK, boost_ecl: bool = True) -> QrCode:
    """
    Encode segments into the smallest fitting version in the given range.

    With ``boost_ecl`` the error correction level is raised as far as the
    data still fits the chosen version.

    Args:
        segments: Segments to concatenate, in order
        ecc_level (ErrorCorrectionLevel): Minimum error correction level
        min_version (int): Smallest allowed version (>= 1)
        max_version (int): Largest allowed version (<= 40)
        mask (int): 0..7 to force a mask, -1 or None to choose automatically
        boost_ecl (bool): Raise the ECC level when it costs no extra version

    Returns:
        QrCode: The encoded symbol

    Raises:
        ValueError: If the version range or mask is invalid
        DataTooLongError: If the data does not fit max_version

    Example:
        >>> qr = encode_segments(make_segments("HELLO WORLD"), ErrorCorrectionLevel.LOW)
        >>> qr.version, qr.size
        (1, 21)
    """
    if not MIN_VERSION <= min_version <= max_version <= MAX_VERSION:
        raise ValueError(f"Invalid version range: {min_version}..{max_version}")
    mask = _check_mask_argument(mask)

    version, used_bits = _find_version(segments, ecc_level, min_version, max_version)

    if boost_ecl:
        levels = list(ErrorCorrectionLevel)
        for level in levels[levels.index(ecc_level) + 1:]:
            if used_bits <= get_num_data_codewords(version, level) * 8:
                ecc_level = level
    logger.debug(f"Encoding {len(segments)} segment(s): version {version}, "
                 f"ECC {ecc_level.name}, {used_bits} data bits")

    return build_symbol(version, ecc_level, pack_data_codewords(segments, version, ecc_level), mask)


def pack_data_codewords(segments: Sequence[Segment], version: int, ecc_level: ErrorCorrectionLevel) -> bytes:
    """
    Concatenate segment headers and data, then add the terminator, bit
    padding and alternating pad bytes up to the data capacity.

    Raises:
        DataTooLongError: If the segments do not fit ``version`` at ``ecc_level``
    """
    used_bits = get_total_bits(segments, version)
    capacity_bits = get_num_data_codewords(version, ecc_level) * 8
    if used_bits is None or used_bits > capacity_bits:
        raise DataTooLongError(f"Segments do not fit version {version} at level {ecc_level.name}")

    bb = BitBuffer()
    for seg in segments:
        bb.append_bits(seg.mode.mode_bits, 4)
        bb.append_bits(seg.num_chars, seg.mode.num_char_count_bits(version))
        bb.append_data(seg.data)
    assert len(bb) == used_bits

    # Terminator and padding to a byte boundary
    bb.append_bits(0, min(4, capacity_bits - len(bb)))
    bb.append_bits(0, -len(bb) % 8)
    assert len(bb) % 8 == 0

    # Alternating pad bytes up to capacity
    pad_byte = PAD_BYTES[0]
    while len(bb) < capacity_bits:
        bb.append_bits(pad_byte, 8)
        pad_byte ^= PAD_BYTES[0] ^ PAD_BYTES[1]

    return bb.to_bytes()


def encode_text(text: str, ecc_level: ErrorCorrectionLevel) -> QrCode:
    """
    Encode Unicode text at the smallest version, boosting the ECC level
    when possible and choosing the mask automatically.

    Raises:
        DataTooLongError: If the text does not fit version 40
    """
    return encode_segments(make_segments(text), ecc_level)


def encode_binary(data: Union[bytes, bytearray], ecc_level: ErrorCorrectionLevel) -> QrCode:
    """Encode raw bytes as a single byte mode segment."""
    return encode_segments([make_bytes(data)], ecc_level)


_MODE_BUILDERS = {
    'numeric': make_numeric,
    'alphanumeric': make_alphanumeric,
    'byte': lambda text: make_bytes(text.encode('utf-8')),
    'kanji': make_kanji,
}


def _segments_for(content: Union[str, bytes], mode: Optional[str], eci: bool) -> List[Segment]:
    if isinstance(content, (bytes, bytearray)):
        if mode not in (None, 'byte'):
            raise ValueError(f"Binary content can only be encoded in byte mode, not {mode!r}")
        segments = [make_bytes(content)]
    elif mode is None:
        segments = make_segments(content)
    elif mode in _MODE_BUILDERS:
        segments = [_MODE_BUILDERS[mode](content)]
    else:
        raise ValueError(f"Unknown mode: {mode!r}")

    if eci and segments and segments[0].mode is Mode.BYTE:
        segments.insert(0, make_eci(ECI_UTF8))
    return segments


def make_qr(content: Union[str, bytes], ecc: Union[str, ErrorCorrectionLevel] = 'M',
            version: Optional[Union[int, str]] = None, mask: Union[str, int, None] = 'auto',
            boost_error: bool = True, mode: Optional[str] = None, eci: bool = False) -> QrCode:
    """
    Generate a QR code symbol from loosely typed parameters.

    Args:
        content (str or bytes): The data to encode
        ecc (str): Error correction level ('L', 'M', 'Q', 'H')
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability
            - H: ~30% recovery capability
        version (int or str): 1..40 to force a version, None or 'auto' for the smallest
        mask (int or str): 0..7 to force a mask, 'auto' or None to pick by penalty
        boost_error (bool): Raise the ECC level if space allows
        mode (str): 'numeric', 'alphanumeric', 'byte', 'kanji' or None to detect
        eci (bool): Prefix byte mode data with a UTF-8 ECI designator

    Returns:
        QrCode: Generated QR code symbol

    Raises:
        ValueError: If parameters are invalid
        DataTooLongError: If data doesn't fit in the specified version

    Example:
        >>> qr = make_qr("https://example.com", ecc='M', version='auto', mask='auto')
    """
    level = ErrorCorrectionLevel.from_name(ecc)
    mask_arg = AUTO_MASK if mask in (None, 'auto') else int(mask)
    if version in (None, 'auto'):
        min_version, max_version = MIN_VERSION, MAX_VERSION
    else:
        min_version = max_version = int(version)
    if isinstance(mode, str):
        mode = mode.strip().lower() or None

    segments = _segments_for(content, mode, eci)
    return encode_segments(segments, level, min_version, max_version, mask_arg, boost_error)
