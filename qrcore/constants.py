# -*- coding: utf-8 -*-
"""
QR Code Constants Module

Version bounds, penalty weights and the error correction levels defined by
ISO/IEC 18004 for QR Code Model 2 symbols.
"""

import enum


MIN_VERSION = 1
MAX_VERSION = 40

# Mask penalty weights (ISO/IEC 18004:2015 section 7.8.3.1)
PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10

# Rendering defaults shared by the renderers, the CLI and the web app
DEFAULT_BORDER = 4
DEFAULT_SCALE = 8


class ErrorCorrectionLevel(enum.Enum):
    """
    The error correction level of a QR Code symbol.

    Each member carries the approximate share of codewords that can be
    restored (in percent) and the 2-bit value written into the format
    information. Members are declared in ascending tolerance order, which is
    also the row order of the capacity tables.
    """

    LOW = (7, 1)
    MEDIUM = (15, 0)
    QUARTILE = (25, 3)
    HIGH = (30, 2)

    def __init__(self, tolerance_percent, format_bits):
        self.tolerance_percent = tolerance_percent
        self.format_bits = format_bits

    @property
    def ordinal(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def from_name(cls, name) -> "ErrorCorrectionLevel":
        """
        Resolve a level from a member or from names like 'L', 'm' or 'quartile'.

        Raises:
            ValueError: If the name matches no level
        """
        if isinstance(name, cls):
            return name
        key = str(name or '').strip().upper()
        for level in cls:
            if key in (level.name, level.name[0]):
                return level
        raise ValueError(f"Unknown error correction level: {name!r}")


_ORDER = tuple(ErrorCorrectionLevel)
