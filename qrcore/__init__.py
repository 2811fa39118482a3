# -*- coding: utf-8 -*-
"""
qrcore - QR Code Model 2 symbol encoder

Encodes text or binary data into QR Code symbols (versions 1-40, error
correction levels L/M/Q/H, numeric/alphanumeric/byte/kanji segments).

Modules:
    qr_generator: Version search, padding and symbol assembly
    segments: Segment modes and data packing
    reed_solomon: GF(256) error correction codewords
    tables: Capacity tables and codeword accounting
    functional_areas: Function pattern drawing
    placement: Block interleaving and codeword placement
    masking: Mask patterns and automatic mask selection
    penalties: Mask penalty evaluation (N1-N4)
    renderer: ASCII, SVG and PNG output
"""

__version__ = "1.0.0"

from .constants import ErrorCorrectionLevel, MIN_VERSION, MAX_VERSION
from .errors import DataTooLongError
from .bitbuffer import BitBuffer
from .segments import (
    Mode, Segment, make_numeric, make_alphanumeric, make_bytes, make_kanji, make_eci, make_segments,
)
from .qr_generator import (
    QrCode, encode_text, encode_binary, encode_segments, build_symbol, build_layer, get_total_bits,
    pack_data_codewords, make_qr,
)
from .masking import evaluate_all_masks
from .penalties import calculate_penalty_score
from .renderer import to_ascii, to_svg, to_image, to_png_bytes, to_png_b64

__all__ = [
    'ErrorCorrectionLevel',
    'MIN_VERSION',
    'MAX_VERSION',
    'DataTooLongError',
    'BitBuffer',
    'Mode',
    'Segment',
    'make_numeric',
    'make_alphanumeric',
    'make_bytes',
    'make_kanji',
    'make_eci',
    'make_segments',
    'QrCode',
    'encode_text',
    'encode_binary',
    'encode_segments',
    'build_symbol',
    'build_layer',
    'get_total_bits',
    'pack_data_codewords',
    'make_qr',
    'evaluate_all_masks',
    'calculate_penalty_score',
    'to_ascii',
    'to_svg',
    'to_image',
    'to_png_bytes',
    'to_png_b64',
]
