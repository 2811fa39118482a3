# -*- coding: utf-8 -*-
import pytest

from qrcore.constants import ErrorCorrectionLevel
from qrcore.functional_areas import draw_function_patterns, symbol_size
from qrcore.layer import Layer
from qrcore.placement import add_ecc_and_interleave, draw_codewords
from qrcore.qr_generator import pack_data_codewords
from qrcore.segments import make_segments


@pytest.fixture
def unmasked_layer():
    """Version 2-M layer holding a URL, before any mask is applied."""
    version, level = 2, ErrorCorrectionLevel.MEDIUM
    layer = Layer.blank(symbol_size(version))
    draw_function_patterns(layer, version, level)
    data = pack_data_codewords(make_segments("https://example.com/qr"), version, level)
    draw_codewords(layer, add_ecc_and_interleave(data, version, level), version)
    return layer
