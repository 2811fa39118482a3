# -*- coding: utf-8 -*-
import pytest

from qrcore.constants import ErrorCorrectionLevel as ECL
from qrcore.tables import get_ecc_block_layout, get_num_data_codewords, get_num_raw_data_modules


@pytest.mark.parametrize("version, expected", [
    (1, 208), (2, 359), (3, 567), (6, 1383), (7, 1568), (13, 4256), (32, 19723), (40, 29648),
])
def test_raw_data_modules(version, expected):
    assert get_num_raw_data_modules(version) == expected


@pytest.mark.parametrize("version, level, expected", [
    (1, ECL.LOW, 19), (1, ECL.MEDIUM, 16), (1, ECL.QUARTILE, 13), (1, ECL.HIGH, 9),
    (5, ECL.QUARTILE, 62), (40, ECL.LOW, 2956), (40, ECL.HIGH, 1276),
])
def test_data_codewords(version, level, expected):
    assert get_num_data_codewords(version, level) == expected


def test_block_layout():
    assert get_ecc_block_layout(1, ECL.LOW) == (1, 7)
    assert get_ecc_block_layout(5, ECL.QUARTILE) == (4, 18)
    assert get_ecc_block_layout(40, ECL.HIGH) == (81, 30)


def test_capacity_shrinks_with_level():
    for version in range(1, 41):
        counts = [get_num_data_codewords(version, level) for level in ECL]
        assert counts == sorted(counts, reverse=True)


@pytest.mark.parametrize("version", [0, 41])
def test_version_out_of_range(version):
    with pytest.raises(ValueError):
        get_num_raw_data_modules(version)
    with pytest.raises(ValueError):
        get_num_data_codewords(version, ECL.LOW)


def test_capacity_grows_with_version():
    for level in ECL:
        counts = [get_num_data_codewords(v, level) for v in range(1, 41)]
        assert counts[0] > 0
        assert counts == sorted(counts)
