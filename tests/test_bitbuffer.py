# -*- coding: utf-8 -*-
import pytest

from qrcore.bitbuffer import BitBuffer


def test_append_bits_most_significant_first():
    bb = BitBuffer()
    bb.append_bits(0b101, 3)
    bb.append_bits(0b0011, 4)
    assert len(bb) == bb.length() == 7
    assert list(bb) == [1, 0, 1, 0, 0, 1, 1]


def test_append_zero_bits_is_noop():
    bb = BitBuffer()
    bb.append_bits(0, 0)
    assert len(bb) == 0


@pytest.mark.parametrize("value, length", [(8, 3), (1, 0), (-1, 4), (0, 32), (0, -1)])
def test_append_bits_rejects_out_of_range(value, length):
    with pytest.raises(ValueError):
        BitBuffer().append_bits(value, length)


def test_append_bits_accepts_31_bits():
    bb = BitBuffer()
    bb.append_bits(2 ** 31 - 1, 31)
    assert len(bb) == 31
    assert all(bit == 1 for bit in bb)


def test_get_bit_bounds():
    bb = BitBuffer([1, 0])
    assert bb.get_bit(0) == 1
    assert bb.get_bit(1) == 0
    with pytest.raises(IndexError):
        bb.get_bit(2)
    with pytest.raises(IndexError):
        bb.get_bit(-1)


def test_copy_is_independent():
    bb = BitBuffer()
    bb.append_bits(0b11, 2)
    clone = bb.copy()
    clone.append_bits(0, 1)
    bb.append_bits(1, 1)
    assert list(bb) == [1, 1, 1]
    assert list(clone) == [1, 1, 0]


def test_append_data():
    a = BitBuffer([1])
    b = BitBuffer([0, 1])
    a.append_data(b)
    assert list(a) == [1, 0, 1]
    assert list(b) == [0, 1]


def test_to_bytes_pads_last_byte():
    bb = BitBuffer()
    bb.append_bits(0xAB, 8)
    bb.append_bits(0b101, 3)
    assert bb.to_bytes() == bytes([0xAB, 0xA0])
