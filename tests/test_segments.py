# -*- coding: utf-8 -*-
import pytest

from qrcore.bitbuffer import BitBuffer
from qrcore.segments import (
    ALPHANUMERIC_CHARSET, Mode, Segment, is_alphanumeric, is_kanji, is_numeric,
    make_alphanumeric, make_bytes, make_eci, make_kanji, make_numeric, make_segments,
)


def bits_value(bb, start, length):
    value = 0
    for i in range(start, start + length):
        value = value << 1 | bb.get_bit(i)
    return value


def test_numeric_groups_of_three():
    seg = make_numeric("0123456789")
    assert seg.mode is Mode.NUMERIC
    assert seg.num_chars == 10
    assert seg.bit_length == 34
    data = seg.data
    assert bits_value(data, 0, 10) == 12
    assert bits_value(data, 10, 10) == 345
    assert bits_value(data, 20, 10) == 678
    assert bits_value(data, 30, 4) == 9


def test_numeric_two_digit_tail():
    seg = make_numeric("12345")
    assert seg.bit_length == 10 + 7
    assert bits_value(seg.data, 10, 7) == 45


def test_numeric_rejects_other_characters():
    with pytest.raises(ValueError):
        make_numeric("12a")
    with pytest.raises(ValueError):
        make_numeric("１２")  # full-width digits


def test_empty_numeric():
    seg = make_numeric("")
    assert seg.num_chars == 0
    assert seg.bit_length == 0


def test_alphanumeric_pair_and_single():
    pair = make_alphanumeric("AB")
    assert pair.bit_length == 11
    assert bits_value(pair.data, 0, 11) == ALPHANUMERIC_CHARSET.index('A') * 45 + ALPHANUMERIC_CHARSET.index('B')

    single = make_alphanumeric("A")
    assert single.bit_length == 6
    assert bits_value(single.data, 0, 6) == ALPHANUMERIC_CHARSET.index('A')


def test_alphanumeric_rejects_lowercase():
    with pytest.raises(ValueError):
        make_alphanumeric("ab")


def test_bytes():
    seg = make_bytes(b"\x00\xff")
    assert seg.mode is Mode.BYTE
    assert seg.num_chars == 2
    assert list(seg.data) == [0] * 8 + [1] * 8


def test_kanji_values():
    seg = make_kanji("点茗")
    assert seg.mode is Mode.KANJI
    assert seg.num_chars == 2
    assert seg.bit_length == 26
    assert bits_value(seg.data, 0, 13) == 0x0D9F
    assert bits_value(seg.data, 13, 13) == 0x1AAA


@pytest.mark.parametrize("text", ["A", "ｱ", "😀"])
def test_kanji_rejects_non_double_byte(text):
    assert not is_kanji(text)
    with pytest.raises(ValueError):
        make_kanji(text)


@pytest.mark.parametrize("value, length, prefix", [
    (26, 8, 0),
    (1000, 16, 0b10),
    (100000, 24, 0b110),
])
def test_eci_lengths(value, length, prefix):
    seg = make_eci(value)
    assert seg.mode is Mode.ECI
    assert seg.num_chars == 0
    assert seg.bit_length == length
    prefix_len = {8: 1, 16: 2, 24: 3}[length]
    assert bits_value(seg.data, 0, prefix_len) == prefix
    assert bits_value(seg.data, 0, length) & ((1 << (length - prefix_len)) - 1) == value


@pytest.mark.parametrize("value", [-1, 1000000])
def test_eci_out_of_range(value):
    with pytest.raises(ValueError):
        make_eci(value)


def test_make_segments_mode_selection():
    assert make_segments("") == []
    assert make_segments("0123")[0].mode is Mode.NUMERIC
    assert make_segments("HELLO WORLD")[0].mode is Mode.ALPHANUMERIC
    assert make_segments("hello")[0].mode is Mode.BYTE
    segments = make_segments("héllo")
    assert len(segments) == 1
    assert segments[0].num_chars == 6


def test_predicates():
    assert is_numeric("0123")
    assert not is_numeric("01 23")
    assert is_alphanumeric("HTTP://X.Y/$%*+-")
    assert not is_alphanumeric("http")


def test_segment_rejects_negative_count():
    with pytest.raises(ValueError):
        Segment(Mode.BYTE, -1, BitBuffer())


def test_segment_data_is_not_aliased():
    source = BitBuffer([1, 0])
    seg = Segment(Mode.BYTE, 1, source)
    source.append_bits(1, 1)
    seg.data.append_bits(1, 1)
    assert seg.bit_length == 2


@pytest.mark.parametrize("mode, version, width", [
    (Mode.NUMERIC, 1, 10), (Mode.NUMERIC, 9, 10), (Mode.NUMERIC, 10, 12),
    (Mode.NUMERIC, 26, 12), (Mode.NUMERIC, 27, 14), (Mode.NUMERIC, 40, 14),
    (Mode.ALPHANUMERIC, 1, 9), (Mode.BYTE, 10, 16), (Mode.KANJI, 27, 12), (Mode.ECI, 5, 0),
])
def test_char_count_widths(mode, version, width):
    assert mode.num_char_count_bits(version) == width


def test_char_count_width_rejects_bad_version():
    with pytest.raises(ValueError):
        Mode.BYTE.num_char_count_bits(0)
    with pytest.raises(ValueError):
        Mode.BYTE.num_char_count_bits(41)


def test_segments_are_hashable_values():
    a = make_alphanumeric("AB")
    b = make_alphanumeric("AB")
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b, make_alphanumeric("BA")}) == 2
