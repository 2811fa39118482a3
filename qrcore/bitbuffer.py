# -*- coding: utf-8 -*-
"""
Append-only bit sequence used to pack segments and codewords.
"""

from typing import List


class BitBuffer:
    """
    An ordered sequence of bits (0 or 1) that only grows by appending.

    Example:
        >>> bb = BitBuffer()
        >>> bb.append_bits(0b101, 3)
        >>> len(bb), bb.get_bit(0)
        (3, 1)
    """

    __slots__ = ('_bits',)

    def __init__(self, bits=None):
        self._bits: List[int] = [1 if b else 0 for b in (bits or ())]

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self):
        return iter(self._bits)

    def __eq__(self, other):
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"BitBuffer('{''.join(map(str, self._bits))}')"

    def length(self) -> int:
        return len(self._bits)

    def get_bit(self, index: int) -> int:
        """
        Return the bit at ``index``, 0 or 1.

        Raises:
            IndexError: If index is not in [0, length)
        """
        if not 0 <= index < len(self._bits):
            raise IndexError(f"Bit index {index} out of range [0, {len(self._bits)})")
        return self._bits[index]

    def append_bits(self, value: int, length: int) -> None:
        """
        Append the ``length`` low-order bits of ``value``, most significant first.

        Args:
            value (int): Non-negative value that fits in ``length`` bits
            length (int): Number of bits to take, 0..31

        Raises:
            ValueError: If length is out of range or value has higher bits set
        """
        if not 0 <= length <= 31:
            raise ValueError(f"Bit count out of range: {length}")
        if value < 0 or value >> length != 0:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        self._bits.extend((value >> i) & 1 for i in reversed(range(length)))

    def append_data(self, other: "BitBuffer") -> None:
        self._bits.extend(other._bits)

    def copy(self) -> "BitBuffer":
        return BitBuffer(self._bits)

    def to_bytes(self) -> bytes:
        """
        Pack the bits into bytes, big endian within each byte.

        The last byte is padded with zero bits when the length is not a
        multiple of 8.
        """
        result = bytearray((len(self._bits) + 7) // 8)
        for i, bit in enumerate(self._bits):
            result[i >> 3] |= bit << (7 - (i & 7))
        return bytes(result)
