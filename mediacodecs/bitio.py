"""Bit-level reading and writing helpers shared by the codec parsers."""

from __future__ import annotations

_MAX_GOLOMB_LEADING_ZEROS = 32


class BitstreamError(ValueError):
    """Raised when a bitstream is truncated or holds an invalid value."""


def remove_emulation_prevention(data: bytes) -> bytes:
    """Drop emulation prevention bytes (0x03 following 0x00 0x00)."""
    return bytes(data).replace(b"\x00\x00\x03", b"\x00\x00")


class BitReader:
    """Reads big-endian bit fields from a byte string.

    ``pos`` is the current position, counted in bits from the start.
    """

    def __init__(self, data: bytes, pos: int = 0) -> None:
        self._data = bytes(data)
        self._size = len(self._data) * 8
        self.pos = pos

    @property
    def remaining(self) -> int:
        """Number of bits left to read."""
        return self._size - self.pos

    def ensure(self, n: int) -> None:
        """Raise BitstreamError unless at least ``n`` bits are left."""
        if n > self.remaining:
            raise BitstreamError("not enough bits")

    def skip(self, n: int) -> None:
        """Advance over ``n`` bits."""
        self.ensure(n)
        self.pos += n

    def read_bits(self, n: int) -> int:
        """Read ``n`` bits as an unsigned integer."""
        self.ensure(n)
        if n == 0:
            return 0
        start = self.pos
        end = start + n
        first = start // 8
        last = (end + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        self.pos = end
        return (chunk >> (last * 8 - end)) & ((1 << n) - 1)

    def read_flag(self) -> bool:
        """Read a single bit as a boolean."""
        return self.read_bits(1) == 1

    def read_golomb_unsigned(self) -> int:
        """Read an unsigned Exp-Golomb code."""
        leading_zeros = 0
        while True:
            if self.remaining == 0:
                raise BitstreamError("not enough bits")
            if self.read_flag():
                break
            leading_zeros += 1
            if leading_zeros > _MAX_GOLOMB_LEADING_ZEROS:
                raise BitstreamError("invalid value")
        suffix = self.read_bits(leading_zeros)
        return (1 << leading_zeros) - 1 + suffix

    def read_golomb_signed(self) -> int:
        """Read a signed Exp-Golomb code."""
        value = self.read_golomb_unsigned()
        if value & 1:
            return (value + 1) // 2
        return -(value // 2)


class BitWriter:
    """Accumulates big-endian bit fields into a byte string."""

    def __init__(self) -> None:
        self._value = 0
        self._nbits = 0

    @property
    def bits(self) -> int:
        """Number of bits written so far."""
        return self._nbits

    def write_bits(self, value: int, n: int) -> None:
        """Append the low ``n`` bits of ``value``."""
        self._value = (self._value << n) | (value & ((1 << n) - 1))
        self._nbits += n

    def write_flag(self, flag: bool) -> None:
        """Append a single bit."""
        self.write_bits(1 if flag else 0, 1)

    def to_bytes(self) -> bytes:
        """Return the written bits, zero-padded to a whole byte."""
        pad = (-self._nbits) % 8
        total = self._nbits + pad
        return (self._value << pad).to_bytes(total // 8, "big")