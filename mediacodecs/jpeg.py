"""JPEG marker segments."""

from __future__ import annotations

from dataclasses import dataclass, field

MARKER_START_OF_IMAGE = 0xD8
MARKER_DEFINE_QUANTIZATION_TABLE = 0xDB
MARKER_DEFINE_HUFFMAN_TABLE = 0xC4
MARKER_DEFINE_RESTART_INTERVAL = 0xDD
MARKER_START_OF_FRAME1 = 0xC0
MARKER_START_OF_SCAN = 0xDA
MARKER_END_OF_IMAGE = 0xD9
MARKER_COMMENT = 0xFE

_QUANTIZATION_TABLE_SIZE = 64


def _marker(code: int) -> bytes:
    return bytes((0xFF, code))


def _u16(value: int) -> bytes:
    return bytes(((value >> 8) & 0xFF, value & 0xFF))


@dataclass
class DefineHuffmanTable:
    """A DHT marker."""

    codes: bytes = b""
    symbols: bytes = b""
    table_number: int = 0
    table_class: int = 0

    def marshal(self) -> bytes:
        """Encode the marker."""
        length = 3 + len(self.codes) + len(self.symbols)
        header = ((self.table_class << 4) | self.table_number) & 0xFF
        return (
            _marker(MARKER_DEFINE_HUFFMAN_TABLE)
            + _u16(length)
            + bytes((header,))
            + bytes(self.codes)
            + bytes(self.symbols)
        )


@dataclass
class QuantizationTable:
    """A single table of a DQT marker."""

    id: int = 0
    precision: int = 0
    data: bytes = b""


@dataclass
class DefineQuantizationTable:
    """A DQT marker."""

    tables: list[QuantizationTable] = field(default_factory=list)

    @classmethod
    def unmarshal(cls, buf: bytes) -> "DefineQuantizationTable":
        """Decode the payload of a DQT marker."""
        buf = bytes(buf)
        tables = []
        while buf:
            table_id = buf[0] & 0x0F
            precision = buf[0] >> 4
            buf = buf[1:]
            if precision != 0:
                raise ValueError(f"Precision {precision} is not supported")
            if len(buf) < _QUANTIZATION_TABLE_SIZE:
                raise ValueError("image is too short")
            tables.append(
                QuantizationTable(
                    id=table_id,
                    precision=precision,
                    data=buf[:_QUANTIZATION_TABLE_SIZE],
                )
            )
            buf = buf[_QUANTIZATION_TABLE_SIZE:]
        return cls(tables=tables)

    def marshal(self) -> bytes:
        """Encode the marker."""
        length = 2 + sum(1 + len(t.data) for t in self.tables)
        body = b"".join(bytes((t.id & 0xFF,)) + bytes(t.data) for t in self.tables)
        return _marker(MARKER_DEFINE_QUANTIZATION_TABLE) + _u16(length) + body


@dataclass
class DefineRestartInterval:
    """A DRI marker."""

    interval: int = 0

    @classmethod
    def unmarshal(cls, buf: bytes) -> "DefineRestartInterval":
        """Decode the payload of a DRI marker."""
        if len(buf) != 2:
            raise ValueError(f"unsupported DRI size of {len(buf)}")
        return cls(interval=(buf[0] << 8) | buf[1])


@dataclass
class StartOfFrame1:
    """A SOF1 marker.

    ``quantization_table_count`` is only used when encoding.
    """

    type: int = 0
    width: int = 0
    height: int = 0
    quantization_table_count: int = 0

    @classmethod
    def unmarshal(cls, buf: bytes) -> "StartOfFrame1":
        """Decode the payload of a SOF1 marker."""
        if len(buf) != 15:
            raise ValueError(f"unsupported SOF size of {len(buf)}")

        precision = buf[0]
        if precision != 8:
            raise ValueError(f"precision {precision} is not supported")

        height = (buf[1] << 8) | buf[2]
        width = (buf[3] << 8) | buf[4]

        components = buf[5]
        if components != 3:
            raise ValueError(f"number of components = {components} is not supported")

        samp0 = buf[7]
        if samp0 == 0x21:
            frame_type = 0
        elif samp0 == 0x22:
            frame_type = 1
        else:
            raise ValueError(f"samp0 {samp0:x} is not supported")

        if buf[10] != 0x11:
            raise ValueError(f"samp1 {buf[10]:x} is not supported")
        if buf[13] != 0x11:
            raise ValueError(f"samp2 {buf[13]:x} is not supported")

        return cls(type=frame_type, width=width, height=height)

    def marshal(self) -> bytes:
        """Encode the marker."""
        sampling = 0x21 if (self.type & 0x3F) == 0 else 0x22
        second_table = 1 if self.quantization_table_count == 2 else 0
        return (
            _marker(MARKER_START_OF_FRAME1)
            + _u16(17)
            + bytes((8,))
            + _u16(self.height)
            + _u16(self.width)
            + bytes((3,))
            + bytes((0x00, sampling, 0))
            + bytes((1, 0x11, second_table))
            + bytes((2, 0x11, second_table))
        )


@dataclass
class StartOfImage:
    """A SOI marker."""

    def marshal(self) -> bytes:
        """Encode the marker."""
        return _marker(MARKER_START_OF_IMAGE)


@dataclass
class StartOfScan:
    """A SOS marker."""

    @classmethod
    def unmarshal(cls, buf: bytes) -> "StartOfScan":
        """Decode the payload of a SOS marker."""
        if len(buf) != 10:
            raise ValueError(f"unsupported SOS size of {len(buf)}")
        return cls()

    def marshal(self) -> bytes:
        """Encode the marker."""
        return (
            _marker(MARKER_START_OF_SCAN)
            + _u16(12)
            + bytes((3,))
            + bytes((0, 0))
            + bytes((1, 0x11))
            + bytes((2, 0x11))
            + bytes((0, 63, 0))
        )