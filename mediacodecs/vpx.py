"""VP8 and VP9 helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mediacodecs.bitio import BitReader, BitstreamError

VP8_MAX_FRAME_SIZE = 2 * 1024 * 1024
VP9_MAX_FRAME_SIZE = 2 * 1024 * 1024

_FRAME_SYNC_BYTES = (0x49, 0x83, 0x42)
_CS_RGB = 7


@dataclass
class ColorConfig:
    """The color_config part of a VP9 header."""

    ten_or_twelve_bit: bool = False
    bit_depth: int = 0
    color_space: int = 0
    color_range: bool = False
    subsampling_x: bool = False
    subsampling_y: bool = False

    @classmethod
    def _read(cls, reader: BitReader, profile: int) -> "ColorConfig":
        config = cls()
        if profile >= 2:
            config.ten_or_twelve_bit = reader.read_flag()
            config.bit_depth = 12 if config.ten_or_twelve_bit else 10
        else:
            config.bit_depth = 8

        config.color_space = reader.read_bits(3)
        extended = profile in (1, 3)

        if config.color_space != _CS_RGB:
            config.color_range = reader.read_flag()
            if extended:
                reader.ensure(3)
                config.subsampling_x = reader.read_flag()
                config.subsampling_y = reader.read_flag()
                reader.skip(1)  # reserved_zero
            else:
                config.subsampling_x = True
                config.subsampling_y = True
        else:
            config.color_range = True
            if extended:
                reader.skip(1)  # reserved_zero
        return config


@dataclass
class FrameSize:
    """The frame_size part of a VP9 header."""

    frame_width_minus1: int = 0
    frame_height_minus1: int = 0

    @classmethod
    def _read(cls, reader: BitReader) -> "FrameSize":
        reader.ensure(32)
        return cls(
            frame_width_minus1=reader.read_bits(16),
            frame_height_minus1=reader.read_bits(16),
        )


@dataclass
class VP9Header:
    """The uncompressed header of a VP9 frame."""

    profile: int = 0
    show_existing_frame: bool = False
    frame_to_show_map_idx: int = 0
    non_key_frame: bool = False
    show_frame: bool = False
    error_resilient_mode: bool = False
    color_config: Optional[ColorConfig] = None
    frame_size: Optional[FrameSize] = None

    @classmethod
    def unmarshal(cls, buf: bytes) -> "VP9Header":
        """Decode a VP9 frame header."""
        reader = BitReader(buf)
        reader.ensure(4)

        if reader.read_bits(2) != 2:
            raise BitstreamError("invalid frame marker")

        low = reader.read_bits(1)
        high = reader.read_bits(1)
        header = cls(profile=(high << 1) + low)

        if header.profile == 3:
            reader.skip(1)

        header.show_existing_frame = reader.read_flag()
        if header.show_existing_frame:
            header.frame_to_show_map_idx = reader.read_bits(3)
            return header

        reader.ensure(3)
        header.non_key_frame = reader.read_flag()
        header.show_frame = reader.read_flag()
        header.error_resilient_mode = reader.read_flag()

        if not header.non_key_frame:
            reader.ensure(24)
            for index, expected in enumerate(_FRAME_SYNC_BYTES):
                if reader.read_bits(8) != expected:
                    raise BitstreamError(f"wrong frame_sync_byte_{index}")
            header.color_config = ColorConfig._read(reader, header.profile)
            header.frame_size = FrameSize._read(reader)

        return header

    def width(self) -> int:
        """Return the video width, or 0 when unknown."""
        if self.frame_size is None:
            return 0
        return self.frame_size.frame_width_minus1 + 1

    def height(self) -> int:
        """Return the video height, or 0 when unknown."""
        if self.frame_size is None:
            return 0
        return self.frame_size.frame_height_minus1 + 1

    def chroma_subsampling(self) -> int:
        """Return the chroma subsampling in ISO-BMFF vpcC form."""
        config = self.color_config
        if config is None:
            return 1
        if not config.subsampling_x and not config.subsampling_y:
            return 3  # 4:4:4
        if config.subsampling_x and not config.subsampling_y:
            return 2  # 4:2:2
        return 1  # 4:2:0 colocated with luma