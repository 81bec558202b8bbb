"""MPEG-1/2 audio frame headers (ISO 11172-3, 2.4.1.3)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_BITRATES = (
    # MPEG-1
    (
        (),  # layer 1
        (
            32000, 48000, 56000, 64000, 80000, 96000, 112000,
            128000, 160000, 192000, 224000, 256000, 320000, 384000,
        ),
        (
            32000, 40000, 48000, 56000, 64000, 80000, 96000,
            112000, 128000, 160000, 192000, 224000, 256000, 320000,
        ),
    ),
    # MPEG-2
    (
        (),  # layer 1
        (
            8000, 16000, 24000, 32000, 40000, 48000, 56000,
            64000, 80000, 96000, 112000, 128000, 144000, 160000,
        ),
        (
            8000, 16000, 24000, 32000, 40000, 48000, 56000,
            64000, 80000, 96000, 112000, 128000, 144000, 160000,
        ),
    ),
)

_SAMPLE_RATES = (
    (44100, 48000, 32000),  # MPEG-1
    (22050, 24000, 16000),  # MPEG-2
)

_SAMPLES_PER_FRAME = (
    (384, 1152, 1152),  # MPEG-1
    (384, 1152, 576),  # MPEG-2
)


class ChannelMode(IntEnum):
    """Channel mode of an MPEG-1/2 audio frame."""

    STEREO = 0
    JOINT_STEREO = 1
    DUAL_CHANNEL = 2
    MONO = 3


@dataclass
class FrameHeader:
    """Header of an MPEG-1/2 audio frame."""

    mpeg2: bool = False
    layer: int = 0
    bitrate: int = 0
    sample_rate: int = 0
    padding: bool = False
    channel_mode: ChannelMode = ChannelMode.STEREO

    @classmethod
    def unmarshal(cls, buf: bytes) -> "FrameHeader":
        """Decode a frame header."""
        if len(buf) < 5:
            raise ValueError("not enough bytes")

        sync_word = (buf[0] << 4) | (buf[1] >> 4)
        if sync_word != 0x0FFF:
            raise ValueError(f"sync word not found: {sync_word:x}")

        mpeg2 = ((buf[1] >> 3) & 0x01) == 0
        mpeg_index = 1 if mpeg2 else 0

        layer = 4 - ((buf[1] >> 1) & 0b11)
        if layer <= 1 or layer >= 4:
            raise ValueError(f"unsupported MPEG layer: {layer}")

        bitrate_index = buf[2] >> 4
        if bitrate_index == 0 or bitrate_index >= 15:
            raise ValueError("invalid bitrate")

        sample_rate_index = (buf[2] >> 2) & 0b11
        if sample_rate_index >= 3:
            raise ValueError("invalid sample rate")

        return cls(
            mpeg2=mpeg2,
            layer=layer,
            bitrate=_BITRATES[mpeg_index][layer - 1][bitrate_index - 1],
            sample_rate=_SAMPLE_RATES[mpeg_index][sample_rate_index],
            padding=((buf[2] >> 1) & 0b1) != 0,
            channel_mode=ChannelMode(buf[3] >> 6),
        )

    def frame_len(self) -> int:
        """Return the length in bytes of the frame this header belongs to."""
        length = 144 * self.bitrate // self.sample_rate
        return length + 1 if self.padding else length

    def sample_count(self) -> int:
        """Return the number of samples in the frame."""
        return _SAMPLES_PER_FRAME[1 if self.mpeg2 else 0][self.layer - 1]