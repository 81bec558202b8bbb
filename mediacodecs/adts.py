"""ADTS streams (ISO 14496-3, Table 1.A.5)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from mediacodecs.mpeg4audio_types import (
    MAX_ACCESS_UNIT_SIZE,
    ObjectType,
    sample_rate_from_index,
    sample_rate_index,
)

_HEADER_SIZE = 7
_BUFFER_FULLNESS = 0x07FF


@dataclass
class ADTSPacket:
    """A single ADTS packet."""

    type: ObjectType = ObjectType.AAC_LC
    sample_rate: int = 0
    channel_count: int = 0
    au: bytes = b""


def _channel_count(config: int) -> int:
    if 1 <= config <= 6:
        return config
    if config == 7:
        return 8
    raise ValueError(f"invalid channel configuration: {config}")


def _channel_config(count: int) -> int:
    if 1 <= count <= 6:
        return count
    if count == 8:
        return 7
    raise ValueError(f"invalid channel count ({count})")


def parse_adts(buf: bytes) -> list[ADTSPacket]:
    """Decode an ADTS stream into packets."""
    buf = bytes(buf)
    packets: list[ADTSPacket] = []
    pos = 0

    while True:
        if len(buf) - pos < 8:
            raise ValueError("invalid length")

        sync_word = (buf[pos] << 4) | (buf[pos + 1] >> 4)
        if sync_word != 0xFFF:
            raise ValueError("invalid syncword")

        if buf[pos + 1] & 0x01 != 1:
            raise ValueError("CRC is not supported")

        raw_type = (buf[pos + 2] >> 6) + 1
        if raw_type != ObjectType.AAC_LC:
            raise ValueError(f"unsupported audio type: {raw_type}")

        sample_rate_idx = (buf[pos + 2] >> 2) & 0x0F
        if sample_rate_idx > 12:
            raise ValueError(f"invalid sample rate index: {sample_rate_idx}")

        channel_config = ((buf[pos + 2] & 0x01) << 2) | ((buf[pos + 3] >> 6) & 0x03)
        channel_count = _channel_count(channel_config)

        frame_len = (
            ((buf[pos + 3] & 0x03) << 11)
            | (buf[pos + 4] << 3)
            | ((buf[pos + 5] >> 5) & 0x07)
        ) - _HEADER_SIZE

        if frame_len <= 0:
            raise ValueError("invalid FrameLen")
        if frame_len > MAX_ACCESS_UNIT_SIZE:
            raise ValueError(
                f"access unit size ({frame_len}) is too big, "
                f"maximum is {MAX_ACCESS_UNIT_SIZE}"
            )

        if buf[pos + 6] & 0x03 != 0:
            raise ValueError("frame count greater than 1 is not supported")

        start = pos + _HEADER_SIZE
        if len(buf) - start < frame_len:
            raise ValueError("invalid frame length")

        packets.append(
            ADTSPacket(
                type=ObjectType.AAC_LC,
                sample_rate=sample_rate_from_index(sample_rate_idx),
                channel_count=channel_count,
                au=buf[start:start + frame_len],
            )
        )
        pos = start + frame_len

        if pos == len(buf):
            return packets


def marshal_adts(packets: Iterable[ADTSPacket]) -> bytes:
    """Encode packets into an ADTS stream."""
    out = bytearray()
    for pkt in packets:
        sr_index = sample_rate_index(pkt.sample_rate)
        channel_config = _channel_config(pkt.channel_count)
        frame_len = len(pkt.au) + _HEADER_SIZE

        out += bytes(
            (
                0xFF,
                0xF1,
                (((int(pkt.type) - 1) << 6) | (sr_index << 2) | ((channel_config >> 2) & 0x01))
                & 0xFF,
                (((channel_config & 0x03) << 6) | ((frame_len >> 11) & 0x03)) & 0xFF,
                (frame_len >> 3) & 0xFF,
                (((frame_len & 0x07) << 5) | ((_BUFFER_FULLNESS >> 6) & 0x1F)) & 0xFF,
                ((_BUFFER_FULLNESS & 0x3F) << 2) & 0xFF,
            )
        )
        out += bytes(pkt.au)
    return bytes(out)