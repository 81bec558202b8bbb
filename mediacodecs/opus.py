"""Opus packet helpers (RFC 6716)."""

from __future__ import annotations

from datetime import timedelta

SAMPLE_RATE = 48000

_FRAME_SIZES = (
    480, 960, 1920, 2880,  # SILK NB
    480, 960, 1920, 2880,  # SILK MB
    480, 960, 1920, 2880,  # SILK WB
    480, 960,  # Hybrid SWB
    480, 960,  # Hybrid FB
    120, 240, 480, 960,  # CELT NB
    120, 240, 480, 960,  # CELT WB
    120, 240, 480, 960,  # CELT SWB
    120, 240, 480, 960,  # CELT FB
)


def packet_duration_samples(pkt: bytes) -> int:
    """Return the duration of an Opus packet in 1/48000 seconds."""
    if not pkt:
        return 0

    frame_duration = _FRAME_SIZES[pkt[0] >> 3]
    code = pkt[0] & 3
    if code == 0:
        frame_count = 1
    elif code in (1, 2):
        frame_count = 2
    else:
        if len(pkt) < 2:
            return 0
        frame_count = pkt[1] & 63

    return frame_duration * frame_count


def packet_duration(pkt: bytes) -> timedelta:
    """Return the duration of an Opus packet."""
    samples = packet_duration_samples(pkt)
    return timedelta(microseconds=samples * 1_000_000 // SAMPLE_RATE)