"""MPEG-4 audio object types, sample rates and limits."""

from __future__ import annotations

from enum import IntEnum

MAX_ACCESS_UNIT_SIZE = 5 * 1024
SAMPLES_PER_ACCESS_UNIT = 1024


class ObjectType(IntEnum):
    """MPEG-4 audio object type (ISO 14496-3, Table 1.17)."""

    AAC_LC = 2
    SBR = 5
    PS = 29


SAMPLE_RATES = (
    96000,
    88200,
    64000,
    48000,
    44100,
    32000,
    24000,
    22050,
    16000,
    12000,
    11025,
    8000,
    7350,
)

_REVERSE_SAMPLE_RATES = {rate: index for index, rate in enumerate(SAMPLE_RATES)}


def sample_rate_from_index(index: int) -> int:
    """Return the sample rate for a sampling frequency index."""
    if not 0 <= index < len(SAMPLE_RATES):
        raise ValueError(f"invalid sample rate index ({index})")
    return SAMPLE_RATES[index]


def sample_rate_index(rate: int) -> int:
    """Return the sampling frequency index of a sample rate."""
    try:
        return _REVERSE_SAMPLE_RATES[rate]
    except KeyError:
        raise ValueError(f"invalid sample rate: {rate}") from None