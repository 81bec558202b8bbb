"""H265 NAL unit types and access unit helpers."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

# With a 50 Mbps 2160p60 H265 video, access units do not seem to exceed 8 MiB.
MAX_ACCESS_UNIT_SIZE = 8 * 1024 * 1024
MAX_NALUS_PER_ACCESS_UNIT = 21


class NALUType(IntEnum):
    """Type of an H265 NAL unit (ITU-T Rec. H.265, Table 7-1)."""

    TRAIL_N = 0
    TRAIL_R = 1
    TSA_N = 2
    TSA_R = 3
    STSA_N = 4
    STSA_R = 5
    RADL_N = 6
    RADL_R = 7
    RASL_N = 8
    RASL_R = 9
    RSV_VCL_N10 = 10
    RSV_VCL_R11 = 11
    RSV_VCL_N12 = 12
    RSV_VCL_R13 = 13
    RSV_VCL_N14 = 14
    RSV_VCL_R15 = 15
    BLA_W_LP = 16
    BLA_W_RADL = 17
    BLA_N_LP = 18
    IDR_W_RADL = 19
    IDR_N_LP = 20
    CRA_NUT = 21
    RSV_IRAP_VCL22 = 22
    RSV_IRAP_VCL23 = 23
    VPS_NUT = 32
    SPS_NUT = 33
    PPS_NUT = 34
    AUD_NUT = 35
    EOS_NUT = 36
    EOB_NUT = 37
    FD_NUT = 38
    PREFIX_SEI_NUT = 39
    SUFFIX_SEI_NUT = 40

    # additional types used by RTP payloads
    AGGREGATION_UNIT = 48
    FRAGMENTATION_UNIT = 49
    PACI = 50

    def __str__(self) -> str:
        return nalu_type_label(self)


_LABELS = {
    NALUType.STSA_R: "STSA_R:",
    NALUType.PREFIX_SEI_NUT: "PrefixSEINUT",
    NALUType.SUFFIX_SEI_NUT: "SuffixSEINUT",
    NALUType.AGGREGATION_UNIT: "AggregationUnit",
    NALUType.FRAGMENTATION_UNIT: "FragmentationUnit",
}


def nalu_type_label(value: int) -> str:
    """Return the printable name of a NAL unit type value."""
    try:
        member = NALUType(value)
    except ValueError:
        return f"unknown ({int(value)})"
    return _LABELS.get(member, member.name)


def nalu_type_of(nalu: bytes) -> NALUType | int:
    """Return the type carried in the header of a NAL unit."""
    value = (nalu[0] >> 1) & 0b111111
    try:
        return NALUType(value)
    except ValueError:
        return value


_RANDOM_ACCESS_TYPES = frozenset(
    {NALUType.IDR_W_RADL, NALUType.IDR_N_LP, NALUType.CRA_NUT}
)


def is_random_access(au: Iterable[bytes]) -> bool:
    """Tell whether an access unit can be randomly accessed."""
    return any(nalu_type_of(nalu) in _RANDOM_ACCESS_TYPES for nalu in au)