"""H265 picture parameter set (ITU-T Rec. H.265, 7.3.2.3.1)."""

from __future__ import annotations

from dataclasses import dataclass

from mediacodecs.bitio import BitReader, BitstreamError, remove_emulation_prevention
from mediacodecs.h265_nalu import NALUType, nalu_type_of


@dataclass
class PPS:
    """The leading fields of an H265 picture parameter set."""

    id: int = 0
    sps_id: int = 0
    dependent_slice_segments_enabled_flag: bool = False
    output_flag_present_flag: bool = False
    num_extra_slice_header_bits: int = 0

    @classmethod
    def unmarshal(cls, buf: bytes) -> "PPS":
        """Decode a PPS NAL unit."""
        if len(buf) < 2:
            raise BitstreamError("not enough bits")
        if nalu_type_of(buf) != NALUType.PPS_NUT:
            raise BitstreamError("not a PPS")

        reader = BitReader(remove_emulation_prevention(buf[1:]), 8)
        pps_id = reader.read_golomb_unsigned()
        sps_id = reader.read_golomb_unsigned()
        reader.ensure(5)
        return cls(
            id=pps_id,
            sps_id=sps_id,
            dependent_slice_segments_enabled_flag=reader.read_flag(),
            output_flag_present_flag=reader.read_flag(),
            num_extra_slice_header_bits=reader.read_bits(3),
        )