"""H265 sequence parameter set (ITU-T Rec. H.265, 7.3.2.2.1)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from mediacodecs.bitio import BitReader, BitstreamError, remove_emulation_prevention
from mediacodecs.h265_nalu import NALUType, nalu_type_of
from mediacodecs.h265_sps_elements import (
    MAX_SHORT_TERM_REF_PICS,
    ProfileTierLevel,
    ScalingListData,
    ShortTermRefPicSet,
    VUI,
    Window,
)

_SUB_WIDTH_C = (1, 2, 2, 1)
_SUB_HEIGHT_C = (1, 2, 1, 1)

_UINT32_MASK = 0xFFFFFFFF


@dataclass
class SPS:
    """An H265 sequence parameter set."""

    vps_id: int = 0
    max_sub_layers_minus1: int = 0
    temporal_id_nesting_flag: bool = False
    profile_tier_level: ProfileTierLevel = field(default_factory=ProfileTierLevel)
    id: int = 0
    chroma_format_idc: int = 0
    separate_colour_plane_flag: bool = False
    pic_width_in_luma_samples: int = 0
    pic_height_in_luma_samples: int = 0
    conformance_window: Optional[Window] = None
    bit_depth_luma_minus8: int = 0
    bit_depth_chroma_minus8: int = 0
    log2_max_pic_order_cnt_lsb_minus4: int = 0
    sub_layer_ordering_info_present_flag: bool = False
    max_dec_pic_buffering_minus1: list[int] = field(default_factory=list)
    max_num_reorder_pics: list[int] = field(default_factory=list)
    max_latency_increase_plus1: list[int] = field(default_factory=list)
    log2_min_luma_coding_block_size_minus3: int = 0
    log2_diff_max_min_luma_coding_block_size: int = 0
    log2_min_luma_transform_block_size_minus2: int = 0
    log2_diff_max_min_luma_transform_block_size: int = 0
    max_transform_hierarchy_depth_inter: int = 0
    max_transform_hierarchy_depth_intra: int = 0
    scaling_list_enabled_flag: bool = False
    scaling_list_data: Optional[ScalingListData] = None
    amp_enabled_flag: bool = False
    sample_adaptive_offset_enabled_flag: bool = False
    pcm_enabled_flag: bool = False
    pcm_sample_bit_depth_luma_minus1: int = 0
    pcm_sample_bit_depth_chroma_minus1: int = 0
    log2_min_pcm_luma_coding_block_size_minus3: int = 0
    log2_diff_max_min_pcm_luma_coding_block_size: int = 0
    pcm_loop_filter_disabled_flag: bool = False
    short_term_ref_pic_sets: list[ShortTermRefPicSet] = field(default_factory=list)
    long_term_ref_pics_present_flag: bool = False
    temporal_mvp_enabled_flag: bool = False
    strong_intra_smoothing_enabled_flag: bool = False
    vui: Optional[VUI] = None

    @classmethod
    def unmarshal(cls, buf: bytes) -> "SPS":
        """Decode an SPS NAL unit."""
        if len(buf) < 2:
            raise BitstreamError("not enough bits")
        if nalu_type_of(buf) != NALUType.SPS_NUT:
            raise BitstreamError("not a SPS")

        reader = BitReader(remove_emulation_prevention(buf[1:]), 8)

        reader.ensure(8)
        sps = cls(
            vps_id=reader.read_bits(4),
            max_sub_layers_minus1=reader.read_bits(3),
            temporal_id_nesting_flag=reader.read_flag(),
        )
        sps.profile_tier_level = ProfileTierLevel.read(
            reader, sps.max_sub_layers_minus1
        )
        sps.id = reader.read_golomb_unsigned() & 0xFF

        sps.chroma_format_idc = reader.read_golomb_unsigned()
        if sps.chroma_format_idc > 3:
            raise BitstreamError("invalid chroma_format_idc")
        if sps.chroma_format_idc == 3:
            sps.separate_colour_plane_flag = reader.read_flag()

        sps.pic_width_in_luma_samples = reader.read_golomb_unsigned()
        sps.pic_height_in_luma_samples = reader.read_golomb_unsigned()

        if reader.read_flag():
            sps.conformance_window = Window.read(reader)

        sps.bit_depth_luma_minus8 = reader.read_golomb_unsigned()
        sps.bit_depth_chroma_minus8 = reader.read_golomb_unsigned()
        sps.log2_max_pic_order_cnt_lsb_minus4 = reader.read_golomb_unsigned()

        sps.sub_layer_ordering_info_present_flag = reader.read_flag()
        count = sps.max_sub_layers_minus1 + 1
        sps.max_dec_pic_buffering_minus1 = [0] * count
        sps.max_num_reorder_pics = [0] * count
        sps.max_latency_increase_plus1 = [0] * count
        start = 0 if sps.sub_layer_ordering_info_present_flag else sps.max_sub_layers_minus1
        for i in range(start, count):
            sps.max_dec_pic_buffering_minus1[i] = reader.read_golomb_unsigned()
            sps.max_num_reorder_pics[i] = reader.read_golomb_unsigned()
            sps.max_latency_increase_plus1[i] = reader.read_golomb_unsigned()

        sps.log2_min_luma_coding_block_size_minus3 = reader.read_golomb_unsigned()
        sps.log2_diff_max_min_luma_coding_block_size = reader.read_golomb_unsigned()
        sps.log2_min_luma_transform_block_size_minus2 = reader.read_golomb_unsigned()
        sps.log2_diff_max_min_luma_transform_block_size = (
            reader.read_golomb_unsigned()
        )
        sps.max_transform_hierarchy_depth_inter = reader.read_golomb_unsigned()
        sps.max_transform_hierarchy_depth_intra = reader.read_golomb_unsigned()

        sps.scaling_list_enabled_flag = reader.read_flag()
        if sps.scaling_list_enabled_flag and reader.read_flag():
            sps.scaling_list_data = ScalingListData.read(reader)

        sps.amp_enabled_flag = reader.read_flag()
        sps.sample_adaptive_offset_enabled_flag = reader.read_flag()

        sps.pcm_enabled_flag = reader.read_flag()
        if sps.pcm_enabled_flag:
            reader.ensure(8)
            sps.pcm_sample_bit_depth_luma_minus1 = reader.read_bits(4)
            sps.pcm_sample_bit_depth_chroma_minus1 = reader.read_bits(4)
            sps.log2_min_pcm_luma_coding_block_size_minus3 = (
                reader.read_golomb_unsigned()
            )
            sps.log2_diff_max_min_pcm_luma_coding_block_size = (
                reader.read_golomb_unsigned()
            )
            sps.pcm_loop_filter_disabled_flag = reader.read_flag()

        num_sets = reader.read_golomb_unsigned()
        if num_sets > MAX_SHORT_TERM_REF_PICS:
            raise BitstreamError(
                f"num_short_term_ref_pic_sets exceeds {MAX_SHORT_TERM_REF_PICS}"
            )
        for i in range(num_sets):
            sps.short_term_ref_pic_sets.append(
                ShortTermRefPicSet.read(
                    reader, i, num_sets, sps.short_term_ref_pic_sets
                )
            )

        sps.long_term_ref_pics_present_flag = reader.read_flag()
        if sps.long_term_ref_pics_present_flag:
            if reader.read_golomb_unsigned() > 0:
                raise BitstreamError(
                    "long term ref pics inside SPS are not supported yet"
                )

        sps.temporal_mvp_enabled_flag = reader.read_flag()
        sps.strong_intra_smoothing_enabled_flag = reader.read_flag()

        if reader.read_flag():
            sps.vui = VUI.read(reader)

        return sps

    def width(self) -> int:
        """Return the video width, after cropping."""
        width = self.pic_width_in_luma_samples
        if self.conformance_window is not None:
            win = self.conformance_window
            crop_unit_x = _SUB_WIDTH_C[self.chroma_format_idc]
            width -= (win.left_offset + win.right_offset) * crop_unit_x
        return width & _UINT32_MASK

    def height(self) -> int:
        """Return the video height, after cropping."""
        height = self.pic_height_in_luma_samples
        if self.conformance_window is not None:
            win = self.conformance_window
            crop_unit_y = _SUB_HEIGHT_C[self.chroma_format_idc]
            height -= (win.top_offset + win.bottom_offset) * crop_unit_y
        return height & _UINT32_MASK

    def fps(self) -> float:
        """Return the frame rate, or 0 when timing information is missing."""
        if self.vui is None or self.vui.timing_info is None:
            return 0.0
        info = self.vui.timing_info
        if info.num_units_in_tick == 0:
            return math.inf if info.time_scale > 0 else math.nan
        return info.time_scale / info.num_units_in_tick