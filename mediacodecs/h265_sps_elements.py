"""Building blocks of an H265 sequence parameter set (ITU-T Rec. H.265, 7.3)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from mediacodecs.bitio import BitReader, BitstreamError

MAX_NEGATIVE_PICS = 255
MAX_POSITIVE_PICS = 255
MAX_SHORT_TERM_REF_PICS = 64

_EXTENDED_SAR = 255


def _grid(value):
    return lambda: [[value] * 6 for _ in range(4)]


@dataclass
class ScalingListData:
    """Scaling list data of an SPS."""

    pred_mode_flag: list[list[bool]] = field(default_factory=_grid(False))
    pred_matrix_id_delta: list[list[int]] = field(default_factory=_grid(0))
    dc_coef_minus8: list[list[int]] = field(default_factory=_grid(0))

    @classmethod
    def read(cls, reader: BitReader) -> "ScalingListData":
        """Read scaling list data from ``reader``."""
        data = cls()
        for size_id in range(4):
            step = 3 if size_id == 3 else 1
            for matrix_id in range(0, 6, step):
                flag = reader.read_flag()
                data.pred_mode_flag[size_id][matrix_id] = flag
                if not flag:
                    data.pred_matrix_id_delta[size_id][matrix_id] = (
                        reader.read_golomb_unsigned()
                    )
                    continue

                coef_num = min(64, 1 << (4 + (size_id << 1)))
                if size_id > 1:
                    data.dc_coef_minus8[size_id - 2][matrix_id] = (
                        reader.read_golomb_signed()
                    )
                for _ in range(coef_num):
                    reader.read_golomb_signed()  # scaling_list_delta_coef
        return data


@dataclass
class Window:
    """A cropping or display window."""

    left_offset: int = 0
    right_offset: int = 0
    top_offset: int = 0
    bottom_offset: int = 0

    @classmethod
    def read(cls, reader: BitReader) -> "Window":
        """Read a window from ``reader``."""
        return cls(
            left_offset=reader.read_golomb_unsigned(),
            right_offset=reader.read_golomb_unsigned(),
            top_offset=reader.read_golomb_unsigned(),
            bottom_offset=reader.read_golomb_unsigned(),
        )


@dataclass
class TimingInfo:
    """VUI timing information."""

    num_units_in_tick: int = 0
    time_scale: int = 0
    poc_proportional_to_timing_flag: bool = False
    num_ticks_poc_diff_one_minus1: int = 0

    @classmethod
    def read(cls, reader: BitReader) -> "TimingInfo":
        """Read timing information from ``reader``."""
        reader.ensure(32 + 32 + 1)
        info = cls(
            num_units_in_tick=reader.read_bits(32),
            time_scale=reader.read_bits(32),
            poc_proportional_to_timing_flag=reader.read_flag(),
        )
        if info.poc_proportional_to_timing_flag:
            info.num_ticks_poc_diff_one_minus1 = reader.read_golomb_unsigned()
        return info


@dataclass
class VUI:
    """Video usability information."""

    aspect_ratio_info_present_flag: bool = False
    aspect_ratio_idc: int = 0
    sar_width: int = 0
    sar_height: int = 0
    overscan_info_present_flag: bool = False
    overscan_appropriate_flag: bool = False
    video_signal_type_present_flag: bool = False
    video_format: int = 0
    video_full_range_flag: bool = False
    colour_description_present_flag: bool = False
    colour_primaries: int = 0
    transfer_characteristics: int = 0
    matrix_coefficients: int = 0
    chroma_loc_info_present_flag: bool = False
    chroma_sample_loc_type_top_field: int = 0
    chroma_sample_loc_type_bottom_field: int = 0
    neutral_chroma_indication_flag: bool = False
    field_seq_flag: bool = False
    frame_field_info_present_flag: bool = False
    default_display_window: Optional[Window] = None
    timing_info: Optional[TimingInfo] = None

    @classmethod
    def read(cls, reader: BitReader) -> "VUI":
        """Read VUI parameters from ``reader``."""
        vui = cls()

        vui.aspect_ratio_info_present_flag = reader.read_flag()
        if vui.aspect_ratio_info_present_flag:
            vui.aspect_ratio_idc = reader.read_bits(8)
            if vui.aspect_ratio_idc == _EXTENDED_SAR:
                reader.ensure(32)
                vui.sar_width = reader.read_bits(16)
                vui.sar_height = reader.read_bits(16)

        vui.overscan_info_present_flag = reader.read_flag()
        if vui.overscan_info_present_flag:
            vui.overscan_appropriate_flag = reader.read_flag()

        vui.video_signal_type_present_flag = reader.read_flag()
        if vui.video_signal_type_present_flag:
            reader.ensure(5)
            vui.video_format = reader.read_bits(3)
            vui.video_full_range_flag = reader.read_flag()
            vui.colour_description_present_flag = reader.read_flag()
            if vui.colour_description_present_flag:
                reader.ensure(24)
                vui.colour_primaries = reader.read_bits(8)
                vui.transfer_characteristics = reader.read_bits(8)
                vui.matrix_coefficients = reader.read_bits(8)

        vui.chroma_loc_info_present_flag = reader.read_flag()
        if vui.chroma_loc_info_present_flag:
            vui.chroma_sample_loc_type_top_field = reader.read_golomb_unsigned()
            vui.chroma_sample_loc_type_bottom_field = reader.read_golomb_unsigned()

        vui.neutral_chroma_indication_flag = reader.read_flag()
        vui.field_seq_flag = reader.read_flag()
        vui.frame_field_info_present_flag = reader.read_flag()

        if reader.read_flag():
            vui.default_display_window = Window.read(reader)

        if reader.read_flag():
            vui.timing_info = TimingInfo.read(reader)

        return vui


@dataclass
class ProfileTierLevel:
    """Profile, tier and level of an SPS."""

    general_profile_space: int = 0
    general_tier_flag: int = 0
    general_profile_idc: int = 0
    general_profile_compatibility_flag: list[bool] = field(
        default_factory=lambda: [False] * 32
    )
    general_progressive_source_flag: bool = False
    general_interlaced_source_flag: bool = False
    general_non_packed_constraint_flag: bool = False
    general_frame_only_constraint_flag: bool = False
    general_max_12bit_constraint_flag: bool = False
    general_max_10bit_constraint_flag: bool = False
    general_max_8bit_constraint_flag: bool = False
    general_max_422_chroma_constraint_flag: bool = False
    general_max_420_chroma_constraint_flag: bool = False
    general_max_monochrome_constraint_flag: bool = False
    general_intra_constraint_flag: bool = False
    general_one_picture_only_constraint_flag: bool = False
    general_lower_bit_rate_constraint_flag: bool = False
    general_max_14bit_constraint_flag: bool = False
    general_level_idc: int = 0
    sub_layer_profile_present_flag: list[bool] = field(default_factory=list)
    sub_layer_level_present_flag: list[bool] = field(default_factory=list)

    @classmethod
    def read(cls, reader: BitReader, max_sub_layers_minus1: int) -> "ProfileTierLevel":
        """Read a profile_tier_level structure from ``reader``."""
        reader.ensure(8 + 32 + 12 + 34 + 8)
        ptl = cls(
            general_profile_space=reader.read_bits(2),
            general_tier_flag=reader.read_bits(1),
            general_profile_idc=reader.read_bits(5),
        )
        ptl.general_profile_compatibility_flag = [
            reader.read_flag() for _ in range(32)
        ]
        ptl.general_progressive_source_flag = reader.read_flag()
        ptl.general_interlaced_source_flag = reader.read_flag()
        ptl.general_non_packed_constraint_flag = reader.read_flag()
        ptl.general_frame_only_constraint_flag = reader.read_flag()
        ptl.general_max_12bit_constraint_flag = reader.read_flag()
        ptl.general_max_10bit_constraint_flag = reader.read_flag()
        ptl.general_max_8bit_constraint_flag = reader.read_flag()
        ptl.general_max_422_chroma_constraint_flag = reader.read_flag()
        ptl.general_max_420_chroma_constraint_flag = reader.read_flag()
        ptl.general_max_monochrome_constraint_flag = reader.read_flag()
        ptl.general_intra_constraint_flag = reader.read_flag()
        ptl.general_one_picture_only_constraint_flag = reader.read_flag()
        ptl.general_lower_bit_rate_constraint_flag = reader.read_flag()

        compat = ptl.general_profile_compatibility_flag
        if ptl.general_profile_idc in (5, 9, 10, 11) or any(
            compat[i] for i in (5, 9, 10, 11)
        ):
            ptl.general_max_14bit_constraint_flag = reader.read_flag()
            reader.skip(34)
        else:
            reader.skip(35)

        ptl.general_level_idc = reader.read_bits(8)

        if max_sub_layers_minus1 > 0:
            reader.ensure(2 * max_sub_layers_minus1)
            for _ in range(max_sub_layers_minus1):
                ptl.sub_layer_profile_present_flag.append(reader.read_flag())
                ptl.sub_layer_level_present_flag.append(reader.read_flag())
            reader.skip((8 - max_sub_layers_minus1) * 2)

        for profile_present, level_present in zip(
            ptl.sub_layer_profile_present_flag, ptl.sub_layer_level_present_flag
        ):
            if profile_present:
                raise BitstreamError("SubLayerProfilePresentFlag not supported yet")
            if level_present:
                raise BitstreamError("SubLayerLevelPresentFlag not supported yet")

        return ptl


@dataclass
class ShortTermRefPicSet:
    """A short-term reference picture set."""

    inter_ref_pic_set_prediction_flag: bool = False
    delta_idx_minus1: int = 0
    delta_rps_sign: bool = False
    abs_delta_rps_minus1: int = 0
    num_negative_pics: int = 0
    num_positive_pics: int = 0
    delta_poc_s0: list[int] = field(default_factory=list)
    used_by_curr_pic_s0_flag: list[bool] = field(default_factory=list)
    delta_poc_s1: list[int] = field(default_factory=list)
    used_by_curr_pic_s1_flag: list[bool] = field(default_factory=list)

    @classmethod
    def read(
        cls,
        reader: BitReader,
        st_rps_idx: int,
        num_sets: int,
        sets: Sequence["ShortTermRefPicSet"],
    ) -> "ShortTermRefPicSet":
        """Read the set with index ``st_rps_idx``; ``sets`` holds those read before."""
        rps = cls()
        if st_rps_idx != 0:
            rps.inter_ref_pic_set_prediction_flag = reader.read_flag()

        if rps.inter_ref_pic_set_prediction_flag:
            rps._read_predicted(reader, st_rps_idx, num_sets, sets)
        else:
            rps._read_explicit(reader)
        return rps

    def _read_predicted(self, reader, st_rps_idx, num_sets, sets) -> None:
        if st_rps_idx == num_sets:
            self.delta_idx_minus1 = reader.read_golomb_unsigned()

        self.delta_rps_sign = reader.read_flag()
        self.abs_delta_rps_minus1 = reader.read_golomb_unsigned()
        sign = -1 if self.delta_rps_sign else 1
        delta_rps = sign * (self.abs_delta_rps_minus1 + 1)

        ref_idx = st_rps_idx - (self.delta_idx_minus1 + 1)
        if not 0 <= ref_idx < len(sets):
            raise BitstreamError("invalid refRpsIdx")

        ref = sets[ref_idx]
        num_neg = ref.num_negative_pics
        num_pos = ref.num_positive_pics
        num_delta_pocs = num_neg + num_pos

        used: list[bool] = []
        use_delta: list[bool] = []
        for _ in range(num_delta_pocs + 1):
            flag = reader.read_flag()
            used.append(flag)
            use_delta.append(True if flag else reader.read_flag())

        def add_s0(poc: int, k: int) -> None:
            self.delta_poc_s0.append(poc)
            self.used_by_curr_pic_s0_flag.append(used[k])

        def add_s1(poc: int, k: int) -> None:
            self.delta_poc_s1.append(poc)
            self.used_by_curr_pic_s1_flag.append(used[k])

        for j in reversed(range(num_pos)):
            poc = ref.delta_poc_s1[j] + delta_rps
            if poc < 0 and use_delta[num_neg + j]:
                add_s0(poc, num_neg + j)
        if delta_rps < 0 and use_delta[num_delta_pocs]:
            add_s0(delta_rps, num_delta_pocs)
        for j in range(num_neg):
            poc = ref.delta_poc_s0[j] + delta_rps
            if poc < 0 and use_delta[j]:
                add_s0(poc, j)
        self.num_negative_pics = len(self.delta_poc_s0)

        for j in reversed(range(num_neg)):
            poc = ref.delta_poc_s0[j] + delta_rps
            if poc > 0 and use_delta[j]:
                add_s1(poc, j)
        if delta_rps > 0 and use_delta[num_delta_pocs]:
            add_s1(delta_rps, num_delta_pocs)
        for j in range(num_pos):
            poc = ref.delta_poc_s1[j] + delta_rps
            if poc > 0 and use_delta[num_neg + j]:
                add_s1(poc, num_neg + j)
        self.num_positive_pics = len(self.delta_poc_s1)

    def _read_explicit(self, reader: BitReader) -> None:
        self.num_negative_pics = reader.read_golomb_unsigned()
        self.num_positive_pics = reader.read_golomb_unsigned()

        if self.num_negative_pics > MAX_NEGATIVE_PICS:
            raise BitstreamError(f"num_negative_pics exceeds {MAX_NEGATIVE_PICS}")
        poc = 0
        for _ in range(self.num_negative_pics):
            poc -= reader.read_golomb_unsigned() + 1
            self.delta_poc_s0.append(poc)
            self.used_by_curr_pic_s0_flag.append(reader.read_flag())

        if self.num_positive_pics > MAX_POSITIVE_PICS:
            raise BitstreamError(f"num_positive_pics exceeds {MAX_POSITIVE_PICS}")
        poc = 0
        for _ in range(self.num_positive_pics):
            poc += reader.read_golomb_unsigned() + 1
            self.delta_poc_s1.append(poc)
            self.used_by_curr_pic_s1_flag.append(reader.read_flag())