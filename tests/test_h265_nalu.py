import pytest

from mediacodecs.h265_nalu import (
    NALUType,
    is_random_access,
    nalu_type_label,
    nalu_type_of,
)


def test_is_random_access_idr():
    assert is_random_access([bytes([NALUType.IDR_W_RADL << 1])]) is True


def test_is_random_access_trail():
    assert is_random_access([bytes([NALUType.TRAIL_N << 1])]) is False


def test_is_random_access_cra_among_others():
    au = [bytes([NALUType.SPS_NUT << 1, 1]), bytes([NALUType.CRA_NUT << 1])]
    assert is_random_access(au) is True


def test_known_label_is_not_unknown():
    assert not nalu_type_label(10).startswith("unknown")


def test_unknown_label():
    assert nalu_type_label(60).startswith("unknown")


@pytest.mark.parametrize(
    "value, label",
    [
        (NALUType.STSA_R, "STSA_R:"),
        (NALUType.PREFIX_SEI_NUT, "PrefixSEINUT"),
        (NALUType.IDR_W_RADL, "IDR_W_RADL"),
        (NALUType.AGGREGATION_UNIT, "AggregationUnit"),
    ],
)
def test_labels(value, label):
    assert str(value) == label


def test_nalu_type_of_sps():
    assert nalu_type_of(bytes([0x42, 0x01])) is NALUType.SPS_NUT


def test_nalu_type_of_unknown_value():
    assert nalu_type_of(bytes([60 << 1])) == 60