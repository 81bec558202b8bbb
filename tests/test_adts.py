import pytest

from mediacodecs.adts import ADTSPacket, marshal_adts, parse_adts
from mediacodecs.mpeg4audio_types import ObjectType

CASES = [
    (
        "single",
        bytes([0xFF, 0xF1, 0x4C, 0x80, 0x1, 0x3F, 0xFC, 0xAA, 0xBB]),
        [
            ADTSPacket(
                type=ObjectType.AAC_LC,
                sample_rate=48000,
                channel_count=2,
                au=bytes([0xAA, 0xBB]),
            )
        ],
    ),
    (
        "multiple",
        bytes(
            [
                0xFF, 0xF1, 0x50, 0x40, 0x1, 0x3F, 0xFC, 0xAA,
                0xBB, 0xFF, 0xF1, 0x4C, 0x80, 0x1, 0x3F, 0xFC,
                0xCC, 0xDD,
            ]
        ),
        [
            ADTSPacket(
                type=ObjectType.AAC_LC,
                sample_rate=44100,
                channel_count=1,
                au=bytes([0xAA, 0xBB]),
            ),
            ADTSPacket(
                type=ObjectType.AAC_LC,
                sample_rate=48000,
                channel_count=2,
                au=bytes([0xCC, 0xDD]),
            ),
        ],
    ),
]

SINGLE = CASES[0][1]


@pytest.mark.parametrize("name,byts,pkts", CASES, ids=[c[0] for c in CASES])
def test_unmarshal(name, byts, pkts):
    assert parse_adts(byts) == pkts


@pytest.mark.parametrize("name,byts,pkts", CASES, ids=[c[0] for c in CASES])
def test_marshal(name, byts, pkts):
    assert marshal_adts(pkts) == byts


@pytest.mark.parametrize("name,byts,pkts", CASES, ids=[c[0] for c in CASES])
def test_round_trip(name, byts, pkts):
    assert parse_adts(marshal_adts(parse_adts(byts))) == pkts


def test_too_short():
    with pytest.raises(ValueError, match="invalid length"):
        parse_adts(SINGLE[:7])


def test_empty():
    with pytest.raises(ValueError, match="invalid length"):
        parse_adts(b"")


def test_bad_syncword():
    with pytest.raises(ValueError, match="invalid syncword"):
        parse_adts(bytes(9))


def test_crc_not_supported():
    data = bytearray(SINGLE)
    data[1] = 0xF0
    with pytest.raises(ValueError, match="CRC is not supported"):
        parse_adts(bytes(data))


def test_unsupported_type():
    data = bytearray(SINGLE)
    data[2] = 0x8C
    with pytest.raises(ValueError, match="unsupported audio type: 3"):
        parse_adts(bytes(data))


def test_truncated_frame():
    with pytest.raises(ValueError, match="invalid frame length"):
        parse_adts(SINGLE + bytes([0xFF, 0xF1, 0x4C, 0x80, 0x1, 0x3F, 0xFC, 0xAA]))


def test_marshal_invalid_channel_count():
    pkt = ADTSPacket(sample_rate=48000, channel_count=7, au=b"\x00")
    with pytest.raises(ValueError, match="invalid channel count"):
        marshal_adts([pkt])


def test_marshal_invalid_sample_rate():
    pkt = ADTSPacket(sample_rate=53000, channel_count=2, au=b"\x00")
    with pytest.raises(ValueError, match="invalid sample rate"):
        marshal_adts([pkt])


def test_marshal_no_packets():
    assert marshal_adts([]) == b""