import pytest

from mediacodecs.mpeg4video import validate_config


def _hex(*chunks):
    return bytes.fromhex("".join(chunks))


VALID_CONFIGS = [
    _hex(
        "000001b0 01000001 b5891300 00010000",
        "00012000 c48d8800 f53c0487 14430000",
        "01b24c61 76633630 2e32332e 313030",
    ),
    _hex(
        "000001b0 01000001 b5891300 00010000",
        "00012000 c48d8800 cd0c0424 14630000",
        "01b24c61 76633532 2e35392e 30",
    ),
]


@pytest.mark.parametrize("config", VALID_CONFIGS, ids=["a", "b"])
def test_valid_configs(config):
    assert validate_config(config) is None


def test_wrong_prefix():
    with pytest.raises(ValueError, match="visual_object_sequence_start_code"):
        validate_config(b"\x00\x00\x01\xb5\x00\x00\x00\x00")


def test_missing_video_object():
    with pytest.raises(ValueError, match="video object not found"):
        validate_config(b"\x00\x00\x01\xb0\x01\x00\x00\x00\x00")


def test_missing_video_object_layer():
    config = b"\x00\x00\x01\xb0\x01\x00\x00\x01\x00\x00\x00\x00\x00"
    with pytest.raises(ValueError, match="video object layer not found"):
        validate_config(config)


def test_unexpected_start_code():
    config = b"\x00\x00\x01\xb0\x01\x00\x00\x01\xb6\x00\x00\x00\x00"
    with pytest.raises(ValueError, match="unexpected start code: b6"):
        validate_config(config)