"""MPEG-4 part 2 video helpers."""

from __future__ import annotations

from enum import IntEnum

MAX_FRAME_SIZE = 1 * 1024 * 1024


class StartCode(IntEnum):
    """MPEG-4 Video start code (ISO 14496-2, Table 6-3)."""

    VIDEO_OBJECT_FIRST = 0x00
    VIDEO_OBJECT_LAST = 0x1F
    VIDEO_OBJECT_LAYER_FIRST = 0x20
    VIDEO_OBJECT_LAYER_LAST = 0x2F
    VISUAL_OBJECT_SEQUENCE = 0xB0
    USER_DATA = 0xB2
    GROUP_OF_VOP = 0xB3
    VISUAL_OBJECT = 0xB5
    VOP = 0xB6


_PREFIX = b"\x00\x00\x01"


def validate_config(config: bytes) -> None:
    """Raise ValueError unless ``config`` is a valid MPEG-4 Video configuration."""
    if not config.startswith(_PREFIX + bytes([StartCode.VISUAL_OBJECT_SEQUENCE])):
        raise ValueError("doesn't start with visual_object_sequence_start_code")

    video_object_found = False
    video_object_layer_found = False

    i = 4
    while i < len(config) - 4:
        if config[i:i + 3] == _PREFIX:
            code = config[i + 3]
            if StartCode.VIDEO_OBJECT_FIRST <= code <= StartCode.VIDEO_OBJECT_LAST:
                video_object_found = True
            elif (
                StartCode.VIDEO_OBJECT_LAYER_FIRST
                <= code
                <= StartCode.VIDEO_OBJECT_LAYER_LAST
            ):
                video_object_layer_found = True
            elif code not in (StartCode.VISUAL_OBJECT, StartCode.USER_DATA):
                raise ValueError(f"unexpected start code: {code:x}")
            i += 3
        i += 1

    if not video_object_found:
        raise ValueError("video object not found")
    if not video_object_layer_found:
        raise ValueError("video object layer not found")