"""MPEG-4 AudioSpecificConfig (ISO 14496-3, 1.6.2.1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mediacodecs.bitio import BitReader, BitstreamError, BitWriter
from mediacodecs.mpeg4audio_types import SAMPLE_RATES, ObjectType

_EXPLICIT_RATE_INDEX = 0x0F
_SUPPORTED_TYPES = frozenset({ObjectType.AAC_LC, ObjectType.SBR, ObjectType.PS})
_EXTENSION_TYPES = frozenset({ObjectType.SBR, ObjectType.PS})
_REVERSE_SAMPLE_RATES = {rate: index for index, rate in enumerate(SAMPLE_RATES)}


def _read_sample_rate(reader: BitReader, what: str) -> int:
    index = reader.read_bits(4)
    if index < len(SAMPLE_RATES):
        return SAMPLE_RATES[index]
    if index == _EXPLICIT_RATE_INDEX:
        return reader.read_bits(24)
    raise BitstreamError(f"invalid {what} index ({index})")


def _write_sample_rate(writer: BitWriter, rate: int) -> None:
    index = _REVERSE_SAMPLE_RATES.get(rate)
    if index is None:
        writer.write_bits(_EXPLICIT_RATE_INDEX, 4)
        writer.write_bits(rate, 24)
    else:
        writer.write_bits(index, 4)


def _sample_rate_bits(rate: int) -> int:
    return 4 if rate in _REVERSE_SAMPLE_RATES else 28


def _channel_config(count: int) -> int:
    if 1 <= count <= 6:
        return count
    if count == 8:
        return 7
    raise ValueError(f"invalid channel count ({count})")


@dataclass
class AudioSpecificConfig:
    """An MPEG-4 audio configuration.

    ``extension_type`` and ``extension_sample_rate`` are set for SBR / PS streams.
    """

    type: ObjectType = ObjectType.AAC_LC
    sample_rate: int = 0
    channel_count: int = 0
    extension_type: Optional[ObjectType] = None
    extension_sample_rate: int = 0
    frame_length_flag: bool = False
    depends_on_core_coder: bool = False
    core_coder_delay: int = 0

    @classmethod
    def unmarshal(cls, buf: bytes) -> "AudioSpecificConfig":
        """Decode a configuration from bytes."""
        return cls.read(BitReader(buf))

    @classmethod
    def read(cls, reader: BitReader) -> "AudioSpecificConfig":
        """Decode a configuration starting at the reader's position."""
        raw_type = reader.read_bits(5)
        if raw_type not in _SUPPORTED_TYPES:
            raise BitstreamError(f"unsupported object type: {raw_type}")
        config = cls(type=ObjectType(raw_type))

        config.sample_rate = _read_sample_rate(reader, "sample rate")

        channel_config = reader.read_bits(4)
        if channel_config == 0:
            raise BitstreamError("not yet supported")
        if 1 <= channel_config <= 6:
            config.channel_count = channel_config
        elif channel_config == 7:
            config.channel_count = 8
        else:
            raise BitstreamError(f"invalid channel configuration ({channel_config})")

        if config.type in _EXTENSION_TYPES:
            config.extension_type = config.type
            config.extension_sample_rate = _read_sample_rate(
                reader, "extension sample rate"
            )
            raw_type = reader.read_bits(5)
            if raw_type != ObjectType.AAC_LC:
                raise BitstreamError(f"unsupported object type: {raw_type}")
            config.type = ObjectType.AAC_LC

        config.frame_length_flag = reader.read_flag()
        config.depends_on_core_coder = reader.read_flag()
        if config.depends_on_core_coder:
            config.core_coder_delay = reader.read_bits(14)

        if reader.read_flag():  # extensionFlag
            raise BitstreamError("unsupported")

        return config

    @property
    def _has_extension(self) -> bool:
        return self.extension_type in _EXTENSION_TYPES

    def size_bits(self) -> int:
        """Return the encoded size in bits."""
        n = 5 + 4 + 2 + 1
        n += _sample_rate_bits(self.sample_rate)
        if self._has_extension:
            n += _sample_rate_bits(self.extension_sample_rate) + 5
        if self.depends_on_core_coder:
            n += 14
        return n

    def write_to(self, writer: BitWriter) -> None:
        """Encode the configuration into ``writer``."""
        if self._has_extension:
            writer.write_bits(int(self.extension_type), 5)
        else:
            writer.write_bits(int(self.type), 5)

        _write_sample_rate(writer, self.sample_rate)
        writer.write_bits(_channel_config(self.channel_count), 4)

        if self._has_extension:
            _write_sample_rate(writer, self.extension_sample_rate)
            writer.write_bits(int(self.type), 5)

        writer.write_flag(self.frame_length_flag)
        writer.write_flag(self.depends_on_core_coder)
        if self.depends_on_core_coder:
            writer.write_bits(self.core_coder_delay, 14)

        writer.write_flag(False)  # extensionFlag

    def marshal(self) -> bytes:
        """Encode the configuration into bytes."""
        writer = BitWriter()
        self.write_to(writer)
        return writer.to_bytes()