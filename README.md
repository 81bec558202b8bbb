# mediacodecs

mediacodecs is a pure-Python library. It reads and writes the small structures found at the edges of media bitstreams: parameter sets, frame headers, configuration records and marker segments. It needs nothing outside the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `mediacodecs.bitio` | `BitReader`, `BitWriter`, `BitstreamError`, `remove_emulation_prevention` |
| `mediacodecs.h265_nalu` | `NALUType`, `nalu_type_of`, `nalu_type_label`, `is_random_access` |
| `mediacodecs.h265_pps` | `PPS` |
| `mediacodecs.h265_sps` | `SPS`, with `width()`, `height()` and `fps()` |
| `mediacodecs.h265_sps_elements` | `ProfileTierLevel`, `VUI`, `TimingInfo`, `Window`, `ScalingListData`, `ShortTermRefPicSet` |
| `mediacodecs.vpx` | `VP9Header`, `ColorConfig`, `FrameSize` |
| `mediacodecs.jpeg` | `DefineQuantizationTable`, `QuantizationTable`, `DefineHuffmanTable`, `DefineRestartInterval`, `StartOfFrame1`, `StartOfImage`, `StartOfScan`, and the `MARKER_*` constants |
| `mediacodecs.mpeg1audio` | `FrameHeader`, `ChannelMode` |
| `mediacodecs.mpeg4audio_types` | `ObjectType`, `SAMPLE_RATES`, `sample_rate_from_index`, `sample_rate_index` |
| `mediacodecs.adts` | `ADTSPacket`, `parse_adts`, `marshal_adts` |
| `mediacodecs.audio_specific_config` | `AudioSpecificConfig` |
| `mediacodecs.mpeg4video` | `StartCode`, `validate_config` |
| `mediacodecs.opus` | `packet_duration_samples`, `packet_duration` |

### H.265 / HEVC

- `nalu_type_of` reads the NAL unit type from the first header byte.
- `is_random_access` reports whether an access unit contains an IDR or CRA NAL unit.
- `PPS.unmarshal` decodes the leading fields of a picture parameter set.
- `SPS.unmarshal` decodes a sequence parameter set. This includes the profile/tier/level, the short-term reference picture sets, the scaling lists and the VUI with its timing information.
- `SPS.width()` and `SPS.height()` apply the conformance window.
- `SPS.fps()` returns `time_scale / num_units_in_tick`. It returns `0.0` when the SPS carries no timing information.

### JPEG

- `DefineQuantizationTable` is decoded from and encoded to a DQT segment. Only 8-bit precision is supported.
- `DefineRestartInterval` is decoded from a DRI payload.
- `StartOfFrame1` is decoded and encoded for marker `0xC0`. It supports three components with 4:2:2 or 4:2:0 sampling.
- `StartOfScan` is decoded and encoded.
- `DefineHuffmanTable` and `StartOfImage` are encoded only.

The `unmarshal` methods take the payload after the marker and length bytes. The `marshal` methods return the whole segment, including the marker.

### VP9, MPEG-1/2 audio, MPEG-4 video, Opus

- `VP9Header.unmarshal` reads the uncompressed frame header. It then gives the width, height and the vpcC chroma subsampling value.
- `FrameHeader.unmarshal` reads an MPEG-1/2 layer II or III header. It then gives `frame_len()` and `sample_count()`.
- `validate_config` raises `ValueError` unless the bytes are a valid MPEG-4 part 2 decoder configuration.
- `packet_duration_samples` returns the length of an Opus packet in 1/48000 s.
- `packet_duration` returns the same length as a `datetime.timedelta`.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Examples

### Reading an H.265 SPS

The SPS is passed as a NAL unit without its start code.

```python
from mediacodecs.h265_sps import SPS

sps = SPS.unmarshal(sps_nalu)
print(sps.width(), sps.height(), sps.fps())
```

### ADTS

```python
from mediacodecs.adts import ADTSPacket, marshal_adts, parse_adts

stream = marshal_adts([ADTSPacket(sample_rate=48000, channel_count=2, au=b"\xaa\xbb")])
packets = parse_adts(stream)
print(packets[0].sample_rate, packets[0].channel_count, packets[0].au)
```

`parse_adts` accepts only streams with these properties:

- AAC-LC audio.
- No CRC.
- One raw data block per frame.

### AudioSpecificConfig

```python
from mediacodecs.audio_specific_config import AudioSpecificConfig
from mediacodecs.mpeg4audio_types import ObjectType

config = AudioSpecificConfig(type=ObjectType.AAC_LC, sample_rate=48000, channel_count=2)
encoded = config.marshal()
assert AudioSpecificConfig.unmarshal(encoded) == config
```

For SBR or PS streams, set `extension_type` and `extension_sample_rate`. Sample rates that are not in the standard table are written explicitly, in 24 bits.

### Opus packet duration

```python
from mediacodecs.opus import packet_duration, packet_duration_samples

packet_duration_samples(b"\x01")   # 960
packet_duration(b"\x01")           # timedelta(milliseconds=20)
```

## Errors

Malformed or unsupported input raises `ValueError`. The bit-level parsers raise `mediacodecs.bitio.BitstreamError`, a subclass of `ValueError`, when the data runs out or a field is out of range.

## What it does not do

- It does not compute decoding timestamps for H.265 access units.
- It has no parser or encoder for the LATM `StreamMuxConfig`. `AudioSpecificConfig.read` and `AudioSpecificConfig.write_to` work on a shared `BitReader` or `BitWriter`, so they can be used inside such a structure.
- It does not decode or encode media samples. It works only on headers and configuration structures.
- It provides no command-line tool.

## Tests

```
pytest
```