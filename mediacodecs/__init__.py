"""Parsers and encoders for H.265, VP9, JPEG, Opus, MPEG-1 audio and MPEG-4 audio/video bitstream structures."""

__version__ = "0.1.0"