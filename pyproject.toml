[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mediacodecs"
version = "0.1.0"
description = "Parsers and encoders for H.265, VP9, JPEG, Opus, MPEG-1 audio and MPEG-4 audio/video bitstream structures"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "h265",
    "hevc",
    "vp9",
    "jpeg",
    "opus",
    "aac",
    "adts",
    "mpeg4",
    "mp3",
    "codec",
    "bitstream",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mediacodecs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
