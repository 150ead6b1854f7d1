# pylint: disable=missing-module-docstring,missing-function-docstring

import io
import os
import struct
import wave

import pytest
import soundfile as sf

from soundmush.wav import (
    frame,
    build_header,
    FormatDescriptor,
    FormatInvalid,
    FramingError,
    DEFAULT_FORMAT,
    HEADER_SIZE,
    MAX_DATA_SIZE,
)


def read_back(container):
    with wave.open(io.BytesIO(container), "rb") as wf:
        params = (wf.getnchannels(), wf.getsampwidth(), wf.getframerate())
        frames = wf.readframes(wf.getnframes())

    return params, frames


# ---------------------------------------------------------------------
# Header layout
# ---------------------------------------------------------------------

def test_empty_payload_is_bare_header():
    container = frame(b"")

    assert len(container) == HEADER_SIZE == 44
    assert container[0:4] == b"RIFF"
    assert struct.unpack("<I", container[4:8])[0] == 36
    assert container[8:16] == b"WAVEfmt "
    assert container[36:40] == b"data"
    assert struct.unpack("<I", container[40:44])[0] == 0


def test_fmt_chunk_fields():
    header = build_header(0)
    fmt_size, audio_format, channels, rate, byte_rate, block_align, bits = \
        struct.unpack("<IHHIIHH", header[16:36])

    assert fmt_size == 16
    assert audio_format == 1
    assert channels == 1
    assert rate == 8000
    assert byte_rate == 8000
    assert block_align == 1
    assert bits == 8


def test_exact_header_bytes():
    expected = (b"RIFF" + (41).to_bytes(4, "little") + b"WAVE"
                + b"fmt " + (16).to_bytes(4, "little")
                + b"\x01\x00" + b"\x01\x00"
                + (8000).to_bytes(4, "little") + (8000).to_bytes(4, "little")
                + b"\x01\x00" + b"\x08\x00"
                + b"data" + (5).to_bytes(4, "little"))

    assert frame(b"hello") == expected + b"hello"


@pytest.mark.parametrize("size", [1, 2, 3, 255, 4096, 65537])
def test_size_fields_track_payload_length(size):
    payload = os.urandom(size)
    container = frame(payload)

    assert len(container) == 44 + size
    assert struct.unpack("<I", container[4:8])[0] == 36 + size
    assert struct.unpack("<I", container[40:44])[0] == size
    assert container[44:] == payload


def test_odd_length_payload_is_not_padded():
    container = frame(b"\x01\x02\x03")
    assert len(container) == 47


def test_bytearray_payload():
    payload = bytearray(range(256))
    assert frame(payload)[44:] == bytes(payload)


def test_later_mutation_does_not_affect_container():
    payload = bytearray(b"abc")
    container = frame(payload)
    payload += b"def"

    assert struct.unpack("<I", container[40:44])[0] == 3
    assert container[44:] == b"abc"


def test_large_payload():
    payload = os.urandom(4 * 1024 * 1024)
    container = frame(payload)

    assert struct.unpack("<I", container[4:8])[0] == 36 + len(payload)
    assert struct.unpack("<I", container[40:44])[0] == len(payload)
    assert container[44:] == payload


def test_build_header_at_size_limit():
    header = build_header(MAX_DATA_SIZE)
    assert struct.unpack("<I", header[4:8])[0] == 0xFFFFFFFF
    assert struct.unpack("<I", header[40:44])[0] == MAX_DATA_SIZE


def test_build_header_rejects_oversize():
    with pytest.raises(FramingError):
        build_header(MAX_DATA_SIZE + 1)


def test_build_header_rejects_negative_size():
    with pytest.raises(FramingError):
        build_header(-1)


# ---------------------------------------------------------------------
# Reading back with standard WAV readers
# ---------------------------------------------------------------------

@pytest.mark.parametrize("payload", [
    b"",
    b"\x00",
    b"\xff\x00\x80",
    bytes(range(256)) * 4,
])
def test_wave_module_reads_back_payload(payload):
    params, frames = read_back(frame(payload))

    assert params == (1, 1, 8000)
    assert frames == payload


def test_soundfile_reads_declared_format(tmp_path):
    payload = os.urandom(8000)
    path = tmp_path / "noise.wav"
    path.write_bytes(frame(payload))

    info = sf.info(str(path))
    assert info.format == "WAV"
    assert info.subtype == "PCM_U8"
    assert info.channels == 1
    assert info.samplerate == 8000
    assert info.frames == len(payload)


# ---------------------------------------------------------------------
# FormatDescriptor
# ---------------------------------------------------------------------

def test_default_format_derived_fields():
    assert DEFAULT_FORMAT.bytes_per_sample == 1
    assert DEFAULT_FORMAT.block_align == 1
    assert DEFAULT_FORMAT.byte_rate == 8000


def test_other_format_derived_fields():
    fmt = FormatDescriptor(channels=2, sample_rate=44100, bits_per_sample=16)

    assert fmt.block_align == 4
    assert fmt.byte_rate == 176400

    params, frames = read_back(frame(b"\x00" * 8, fmt))
    assert params == (2, 2, 44100)
    assert frames == b"\x00" * 8


def test_format_equality():
    assert FormatDescriptor() == DEFAULT_FORMAT
    assert FormatDescriptor(sample_rate=16000) != DEFAULT_FORMAT


@pytest.mark.parametrize("kwargs", [
    {"channels": 0},
    {"channels": -1},
    {"sample_rate": 0},
    {"bits_per_sample": 0},
    {"bits_per_sample": 12},
    {"audio_format": 0},
    {"channels": 1.5},
    {"channels": True},
    {"channels": 70000},
    {"audio_format": 65536},
    {"sample_rate": 2 ** 32},
    {"bits_per_sample": 65536},
    {"channels": 65535, "bits_per_sample": 16},
    {"sample_rate": 2 ** 31, "bits_per_sample": 16},
])
def test_invalid_format_rejected(kwargs):
    with pytest.raises(FormatInvalid):
        FormatDescriptor(**kwargs)


def test_format_at_header_field_limits():
    fmt = FormatDescriptor(channels=65535, sample_rate=65537, bits_per_sample=8)
    header = build_header(0, fmt)

    channels, rate, byte_rate, block_align = struct.unpack("<HIIH", header[22:34])
    assert channels == 65535
    assert rate == 65537
    assert byte_rate == 65537 * 65535
    assert block_align == 65535


def test_oversized_field_set_after_construction():
    fmt = FormatDescriptor()
    fmt.channels = 70000

    with pytest.raises(FormatInvalid):
        frame(b"abc", fmt)


def test_format_invalid_is_framing_error():
    fmt = FormatDescriptor()
    fmt.bits_per_sample = 7

    with pytest.raises(FramingError):
        frame(b"abc", fmt)
