import struct

from soundmush import SoundMushError

WAVE_FORMAT_PCM = 1

AUDIO_FORMAT = WAVE_FORMAT_PCM
NUM_CHANNELS = 1
SAMPLE_RATE = 8000
BITS_PER_SAMPLE = 8

FMT_CHUNK_SIZE = 16
HEADER_SIZE = 44

# RIFF size field holds everything after itself: 36 header bytes + data
RIFF_SIZE_OVERHEAD = HEADER_SIZE - 8
MAX_DATA_SIZE = 0xFFFFFFFF - RIFF_SIZE_OVERHEAD

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF


class FramingError(SoundMushError):
    """
    Raised when a WAV header cannot be built for the requested payload or
    format
    """
    pass

class FormatInvalid(FramingError):
    """
    Raised by FormatDescriptor when a format field is non-positive, does not fit
    in its header field, or when the bit depth does not divide evenly into whole
    bytes
    """
    pass


def _invalid_field(name, value):
    raise FormatInvalid("invalid value '%s' for format field '%s'" % (value, name))


class FormatDescriptor:
    """
    Describes the sample format declared in the 'fmt ' chunk of a WAV file.

    :ivar int audio_format: Audio format code (1 for uncompressed PCM)
    :ivar int channels: Number of interleaved channels
    :ivar int sample_rate: Samples per second, per channel
    :ivar int bits_per_sample: Bits used to store a single sample
    """
    def __init__(self, audio_format=AUDIO_FORMAT, channels=NUM_CHANNELS,
                 sample_rate=SAMPLE_RATE, bits_per_sample=BITS_PER_SAMPLE):
        self.audio_format = audio_format
        self.channels = channels
        self.sample_rate = sample_rate
        self.bits_per_sample = bits_per_sample
        self.validate()

    def validate(self):
        """
        Check that all fields are positive integers that fit in their header
        fields, and that the bit depth is a whole number of bytes.

        :raises FormatInvalid: if any field is invalid
        """
        fields = [
            ("audio_format", self.audio_format, UINT16_MAX),
            ("channels", self.channels, UINT16_MAX),
            ("sample_rate", self.sample_rate, UINT32_MAX),
            ("bits_per_sample", self.bits_per_sample, UINT16_MAX),
        ]

        for name, value, limit in fields:
            # bool is an int subclass, but True is not a channel count
            if isinstance(value, bool) or not isinstance(value, int):
                _invalid_field(name, value)

            if (value <= 0) or (value > limit):
                _invalid_field(name, value)

        if (self.bits_per_sample % 8) != 0:
            raise FormatInvalid("bits per sample (%d) is not a whole number of bytes"
                                % self.bits_per_sample)

        if self.block_align > UINT16_MAX:
            raise FormatInvalid("block align (%d) does not fit in a WAV header"
                                % self.block_align)

        if self.byte_rate > UINT32_MAX:
            raise FormatInvalid("byte rate (%d) does not fit in a WAV header"
                                % self.byte_rate)

    @property
    def bytes_per_sample(self):
        return self.bits_per_sample // 8

    @property
    def block_align(self):
        return self.channels * self.bytes_per_sample

    @property
    def byte_rate(self):
        return self.sample_rate * self.block_align

    def __eq__(self, other):
        if not isinstance(other, FormatDescriptor):
            return NotImplemented

        return ((self.audio_format, self.channels, self.sample_rate, self.bits_per_sample) ==
                (other.audio_format, other.channels, other.sample_rate, other.bits_per_sample))

    def __hash__(self):
        return hash((self.audio_format, self.channels, self.sample_rate, self.bits_per_sample))

    def __str__(self):
        return "%s(format=%d, channels=%d, rate=%d, bits=%d)" % (self.__class__.__name__,
                                                                 self.audio_format,
                                                                 self.channels,
                                                                 self.sample_rate,
                                                                 self.bits_per_sample)

    def __repr__(self):
        return self.__str__()


DEFAULT_FORMAT = FormatDescriptor()


def build_header(data_size, fmt=DEFAULT_FORMAT):
    """
    Build the 44-byte RIFF/WAVE header for a data chunk of the given size.

    :param int data_size: Size of the payload that follows the header, in bytes
    :param FormatDescriptor fmt: Sample format to declare in the 'fmt ' chunk
    :return: header bytes
    :rtype: bytes
    :raises FramingError: if data_size does not fit in the 32-bit size fields
    """
    if data_size < 0:
        raise FramingError("negative data size (%d)" % data_size)

    if data_size > MAX_DATA_SIZE:
        raise FramingError("payload of %d bytes is too large for a WAV file "
                           "(maximum is %d bytes)" % (data_size, MAX_DATA_SIZE))

    fmt.validate()

    return _HEADER_STRUCT.pack(
        b"RIFF", RIFF_SIZE_OVERHEAD + data_size, b"WAVE",
        b"fmt ", FMT_CHUNK_SIZE,
        fmt.audio_format,
        fmt.channels,
        fmt.sample_rate,
        fmt.byte_rate,
        fmt.block_align,
        fmt.bits_per_sample,
        b"data", data_size
    )

def frame(payload, fmt=DEFAULT_FORMAT):
    """
    Wrap raw bytes in a WAV container, without modifying them. Every byte of
    the payload becomes one sample (for the default 8-bit mono format).

    :param bytes payload: Raw data to use as the WAV data chunk
    :param FormatDescriptor fmt: Sample format to declare in the header
    :return: complete WAV file contents
    :rtype: bytes
    """
    payload = bytes(payload)
    return build_header(len(payload), fmt) + payload
