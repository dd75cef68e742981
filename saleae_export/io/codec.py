# saleae_export/io/codec.py
"""
Byte-level codec for Logic 2 binary channel exports.

Every parse_* function reads from a ByteCursor and leaves it just past the
consumed fields; every write_* function appends the same layout to a
ByteWriter. All fields are little-endian.

    header   magic[8] version:u32 channel_type:u32
    digital  initial_state:u32 begin_time:f64 end_time:f64
             transition_count:u64 transitions:f64[transition_count]
    analog   begin_time:f64 sample_rate:R downsample_factor:R
             sample_count:u64 samples:f32[sample_count]

R is u64 in version 0 and u32 in version 1.
"""
from __future__ import annotations

import logging

from saleae_export.core.analog import AnalogTrace
from saleae_export.core.digital import DigitalTrace
from saleae_export.core.exceptions import (
    FormatError,
    InvalidMagic,
    InvalidTrace,
    NonMonotonicTransitions,
)
from saleae_export.core.header import MAGIC, CaptureHeader, ChannelType, check_version

from .cursor import ByteCursor, ByteWriter


logger = logging.getLogger(__name__)

TRANSITION_DTYPE = "<f8"
SAMPLE_DTYPE = "<f4"

# version -> width in bytes of the analog sample_rate / downsample_factor fields
_RATE_FIELD_BYTES = {0: 8, 1: 4}


# ----------------------------------------------------------------------
# Header
# ----------------------------------------------------------------------
def parse_header(cursor: ByteCursor) -> CaptureHeader:
    start = cursor.offset
    head = cursor.peek(len(MAGIC))
    if head != MAGIC[:len(head)]:
        raise InvalidMagic(f"Invalid magic: {head!r} (expected {MAGIC!r})")
    cursor.read_bytes(len(MAGIC), "magic")

    version = check_version(cursor.read_u32("version"))
    channel_type = ChannelType.from_tag(cursor.read_u32("channel type"))

    logger.debug(
        "Header at offset %d: version=%d channel_type=%s",
        start, version, channel_type.name,
    )
    return CaptureHeader(version=version, channel_type=channel_type)


def write_header(writer: ByteWriter, header: CaptureHeader) -> None:
    writer.write_bytes(MAGIC)
    writer.write_u32(header.version)
    writer.write_u32(int(header.channel_type))


# ----------------------------------------------------------------------
# Digital
# ----------------------------------------------------------------------
def parse_digital(cursor: ByteCursor, *, strict: bool = False) -> DigitalTrace:
    initial_state = cursor.read_u32("initial state") != 0
    begin_time = cursor.read_f64("begin time")
    end_time = cursor.read_f64("end time")
    count = cursor.read_u64("transition count")
    transitions = cursor.read_array(TRANSITION_DTYPE, count, f"{count} transitions")

    trace = DigitalTrace(
        initial_state=initial_state,
        begin_time=begin_time,
        end_time=end_time,
        transitions=transitions,
    )

    problems = trace.check_ordering()
    if problems:
        if strict:
            raise NonMonotonicTransitions("; ".join(problems))
        logger.warning("Digital trace is not ordered, durations may be negative: %s",
                       "; ".join(problems))

    logger.debug("Parsed digital trace with %d transitions", count)
    return trace


def write_digital(writer: ByteWriter, trace: DigitalTrace) -> None:
    problems = trace.check_ordering()
    if problems:
        raise InvalidTrace("Refusing to write unordered digital trace: " + "; ".join(problems))

    writer.write_u32(1 if trace.initial_state else 0)
    writer.write_f64(trace.begin_time)
    writer.write_f64(trace.end_time)
    writer.write_u64(trace.num_transitions)
    writer.write_array(trace.transitions, TRANSITION_DTYPE)


# ----------------------------------------------------------------------
# Analog
# ----------------------------------------------------------------------
def parse_analog(cursor: ByteCursor, version: int) -> AnalogTrace:
    read_rate = cursor.read_u64 if _rate_field_bytes(version) == 8 else cursor.read_u32

    begin_time = cursor.read_f64("begin time")
    sample_rate = read_rate("sample rate")
    downsample_factor = read_rate("downsample factor")
    if sample_rate == 0 or downsample_factor == 0:
        raise FormatError(
            f"Analog sample_rate and downsample_factor must be non-zero, "
            f"got {sample_rate} and {downsample_factor}."
        )
    count = cursor.read_u64("sample count")
    samples = cursor.read_array(SAMPLE_DTYPE, count, f"{count} samples")

    logger.debug(
        "Parsed analog trace: %d samples at %d Hz / %d",
        count, sample_rate, downsample_factor,
    )
    return AnalogTrace(
        begin_time=begin_time,
        sample_rate=sample_rate,
        downsample_factor=downsample_factor,
        samples=samples,
    )


def write_analog(writer: ByteWriter, trace: AnalogTrace, version: int) -> None:
    width = _rate_field_bytes(version)
    limit = (1 << (8 * width)) - 1
    for name in ("sample_rate", "downsample_factor"):
        value = getattr(trace, name)
        if value > limit:
            raise InvalidTrace(
                f"{name}={value} does not fit the {8 * width}-bit field of version {version}."
            )

    write_rate = writer.write_u64 if width == 8 else writer.write_u32
    writer.write_f64(trace.begin_time)
    write_rate(trace.sample_rate)
    write_rate(trace.downsample_factor)
    writer.write_u64(trace.num_samples)
    writer.write_array(trace.samples, SAMPLE_DTYPE)


def _rate_field_bytes(version: int) -> int:
    return _RATE_FIELD_BYTES[check_version(version)]
