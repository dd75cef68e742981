import logging
import struct

import numpy as np
import pytest

from saleae_export.core import (
    AnalogTrace,
    CaptureHeader,
    ChannelType,
    DigitalTrace,
    FormatError,
    InvalidMagic,
    InvalidTrace,
    NonMonotonicTransitions,
    TruncatedData,
    UnknownChannelType,
    UnsupportedVersion,
)
from saleae_export.io.codec import (
    parse_analog,
    parse_digital,
    parse_header,
    write_analog,
    write_digital,
    write_header,
)
from saleae_export.io.cursor import ByteCursor, ByteWriter


def _digital_body(initial, begin, end, transitions):
    return struct.pack("<IddQ", initial, begin, end, len(transitions)) + struct.pack(
        f"<{len(transitions)}d", *transitions
    )


class TestHeader:
    def test_parse_header_leaves_cursor_at_body(self):
        cursor = ByteCursor(b"<SALEAE>" + struct.pack("<II", 0, 1) + b"body")
        header = parse_header(cursor)

        assert header == CaptureHeader(version=0, channel_type=ChannelType.ANALOG)
        assert cursor.offset == 16
        assert cursor.read_bytes(4) == b"body"

    def test_invalid_magic(self):
        with pytest.raises(InvalidMagic):
            parse_header(ByteCursor(b"<SALEAF>" + struct.pack("<II", 0, 0)))
        with pytest.raises(InvalidMagic):
            parse_header(ByteCursor(b"PK\x03\x04"))

    def test_short_matching_magic_is_truncated(self):
        with pytest.raises(TruncatedData):
            parse_header(ByteCursor(b"<SAL"))
        with pytest.raises(TruncatedData):
            parse_header(ByteCursor(b""))

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedVersion):
            parse_header(ByteCursor(b"<SALEAE>" + struct.pack("<II", 2, 0)))

    def test_unknown_channel_type(self):
        with pytest.raises(UnknownChannelType):
            parse_header(ByteCursor(b"<SALEAE>" + struct.pack("<II", 0, 5)))

    def test_write_header_is_bit_exact(self):
        raw = b"<SALEAE>" + struct.pack("<II", 1, 0)
        writer = ByteWriter()
        write_header(writer, parse_header(ByteCursor(raw)))
        assert writer.getvalue() == raw


class TestDigital:
    def test_parse_digital(self):
        cursor = ByteCursor(_digital_body(0, 0.0, 1.0, [0.25, 0.75]))
        trace = parse_digital(cursor)

        assert trace.initial_state is False
        assert trace.begin_time == 0.0
        assert trace.end_time == 1.0
        assert trace.transitions.tolist() == [0.25, 0.75]
        assert cursor.remaining == 0

    def test_any_nonzero_initial_state_reads_high(self):
        trace = parse_digital(ByteCursor(_digital_body(7, 0.0, 1.0, [])))
        assert trace.initial_state is True

    def test_declared_count_exceeding_data_is_truncated(self):
        body = struct.pack("<IddQ", 0, 0.0, 1.0, 3) + struct.pack("<2d", 0.25, 0.75)
        with pytest.raises(TruncatedData) as excinfo:
            parse_digital(ByteCursor(body))
        assert excinfo.value.needed == 24
        assert excinfo.value.available == 16

    def test_non_monotonic_passes_through_with_warning(self, caplog):
        body = _digital_body(0, 0.0, 1.0, [0.5, 0.25])
        with caplog.at_level(logging.WARNING, logger="saleae_export.io.codec"):
            trace = parse_digital(ByteCursor(body))

        assert trace.transitions.tolist() == [0.5, 0.25]
        assert any(e.duration < 0 for e in trace.iter_samples())
        assert "not ordered" in caplog.text

    def test_non_monotonic_rejected_in_strict_mode(self):
        body = _digital_body(0, 0.0, 1.0, [0.5, 0.25])
        with pytest.raises(NonMonotonicTransitions):
            parse_digital(ByteCursor(body), strict=True)

    def test_write_digital_layout(self):
        trace = DigitalTrace(initial_state=True, begin_time=-1.0, end_time=2.0, transitions=[0.0, 1.5])
        writer = ByteWriter()
        write_digital(writer, trace)
        assert writer.getvalue() == _digital_body(1, -1.0, 2.0, [0.0, 1.5])

    def test_write_digital_refuses_unordered_trace(self):
        trace = DigitalTrace(initial_state=False, begin_time=0.0, end_time=1.0, transitions=[0.5, 0.25])
        writer = ByteWriter()
        with pytest.raises(InvalidTrace):
            write_digital(writer, trace)
        assert len(writer) == 0

    def test_write_digital_refuses_transition_after_end(self):
        trace = DigitalTrace(initial_state=False, begin_time=0.0, end_time=1.0, transitions=[1.5])
        with pytest.raises(InvalidTrace):
            write_digital(ByteWriter(), trace)


class TestAnalog:
    def test_parse_analog_version_0_uses_64_bit_rates(self):
        body = struct.pack("<dQQQ", 0.0, 1000, 1, 3) + struct.pack("<3f", 0.0, 1.0, 0.5)
        cursor = ByteCursor(body)
        trace = parse_analog(cursor, version=0)

        assert trace.sample_rate == 1000
        assert trace.downsample_factor == 1
        assert trace.samples.tolist() == [0.0, 1.0, 0.5]
        assert trace.sample_time(2) == pytest.approx(0.002)
        assert cursor.remaining == 0

    def test_parse_analog_version_1_uses_32_bit_rates(self):
        body = struct.pack("<dIIQ", 0.5, 625_000, 4, 2) + struct.pack("<2f", 3.3, -3.3)
        trace = parse_analog(ByteCursor(body), version=1)

        assert trace.begin_time == 0.5
        assert trace.sample_rate == 625_000
        assert trace.downsample_factor == 4
        assert np.allclose(trace.samples, [3.3, -3.3])

    def test_sample_count_matches_declared(self):
        body = struct.pack("<dQQQ", 0.0, 10, 1, 100) + np.arange(100, dtype="<f4").tobytes()
        trace = parse_analog(ByteCursor(body), version=0)
        assert len(trace.samples) == 100

    def test_truncated_samples(self):
        body = struct.pack("<dQQQ", 0.0, 1000, 1, 4) + struct.pack("<3f", 0.0, 1.0, 0.5)
        with pytest.raises(TruncatedData):
            parse_analog(ByteCursor(body), version=0)

    def test_zero_sample_rate_is_a_format_error(self):
        body = struct.pack("<dQQQ", 0.0, 0, 1, 0)
        with pytest.raises(FormatError):
            parse_analog(ByteCursor(body), version=0)

    def test_write_analog_layout(self):
        trace = AnalogTrace(begin_time=0.0, sample_rate=1000, downsample_factor=2, samples=[0.5])
        w0, w1 = ByteWriter(), ByteWriter()
        write_analog(w0, trace, version=0)
        write_analog(w1, trace, version=1)

        assert w0.getvalue() == struct.pack("<dQQQf", 0.0, 1000, 2, 1, 0.5)
        assert w1.getvalue() == struct.pack("<dIIQf", 0.0, 1000, 2, 1, 0.5)

    def test_write_analog_rate_overflowing_version_1(self):
        trace = AnalogTrace(begin_time=0.0, sample_rate=2**32, samples=[0.0])
        with pytest.raises(InvalidTrace):
            write_analog(ByteWriter(), trace, version=1)
        write_analog(ByteWriter(), trace, version=0)
