# saleae_export/core/export.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .analog import AnalogTrace
from .digital import DigitalTrace
from .exceptions import InvalidTrace, TypeMismatch
from .header import DEFAULT_VERSION, CaptureHeader, ChannelType


Trace = Union[DigitalTrace, AnalogTrace]


@dataclass(frozen=True, slots=True)
class Export:
    """
    One exported channel file: the header plus exactly one trace.

    The header's channel type always agrees with the trace kind. Use
    assume_digital() / assume_analog() to narrow to the concrete trace.
    """

    header: CaptureHeader
    trace: Trace

    # Traces compare by array value and are unhashable.
    __hash__ = None

    def __post_init__(self) -> None:
        if not isinstance(self.header, CaptureHeader):
            raise InvalidTrace("Export.header must be a CaptureHeader instance.")
        if not isinstance(self.trace, (DigitalTrace, AnalogTrace)):
            raise InvalidTrace("Export.trace must be a DigitalTrace or AnalogTrace.")
        if _channel_type_of(self.trace) is not self.header.channel_type:
            raise InvalidTrace(
                f"Header declares {self.header.channel_type.name} "
                f"but trace is {type(self.trace).__name__}."
            )

    @classmethod
    def from_trace(cls, trace: Trace, version: int = DEFAULT_VERSION) -> "Export":
        return cls(
            header=CaptureHeader(version=version, channel_type=_channel_type_of(trace)),
            trace=trace,
        )

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def channel_type(self) -> ChannelType:
        return self.header.channel_type

    @property
    def is_digital(self) -> bool:
        return self.header.is_digital

    @property
    def is_analog(self) -> bool:
        return self.header.is_analog

    def assume_digital(self) -> DigitalTrace:
        if not isinstance(self.trace, DigitalTrace):
            raise TypeMismatch("Expected a digital export, found analog.")
        return self.trace

    def assume_analog(self) -> AnalogTrace:
        if not isinstance(self.trace, AnalogTrace):
            raise TypeMismatch("Expected an analog export, found digital.")
        return self.trace


def _channel_type_of(trace: object) -> ChannelType:
    if isinstance(trace, DigitalTrace):
        return ChannelType.DIGITAL
    if isinstance(trace, AnalogTrace):
        return ChannelType.ANALOG
    raise InvalidTrace(f"Not a trace: {type(trace).__name__}.")
