"""
Core domain objects for saleae_export.

This module defines the decoded, byte-layout-agnostic data model:
- CaptureHeader: format version + channel type
- DigitalTrace: initial level + transition timestamps, with a lazy edge iterator
- AnalogTrace: sample rate metadata + float32 sample buffer
- Export: tagged union of exactly one trace, with narrowing accessors

The core layer is independent from the byte-level codec in saleae_export.io.
"""

from .header import (
    CaptureHeader,
    ChannelType,
    MAGIC,
    HEADER_SIZE,
    SUPPORTED_VERSIONS,
    DEFAULT_VERSION,
)
from .digital import DigitalTrace, Edge
from .analog import AnalogTrace
from .export import Export, Trace
from .exceptions import (
    SaleaeExportError,
    FormatError,
    InvalidMagic,
    UnsupportedVersion,
    UnknownChannelType,
    TruncatedData,
    NonMonotonicTransitions,
    InvalidTrace,
    TypeMismatch,
)


__all__ = [
    # header
    "CaptureHeader",
    "ChannelType",
    "MAGIC",
    "HEADER_SIZE",
    "SUPPORTED_VERSIONS",
    "DEFAULT_VERSION",

    # traces
    "DigitalTrace",
    "Edge",
    "AnalogTrace",
    "Export",
    "Trace",

    # exceptions
    "SaleaeExportError",
    "FormatError",
    "InvalidMagic",
    "UnsupportedVersion",
    "UnknownChannelType",
    "TruncatedData",
    "NonMonotonicTransitions",
    "InvalidTrace",
    "TypeMismatch",
]
