"""
Read and write Saleae Logic 2 binary channel exports.

    import saleae_export

    export = saleae_export.open("digital_0.bin")
    for is_high, duration in export.assume_digital().iter_samples():
        ...
"""

from .core import (
    CaptureHeader,
    ChannelType,
    MAGIC,
    SUPPORTED_VERSIONS,
    DEFAULT_VERSION,
    DigitalTrace,
    Edge,
    AnalogTrace,
    Export,
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
from .io import open, read, loads, dumps, write, write_to, save


__all__ = [
    # model
    "CaptureHeader",
    "ChannelType",
    "MAGIC",
    "SUPPORTED_VERSIONS",
    "DEFAULT_VERSION",
    "DigitalTrace",
    "Edge",
    "AnalogTrace",
    "Export",

    # entry points
    "open",
    "read",
    "loads",
    "dumps",
    "write",
    "write_to",
    "save",

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
