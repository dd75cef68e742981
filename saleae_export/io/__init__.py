"""
Byte-level codec and file entry points for Logic 2 binary exports.
"""

from .codec import (
    parse_header,
    write_header,
    parse_digital,
    write_digital,
    parse_analog,
    write_analog,
)
from .cursor import ByteCursor, ByteWriter
from .load import open, read, loads, dumps, write, write_to, save


__all__ = [
    # codec
    "parse_header",
    "write_header",
    "parse_digital",
    "write_digital",
    "parse_analog",
    "write_analog",

    # cursor
    "ByteCursor",
    "ByteWriter",

    # entry points
    "open",
    "read",
    "loads",
    "dumps",
    "write",
    "write_to",
    "save",
]
