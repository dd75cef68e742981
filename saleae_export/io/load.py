# saleae_export/io/load.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Union

from saleae_export.core import ChannelType, Export

from .codec import (
    parse_analog,
    parse_digital,
    parse_header,
    write_analog,
    write_digital,
    write_header,
)
from .cursor import ByteCursor, ByteWriter


logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, memoryview, str, os.PathLike]


def loads(data: bytes | bytearray | memoryview, *, strict: bool = False) -> Export:
    """Parse a complete export file held in memory.

    Parameters
    ----------
    data:
        The whole file contents.
    strict:
        If True, reject digital traces whose transitions are out of order
        (NonMonotonicTransitions). Otherwise they are returned as-is.

    Raises
    ------
    FormatError
        InvalidMagic, UnsupportedVersion, UnknownChannelType, TruncatedData
        or NonMonotonicTransitions.
    """
    cursor = ByteCursor(data)
    header = parse_header(cursor)

    if header.channel_type is ChannelType.DIGITAL:
        trace = parse_digital(cursor, strict=strict)
    else:
        trace = parse_analog(cursor, header.version)

    if cursor.remaining:
        logger.warning(
            "Ignoring %d trailing bytes after offset %d", cursor.remaining, cursor.offset
        )
    return Export(header=header, trace=trace)


def read(stream: BinaryIO, *, strict: bool = False) -> Export:
    """Read an export from a binary stream (consumed to EOF)."""
    return loads(stream.read(), strict=strict)


def open(source: Source, *, strict: bool = False) -> Export:
    """Open an export from raw bytes or from a file path."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return loads(source, strict=strict)

    path = Path(source)
    logger.debug("Reading export file %s", path)
    return loads(path.read_bytes(), strict=strict)


def dumps(export: Export) -> bytes:
    """Serialize an Export; open(dumps(e)) == e."""
    writer = ByteWriter()
    write_header(writer, export.header)

    if export.is_digital:
        write_digital(writer, export.assume_digital())
    else:
        write_analog(writer, export.assume_analog(), export.version)

    return writer.getvalue()


write = dumps


def write_to(export: Export, stream: BinaryIO) -> None:
    stream.write(dumps(export))


def save(export: Export, path: str | os.PathLike) -> None:
    data = dumps(export)
    Path(path).write_bytes(data)
    logger.debug("Wrote %d bytes to %s", len(data), path)
