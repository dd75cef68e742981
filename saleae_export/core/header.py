# saleae_export/core/header.py
"""
Fixed preamble of a Logic 2 binary channel export.

Layout (16 bytes, little-endian):
    Bytes 0-7:   magic         "<SALEAE>"
    Bytes 8-11:  version       u32, see SUPPORTED_VERSIONS
    Bytes 12-15: channel_type  u32, 0 = digital, 1 = analog
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .exceptions import InvalidTrace, UnknownChannelType, UnsupportedVersion


MAGIC = b"<SALEAE>"

# Version 0 is what Logic 2 writes. Version 1 narrows the analog rate fields to u32.
SUPPORTED_VERSIONS = (0, 1)
DEFAULT_VERSION = 0

HEADER_SIZE = len(MAGIC) + 4 + 4


class ChannelType(IntEnum):
    DIGITAL = 0
    ANALOG = 1

    @classmethod
    def from_tag(cls, tag: int) -> "ChannelType":
        try:
            return cls(tag)
        except ValueError as e:
            raise UnknownChannelType(
                f"Unknown channel type tag {tag} (expected 0=digital or 1=analog)."
            ) from e


def check_version(version: int) -> int:
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(
            f"Unsupported export version {version} (supported: {SUPPORTED_VERSIONS})."
        )
    return version


@dataclass(frozen=True, slots=True)
class CaptureHeader:
    version: int
    channel_type: ChannelType

    def __post_init__(self) -> None:
        if not isinstance(self.version, int) or isinstance(self.version, bool):
            raise InvalidTrace("CaptureHeader.version must be an int.")
        check_version(self.version)
        if not isinstance(self.channel_type, ChannelType):
            object.__setattr__(self, "channel_type", ChannelType.from_tag(self.channel_type))

    @property
    def is_digital(self) -> bool:
        return self.channel_type is ChannelType.DIGITAL

    @property
    def is_analog(self) -> bool:
        return self.channel_type is ChannelType.ANALOG
