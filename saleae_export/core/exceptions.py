# saleae_export/core/exceptions.py
from __future__ import annotations


class SaleaeExportError(Exception):
    """Base error for all saleae_export exceptions."""


# ---- Structural parse errors ----
class FormatError(SaleaeExportError, ValueError):
    """Raised when a byte buffer is not a well-formed export file."""


class InvalidMagic(FormatError):
    """Raised when the file does not start with the export magic marker."""


class UnsupportedVersion(FormatError):
    """Raised when the header declares a format version we cannot read."""


class UnknownChannelType(FormatError):
    """Raised when the header's channel type tag is neither digital nor analog."""


class TruncatedData(FormatError):
    """Raised when fewer bytes remain than a field or declared count requires."""

    def __init__(self, what: str, offset: int, needed: int, available: int) -> None:
        super().__init__(
            f"Truncated {what} at offset {offset}: "
            f"need {needed} bytes, {available} available."
        )
        self.what = what
        self.offset = offset
        self.needed = needed
        self.available = available


class NonMonotonicTransitions(FormatError):
    """Raised in strict mode when transition timestamps are out of order."""


# ---- Model errors ----
class InvalidTrace(SaleaeExportError, ValueError):
    """Raised when a trace or Export is constructed or written with invalid fields."""


# ---- Narrowing errors (also behave like TypeError) ----
class TypeMismatch(SaleaeExportError, TypeError):
    """Raised when narrowing an Export to the wrong channel type."""
