"""Error and warning types shared by the loader tools."""
from __future__ import annotations


class FormatError(ValueError):
    """The input is not a valid loader stream. Aborts the conversion."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} @ 0x{offset:02x}")
        self.offset = offset


class ChecksumError(FormatError):
    """A header does not XOR to zero."""


class TruncatedStreamError(FormatError):
    """The stream ends inside a header or payload."""


class OverlapWarning(UserWarning):
    """A block writes only to memory that an earlier block already covered."""


class UnterminatedStreamWarning(UserWarning):
    """The stream ended without a FINAL block."""
