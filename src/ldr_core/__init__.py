"""LDR Core - Loader stream wire format."""
from .errors import (
    ChecksumError,
    FormatError,
    OverlapWarning,
    TruncatedStreamError,
    UnterminatedStreamWarning,
)
from .header import BlockHeader, decode_header, encode_header, header_checksum
from .stream import BlockReader

__all__ = [
    "BlockHeader",
    "BlockReader",
    "ChecksumError",
    "FormatError",
    "OverlapWarning",
    "TruncatedStreamError",
    "UnterminatedStreamWarning",
    "decode_header",
    "encode_header",
    "header_checksum",
]
