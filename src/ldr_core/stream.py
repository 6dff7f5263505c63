from __future__ import annotations

import os
from typing import BinaryIO, Iterator

from ldr_core.errors import ChecksumError, TruncatedStreamError
from ldr_core.header import BlockHeader, decode_header, header_checksum
from ldr_core.protocol import HEADER_LEN


class BlockReader:
    """Sequential header reader over a loader stream.

    The caller consumes (or skips) each block's payload before asking for
    the next header.
    """

    def __init__(self, handle: BinaryIO):
        self.f = handle
        self.offset = 0

    def read_header(self) -> BlockHeader | None:
        """Return the next header, or None on a clean end of file."""
        start_off = self.offset
        raw = self.f.read(HEADER_LEN)

        if len(raw) == 0:
            return None
        if len(raw) < HEADER_LEN:
            raise TruncatedStreamError("truncated header", start_off)

        # The checksum passes only when the XOR over the header is zero
        if header_checksum(raw):
            raise ChecksumError("checksum failed", start_off)

        self.offset += HEADER_LEN
        return decode_header(raw)

    def read_payload(self, n: int) -> bytes:
        data = self.f.read(n)
        if len(data) != n:
            raise TruncatedStreamError(f"truncated payload ({len(data)} of {n} bytes)", self.offset)
        self.offset += n
        return data

    def skip_payload(self, n: int) -> None:
        if not n:
            return

        here = self.f.tell()
        end = self.f.seek(0, os.SEEK_END)
        if end - here < n:
            raise TruncatedStreamError(f"truncated payload ({end - here} of {n} bytes)", self.offset)

        self.f.seek(here + n)
        self.offset += n

    def __iter__(self) -> Iterator[BlockHeader]:
        while True:
            hdr = self.read_header()
            if hdr is None:
                return
            yield hdr
