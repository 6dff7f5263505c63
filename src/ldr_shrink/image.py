from __future__ import annotations

import hashlib
from typing import BinaryIO

from ldr_core.header import BlockHeader, encode_header
from ldr_core.protocol import BFLAG_FIRST, BFLAG_IGNORE, HEADER_LEN
from ldr_shrink.merge import Chunk


class ApplicationSettings:
    """Per-application values captured from the FIRST block."""

    def __init__(self, signature: int = 0, code: int = 0, entry_point: int = 0):
        self.signature = signature
        self.code = code
        self.entry_point = entry_point

    @classmethod
    def from_header(cls, hdr: BlockHeader) -> "ApplicationSettings":
        return cls(signature=hdr.signature, code=hdr.code, entry_point=hdr.target_address)


def encoded_size(chunks: list[Chunk]) -> int:
    """Bytes the application occupies on the wire, descriptor included."""
    size = HEADER_LEN
    for chunk in chunks:
        size += HEADER_LEN
        if chunk.data is not None:
            size += chunk.length
    return size


def write_image(handle: BinaryIO, chunks: list[Chunk], settings: ApplicationSettings) -> list[dict]:
    """Serialize one application and release its chunks.

    Returns one layout record per chunk written.
    """
    hdr = BlockHeader(
        code=settings.code,
        flags=BFLAG_IGNORE | BFLAG_FIRST,
        signature=settings.signature,
        target_address=settings.entry_point,
        argument=encoded_size(chunks),
    )
    handle.write(encode_header(hdr))

    records: list[dict] = []
    while chunks:
        chunk = chunks.pop(0)
        hdr.flags = chunk.flags
        hdr.argument = chunk.argument
        hdr.byte_count = chunk.length
        hdr.target_address = chunk.address
        handle.write(encode_header(hdr))

        content_hash = None
        if chunk.data is not None:
            handle.write(chunk.data)
            content_hash = hashlib.sha256(chunk.data).hexdigest()
            chunk.data = None

        records.append({
            "address": int(chunk.address),
            "length": int(chunk.length),
            "flags": int(chunk.flags),
            "argument": int(chunk.argument),
            "fill": chunk.is_fill,
            "content_hash": content_hash,
        })

    return records
