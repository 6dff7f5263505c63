"""Loader stream block header codec."""
from __future__ import annotations

import struct
from dataclasses import dataclass

from ldr_core.protocol import (
    BFLAG_FILL,
    BFLAG_FINAL,
    BFLAG_FIRST,
    BFLAG_IGNORE,
    BFLAG_INIT,
    CODE_MASK,
    FLAG_NAMES,
    FLAGS_MASK,
    FLAGS_SHIFT,
    HEADER_FMT,
    HEADER_LEN,
)


@dataclass
class BlockHeader:
    code: int = 0
    flags: int = 0
    checksum: int = 0
    signature: int = 0
    target_address: int = 0
    byte_count: int = 0
    argument: int = 0

    @property
    def is_first(self) -> bool:
        return bool(self.flags & BFLAG_FIRST)

    @property
    def is_final(self) -> bool:
        return bool(self.flags & BFLAG_FINAL)

    @property
    def is_ignore(self) -> bool:
        return bool(self.flags & BFLAG_IGNORE)

    @property
    def is_fill(self) -> bool:
        return bool(self.flags & BFLAG_FILL)

    @property
    def is_init(self) -> bool:
        return bool(self.flags & BFLAG_INIT)

    @property
    def payload_size(self) -> int:
        """Number of payload bytes that follow this header on the wire."""
        if self.flags & (BFLAG_FIRST | BFLAG_FINAL):
            return 0
        # Ignored payloads are on the wire even when FILL is set
        if self.flags & BFLAG_IGNORE:
            return self.byte_count
        if self.flags & BFLAG_FILL:
            return 0
        return self.byte_count


def header_checksum(buf: bytes) -> int:
    """XOR of all header bytes. A valid header evaluates to zero."""
    acc = 0
    for b in buf:
        acc ^= b
    return acc


def decode_header(buf: bytes) -> BlockHeader:
    """Unpack one raw header. No validation beyond the record size."""
    if len(buf) != HEADER_LEN:
        raise ValueError(f"Header must be {HEADER_LEN} bytes, got {len(buf)}")

    word, chk, sign, target, count, arg = struct.unpack(HEADER_FMT, buf)
    return BlockHeader(
        code=word & CODE_MASK,
        flags=(word >> FLAGS_SHIFT) & FLAGS_MASK,
        checksum=chk,
        signature=sign,
        target_address=target,
        byte_count=count,
        argument=arg,
    )


def _pack(hdr: BlockHeader, checksum: int) -> bytes:
    word = (hdr.code & CODE_MASK) | ((hdr.flags & FLAGS_MASK) << FLAGS_SHIFT)
    return struct.pack(
        HEADER_FMT,
        word,
        checksum & 0xFF,
        hdr.signature & 0xFF,
        hdr.target_address & 0xFFFFFFFF,
        hdr.byte_count & 0xFFFFFFFF,
        hdr.argument & 0xFFFFFFFF,
    )


def encode_header(hdr: BlockHeader) -> bytes:
    """Pack a header with a freshly computed checksum.

    The checksum field is zeroed, the XOR of all bytes is taken, and that
    value is stored in the checksum field so the record XORs to zero.
    """
    return _pack(hdr, header_checksum(_pack(hdr, 0)))


def describe_flags(flags: int, argument: int) -> str:
    """Diagnostic suffix for a block line, e.g. ' FILL (0x0) INIT'."""
    parts = []
    if flags & BFLAG_FILL:
        parts.append(f" {FLAG_NAMES[BFLAG_FILL]} (0x{argument:x})")
    if flags & BFLAG_INIT:
        parts.append(f" {FLAG_NAMES[BFLAG_INIT]}")
    return "".join(parts)
