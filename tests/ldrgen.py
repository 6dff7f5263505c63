"""Helpers for building loader streams in tests."""
from __future__ import annotations

import io

from ldr_core.header import BlockHeader, encode_header
from ldr_core.protocol import BFLAG_FILL, BFLAG_FINAL, BFLAG_FIRST, BFLAG_IGNORE, BFLAG_INIT
from ldr_core.stream import BlockReader

SIGN = 0xAD
CODE = 0x1
ENTRY = 0x1000


def block(flags=0, target=0, count=0, argument=0, payload=b"", code=CODE, signature=SIGN) -> bytes:
    hdr = BlockHeader(code=code, flags=flags, signature=signature,
                      target_address=target, byte_count=count, argument=argument)
    return encode_header(hdr) + payload


def data(target, payload, flags=0) -> bytes:
    return block(flags, target, len(payload), payload=payload)


def fill(target, count, argument, flags=0) -> bytes:
    return block(flags | BFLAG_FILL, target, count, argument=argument)


def ignore(payload) -> bytes:
    return block(BFLAG_IGNORE, 0, len(payload), payload=payload)


def init(target, payload) -> bytes:
    return data(target, payload, flags=BFLAG_INIT)


def first(entry=ENTRY, signature=SIGN, code=CODE) -> bytes:
    return block(BFLAG_FIRST | BFLAG_IGNORE, entry, code=code, signature=signature)


def final(entry=ENTRY) -> bytes:
    return block(BFLAG_FINAL, entry)


def app(*blocks, entry=ENTRY) -> bytes:
    return first(entry) + b"".join(blocks)


def stream(*parts) -> bytes:
    return b"".join(parts)


def pattern(n, seed=0) -> bytes:
    return bytes((seed + i * 7) & 0xFF for i in range(n))


def parse(buf: bytes) -> list[tuple[BlockHeader, bytes]]:
    """Split a stream into (header, payload) pairs, FINAL included."""
    reader = BlockReader(io.BytesIO(buf))
    out = []
    for hdr in reader:
        out.append((hdr, reader.read_payload(hdr.payload_size)))
        if hdr.is_final:
            break
    return out


def sample_stream() -> bytes:
    """Two applications with contiguous sections, fills, ignore and init blocks."""
    one = app(
        data(0x1000, pattern(16)),
        data(0x1010, pattern(32, 1)),
        fill(0x1030, 16, 0),
        data(0x1040, pattern(64, 2)),
        fill(0x1080, 1024, 0xDEADBEEF),
        data(0x8000, pattern(24, 3)),
        ignore(b"\xee" * 20),
        data(0x1480, pattern(16, 4)),
        init(0x9000, pattern(8, 5)),
        entry=0x1000,
    )
    two = app(
        data(0x2000, pattern(8, 6)),
        data(0x2008, pattern(8, 7)),
        fill(0x2010, 40, 0x01020304),
        entry=0x2000,
    )
    return stream(one, two, final(0x2000))
