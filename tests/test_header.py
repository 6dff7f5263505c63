import struct

import pytest

from ldr_core.header import BlockHeader, decode_header, describe_flags, encode_header, header_checksum
from ldr_core.protocol import (
    BFLAG_FILL,
    BFLAG_FINAL,
    BFLAG_FIRST,
    BFLAG_IGNORE,
    BFLAG_INIT,
    HEADER_LEN,
)


def test_encoded_header_xors_to_zero():
    hdr = BlockHeader(code=0xA, flags=BFLAG_FILL | BFLAG_INIT, signature=0xAD,
                      target_address=0x20080000, byte_count=0x100, argument=0xDEADBEEF)
    raw = encode_header(hdr)
    assert len(raw) == HEADER_LEN
    assert header_checksum(raw) == 0


def test_encode_ignores_stale_checksum():
    hdr = BlockHeader(flags=BFLAG_FINAL, checksum=0x5A, target_address=0x1000)
    assert encode_header(hdr) == encode_header(BlockHeader(flags=BFLAG_FINAL, target_address=0x1000))


def test_bit_layout():
    hdr = BlockHeader(code=0x1, flags=BFLAG_FIRST | BFLAG_FILL, signature=0xAD,
                      target_address=0x11223344, byte_count=0x20, argument=0x55667788)
    raw = encode_header(hdr)

    # code in the low nibble, flags above it
    assert raw[0:2] == struct.pack("<H", 0x1 | (0x410 << 4))
    assert raw[3] == 0xAD
    assert raw[4:8] == bytes([0x44, 0x33, 0x22, 0x11])
    assert struct.unpack("<II", raw[8:16]) == (0x20, 0x55667788)


def test_decode_fields():
    hdr = BlockHeader(code=0x3, flags=BFLAG_IGNORE, signature=0x7F,
                      target_address=0xFFFFFFFC, byte_count=12, argument=1)
    raw = encode_header(hdr)
    out = decode_header(raw)

    assert out.code == 0x3
    assert out.flags == BFLAG_IGNORE
    assert out.signature == 0x7F
    assert out.checksum == raw[2]
    assert out.target_address == 0xFFFFFFFC
    assert out.byte_count == 12
    assert out.argument == 1


def test_decode_is_not_validating():
    raw = bytearray(encode_header(BlockHeader(target_address=0x1000)))
    raw[2] ^= 0xFF
    assert decode_header(bytes(raw)).target_address == 0x1000


def test_decode_rejects_wrong_size():
    with pytest.raises(ValueError):
        decode_header(b"\x00" * 15)


@pytest.mark.parametrize(
    "flags, size",
    [
        (0, 32),
        (BFLAG_INIT, 32),
        (BFLAG_IGNORE, 32),
        (BFLAG_IGNORE | BFLAG_FILL, 32),
        (BFLAG_FILL, 0),
        (BFLAG_FIRST | BFLAG_IGNORE, 0),
        (BFLAG_FINAL, 0),
    ],
)
def test_payload_size(flags, size):
    assert BlockHeader(flags=flags, byte_count=32).payload_size == size


def test_describe_flags():
    assert describe_flags(0, 0) == ""
    assert describe_flags(BFLAG_FILL, 0xFF) == " FILL (0xff)"
    assert describe_flags(BFLAG_FILL | BFLAG_INIT, 0) == " FILL (0x0) INIT"
