import io

import pytest

from ldr_core.errors import ChecksumError, FormatError, TruncatedStreamError
from ldr_core.stream import BlockReader

from ldrgen import data, final, parse, stream


def test_reads_blocks_until_eof():
    buf = stream(data(0x1000, b"\x01\x02\x03\x04"), final())
    blocks = parse(buf)

    assert [h.target_address for h, _ in blocks] == [0x1000, 0x1000]
    assert blocks[0][1] == b"\x01\x02\x03\x04"
    assert blocks[1][0].is_final


def test_empty_stream_yields_nothing():
    assert list(BlockReader(io.BytesIO(b""))) == []


def test_checksum_failure_reports_offset():
    good = data(0x1000, b"\xaa" * 4)
    bad = bytearray(final())
    bad[4] ^= 0x01
    reader = BlockReader(io.BytesIO(good + bytes(bad)))

    reader.read_header()
    reader.read_payload(4)
    with pytest.raises(ChecksumError) as exc:
        reader.read_header()

    assert exc.value.offset == 0x14
    assert "checksum failed @ 0x14" in str(exc.value)
    assert isinstance(exc.value, FormatError)


def test_truncated_header():
    reader = BlockReader(io.BytesIO(final()[:10]))
    with pytest.raises(TruncatedStreamError):
        reader.read_header()


def test_truncated_payload():
    reader = BlockReader(io.BytesIO(data(0x1000, b"\x00" * 8)[:-3]))
    reader.read_header()
    with pytest.raises(TruncatedStreamError) as exc:
        reader.read_payload(8)
    assert exc.value.offset == 16


def test_skip_payload_advances_offset():
    buf = data(0x1000, b"\x00" * 8) + final()
    reader = BlockReader(io.BytesIO(buf))
    hdr = reader.read_header()
    reader.skip_payload(hdr.byte_count)

    assert reader.offset == 24
    assert reader.read_header().is_final


def test_skip_past_end_is_truncation():
    buf = data(0x1000, b"\x00" * 8)[:-5]
    reader = BlockReader(io.BytesIO(buf))
    hdr = reader.read_header()
    with pytest.raises(TruncatedStreamError) as exc:
        reader.skip_payload(hdr.byte_count)

    assert exc.value.offset == 16
    assert "3 of 8 bytes" in str(exc.value)
