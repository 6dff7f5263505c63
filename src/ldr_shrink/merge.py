from __future__ import annotations

import struct
from warnings import warn

from ldr_core.errors import OverlapWarning
from ldr_core.header import BlockHeader
from ldr_core.protocol import (
    BFLAG_FILL,
    DEFAULT_FILL_UNROLL_THRESHOLD,
    FILL_WORD_FMT,
    FILL_WORD_LEN,
)
from ldr_core.stream import BlockReader


class Chunk:
    """One contiguous region of target memory.

    Data chunks own a buffer; fill chunks only record the pattern.
    """

    def __init__(self, address: int, argument: int, flags: int):
        self.address = address
        self.argument = argument
        self.flags = flags
        self.length = 0
        self.data: bytearray | None = None if flags & BFLAG_FILL else bytearray()

    @property
    def is_fill(self) -> bool:
        return bool(self.flags & BFLAG_FILL)

    @property
    def end(self) -> int:
        return self.address + self.length

    def __repr__(self) -> str:
        return f"Chunk(0x{self.address:x}, 0x{self.length:x}, flags=0x{self.flags:03x})"


class ChunkMerger:
    """Folds the blocks of one application into a list of chunks.

    Chunks stay in discovery order; the first matching chunk absorbs a block.
    """

    def __init__(self, fill_threshold: int = DEFAULT_FILL_UNROLL_THRESHOLD):
        self.fill_threshold = fill_threshold
        self.chunks: list[Chunk] = []
        self.created = 0

    def find_chunk(self, hdr: BlockHeader) -> Chunk | None:
        # Any flag other than FILL forces a block of its own
        if hdr.flags & ~BFLAG_FILL:
            return None
        # Large fills are not worth unrolling
        if hdr.is_fill and hdr.byte_count > self.fill_threshold:
            return None

        for chunk in self.chunks:
            # Never join existing fill chunks
            if chunk.is_fill:
                continue
            if chunk.address <= hdr.target_address <= chunk.end:
                return chunk
        return None

    def merge(self, hdr: BlockHeader, reader: BlockReader) -> Chunk:
        """Merge one block, consuming its payload from ``reader``."""
        chunk = self.find_chunk(hdr)
        if chunk is None:
            chunk = Chunk(hdr.target_address, hdr.argument, hdr.flags)
            self.chunks.append(chunk)
            self.created += 1

        extension = (hdr.target_address + hdr.byte_count) - chunk.end
        if extension <= 0:
            if hdr.byte_count:
                warn(
                    f"memory overwrite in region 0x{hdr.target_address:x} to "
                    f"0x{hdr.target_address + hdr.byte_count:x}",
                    OverlapWarning,
                )
            # Keep the stream aligned; the overlapping bytes are not applied
            reader.skip_payload(hdr.payload_size)
            return chunk

        offset = hdr.target_address - chunk.address
        if hdr.is_fill:
            if chunk.data is not None:
                chunk.data.extend(bytes(extension))
                _unroll(chunk.data, offset, hdr.argument, hdr.byte_count)
        else:
            payload = reader.read_payload(hdr.byte_count)
            chunk.data.extend(bytes(extension))
            chunk.data[offset:offset + hdr.byte_count] = payload

        chunk.length += extension
        return chunk

    def drain(self) -> list[Chunk]:
        """Hand the pending chunk list over and start an empty one."""
        chunks, self.chunks = self.chunks, []
        return chunks


def _unroll(buf: bytearray, offset: int, argument: int, byte_count: int) -> None:
    # A trailing remainder shorter than one word is not written
    word = struct.pack(FILL_WORD_FMT, argument)
    for _ in range(byte_count // FILL_WORD_LEN):
        buf[offset:offset + FILL_WORD_LEN] = word
        offset += FILL_WORD_LEN
