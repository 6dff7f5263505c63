from __future__ import annotations

import struct
from typing import BinaryIO

from ldr_core.protocol import FILL_WORD_FMT, FILL_WORD_LEN
from ldr_core.stream import BlockReader


def replay_stream(handle: BinaryIO) -> dict[int, int]:
    """Replay a loader stream into a sparse memory map (address -> byte).

    Later writes win. FIRST, IGNORE and FINAL blocks leave memory untouched.
    """
    memory: dict[int, int] = {}
    reader = BlockReader(handle)

    for hdr in reader:
        if hdr.is_final:
            break
        if hdr.is_first:
            continue
        if hdr.is_ignore:
            reader.skip_payload(hdr.payload_size)
            continue

        if hdr.is_fill:
            word = struct.pack(FILL_WORD_FMT, hdr.argument)
            data = word * (hdr.byte_count // FILL_WORD_LEN)
        else:
            data = reader.read_payload(hdr.byte_count)

        for i, b in enumerate(data):
            memory[hdr.target_address + i] = b

    return memory
