"""LDR Shrink - Loader stream simplifier.

Merges contiguous blocks of each application and unrolls small fill blocks
so the boot ROM spends less time between blocks.
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable
from warnings import warn

from ldr_core.errors import UnterminatedStreamWarning
from ldr_core.header import BlockHeader, describe_flags, encode_header
from ldr_core.protocol import BFLAG_FINAL, DEFAULT_FILL_UNROLL_THRESHOLD
from ldr_core.stream import BlockReader
from ldr_shrink.image import ApplicationSettings, write_image
from ldr_shrink.merge import ChunkMerger


def _silent(_line: str) -> None:
    pass


class ConversionSession:
    """State of one conversion, threaded through the pipeline."""

    def __init__(
        self,
        output: BinaryIO,
        fill_threshold: int = DEFAULT_FILL_UNROLL_THRESHOLD,
        echo: Callable[[str], None] | None = None,
    ):
        self.output = output
        self.echo = echo or _silent
        self.merger = ChunkMerger(fill_threshold)
        self.settings = ApplicationSettings()
        self.blocks_read = 0
        self.applications = 0
        self.layout: list[dict] = []

    @property
    def blocks_written(self) -> int:
        return self.merger.created

    def flush(self) -> None:
        """Write the pending chunk list as one application image."""
        chunks = self.merger.drain()
        if not chunks:
            return

        self.echo(f"--- write 0x{self.settings.signature:02x} entry 0x{self.settings.entry_point:x}")
        for chunk in chunks:
            self.echo(f"0x{chunk.address:x} 0x{chunk.length:x}" + describe_flags(chunk.flags, chunk.argument))

        records = write_image(self.output, chunks, self.settings)
        for rec in records:
            rec["application"] = self.applications
            rec["entry_point"] = int(self.settings.entry_point)
        self.layout.extend(records)
        self.applications += 1

    def open_application(self, hdr: BlockHeader) -> None:
        # A pending list here means the previous application was never closed
        self.flush()
        self.settings = ApplicationSettings.from_header(hdr)
        self.echo(f"--- read 0x{hdr.signature:02x} entry 0x{hdr.target_address:x}")

    def close(self, final: BlockHeader | None) -> None:
        """Flush and terminate the output with a FINAL block."""
        self.flush()
        hdr = BlockHeader(
            code=final.code if final else self.settings.code,
            flags=BFLAG_FINAL,
            signature=final.signature if final else self.settings.signature,
            target_address=self.settings.entry_point,
        )
        self.output.write(encode_header(hdr))

    def feed(self, hdr: BlockHeader, reader: BlockReader) -> None:
        """Handle one ordinary (non FIRST, non FINAL) block."""
        self.echo(f"0x{hdr.target_address:x} 0x{hdr.byte_count:x}" + describe_flags(hdr.flags, hdr.argument))
        self.blocks_read += 1

        if hdr.is_ignore:
            reader.skip_payload(hdr.payload_size)
            return

        self.merger.merge(hdr, reader)

        # The init call must observe every write made so far
        if hdr.is_init:
            self.flush()


def shrink_stream(
    src: BinaryIO,
    dst: BinaryIO,
    fill_threshold: int = DEFAULT_FILL_UNROLL_THRESHOLD,
    echo: Callable[[str], None] | None = None,
) -> ConversionSession:
    """Rewrite the loader stream ``src`` into ``dst``."""
    session = ConversionSession(dst, fill_threshold=fill_threshold, echo=echo)
    reader = BlockReader(src)

    final = None
    for hdr in reader:
        if hdr.is_final:
            final = hdr
            break
        if hdr.is_first:
            session.open_application(hdr)
            continue
        session.feed(hdr, reader)

    if final is None:
        warn(f"stream ended without a FINAL block at offset 0x{reader.offset:x}", UnterminatedStreamWarning)

    session.close(final)
    session.echo("---")
    session.echo(f"{session.blocks_read} blocks read; {session.blocks_written} blocks written")
    return session


def shrink_file(
    input_path: Path,
    output_path: Path,
    fill_threshold: int = DEFAULT_FILL_UNROLL_THRESHOLD,
    echo: Callable[[str], None] | None = None,
) -> ConversionSession:
    with open(input_path, "rb") as src:
        with open(output_path, "wb") as dst:
            return shrink_stream(src, dst, fill_threshold=fill_threshold, echo=echo)
