"""LDR Shrink - Merge and unroll loader stream blocks."""
from .convert import ConversionSession, shrink_file, shrink_stream
from .merge import Chunk, ChunkMerger

__all__ = ["Chunk", "ChunkMerger", "ConversionSession", "shrink_file", "shrink_stream"]
