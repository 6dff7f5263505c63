"""LDR Verify - Loader stream validation and replay."""
from .logic import compare_streams, verify_stream
from .replay import replay_stream

__all__ = ["compare_streams", "replay_stream", "verify_stream"]
