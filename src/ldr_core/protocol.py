"""Loader stream protocol constants.

Single source of truth for the block header layout and flag bits.
Keep this file stable. Reader, writer and verifier must remain synchronized.
"""

# Block flags (ADSP-SC58x / ADSP-BF70x boot ROM)
BFLAG_FILL   = 0x010  # Fill target with the 32-bit argument
BFLAG_INIT   = 0x080  # Call target after loading
BFLAG_IGNORE = 0x100  # Payload is ignored
BFLAG_FIRST  = 0x400  # First block of an application
BFLAG_FINAL  = 0x800  # Last block of the loader stream

FLAG_NAMES = {
    BFLAG_FILL: "FILL",
    BFLAG_INIT: "INIT",
    BFLAG_IGNORE: "IGNORE",
    BFLAG_FIRST: "FIRST",
    BFLAG_FINAL: "FINAL",
}

# Header: [Code:4 Flags:12 (2) | Chk(1) | Sign(1) | Target(4) | Count(4) | Arg(4)] = 16 bytes
HEADER_FMT = "<HBBIII"
HEADER_LEN = 16

CODE_MASK = 0xF
FLAGS_MASK = 0xFFF
FLAGS_SHIFT = 4

# Fill patterns are one little-endian word
FILL_WORD_FMT = "<I"
FILL_WORD_LEN = 4

# Fill blocks up to this size get unrolled into neighbouring data
DEFAULT_FILL_UNROLL_THRESHOLD = 256
