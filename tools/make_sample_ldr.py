"""Generate a sample loader stream shaped like elfloader output.

Usage:
  python tools/make_sample_ldr.py OUT_FILE [--apps N] [--seed S]
"""
import random
import struct
import sys
from pathlib import Path

from ldr_core.header import BlockHeader, encode_header
from ldr_core.protocol import (
    BFLAG_FILL,
    BFLAG_FINAL,
    BFLAG_FIRST,
    BFLAG_IGNORE,
    BFLAG_INIT,
    HEADER_LEN,
)

# --- CONFIGURATION ---
SIGNATURE = 0xAD
BCODE = 0x1
BASE_ADDRESS = 0x20080000
SECTIONS_PER_APP = 12


def block(flags, target, count=0, argument=0, payload=b""):
    hdr = BlockHeader(code=BCODE, flags=flags, signature=SIGNATURE,
                      target_address=target, byte_count=count, argument=argument)
    return encode_header(hdr) + payload


def generate_application(rng, base):
    """One application: runs of contiguous sections, small and large fills, an init hook."""
    body = []
    addr = base

    for i in range(SECTIONS_PER_APP):
        size = rng.choice([16, 32, 64, 128])
        data = bytes(rng.randrange(256) for _ in range(size))
        body.append(block(0, addr, size, payload=data))
        addr += size

        # Small zero-init sections, worth unrolling
        if i % 4 == 1:
            body.append(block(BFLAG_FILL, addr, 32, argument=0))
            addr += 32

    # Large .bss, kept as a single FILL block
    body.append(block(BFLAG_FILL, addr, 4096, argument=0))
    addr += 4096

    # Disjoint section elsewhere in memory
    body.append(block(0, base + 0x10000, 64, payload=bytes(64)))

    # Debug info the boot ROM throws away
    junk = b"\xee" * 48
    body.append(block(BFLAG_IGNORE, 0, len(junk), payload=junk))

    # Init hook at the end of the application
    body.append(block(BFLAG_INIT, base + 0x20000, 8, payload=struct.pack("<II", 0xE12FFF1E, 0)))

    size = HEADER_LEN + sum(len(b) for b in body)
    first = block(BFLAG_FIRST | BFLAG_IGNORE, base, argument=size)
    return first + b"".join(body)


def generate_stream(out_file, apps=1, seed=0):
    rng = random.Random(seed)
    parts = []
    base = BASE_ADDRESS
    for _ in range(apps):
        parts.append(generate_application(rng, base))
        base += 0x100000
    parts.append(block(BFLAG_FINAL, BASE_ADDRESS))

    out = Path(out_file)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(b"".join(parts))
    print(f"GENERATED: {out}")
    return out


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if a]

    def pop_option(arg_list, name, default):
        if name in arg_list:
            i = arg_list.index(name)
            if i + 1 >= len(arg_list):
                raise SystemExit(f"{name} requires a value")
            value = int(arg_list[i + 1])
            return value, arg_list[:i] + arg_list[i + 2:]
        return default, arg_list

    apps, args = pop_option(args, "--apps", 1)
    seed, args = pop_option(args, "--seed", 0)

    out = args[0] if args else "sample.ldr"
    generate_stream(out, apps=apps, seed=seed)
