import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <file.ldr>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 32:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Flip a bit in the target address of the second block header.
    # The first header is the 16-byte application descriptor.
    idx = 16 + 4
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
