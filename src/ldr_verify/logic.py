from pathlib import Path

from ldr_core.errors import ChecksumError, FormatError
from ldr_core.stream import BlockReader
from .const import ERRORS
from .replay import replay_stream


def _fail(errors):
    return {"status": "FAIL", "error_count": len(errors), "errors": errors}


def _format_error(e: FormatError) -> dict:
    code = "E_HEADER_CHECKSUM" if isinstance(e, ChecksumError) else "E_TRUNCATED"
    return {"code": code, "message": ERRORS[code], "offset": e.offset}


def verify_stream(path: Path) -> dict:
    errors = []
    blocks = 0
    applications = 0
    final_seen = False

    with open(path, "rb") as f:
        reader = BlockReader(f)
        try:
            for hdr in reader:
                blocks += 1
                if hdr.is_final:
                    final_seen = True
                    break
                if hdr.is_first:
                    applications += 1
                    continue
                # Read rather than seek so a short payload is caught
                reader.read_payload(hdr.payload_size)
        except FormatError as e:
            errors.append(_format_error(e))
            return _fail(errors)

        if not final_seen:
            errors.append({"code": "E_NO_FINAL", "message": ERRORS["E_NO_FINAL"], "offset": reader.offset})
            return _fail(errors)

        trailing = len(f.read())
        if trailing:
            errors.append({"code": "E_TRAILING_DATA", "message": ERRORS["E_TRAILING_DATA"],
                           "offset": reader.offset, "bytes": trailing})
            return _fail(errors)

    return {"status": "PASS", "error_count": 0, "errors": [], "blocks": blocks, "applications": applications}


def compare_streams(original: Path, simplified: Path) -> dict:
    """Every byte the original loads must be loaded with the same value by the simplified stream."""
    errors = []
    try:
        with open(original, "rb") as f:
            expected = replay_stream(f)
        with open(simplified, "rb") as f:
            actual = replay_stream(f)
    except FormatError as e:
        errors.append(_format_error(e))
        return _fail(errors)

    missing = [a for a in expected if a not in actual]
    if missing:
        errors.append({"code": "E_CONTENT_MISSING", "message": ERRORS["E_CONTENT_MISSING"],
                       "address": min(missing), "count": len(missing)})

    differ = [a for a in expected if a in actual and actual[a] != expected[a]]
    if differ:
        errors.append({"code": "E_CONTENT_MISMATCH", "message": ERRORS["E_CONTENT_MISMATCH"],
                       "address": min(differ), "count": len(differ)})

    if errors:
        return _fail(errors)
    return {"status": "PASS", "error_count": 0, "errors": [], "bytes": len(expected)}
