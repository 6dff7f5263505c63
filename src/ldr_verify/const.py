ERRORS = {
  "E_TRUNCATED": "Stream truncated inside a header or payload",
  "E_HEADER_CHECKSUM": "Header checksum does not evaluate to zero",
  "E_NO_FINAL": "Stream does not end with a FINAL block",
  "E_TRAILING_DATA": "Bytes follow the FINAL block",
  "E_CONTENT_MISMATCH": "Replayed memory differs from the original stream",
  "E_CONTENT_MISSING": "Memory written by the original stream is never written",
}
