from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

LAYOUT_SCHEMA = pa.schema(
    [
        ("application", pa.int32()),
        ("entry_point", pa.int64()),
        ("address", pa.int64()),
        ("length", pa.int64()),
        ("flags", pa.int32()),
        ("argument", pa.int64()),
        ("fill", pa.bool_()),
        ("content_hash", pa.string()),
    ]
)


def write_layout(records: list[dict], out_path: Path) -> None:
    """Write the chunk layout of a simplified stream as Parquet."""
    df = pd.DataFrame(records, columns=LAYOUT_SCHEMA.names)
    table = pa.Table.from_pandas(df, schema=LAYOUT_SCHEMA, preserve_index=False)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, out_path)


def read_layout(path: Path) -> pd.DataFrame:
    return pq.read_table(path).to_pandas()
