"""Export decoded records to Parquet.

Every record field becomes a string column (see `Column`); base columns
carry the transaction slot, block time, signature and instruction position.
"""

from __future__ import annotations

from pathlib import Path

import pyarrow.parquet as pq

from solind.core.models import Column, ParsedTransaction, RecordMeta
from solind.decoding.transaction import BatchResult


def records_to_column(tx: ParsedTransaction, result: BatchResult, column: Column | None = None) -> Column:
    """Append the records of one transaction to `column` (or a new buffer)."""
    out = column if column is not None else Column()
    for record in result.records:
        out.append_record(meta=RecordMeta.from_transaction(tx, record.index), record=record)
    return out


def write_parquet(column: Column, path: Path) -> Path:
    """Write the buffer as one Parquet file and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(column.to_arrow_table(), path)
    return path
