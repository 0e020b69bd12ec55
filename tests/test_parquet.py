from pathlib import Path

import pyarrow.parquet as pq
from conftest import make_raw_tx

from solind.core.models import Column, ParsedTransaction, RecordMeta
from solind.decoding.transaction import BatchResult, TaggedRecord
from solind.programs import meteora_dlmm
from solind.storage.parquet import records_to_column, write_parquet


def _result() -> BatchResult:
    return BatchResult(
        records=[
            TaggedRecord(
                kind="instruction",
                name="SwapInstruction",
                data=meteora_dlmm.ParsedSwapInstruction(amount_in=2**64 - 1, min_amount_out=0),
                index=3,
            ),
            TaggedRecord(kind="event", name="Custom", data={"fee_bps": 2**100, "memo": None}, index=1),
        ]
    )


def test_column_aligns_dynamic_fields() -> None:
    tx = ParsedTransaction.model_validate(make_raw_tx([], signature="sigA", slot=7))

    column = records_to_column(tx, _result())

    assert column.size() == 2
    assert column.dyn["amount_in"] == [str(2**64 - 1), None]
    assert column.dyn["fee_bps"] == [None, str(2**100)]
    assert column.dyn["memo"] == [None, None]
    assert column.ix_index == [3, 1]
    assert column.signature == ["sigA", "sigA"]


def test_record_fields_named_like_base_columns_are_prefixed(tmp_path: Path) -> None:
    column = Column()
    meta = RecordMeta(slot=1, block_time=None, signature="s", ix_index=0)
    column.append_record(
        meta=meta, record=TaggedRecord(kind="instruction", name="setName", data={"name": "abc", "slot": 7, "x": 1})
    )

    assert column.dyn == {"field_name": ["abc"], "field_slot": ["7"], "x": ["1"]}

    table = pq.read_table(write_parquet(column, tmp_path / "records.parquet"))
    assert table.column("name").to_pylist() == ["setName"]
    assert table.column("slot").to_pylist() == [1]
    assert table.column("field_name").to_pylist() == ["abc"]
    assert table.column("field_slot").to_pylist() == ["7"]


def test_arrow_table_sorted_by_position(tmp_path: Path) -> None:
    tx = ParsedTransaction.model_validate(make_raw_tx([], signature="sigA"))

    path = write_parquet(records_to_column(tx, _result()), tmp_path / "out" / "records.parquet")

    table = pq.read_table(path)
    assert table.column("ix_index").to_pylist() == [1, 3]
    assert table.column("name").to_pylist() == ["Custom", "SwapInstruction"]
    assert table.column("amount_in").to_pylist() == [None, str(2**64 - 1)]
    assert table.schema.names[:6] == ["slot", "block_time", "signature", "ix_index", "kind", "name"]
