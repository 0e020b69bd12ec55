"""Core data models and dynamic column buffer.

This module defines:
- `ParsedTransaction` and friends: the subset of a `jsonParsed`
  `getTransaction` response that the batch decoder consumes.
- `RecordMeta`: where a decoded record came from (slot, signature, position).
- `Column`: dynamic, append-only columnar buffer where every record field
  becomes its own Parquet column.

Design notes
------------
- Transaction models ignore unknown keys so node upgrades do not break parsing.
- Dynamic columns are stored as strings for Arrow safety (u64/u128 values).
- Sorting is applied on (slot, signature, ix_index) before write.
- Record fields named like a base column are written as `field_<name>`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pyarrow as pa
from pydantic import BaseModel

if TYPE_CHECKING:
    from solind.decoding.transaction import TaggedRecord

# === Base schema (Arrow) ===

_BASE_FIELDS: list[tuple[str, pa.DataType]] = [
    ("slot", pa.uint64()),
    ("block_time", pa.int64()),
    ("signature", pa.string()),
    ("ix_index", pa.uint32()),
    ("kind", pa.string()),
    ("name", pa.string()),
]
_BASE_NAMES = frozenset(n for n, _ in _BASE_FIELDS)

# Record fields named like a base column are stored under this prefix
DYN_COLLISION_PREFIX = "field_"


def dyn_column_name(field_name: str) -> str:
    if field_name in _BASE_NAMES:
        return DYN_COLLISION_PREFIX + field_name
    return field_name


# === RPC transaction (jsonParsed encoding) ===


class UiInstruction(BaseModel):
    """One instruction as rendered by the node.

    Instructions of programs the node knows are returned already `parsed`
    (no `data`); everything else is partially decoded with base58 `data`.
    """

    programId: str
    data: str | None = None
    accounts: list[str] = []
    parsed: Any = None
    program: str | None = None
    stackHeight: int | None = None


class InnerInstructions(BaseModel):
    index: int
    instructions: list[UiInstruction]


class TransactionMeta(BaseModel):
    err: Any = None
    fee: int = 0
    innerInstructions: list[InnerInstructions] | None = None
    logMessages: list[str] | None = None


class TransactionMessage(BaseModel):
    accountKeys: list[Any] = []
    instructions: list[UiInstruction] = []
    recentBlockhash: str | None = None


class TransactionEnvelope(BaseModel):
    signatures: list[str]
    message: TransactionMessage = TransactionMessage()


class ParsedTransaction(BaseModel):
    slot: int
    blockTime: int | None = None
    meta: TransactionMeta | None = None
    transaction: TransactionEnvelope
    version: int | str | None = None

    @property
    def signature(self) -> str:
        return self.transaction.signatures[0] if self.transaction.signatures else ""


# === Record metadata ===


@dataclass(slots=True)
class RecordMeta:
    """Lightweight metadata for a single decoded record."""

    slot: int
    block_time: int | None
    signature: str
    ix_index: int

    @staticmethod
    def from_transaction(tx: ParsedTransaction, ix_index: int) -> RecordMeta:
        return RecordMeta(
            slot=tx.slot,
            block_time=tx.blockTime,
            signature=tx.signature,
            ix_index=ix_index,
        )


def record_values(data: Any) -> dict[str, Any]:
    """Flatten a decoded record payload into a field → value mapping."""
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
    if isinstance(data, Mapping):
        return dict(data)
    return {"value": data}


# === Dynamic column buffer ===


@dataclass(slots=True)
class Column:
    """Dynamic columnar buffer.

    - Base columns are always present and strongly typed.
    - Dynamic columns are created lazily upon first field appearance.
    - All dynamic values are stored as *strings* (or None) to avoid Arrow
      overflow and preserve exactness (e.g., u128).
    """

    slot: list[int] = field(default_factory=list)
    block_time: list[int | None] = field(default_factory=list)
    signature: list[str] = field(default_factory=list)
    ix_index: list[int] = field(default_factory=list)
    kind: list[str] = field(default_factory=list)
    name: list[str] = field(default_factory=list)

    # Dynamic columns created on-demand for any record field
    dyn: dict[str, list[str | None]] = field(default_factory=dict)
    _rows: int = 0

    def size(self) -> int:
        """Number of rows currently stored."""
        return self._rows

    def _append_base(self, meta: RecordMeta, kind: str, name: str) -> None:
        """Append one row to base columns and pad existing dynamic cols."""
        self.slot.append(meta.slot)
        self.block_time.append(meta.block_time)
        self.signature.append(meta.signature)
        self.ix_index.append(meta.ix_index)
        self.kind.append(kind)
        self.name.append(name)
        self._rows += 1
        for col in self.dyn.values():
            col.append(None)

    def _ensure_dyn_col(self, name: str) -> list[str | None]:
        """Ensure a dynamic column exists and is aligned to current row count."""
        col = self.dyn.get(name)
        if col is None:
            col = [None] * self._rows
            self.dyn[name] = col
        return col

    def append_record(self, *, meta: RecordMeta, record: TaggedRecord) -> None:
        """Append a decoded record into the buffer (all fields become columns)."""
        self._append_base(meta, record.kind, record.name)
        for k, v in record_values(record.data).items():
            sval: str | None = None if v is None else str(v)
            self._ensure_dyn_col(dyn_column_name(k))[-1] = sval

    def to_arrow_table(self) -> pa.Table:
        """Convert the buffer to a sorted Arrow table with deterministic schema."""
        fields = [pa.field(n, t) for n, t in _BASE_FIELDS]
        arrays: dict[str, pa.Array] = {
            "slot": pa.array(self.slot, type=pa.uint64()),
            "block_time": pa.array(self.block_time, type=pa.int64()),
            "signature": pa.array(self.signature, type=pa.string()),
            "ix_index": pa.array(self.ix_index, type=pa.uint32()),
            "kind": pa.array(self.kind, type=pa.string()),
            "name": pa.array(self.name, type=pa.string()),
        }
        for name in sorted(self.dyn.keys()):
            fields.append(pa.field(name, pa.string()))
            arrays[name] = pa.array(self.dyn[name], type=pa.string())
        schema = pa.schema(fields)
        return pa.Table.from_pydict(arrays, schema=schema).sort_by(
            [("slot", "ascending"), ("signature", "ascending"), ("ix_index", "ascending")]
        )
