"""Transaction-level decoding: instructions and events of one program.

This module provides:
- `decode_buffer(...)`: try instruction schemas, then event schemas (or the
  other way round) on one payload and tag the first match.
- `decode_candidates(...)`: apply `decode_buffer` to every candidate
  instruction accepted by a program-identity predicate.
- `parse_transaction(...)`: the same over the inner instructions of a
  `ParsedTransaction`.

A candidate that fails to decode does not abort the batch: the failure is
logged and reported in `BatchResult.failures`, and its siblings are still
decoded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

import base58
from structlog import get_logger

from solind.core.config import Priority
from solind.core.exceptions import DecodeError
from solind.core.models import ParsedTransaction, UiInstruction
from solind.decoding.decoder import DecodedRecord, decode_event, decode_struct
from solind.decoding.reader import Buffer
from solind.decoding.registry import make_registry
from solind.decoding.specs import SchemaRegistry, SchemaSet

logger = get_logger()

Kind = Literal["instruction", "event"]
InstructionPredicate = Callable[[UiInstruction], bool]


# ---------- results ----------


@dataclass(frozen=True, slots=True)
class TaggedRecord:
    """A decoded record tagged with its category and candidate position."""

    kind: Kind
    name: str
    data: Any
    index: int = 0


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """A candidate that could not be decoded.

    `kind` is the category whose schema raised, or None when the payload was
    not valid base58.
    """

    index: int
    program_id: str
    kind: Kind | None
    error: DecodeError


@dataclass(slots=True)
class BatchResult:
    records: list[TaggedRecord] = field(default_factory=list)
    failures: list[DecodeFailure] = field(default_factory=list)

    def names(self) -> list[str]:
        return [r.name for r in self.records]


# ---------- single payload ----------


@dataclass(frozen=True)
class _Registries:
    instructions: SchemaRegistry
    events: SchemaRegistry

    @staticmethod
    def build(schema_set: SchemaSet) -> _Registries:
        return _Registries(
            instructions=make_registry(schema_set.instructions),
            events=make_registry(schema_set.events),
        )


def _tag(kind: Kind, record: DecodedRecord[Any] | None, index: int) -> TaggedRecord | None:
    if record is None:
        return None
    return TaggedRecord(kind=kind, name=record.name, data=record.data, index=index)


Attempt = Callable[[], DecodedRecord[Any] | None]


def _attempts(regs: _Registries, data: Buffer, priority: Priority) -> list[tuple[Kind, Attempt]]:
    attempts: list[tuple[Kind, Attempt]] = [
        ("instruction", lambda: decode_struct(regs.instructions, data)),
        ("event", lambda: decode_event(regs.events, data)),
    ]
    if priority == "events":
        attempts.reverse()
    return attempts


def _decode_with(regs: _Registries, data: Buffer, priority: Priority, index: int) -> TaggedRecord | None:
    for kind, attempt in _attempts(regs, data, priority):
        tagged = _tag(kind, attempt(), index)
        if tagged is not None:
            return tagged
    return None


def decode_buffer(
    schema_set: SchemaSet,
    data: Buffer,
    *,
    priority: Priority = "instructions",
    index: int = 0,
) -> TaggedRecord | None:
    """Decode one instruction payload as an instruction or an event.

    Instruction schemas match against the first 8 bytes; event schemas match
    after the 8-byte event instruction tag. The first category in `priority`
    order that matches wins; None when neither does.
    """
    return _decode_with(_Registries.build(schema_set), data, priority, index)


# ---------- batches ----------


def _b58_payload(text: str) -> bytes:
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise DecodeError(f"instruction data is not base58: {e}") from e


def is_program_instruction(program_id: str) -> InstructionPredicate:
    """Accept instructions of `program_id` that carry raw (undecoded) data."""

    def accept(ix: UiInstruction) -> bool:
        return ix.programId == program_id and ix.data is not None

    return accept


def decode_candidates(
    candidates: Iterable[UiInstruction],
    schema_set: SchemaSet,
    *,
    accept: InstructionPredicate,
    priority: Priority = "instructions",
) -> BatchResult:
    """Decode every accepted candidate instruction, in encounter order.

    `index` on each record and failure is the candidate's position in
    `candidates` (rejected candidates still count).
    """
    regs = _Registries.build(schema_set)
    result = BatchResult()
    log = logger.new(priority=priority)

    for index, ix in enumerate(candidates):
        if not accept(ix):
            continue
        if ix.data is None:
            log.debug("candidate has no raw data", index=index, program_id=ix.programId)
            continue

        kind: Kind | None = None
        tagged: TaggedRecord | None = None
        try:
            payload = _b58_payload(ix.data)
            for kind, attempt in _attempts(regs, payload, priority):
                tagged = _tag(kind, attempt(), index)
                if tagged is not None:
                    break
        except DecodeError as e:
            log.warning(
                "candidate decode failed", index=index, program_id=ix.programId, kind=kind, error=str(e)
            )
            result.failures.append(DecodeFailure(index=index, program_id=ix.programId, kind=kind, error=e))
            continue
        if tagged is None:
            log.debug("no schema matched", index=index, program_id=ix.programId)
            continue
        result.records.append(tagged)

    log.debug("candidates decoded", records=len(result.records), failures=len(result.failures))
    return result


def iter_inner_instructions(tx: ParsedTransaction) -> Iterator[UiInstruction]:
    """Yield every inner instruction of `tx`, outer group by group."""
    if tx.meta is None or not tx.meta.innerInstructions:
        return
    for inner in tx.meta.innerInstructions:
        yield from inner.instructions


def parse_transaction(
    program_id: str,
    schema_set: SchemaSet,
    tx: ParsedTransaction,
    *,
    priority: Priority = "instructions",
) -> BatchResult | None:
    """Decode the inner instructions of `tx` that belong to `program_id`.

    Returns None when the transaction carries no inner instructions.

    Example
    -------
    >>> result = parse_transaction(
    ...     METEORA_DLMM_PROGRAM_ID,
    ...     SchemaSet(instructions=(SwapInstruction,), events=(SwapEvent,)),
    ...     tx,
    ... )
    >>> [(r.kind, r.name) for r in result.records]
    [('instruction', 'SwapInstruction'), ('event', 'SwapEvent')]
    """
    if tx.meta is None or not tx.meta.innerInstructions:
        return None
    return decode_candidates(
        iter_inner_instructions(tx),
        schema_set,
        accept=is_program_instruction(program_id),
        priority=priority,
    )
