"""Jupiter aggregator v6 events.

Jupiter emits one `SwapEvent` per hop of a route and a `FeeEvent` when a
platform fee is charged, both through Anchor's self-CPI event instruction.
"""

from __future__ import annotations

from dataclasses import dataclass

from solind.constants import SIGHASH_EVENT_NAMESPACE
from solind.decoding import binary as b
from solind.decoding.specs import SchemaSet, make_schema

JUPITER_V6_PROGRAM_ID = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"


@dataclass(frozen=True, slots=True)
class ParsedSwapEvent:
    amm: str
    input_mint: str
    input_amount: int
    output_mint: str
    output_amount: int


def parse_swap_event(data: memoryview) -> ParsedSwapEvent:
    reader = b.create_reader(data)
    return ParsedSwapEvent(
        amm=b.public_key(reader),
        input_mint=b.public_key(reader),
        input_amount=b.u64(reader),
        output_mint=b.public_key(reader),
        output_amount=b.u64(reader),
    )


SwapEvent = make_schema(SIGHASH_EVENT_NAMESPACE, "SwapEvent", parse_swap_event)


@dataclass(frozen=True, slots=True)
class ParsedFeeEvent:
    account: str
    mint: str
    amount: int


def parse_fee_event(data: memoryview) -> ParsedFeeEvent:
    reader = b.create_reader(data)
    return ParsedFeeEvent(
        account=b.public_key(reader),
        mint=b.public_key(reader),
        amount=b.u64(reader),
    )


FeeEvent = make_schema(SIGHASH_EVENT_NAMESPACE, "FeeEvent", parse_fee_event)


def make_jupiter_schema_set() -> SchemaSet:
    """Return the Jupiter v6 schemas (events only)."""
    return SchemaSet(events=(SwapEvent, FeeEvent))
