"""Meteora DLMM (liquidity book) swap instruction and event."""

from __future__ import annotations

from dataclasses import dataclass

from solind.constants import SIGHASH_EVENT_NAMESPACE, SIGHASH_GLOBAL_NAMESPACE
from solind.decoding import binary as b
from solind.decoding.specs import SchemaSet, make_schema

METEORA_DLMM_PROGRAM_ID = "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo"


@dataclass(frozen=True, slots=True)
class ParsedSwapEvent:
    lb_pair: str
    from_: str
    start_bin_id: int
    end_bin_id: int
    amount_in: int
    amount_out: int
    swap_for_y: bool
    fee: int
    protocol_fee: int
    fee_bps: int
    host_fee: int


def parse_swap_event(data: memoryview) -> ParsedSwapEvent:
    reader = b.create_reader(data)
    return ParsedSwapEvent(
        lb_pair=b.public_key(reader),
        from_=b.public_key(reader),
        start_bin_id=b.i32(reader),
        end_bin_id=b.i32(reader),
        amount_in=b.u64(reader),
        amount_out=b.u64(reader),
        swap_for_y=b.bool_(reader),
        fee=b.u64(reader),
        protocol_fee=b.u64(reader),
        fee_bps=b.u128(reader),
        host_fee=b.u64(reader),
    )


# The on-chain event struct is `Swap`; exposed as SwapEvent.
SwapEvent = make_schema(SIGHASH_EVENT_NAMESPACE, "Swap", parse_swap_event, label="SwapEvent")


@dataclass(frozen=True, slots=True)
class ParsedSwapInstruction:
    amount_in: int
    min_amount_out: int


def parse_swap_instruction(data: memoryview) -> ParsedSwapInstruction:
    reader = b.create_reader(data)
    return ParsedSwapInstruction(
        amount_in=b.u64(reader),
        min_amount_out=b.u64(reader),
    )


SwapInstruction = make_schema(SIGHASH_GLOBAL_NAMESPACE, "swap", parse_swap_instruction, label="SwapInstruction")


def make_meteora_dlmm_schema_set() -> SchemaSet:
    """Return the Meteora DLMM swap instruction and event schemas."""
    return SchemaSet(instructions=(SwapInstruction,), events=(SwapEvent,))
