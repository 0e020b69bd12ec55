import struct
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import base58
import pytest

from solind.constants import EVENT_IX_TAG

WSOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
PHOENIX_AMM = "PhoeNiXZ8ByJGLkxNfZRnkUfjvmuYqLR89jjFHGqdXY"
RAYDIUM_AMM = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


def pk(address: str) -> bytes:
    """Raw 32 bytes of a base58 public key."""
    raw = base58.b58decode(address)
    assert len(raw) == 32
    return raw


def u64le(v: int) -> bytes:
    return struct.pack("<Q", v)


def event_ix_data(discriminator: bytes, payload: bytes) -> bytes:
    """Instruction data of an Anchor self-CPI event."""
    return EVENT_IX_TAG + discriminator + payload


def b58(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def make_raw_tx(
    instructions: list[dict[str, Any]],
    *,
    signature: str = "5sig",
    slot: int = 250_000_000,
    block_time: int | None = 1_700_000_000,
) -> dict[str, Any]:
    """A minimal `jsonParsed` getTransaction result with one inner group."""
    return {
        "slot": slot,
        "blockTime": block_time,
        "meta": {
            "err": None,
            "fee": 5000,
            "innerInstructions": [{"index": 0, "instructions": instructions}] if instructions else [],
            "logMessages": [],
        },
        "transaction": {
            "signatures": [signature],
            "message": {"accountKeys": [], "instructions": [], "recentBlockhash": "11111111111111111111111111111111"},
        },
        "version": 0,
    }


@pytest.fixture
def raw_tx_factory() -> Callable[..., dict[str, Any]]:
    return make_raw_tx


@pytest.fixture
def mock_provider():
    provider = AsyncMock()
    provider.get_transaction_raw = AsyncMock(return_value=None)
    provider.get_transaction = AsyncMock(return_value=None)
    return provider
