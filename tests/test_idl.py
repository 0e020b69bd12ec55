import struct
from pathlib import Path

import pytest
from conftest import PHOENIX_AMM, RAYDIUM_AMM, event_ix_data, pk, u64le

from solind.core.exceptions import UnsupportedTypeError
from solind.decoding.decoder import decode_event, decode_struct
from solind.decoding.sighash import compute_sighash
from solind.idl import get_idl, make_schema_set_from_idl, snake_case
from solind.programs import meteora_dlmm

IDL = Path(__file__).parent / "idl" / "lb_clmm_idl.json"


def test_idl_file_exists() -> None:
    assert IDL.is_file()
    assert get_idl(IDL).program_name == "lb_clmm"


def test_make_schema_set_from_idl_skips_unsupported() -> None:
    schema_set = make_schema_set_from_idl(IDL)

    assert [s.name for s in schema_set.instructions] == ["swap", "initializeLbPair", "addLiquidity"]
    assert [s.name for s in schema_set.events] == ["Swap", "CompositionFee"]


def test_idl_strict_raises_on_enum() -> None:
    with pytest.raises(UnsupportedTypeError):
        make_schema_set_from_idl(IDL, strict=True)


def test_idl_discriminators_match_hand_written_schemas() -> None:
    schema_set = make_schema_set_from_idl(IDL)
    by_name = {s.name: s for s in schema_set.instructions + schema_set.events}

    assert by_name["swap"].discriminator == meteora_dlmm.SwapInstruction.discriminator
    assert by_name["Swap"].discriminator == meteora_dlmm.SwapEvent.discriminator
    assert by_name["initializeLbPair"].discriminator == compute_sighash("global", "initialize_lb_pair")


def test_idl_event_decodes_like_hand_written_parser() -> None:
    payload = (
        pk(PHOENIX_AMM) + pk(RAYDIUM_AMM) + struct.pack("<ii", -5, 7)
        + u64le(10) + u64le(20) + b"\x00" + u64le(1) + u64le(2)
        + (3).to_bytes(16, "little") + u64le(4)
    )
    data = event_ix_data(meteora_dlmm.SwapEvent.discriminator, payload)

    rec = decode_event(make_schema_set_from_idl(IDL).events, data)

    assert rec is not None
    assert rec.name == "Swap"
    assert rec.data == {
        "lbPair": PHOENIX_AMM,
        "from": RAYDIUM_AMM,
        "startBinId": -5,
        "endBinId": 7,
        "amountIn": 10,
        "amountOut": 20,
        "swapForY": False,
        "fee": 1,
        "protocolFee": 2,
        "feeBps": 3,
        "hostFee": 4,
    }


def test_idl_defined_struct_with_vec() -> None:
    schema_set = make_schema_set_from_idl(IDL)
    add_liquidity = next(s for s in schema_set.instructions if s.name == "addLiquidity")
    body = u64le(100) + u64le(200) + struct.pack("<I", 2) + struct.pack("<iHH", -1, 5000, 0) + struct.pack("<iHH", 0, 0, 10000)

    rec = decode_struct([add_liquidity], add_liquidity.discriminator + body)

    assert rec is not None
    assert rec.data == {
        "liquidityParameter": {
            "amountX": 100,
            "amountY": 200,
            "binLiquidityDist": [
                {"binId": -1, "distributionX": 5000, "distributionY": 0},
                {"binId": 0, "distributionX": 0, "distributionY": 10000},
            ],
        }
    }


def test_new_format_idl_with_explicit_discriminators() -> None:
    idl = {
        "address": "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo",
        "metadata": {"name": "lb_clmm", "version": "0.9.0"},
        "instructions": [
            {
                "name": "claim_fee",
                "discriminator": [1, 2, 3, 4, 5, 6, 7, 8],
                "accounts": [],
                "args": [{"name": "memo", "type": {"option": "string"}}, {"name": "seed", "type": {"array": ["u8", 4]}}],
            }
        ],
        "events": [{"name": "FeeClaimed", "discriminator": [8, 7, 6, 5, 4, 3, 2, 1]}],
        "types": [
            {
                "name": "FeeClaimed",
                "type": {"kind": "struct", "fields": [{"name": "owner", "type": "pubkey"}, {"name": "amount", "type": "u64"}]},
            }
        ],
    }
    schema_set = make_schema_set_from_idl(idl)
    assert get_idl(idl).program_name == "lb_clmm"

    claim = schema_set.instructions[0]
    assert claim.discriminator == bytes(range(1, 9))
    assert claim.parse(memoryview(b"\x00" + b"abcd")) == {"memo": None, "seed": b"abcd"}
    assert claim.parse(memoryview(b"\x01" + struct.pack("<I", 2) + b"hi" + b"wxyz")) == {"memo": "hi", "seed": b"wxyz"}

    fee_claimed = schema_set.events[0]
    assert fee_claimed.discriminator == bytes(range(8, 0, -1))
    assert fee_claimed.parse(memoryview(pk(PHOENIX_AMM) + u64le(9))) == {"owner": PHOENIX_AMM, "amount": 9}


@pytest.mark.parametrize(
    ("name", "expected"),
    [("swap", "swap"), ("initializeLbPair", "initialize_lb_pair"), ("swapExactOut", "swap_exact_out")],
)
def test_snake_case(name: str, expected: str) -> None:
    assert snake_case(name) == expected


def test_generic_array_length_and_tuple_struct_are_skipped() -> None:
    idl = {
        "metadata": {"name": "generic_prog"},
        "instructions": [
            {"name": "deposit", "accounts": [], "args": [{"name": "amount", "type": "u64"}]},
            {"name": "setSeeds", "accounts": [], "args": [{"name": "seeds", "type": {"array": ["u8", {"generic": "N"}]}}]},
            {"name": "setPair", "accounts": [], "args": [{"name": "pair", "type": {"defined": {"name": "Pair"}}}]},
        ],
        "types": [{"name": "Pair", "type": {"kind": "struct", "fields": ["u64", "u64"]}}],
    }

    schema_set = make_schema_set_from_idl(idl)

    assert [s.name for s in schema_set.instructions] == ["deposit"]
    with pytest.raises(UnsupportedTypeError):
        make_schema_set_from_idl(idl, strict=True)
