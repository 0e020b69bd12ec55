import struct

import pytest
from conftest import USDC_MINT, WSOL_MINT, pk, u64le

from solind.core.exceptions import UnsupportedTypeError
from solind.decoding.decoder import decode_struct
from solind.decoding.registry_builder import make_registry_from_signatures, schema_from_signature
from solind.decoding.sighash import compute_sighash
from solind.programs import jupiter


def test_schema_from_signature_matches_hand_written_schema() -> None:
    schema = schema_from_signature(
        "SwapEvent(publicKey amm, publicKey inputMint, u64 inputAmount, publicKey outputMint, u64 outputAmount)"
    )
    assert schema.name == "SwapEvent"
    assert schema.discriminator == jupiter.SwapEvent.discriminator

    payload = pk(USDC_MINT) + pk(WSOL_MINT) + u64le(5) + pk(USDC_MINT) + u64le(6)
    assert schema.parse(memoryview(payload)) == {
        "amm": USDC_MINT,
        "inputMint": WSOL_MINT,
        "inputAmount": 5,
        "outputMint": USDC_MINT,
        "outputAmount": 6,
    }


def test_instruction_signature_uses_global_namespace() -> None:
    schema = schema_from_signature("swap(u64 amountIn, u64 minAmountOut)", namespace="global", label="SwapInstruction")
    assert schema.name == "SwapInstruction"
    assert schema.discriminator == compute_sighash("global", "swap")

    rec = decode_struct([schema], schema.discriminator + struct.pack("<QQ", 44_765_283, 0))
    assert rec is not None
    assert rec.data == {"amountIn": 44_765_283, "minAmountOut": 0}


def test_unnamed_and_empty_params() -> None:
    assert schema_from_signature("Ping()").parse(memoryview(b"")) == {}
    schema = schema_from_signature("Pair(u8, bool)")
    assert schema.parse(memoryview(b"\x05\x01")) == {"arg0": 5, "arg1": True}


def test_unknown_type_fails_at_build_time() -> None:
    with pytest.raises(UnsupportedTypeError):
        schema_from_signature("Bad(f64 price)")


@pytest.mark.parametrize("signature", ["NoParens", "(u8 a)", "Broken(u8 a"])
def test_invalid_signature(signature: str) -> None:
    with pytest.raises(ValueError):
        schema_from_signature(signature)


def test_make_registry_from_signatures() -> None:
    reg = make_registry_from_signatures(["A(u8 x)", "B(u16 y)"])
    assert set(reg) == {compute_sighash("event", "A"), compute_sighash("event", "B")}
    single = make_registry_from_signatures("C(i32 z)")
    assert list(single) == [compute_sighash("event", "C")]
