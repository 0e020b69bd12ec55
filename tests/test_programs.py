import struct

from conftest import event_ix_data, pk, u64le

from solind.decoding.decoder import decode_event, decode_struct
from solind.decoding.sighash import compute_sighash
from solind.programs import PROGRAMS, jupiter, meteora_dlmm

LB_PAIR = "EgSDeuHbP1AUF9Artd2qfquevKFdpkPTrnSFcPoXTf78"
USER = "9nnLbotNTcUhvbrsA6Mdkx45Sm82G35zo28AqUvjExn8"


def _meteora_swap_payload() -> bytes:
    return (
        pk(LB_PAIR)
        + pk(USER)
        + struct.pack("<ii", 3039, 3039)
        + u64le(44_765_283)
        + u64le(933_267_444)
        + b"\x01"
        + u64le(9964)
        + u64le(0)
        + (222_563).to_bytes(16, "little")
        + u64le(0)
    )


def test_meteora_discriminators() -> None:
    assert meteora_dlmm.SwapEvent.name == "SwapEvent"
    assert meteora_dlmm.SwapEvent.discriminator == compute_sighash("event", "Swap")
    assert meteora_dlmm.SwapInstruction.name == "SwapInstruction"
    assert meteora_dlmm.SwapInstruction.discriminator == compute_sighash("global", "swap")


def test_meteora_swap_instruction() -> None:
    data = meteora_dlmm.SwapInstruction.discriminator + u64le(44_765_283) + u64le(0)

    rec = decode_struct([meteora_dlmm.SwapInstruction], data)

    assert rec is not None
    assert rec.data == meteora_dlmm.ParsedSwapInstruction(amount_in=44_765_283, min_amount_out=0)


def test_meteora_swap_event() -> None:
    data = event_ix_data(meteora_dlmm.SwapEvent.discriminator, _meteora_swap_payload())

    rec = decode_event([meteora_dlmm.SwapEvent], data)

    assert rec is not None
    assert rec.name == "SwapEvent"
    assert rec.data == meteora_dlmm.ParsedSwapEvent(
        lb_pair=LB_PAIR,
        from_=USER,
        start_bin_id=3039,
        end_bin_id=3039,
        amount_in=44_765_283,
        amount_out=933_267_444,
        swap_for_y=True,
        fee=9964,
        protocol_fee=0,
        fee_bps=222_563,
        host_fee=0,
    )


def test_jupiter_fee_event_layout() -> None:
    payload = pk(USER) + pk(LB_PAIR) + u64le(1234)
    rec = jupiter.parse_fee_event(memoryview(payload))
    assert rec == jupiter.ParsedFeeEvent(account=USER, mint=LB_PAIR, amount=1234)


def test_programs_table() -> None:
    pid, factory = PROGRAMS["jupiter"]
    assert pid == jupiter.JUPITER_V6_PROGRAM_ID
    assert factory().events == (jupiter.SwapEvent, jupiter.FeeEvent)
    pid, factory = PROGRAMS["meteora-dlmm"]
    assert pid == meteora_dlmm.METEORA_DLMM_PROGRAM_ID
    assert factory().instructions == (meteora_dlmm.SwapInstruction,)
