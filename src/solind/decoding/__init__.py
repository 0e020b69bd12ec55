"""Binary decoding and discriminator dispatch.

This package provides:
- Cursor reader and little-endian primitive decoders
- Anchor signature hashes (discriminators)
- Schema specification, registry management and dispatch
- Transaction-level decoding of instructions and events
"""

from solind.decoding.decoder import DecodedRecord, decode_event, decode_struct
from solind.decoding.reader import Reader, create_reader
from solind.decoding.registry import add_many, add_schema, make_registry
from solind.decoding.sighash import compute_sighash, decode_sighash, encode_sighash, extract_sighash
from solind.decoding.specs import Schema, SchemaRegistry, SchemaSet, make_schema
from solind.decoding.transaction import (
    BatchResult,
    DecodeFailure,
    TaggedRecord,
    decode_buffer,
    decode_candidates,
    is_program_instruction,
    parse_transaction,
)

__all__ = [
    "DecodedRecord",
    "decode_event",
    "decode_struct",
    "Reader",
    "create_reader",
    "add_many",
    "add_schema",
    "make_registry",
    "compute_sighash",
    "decode_sighash",
    "encode_sighash",
    "extract_sighash",
    "Schema",
    "SchemaRegistry",
    "SchemaSet",
    "make_schema",
    "BatchResult",
    "DecodeFailure",
    "TaggedRecord",
    "decode_buffer",
    "decode_candidates",
    "is_program_instruction",
    "parse_transaction",
]
