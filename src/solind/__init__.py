from __future__ import annotations

from .constants import DISCRIMINATOR_SIZE, EVENT_IX_TAG, SIGHASH_EVENT_NAMESPACE, SIGHASH_GLOBAL_NAMESPACE
from .decoding.decoder import DecodedRecord, decode_event, decode_struct
from .decoding.registry import add_many, add_schema, make_registry
from .decoding.sighash import compute_sighash, extract_sighash
from .decoding.specs import Schema, SchemaRegistry, SchemaSet, make_schema
from .decoding.transaction import BatchResult, TaggedRecord, parse_transaction

__version__ = "0.1.0"

__all__ = [
    "make_registry",
    "add_schema",
    "add_many",
    "Schema",
    "SchemaRegistry",
    "SchemaSet",
    "make_schema",
    "DecodedRecord",
    "decode_struct",
    "decode_event",
    "BatchResult",
    "TaggedRecord",
    "parse_transaction",
    "compute_sighash",
    "extract_sighash",
    "DISCRIMINATOR_SIZE",
    "EVENT_IX_TAG",
    "SIGHASH_EVENT_NAMESPACE",
    "SIGHASH_GLOBAL_NAMESPACE",
]
