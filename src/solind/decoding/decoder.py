"""Discriminator-based dispatch.

This module matches the leading 8-byte signature of a payload against a
`SchemaRegistry` and hands the rest of the payload to the matching schema's
parse function. No match is a normal outcome and yields None; a payload that
matches but is malformed raises `DecodeError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from solind.constants import DISCRIMINATOR_SIZE
from solind.core.interfaces import ISchemaRegistryProvider
from solind.decoding.reader import Buffer
from solind.decoding.registry import make_registry
from solind.decoding.specs import Schema, SchemaRegistry

T = TypeVar("T")

Schemas = SchemaRegistry | ISchemaRegistryProvider | Iterable[Schema[Any]]

# ---------- decoded record ----------


@dataclass(frozen=True, slots=True)
class DecodedRecord(Generic[T]):
    """Schema name plus the typed payload its parse function produced."""

    name: str
    data: T


# ---------- helper functions ----------


def _as_registry(schemas: Schemas) -> SchemaRegistry:
    if isinstance(schemas, dict):
        return schemas
    if isinstance(schemas, ISchemaRegistryProvider):
        return schemas.get_registry()
    return make_registry(schemas)


def _lookup(registry: SchemaRegistry, data: memoryview) -> Schema[Any] | None:
    if len(data) < DISCRIMINATOR_SIZE:
        return None
    return registry.get(bytes(data[:DISCRIMINATOR_SIZE]))


# ---------- dispatch ----------


def decode_struct(schemas: Schemas, data: Buffer) -> DecodedRecord[Any] | None:
    """Decode `data` with the schema whose discriminator prefixes it.

    Returns None when no schema matches (including payloads shorter than a
    discriminator). Errors raised by the schema's parser propagate.

    Example
    -------
    >>> rec = decode_struct([SwapInstruction], ix_data)
    >>> if rec is not None and rec.name == "SwapInstruction":
    ...     rec.data.amount_in
    """
    registry = _as_registry(schemas)
    view = memoryview(data)
    schema = _lookup(registry, view)
    if schema is None:
        return None
    return DecodedRecord(name=schema.name, data=schema.parse(view[DISCRIMINATOR_SIZE:]))


def decode_event(schemas: Schemas, ix_data: Buffer) -> DecodedRecord[Any] | None:
    """Decode an event emitted through Anchor's self-CPI instruction.

    The instruction payload starts with the 8-byte event instruction tag
    followed by the event discriminator and fields; the tag is skipped
    without being checked.
    """
    view = memoryview(ix_data)
    return decode_struct(schemas, view[DISCRIMINATOR_SIZE:])
