"""Schema primitives and registry typing.

Defines lightweight dataclasses to describe how to decode payloads:
- `Schema`: one record rule (name, 8-byte discriminator, parse function)
- `SchemaSet`: the instruction and event schemas of one program
- `SchemaRegistry`: mapping from raw discriminator bytes → Schema
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from solind.constants import DISCRIMINATOR_SIZE
from solind.core.exceptions import SchemaError
from solind.decoding.sighash import compute_sighash, encode_sighash

T = TypeVar("T")

# Parse functions receive the payload with the discriminator already stripped.
Parser = Callable[[memoryview], T]


@dataclass(frozen=True)
class Schema(Generic[T]):
    """One named decode rule keyed by its discriminator."""

    name: str
    discriminator: bytes
    parse: Parser[T]

    def __post_init__(self) -> None:
        if not isinstance(self.discriminator, bytes) or len(self.discriminator) != DISCRIMINATOR_SIZE:
            raise SchemaError(f"{self.name}: discriminator must be {DISCRIMINATOR_SIZE} raw bytes")

    @property
    def discriminator_b58(self) -> str:
        return encode_sighash(self.discriminator)

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, discriminator={self.discriminator_b58})"


def make_schema(namespace: str, name: str, parse: Parser[T], *, label: str | None = None) -> Schema[T]:
    """Build a schema whose discriminator is `sighash(namespace, name)`.

    `label` overrides the record name when it differs from the hashed name,
    e.g. Meteora's `Swap` event exposed as `SwapEvent`.
    """
    return Schema(name=label or name, discriminator=compute_sighash(namespace, name), parse=parse)


@dataclass(frozen=True)
class SchemaSet:
    """Instruction and event schemas of one program."""

    instructions: tuple[Schema[Any], ...] = ()
    events: tuple[Schema[Any], ...] = ()

    def merge(self, other: SchemaSet) -> SchemaSet:
        return SchemaSet(
            instructions=self.instructions + other.instructions,
            events=self.events + other.events,
        )


# The full registry keyed by raw 8-byte discriminator.
SchemaRegistry = dict[bytes, Schema[Any]]
