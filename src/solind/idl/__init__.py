"""Anchor IDL loading.

This module provides:
- pydantic models of legacy (`publicKey`, `isMut`) and current (`pubkey`,
  explicit `discriminator` arrays) Anchor IDL files
- `get_type_decoder(...)`: IDL type → Borsh decoder (primitives, `vec`,
  `option`, constant-length `array`, `defined` structs)
- `make_schema_set_from_idl(...)`: instruction and event schemas for a program

Entries whose types have no decoder (enums, generic lengths, tuple structs)
are skipped with a warning unless `strict=True`.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from structlog import get_logger

from solind.constants import SIGHASH_EVENT_NAMESPACE, SIGHASH_GLOBAL_NAMESPACE
from solind.core.exceptions import UnsupportedTypeError
from solind.decoding.binary import PRIMITIVES, u8, u32
from solind.decoding.reader import Reader, create_reader
from solind.decoding.sighash import compute_sighash
from solind.decoding.specs import Schema, SchemaSet

logger = get_logger()

IdlType = str | dict[str, Any]
TypeDecoder = Callable[[Reader], Any]


class IdlField(BaseModel):
    name: str
    type: IdlType
    index: bool = False


class IdlEvent(BaseModel):
    name: str
    fields: list[IdlField] | None = None
    discriminator: list[int] | None = None


class IdlInstruction(BaseModel):
    name: str
    args: list[IdlField] = []
    discriminator: list[int] | None = None


class IdlTypeDef(BaseModel):
    name: str
    type: dict[str, Any]


class Idl(BaseModel):
    name: str | None = None
    address: str | None = None
    metadata: dict[str, Any] | None = None
    instructions: list[IdlInstruction] = []
    events: list[IdlEvent] = []
    types: list[IdlTypeDef] = []

    @property
    def program_name(self) -> str | None:
        if self.name:
            return self.name
        return (self.metadata or {}).get("name")

    def find_type(self, name: str) -> IdlTypeDef | None:
        return next((t for t in self.types if t.name == name), None)


def snake_case(name: str) -> str:
    """`swapExactIn` → `swap_exact_in`, as Anchor hashes instruction names."""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()


# ---------- type decoders ----------


def _vec(item: TypeDecoder) -> TypeDecoder:
    def decode(reader: Reader) -> list[Any]:
        return [item(reader) for _ in range(u32(reader))]

    return decode


def _option(item: TypeDecoder) -> TypeDecoder:
    def decode(reader: Reader) -> Any:
        return item(reader) if u8(reader) else None

    return decode


def _array(item: TypeDecoder, length: int, raw_bytes: bool) -> TypeDecoder:
    def decode(reader: Reader) -> Any:
        if raw_bytes:
            return bytes(reader.read_bytes(length))
        return [item(reader) for _ in range(length)]

    return decode


def _struct(fields: Sequence[tuple[str, TypeDecoder]]) -> TypeDecoder:
    def decode(reader: Reader) -> dict[str, Any]:
        return {name: item(reader) for name, item in fields}

    return decode


def _defined_name(ref: Any) -> str:
    # legacy IDLs use {"defined": "Name"}, newer ones {"defined": {"name": "Name"}}
    return ref["name"] if isinstance(ref, dict) else str(ref)


def get_type_decoder(idl: Idl, t: IdlType, _seen: frozenset[str] = frozenset()) -> TypeDecoder:
    """Resolve an IDL type to a decoder; raises UnsupportedTypeError."""
    if isinstance(t, str):
        decoder = PRIMITIVES.get(t)
        if decoder is None:
            raise UnsupportedTypeError(f"unsupported type {t!r}")
        return decoder
    if "vec" in t:
        return _vec(get_type_decoder(idl, t["vec"], _seen))
    if "option" in t:
        return _option(get_type_decoder(idl, t["option"], _seen))
    if "array" in t:
        item_type, length = t["array"]
        if not isinstance(length, int):
            raise UnsupportedTypeError(f"array length {length!r} is not a constant")
        return _array(get_type_decoder(idl, item_type, _seen), length, item_type == "u8")
    if "defined" in t:
        name = _defined_name(t["defined"])
        typedef = idl.find_type(name)
        if typedef is None or name in _seen:
            raise UnsupportedTypeError(f"unresolvable defined type {name!r}")
        if typedef.type.get("kind") != "struct":
            raise UnsupportedTypeError(f"defined type {name!r} is a {typedef.type.get('kind')}")
        return _struct(get_fields_decoders(idl, _typedef_fields(typedef), _seen | {name}))
    raise UnsupportedTypeError(f"unsupported type {t!r}")


def _typedef_fields(typedef: IdlTypeDef) -> list[IdlField]:
    fields = typedef.type.get("fields", [])
    if any(not isinstance(f, dict) or "name" not in f for f in fields):
        raise UnsupportedTypeError(f"defined type {typedef.name!r} is a tuple struct")
    return [IdlField.model_validate(f) for f in fields]


def get_fields_decoders(
    idl: Idl, fields: Sequence[IdlField], _seen: frozenset[str] = frozenset()
) -> list[tuple[str, TypeDecoder]]:
    return [(f.name, get_type_decoder(idl, f.type, _seen)) for f in fields]


def _parser(fields: list[tuple[str, TypeDecoder]]) -> Callable[[memoryview], dict[str, Any]]:
    decode = _struct(fields)

    def parse(data: memoryview) -> dict[str, Any]:
        return decode(create_reader(data))

    return parse


# ---------- schemas ----------


def get_event_fields(idl: Idl, event: IdlEvent) -> list[IdlField]:
    if event.fields is not None:
        return event.fields
    typedef = idl.find_type(event.name)
    if typedef is None:
        raise UnsupportedTypeError(f"event {event.name!r} has no field definition")
    return _typedef_fields(typedef)


def get_event_schema(idl: Idl, event: IdlEvent) -> Schema[dict[str, Any]]:
    disc = (
        bytes(event.discriminator)
        if event.discriminator
        else compute_sighash(SIGHASH_EVENT_NAMESPACE, event.name)
    )
    return Schema(
        name=event.name,
        discriminator=disc,
        parse=_parser(get_fields_decoders(idl, get_event_fields(idl, event))),
    )


def get_instruction_schema(idl: Idl, instruction: IdlInstruction) -> Schema[dict[str, Any]]:
    disc = (
        bytes(instruction.discriminator)
        if instruction.discriminator
        else compute_sighash(SIGHASH_GLOBAL_NAMESPACE, snake_case(instruction.name))
    )
    return Schema(
        name=instruction.name,
        discriminator=disc,
        parse=_parser(get_fields_decoders(idl, instruction.args)),
    )


IdlJson = dict[str, Any]
IdlSpec = IdlJson | Path


def get_idl(idl: IdlSpec) -> Idl:
    if isinstance(idl, Path):
        idl = json.loads(idl.read_text())
    return Idl.model_validate(idl)


def _collect(
    items: Sequence[IdlInstruction | IdlEvent],
    build: Callable[[Any], Schema[dict[str, Any]]],
    strict: bool,
) -> tuple[Schema[dict[str, Any]], ...]:
    out: list[Schema[dict[str, Any]]] = []
    for item in items:
        try:
            out.append(build(item))
        except UnsupportedTypeError as e:
            if strict:
                raise
            logger.warning("skipping idl entry", name=item.name, reason=str(e))
    return tuple(out)


def make_schema_set_from_idl(idl: IdlSpec | Idl, *, strict: bool = False) -> SchemaSet:
    """Build instruction and event schemas for every entry of an Anchor IDL.

    Entries using types without a decoder (enums, unknown defined types) are
    skipped with a warning, or raise UnsupportedTypeError when `strict`.
    """
    if not isinstance(idl, Idl):
        idl = get_idl(idl)
    model = idl
    return SchemaSet(
        instructions=_collect(model.instructions, lambda ix: get_instruction_schema(model, ix), strict),
        events=_collect(model.events, lambda ev: get_event_schema(model, ev), strict),
    )
