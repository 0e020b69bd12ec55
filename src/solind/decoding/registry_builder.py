"""Registry builder utilities for creating schemas from compact signatures.

This module provides:
- `schema_from_signature()` to turn `"Name(type field, ...)"` into a Schema
- `make_registry_from_signatures()` for one or many signatures

Field types are the primitive names of `solind.decoding.binary.PRIMITIVES`
(`u64`, `i32`, `bool`, `publicKey`, `string`, ...). The parsed record is a
dict keyed by field name in declaration order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from solind.constants import SIGHASH_EVENT_NAMESPACE
from solind.core.exceptions import UnsupportedTypeError
from solind.decoding.binary import PRIMITIVES
from solind.decoding.reader import Reader, create_reader
from solind.decoding.registry import make_registry
from solind.decoding.specs import Schema, SchemaRegistry, make_schema

FieldDecoder = tuple[str, Callable[[Reader], Any]]


# ---- Helpers: parse a signature ----
def _split_params(params_str: str) -> list[str]:
    """Split the parameter list by commas, dropping empty fragments."""
    return [p.strip() for p in params_str.split(",") if p.strip()]


def _parse_param(p: str, fallback_name: str) -> tuple[str, str]:
    """Parse one parameter fragment into (name, type)."""
    tokens = p.split()
    if len(tokens) == 1:
        # Unnamed parameter
        return (fallback_name, tokens[0])
    if len(tokens) != 2:
        raise ValueError(f"Invalid parameter: {p!r}")
    return (tokens[1], tokens[0])


def field_decoders(fields: Sequence[tuple[str, str]]) -> list[FieldDecoder]:
    """Resolve (name, type) pairs to primitive decoders; unknown types fail here."""
    out: list[FieldDecoder] = []
    for name, typ in fields:
        decoder = PRIMITIVES.get(typ)
        if decoder is None:
            raise UnsupportedTypeError(f"field {name!r} has unsupported type {typ!r}")
        out.append((name, decoder))
    return out


def make_struct_parser(fields: Sequence[tuple[str, str]]) -> Callable[[memoryview], dict[str, Any]]:
    """Return a parse function reading `fields` sequentially into a dict."""
    decoders = field_decoders(fields)

    def parse(data: memoryview) -> dict[str, Any]:
        reader = create_reader(data)
        return {name: decode(reader) for name, decode in decoders}

    return parse


def schema_from_signature(
    signature: str,
    *,
    namespace: str = SIGHASH_EVENT_NAMESPACE,
    label: str | None = None,
) -> Schema[dict[str, Any]]:
    """Build a Schema from a compact signature string.

    The name before the parenthesis is hashed under `namespace`; pass the
    snake_case method name with `namespace="global"` for instructions.

    Example input:
      "SwapEvent(publicKey amm, publicKey inputMint, u64 inputAmount)"
    """
    sig = signature.strip()
    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren == -1 or close_paren == -1 or close_paren < open_paren:
        raise ValueError(f"Invalid schema signature: {signature}")
    name = sig[:open_paren].strip()
    if not name:
        raise ValueError(f"Invalid schema signature: {signature}")
    params_str = sig[open_paren + 1 : close_paren]

    fields = [_parse_param(part, fallback_name=f"arg{i}") for i, part in enumerate(_split_params(params_str))]
    return make_schema(namespace, name, make_struct_parser(fields), label=label)


def make_registry_from_signatures(
    signatures: str | list[str],
    *,
    namespace: str = SIGHASH_EVENT_NAMESPACE,
) -> SchemaRegistry:
    """Create a registry from one or multiple schema signatures."""
    sig_list = [signatures] if isinstance(signatures, str) else signatures
    return make_registry(schema_from_signature(s, namespace=namespace) for s in sig_list)
