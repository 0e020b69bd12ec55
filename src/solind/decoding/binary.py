"""Primitive decoders for Borsh-style little-endian payloads.

Each decoder consumes a fixed number of bytes from a `Reader` (strings and
byte vectors consume a `u32` length prefix plus the body) and returns a plain
Python value. Decoders never look at values produced earlier; a schema is just
an ordered sequence of these calls.

>>> r = create_reader(bytes([103, 0, 0, 0, 1]))
>>> u32(r), bool_(r), r.offset
(103, True, 5)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import base58

from solind.constants import PUBLIC_KEY_SIZE
from solind.core.exceptions import MalformedTextError
from solind.decoding.reader import Reader, create_reader

__all__ = [
    "PRIMITIVES",
    "bool_",
    "bytes_",
    "create_reader",
    "fixed_bytes",
    "i8",
    "i16",
    "i32",
    "i64",
    "i128",
    "public_key",
    "string",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
]


# ---------- integers ----------


def u8(reader: Reader) -> int:
    return reader.read_struct("<B")[0]


def u16(reader: Reader) -> int:
    return reader.read_struct("<H")[0]


def u32(reader: Reader) -> int:
    return reader.read_struct("<I")[0]


def u64(reader: Reader) -> int:
    return reader.read_struct("<Q")[0]


def u128(reader: Reader) -> int:
    """Read 16 bytes as one unsigned integer, most-significant byte last."""
    return int.from_bytes(reader.read_bytes(16), "little", signed=False)


def i8(reader: Reader) -> int:
    return reader.read_struct("<b")[0]


def i16(reader: Reader) -> int:
    return reader.read_struct("<h")[0]


def i32(reader: Reader) -> int:
    return reader.read_struct("<i")[0]


def i64(reader: Reader) -> int:
    return reader.read_struct("<q")[0]


def i128(reader: Reader) -> int:
    return int.from_bytes(reader.read_bytes(16), "little", signed=True)


# ---------- scalars ----------


def bool_(reader: Reader) -> bool:
    """Any nonzero byte is True."""
    return reader.read_bytes(1)[0] != 0


def public_key(reader: Reader) -> str:
    """Read a 32-byte public key and return its base58 text form."""
    return base58.b58encode(bytes(reader.read_bytes(PUBLIC_KEY_SIZE))).decode("ascii")


def fixed_bytes(reader: Reader, n: int) -> bytes:
    return bytes(reader.read_bytes(n))


# ---------- length-prefixed ----------


def _read_prefixed(reader: Reader) -> memoryview:
    # Peek the prefix first so a short body leaves the offset where it was.
    (length,) = reader.peek_struct("<I")
    return reader.peek_bytes(4 + length)[4:]


def bytes_(reader: Reader) -> bytes:
    """Read a `u32` length prefix followed by that many raw bytes."""
    body = _read_prefixed(reader)
    reader.read_bytes(4 + len(body))
    return bytes(body)


def string(reader: Reader) -> str:
    """Read a `u32` length prefix followed by that many UTF-8 bytes.

    Invalid UTF-8 raises `MalformedTextError`; nothing is consumed in that case.
    """
    body = _read_prefixed(reader)
    try:
        text = bytes(body).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedTextError(f"invalid UTF-8 in string at offset {reader.offset}: {e.reason}") from e
    reader.read_bytes(4 + len(body))
    return text


# Type names as they appear in Anchor IDLs and compact schema signatures.
PRIMITIVES: dict[str, Callable[[Reader], Any]] = {
    "u8": u8,
    "u16": u16,
    "u32": u32,
    "u64": u64,
    "u128": u128,
    "i8": i8,
    "i16": i16,
    "i32": i32,
    "i64": i64,
    "i128": i128,
    "bool": bool_,
    "publicKey": public_key,
    "pubkey": public_key,
    "string": string,
    "bytes": bytes_,
}
