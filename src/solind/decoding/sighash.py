"""Anchor signature hashes (discriminators).

An Anchor discriminator is the first 8 bytes of `sha256("<namespace>:<name>")`.
Instructions use the `global` namespace with the snake_case method name,
events use the `event` namespace with the struct name.

Discriminators are compared as raw bytes; base58 text is only for display and
configuration.
"""

from __future__ import annotations

import hashlib

import base58

from solind.constants import DISCRIMINATOR_SIZE
from solind.core.exceptions import OutOfBoundsError
from solind.decoding.reader import Buffer


def compute_sighash(namespace: str, name: str) -> bytes:
    """Return the 8-byte discriminator for `namespace:name`.

    >>> compute_sighash("global", "swap").hex()
    'f8c69e91e17587c8'
    """
    preimage = f"{namespace}:{name}"
    return hashlib.sha256(preimage.encode("utf-8")).digest()[:DISCRIMINATOR_SIZE]


def extract_sighash(data: Buffer) -> bytes:
    """Return the discriminator embedded in the first 8 bytes of `data`."""
    if len(data) < DISCRIMINATOR_SIZE:
        raise OutOfBoundsError(offset=0, requested=DISCRIMINATOR_SIZE, size=len(data))
    return bytes(data[:DISCRIMINATOR_SIZE])


def encode_sighash(discriminator: bytes) -> str:
    """Render a discriminator as base58 text."""
    return base58.b58encode(discriminator).decode("ascii")


def decode_sighash(text: str) -> bytes:
    """Parse a base58 discriminator; raises ValueError on bad input."""
    raw = base58.b58decode(text)
    if len(raw) != DISCRIMINATOR_SIZE:
        raise ValueError(f"discriminator must be {DISCRIMINATOR_SIZE} bytes, got {len(raw)}")
    return raw
