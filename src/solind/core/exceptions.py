"""Exception hierarchy shared by the decoding core and its collaborators.

- `DecodeError` and subclasses abort a single decode call (no partial record).
- `SchemaError` and subclasses are configuration defects detected when
  schemas or registries are built.
- `RPCError` / `TransactionNotFoundError` come from the transaction source.

A buffer that matches no schema is not an error: dispatch returns None.
"""

from __future__ import annotations


class SolindError(Exception):
    """Base class for all solind errors."""


# ---------- decoding ----------


class DecodeError(SolindError):
    """A payload could not be decoded by the schema it was dispatched to."""


class OutOfBoundsError(DecodeError):
    """A read would consume past the end of the buffer."""

    def __init__(self, *, offset: int, requested: int, size: int) -> None:
        self.offset = offset
        self.requested = requested
        self.size = size
        super().__init__(f"cannot read {requested} bytes at offset {offset}: buffer holds {size} bytes")


class MalformedTextError(DecodeError):
    """A length-prefixed string field is not valid UTF-8."""


# ---------- schema configuration ----------


class SchemaError(SolindError):
    """A schema or registry definition is invalid."""


class DuplicateDiscriminatorError(SchemaError):
    """Two schemas in one registry share a discriminator."""

    def __init__(self, discriminator: str, existing: str, new: str) -> None:
        self.discriminator = discriminator
        self.existing = existing
        self.new = new
        super().__init__(f"discriminator {discriminator} of {new!r} is already registered by {existing!r}")


class UnsupportedTypeError(SchemaError):
    """A field type has no primitive decoder."""


# ---------- transaction source ----------


class RPCError(SolindError):
    """The JSON-RPC node answered with an error object."""

    def __init__(self, code: int | None, message: str | None) -> None:
        self.code = code
        self.message = message
        super().__init__(f"RPC error: {code} {message}")


class TransactionNotFoundError(SolindError):
    """The requested transaction is unknown or carries no inner instructions."""
