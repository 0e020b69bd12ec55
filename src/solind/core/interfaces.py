from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from solind.core.models import ParsedTransaction
    from solind.decoding.specs import SchemaRegistry


# ---------------------------------------------------------------------------
# ITransactionProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class ITransactionProvider(Protocol):
    """
    Abstract source of parsed transactions.

    Domain expectations:
    - It returns ParsedTransaction objects already validated into models.
    - It hides the underlying RPC / fixture / archive technology.
    - The decoding core never depends on it; only the fixture cache and the
      CLI do.
    """

    async def get_transaction(self, signature: str) -> ParsedTransaction | None:
        """
        Return the transaction identified by `signature`, or None if unknown.

        Implementations:
        - RPC-based (`RPC` class)
        - Fixture directory reader
        - In-memory provider for testing
        """
        ...

    async def get_transaction_raw(self, signature: str) -> dict | None:
        """Return the raw JSON object of the transaction, or None if unknown."""
        ...


# ---------------------------------------------------------------------------
# ISchemaRegistryProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class ISchemaRegistryProvider(Protocol):
    """
    Abstract provider of SchemaRegistry objects used for dispatch.

    How the registry is built (hand-written program modules, Anchor IDL
    files, signature strings) is an infrastructure concern.
    """

    def get_registry(self) -> SchemaRegistry:
        """Return a fully configured SchemaRegistry instance."""
        ...
