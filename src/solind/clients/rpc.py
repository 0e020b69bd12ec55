"""Lightweight JSON-RPC client for Solana nodes.

This module provides:
- `RPC`: an async client with sane timeouts/connection limits

It returns `ParsedTransaction` records ready for downstream decoding. The
decoding core never imports this module.
"""

from __future__ import annotations

from typing import Any

import httpx
from structlog import get_logger

from solind.core.config import RpcConfig
from solind.core.exceptions import RPCError
from solind.core.models import ParsedTransaction

logger = get_logger()


class RPC:
    """Minimal async RPC client.

    Parameters
    ----------
    url : str
        RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    commitment : str
        Commitment level passed to `getTransaction`.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests use `httpx.MockTransport`).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: int = 20,
        max_connections: int = 16,
        commitment: str = "confirmed",
        max_supported_transaction_version: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.commitment = commitment
        self.max_supported_transaction_version = max_supported_transaction_version
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            transport=transport,
        )
        self.log = logger.new(url=url)

    @classmethod
    def from_config(cls, config: RpcConfig) -> RPC:
        return cls(
            config.rpc_url,
            timeout_s=config.timeout_s,
            max_connections=config.max_connections,
            commitment=config.commitment,
            max_supported_transaction_version=config.max_supported_transaction_version,
        )

    async def _call(self, method: str, params: list[Any]) -> Any:
        r = await self.client.post(
            self.url,
            json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
        )
        r.raise_for_status()
        data = r.json()
        if "error" in data:
            e = data["error"]
            raise RPCError(e.get("code"), e.get("message"))
        return data.get("result")

    async def get_transaction_raw(self, signature: str) -> dict[str, Any] | None:
        """Fetch a transaction as raw `jsonParsed` JSON, or None if unknown."""
        self.log.debug("get transaction", signature=signature)
        return await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "commitment": self.commitment,
                    "maxSupportedTransactionVersion": self.max_supported_transaction_version,
                },
            ],
        )

    async def get_transaction(self, signature: str) -> ParsedTransaction | None:
        """Fetch and validate a transaction, or None if unknown."""
        raw = await self.get_transaction_raw(signature)
        if raw is None:
            return None
        return ParsedTransaction.model_validate(raw)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
