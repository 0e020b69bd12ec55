from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

Priority = Literal["instructions", "events"]


@dataclass(frozen=True)
class RpcConfig:
    """Configuration for the JSON-RPC transaction source."""

    rpc_url: str
    timeout_s: int = 20
    max_connections: int = 16
    commitment: str = "confirmed"
    max_supported_transaction_version: int = 0


@dataclass(frozen=True)
class DecodeConfig:
    """Configuration for decoding the instructions of one transaction (CLI)."""

    program: str
    signature: str
    priority: Priority = "instructions"
    fixtures_dir: Path | None = None
    parquet_out: Path | None = None
    idl_path: Path | None = None
