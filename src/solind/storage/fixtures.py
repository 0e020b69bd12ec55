from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from structlog import get_logger

from solind.core.exceptions import TransactionNotFoundError
from solind.core.interfaces import ITransactionProvider
from solind.core.models import ParsedTransaction

logger = get_logger()


class FixtureCache:
    """File-backed transaction cache: `<directory>/<signature>.json`.

    Reads a saved transaction when present; otherwise fetches it from the
    provider (if any), checks it has inner instructions, and saves the raw
    JSON for the next run.
    """

    def __init__(self, directory: Path, provider: ITransactionProvider | None = None) -> None:
        self.directory = Path(directory)
        self.provider = provider
        self.log = logger.new(directory=str(self.directory))

    def path_for(self, signature: str) -> Path:
        return self.directory / f"{signature}.json"

    def has(self, signature: str) -> bool:
        return self.path_for(signature).is_file()

    async def load(self, signature: str) -> ParsedTransaction:
        path = self.path_for(signature)
        if path.is_file():
            raw = await asyncio.to_thread(self._read_json, path)
            return ParsedTransaction.model_validate(raw)

        if self.provider is None:
            raise TransactionNotFoundError(f"no fixture for {signature} in {self.directory}")

        self.log.info("fixture miss, fetching", signature=signature)
        raw = await self.provider.get_transaction_raw(signature)
        if raw is None:
            raise TransactionNotFoundError(f"transaction {signature} not found")
        tx = ParsedTransaction.model_validate(raw)
        if tx.meta is None or not tx.meta.innerInstructions:
            raise TransactionNotFoundError(f"transaction {signature} has no inner instructions")

        await asyncio.to_thread(self._write_json, path, raw)
        return tx

    @staticmethod
    def _read_json(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _write_json(path: Path, raw: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(raw), encoding="utf-8")
