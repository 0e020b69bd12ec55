"""Command-line interface: discriminators, payload and transaction decoding."""

from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from typing import Any

import base58
import click
from rich.console import Console
from rich.table import Table

from solind.core.config import DecodeConfig, RpcConfig
from solind.core.exceptions import SolindError
from solind.core.models import ParsedTransaction, record_values
from solind.decoding.decoder import decode_event, decode_struct
from solind.decoding.sighash import compute_sighash, encode_sighash
from solind.decoding.specs import SchemaSet
from solind.decoding.transaction import BatchResult, TaggedRecord, decode_buffer, parse_transaction
from solind.idl import get_idl, make_schema_set_from_idl
from solind.programs import PROGRAMS

console = Console()

_PROGRAM_CHOICES = click.Choice(sorted(PROGRAMS))
_PRIORITY_CHOICES = click.Choice(["instructions", "events"])


def _resolve_schemas(
    program: str | None,
    idl_path: Path | None,
    program_id: str | None = None,
    *,
    require_program_id: bool = False,
) -> tuple[str, SchemaSet]:
    """Return (program id, schema set) from a known program name or an IDL file."""
    if idl_path is not None:
        idl = get_idl(idl_path)
        pid = program_id or idl.address or ""
        if require_program_id and not pid:
            raise click.UsageError("Pass --program-id: the IDL does not carry an address")
        return pid, make_schema_set_from_idl(idl)
    if program is None:
        raise click.UsageError("Pass --program or --idl")
    pid, factory = PROGRAMS[program]
    return program_id or pid, factory()


def _decode_payload(text: str, encoding: str) -> bytes:
    try:
        if encoding == "hex":
            return bytes.fromhex(text.removeprefix("0x"))
        if encoding == "base64":
            return base64.b64decode(text, validate=True)
        return base58.b58decode(text)
    except ValueError as e:
        raise click.BadParameter(f"not valid {encoding}: {e}", param_hint="DATA") from e


def _format_value(v: Any) -> str:
    if isinstance(v, bytes):
        return "0x" + v.hex()
    return str(v)


def _records_table(records: list[TaggedRecord]) -> Table:
    table = Table(show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("kind")
    table.add_column("name", style="bold")
    table.add_column("fields")
    for r in records:
        fields = "\n".join(f"{k}={_format_value(v)}" for k, v in record_values(r.data).items())
        table.add_row(str(r.index), r.kind, r.name, fields)
    return table


def _print_result(result: BatchResult) -> None:
    console.print(_records_table(result.records))
    for f in result.failures:
        console.print(f"[red]failed[/] #{f.index} {f.program_id} ({f.kind or 'payload'}): {f.error}")
    console.print(
        f"[bold]summary[/]: [green]records[/]={len(result.records)}  [red]failures[/]={len(result.failures)}"
    )


@click.group()
def cli() -> None:
    """solind: Anchor instruction and event decoder for Solana programs."""


@cli.command("sighash")
@click.argument("namespace")
@click.argument("name")
def sighash_cmd(namespace: str, name: str) -> None:
    """Print the discriminator of NAMESPACE:NAME (hex and base58)."""
    disc = compute_sighash(namespace, name)
    console.print(f"{namespace}:{name}  hex={disc.hex()}  base58={encode_sighash(disc)}")


@cli.command("list-schemas")
@click.option("--program", type=_PROGRAM_CHOICES, default=None)
@click.option("--idl", "idl_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
def list_schemas_cmd(program: str | None, idl_path: Path | None) -> None:
    """List the instruction and event schemas of a program."""
    pid, schema_set = _resolve_schemas(program, idl_path)
    table = Table(title=pid)
    table.add_column("kind")
    table.add_column("name", style="bold")
    table.add_column("discriminator")
    for kind, schemas in (("instruction", schema_set.instructions), ("event", schema_set.events)):
        for schema in schemas:
            table.add_row(kind, schema.name, schema.discriminator_b58)
    console.print(table)


@cli.command("decode-data")
@click.argument("data")
@click.option("--program", type=_PROGRAM_CHOICES, default=None, help="Known program schema set")
@click.option("--idl", "idl_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.option(
    "--encoding",
    type=click.Choice(["base58", "hex", "base64"]),
    default="base58",
    show_default=True,
    help="Encoding of DATA",
)
@click.option(
    "--kind",
    type=click.Choice(["auto", "instruction", "event"]),
    default="auto",
    show_default=True,
    help="Decode as instruction data, self-CPI event data, or try both",
)
@click.option("--priority", type=_PRIORITY_CHOICES, default="instructions", show_default=True)
def decode_data_cmd(
    data: str,
    program: str | None,
    idl_path: Path | None,
    encoding: str,
    kind: str,
    priority: str,
) -> None:
    """Decode one instruction payload DATA."""
    _pid, schema_set = _resolve_schemas(program, idl_path)
    payload = _decode_payload(data, encoding)

    try:
        if kind == "instruction":
            rec = decode_struct(schema_set.instructions, payload)
            tagged = None if rec is None else TaggedRecord(kind="instruction", name=rec.name, data=rec.data)
        elif kind == "event":
            rec = decode_event(schema_set.events, payload)
            tagged = None if rec is None else TaggedRecord(kind="event", name=rec.name, data=rec.data)
        else:
            tagged = decode_buffer(schema_set, payload, priority=priority)  # type: ignore[arg-type]
    except SolindError as e:
        raise click.ClickException(str(e)) from e

    if tagged is None:
        raise click.ClickException("no matching schema")
    console.print(_records_table([tagged]))


@cli.command("decode-tx")
@click.argument("signature")
@click.option("--rpc", "rpc_url", default=None, help="RPC endpoint URL (required on fixture miss)")
@click.option("--program", type=_PROGRAM_CHOICES, default=None, help="Known program schema set")
@click.option("--idl", "idl_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.option("--program-id", default=None, help="Override the program id to filter on")
@click.option("--fixtures", "fixtures_dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--parquet-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--priority", type=_PRIORITY_CHOICES, default="instructions", show_default=True)
@click.option("--timeout", "timeout_s", type=int, default=20, show_default=True)
def decode_tx_cmd(
    signature: str,
    rpc_url: str | None,
    program: str | None,
    idl_path: Path | None,
    program_id: str | None,
    fixtures_dir: Path | None,
    parquet_out: Path | None,
    priority: str,
    timeout_s: int,
) -> None:
    """Decode the inner instructions of transaction SIGNATURE."""
    if rpc_url is None and fixtures_dir is None:
        raise click.UsageError("Pass --rpc and/or --fixtures")

    config = DecodeConfig(
        program=program or "",
        signature=signature,
        priority=priority,  # type: ignore[arg-type]
        fixtures_dir=fixtures_dir,
        parquet_out=parquet_out,
        idl_path=idl_path,
    )
    rpc_config = RpcConfig(rpc_url=rpc_url, timeout_s=timeout_s) if rpc_url else None
    pid, schema_set = _resolve_schemas(program, idl_path, program_id, require_program_id=True)

    from solind.clients.rpc import RPC
    from solind.storage.fixtures import FixtureCache

    async def load() -> ParsedTransaction:
        rpc = RPC.from_config(rpc_config) if rpc_config is not None else None
        try:
            if config.fixtures_dir is not None:
                return await FixtureCache(config.fixtures_dir, rpc).load(config.signature)
            assert rpc is not None
            tx = await rpc.get_transaction(config.signature)
            if tx is None:
                raise click.ClickException(f"transaction {config.signature} not found")
            return tx
        finally:
            if rpc is not None:
                await rpc.aclose()

    try:
        tx = asyncio.run(load())
        result = parse_transaction(pid, schema_set, tx, priority=config.priority)
    except SolindError as e:
        raise click.ClickException(str(e)) from e

    if result is None:
        raise click.ClickException(f"transaction {signature} has no inner instructions")
    _print_result(result)

    if config.parquet_out is not None:
        from solind.storage.parquet import records_to_column, write_parquet

        path = write_parquet(records_to_column(tx, result), config.parquet_out)
        console.print(f"[bold]wrote[/] {path}")


if __name__ == "__main__":
    cli()
