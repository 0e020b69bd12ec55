"""Storage components for transaction fixtures and Parquet export.

This package provides:
- FixtureCache: file-backed cache of raw transactions, filled from an RPC
- records_to_column / write_parquet: decoded records to Parquet
"""

from solind.storage.fixtures import FixtureCache
from solind.storage.parquet import records_to_column, write_parquet

__all__ = [
    "FixtureCache",
    "records_to_column",
    "write_parquet",
]
