"""Core data models, configuration and errors.

This package provides:
- Transaction models (ParsedTransaction, UiInstruction, ...)
- Record metadata and the dynamic Column buffer
- Configuration classes (RpcConfig, DecodeConfig)
- The exception hierarchy
"""

from solind.core.config import DecodeConfig, RpcConfig
from solind.core.exceptions import (
    DecodeError,
    DuplicateDiscriminatorError,
    MalformedTextError,
    OutOfBoundsError,
    SolindError,
)
from solind.core.models import Column, ParsedTransaction, RecordMeta, UiInstruction

__all__ = [
    "DecodeConfig",
    "RpcConfig",
    "DecodeError",
    "DuplicateDiscriminatorError",
    "MalformedTextError",
    "OutOfBoundsError",
    "SolindError",
    "Column",
    "ParsedTransaction",
    "RecordMeta",
    "UiInstruction",
]
