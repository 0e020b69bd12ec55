"""Schema registry construction.

This module exposes:
- `make_registry(schemas)` → SchemaRegistry keyed by raw discriminator bytes
- `add_schema(registry, schema)` → insert one schema (collisions fail fast)
- `add_many(registry, schemas)` → insert multiple

Two schemas sharing a discriminator is a configuration defect and raises
`DuplicateDiscriminatorError`; pass `replace=True` for a deliberate override.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from solind.core.exceptions import DuplicateDiscriminatorError
from solind.core.interfaces import ISchemaRegistryProvider
from solind.decoding.specs import Schema, SchemaRegistry


def add_schema(registry: SchemaRegistry, schema: Schema[Any], *, replace: bool = False) -> None:
    """Insert one schema into the registry keyed by its discriminator."""
    existing = registry.get(schema.discriminator)
    if existing is not None and existing is not schema and not replace:
        raise DuplicateDiscriminatorError(schema.discriminator_b58, existing.name, schema.name)
    registry[schema.discriminator] = schema


def add_many(registry: SchemaRegistry, schemas: Iterable[Schema[Any]], *, replace: bool = False) -> None:
    """Insert many schemas into the registry."""
    for s in schemas:
        add_schema(registry, s, replace=replace)


def make_registry(schemas: Iterable[Schema[Any]] = ()) -> SchemaRegistry:
    """Build a registry from schemas, failing on discriminator collisions."""
    reg: SchemaRegistry = {}
    add_many(reg, schemas)
    return reg


class SchemaRegistryProvider(ISchemaRegistryProvider):
    """
    Simple registry provider that always returns the same SchemaRegistry.

    Bridges statically defined program schemas and code that only depends
    on the provider interface.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry

    def get_registry(self) -> SchemaRegistry:
        return self._registry
