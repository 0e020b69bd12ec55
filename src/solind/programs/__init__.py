"""Schema sets for known programs.

All schema sets are composable with `SchemaSet.merge`.

Available programs:
- Jupiter v6: make_jupiter_schema_set()
- Meteora DLMM: make_meteora_dlmm_schema_set()
"""

from __future__ import annotations

from collections.abc import Callable

from solind.decoding.specs import SchemaSet
from solind.programs.jupiter import JUPITER_V6_PROGRAM_ID, make_jupiter_schema_set
from solind.programs.meteora_dlmm import METEORA_DLMM_PROGRAM_ID, make_meteora_dlmm_schema_set

# CLI name → (program id, schema set factory)
PROGRAMS: dict[str, tuple[str, Callable[[], SchemaSet]]] = {
    "jupiter": (JUPITER_V6_PROGRAM_ID, make_jupiter_schema_set),
    "meteora-dlmm": (METEORA_DLMM_PROGRAM_ID, make_meteora_dlmm_schema_set),
}

__all__ = [
    "PROGRAMS",
    "JUPITER_V6_PROGRAM_ID",
    "METEORA_DLMM_PROGRAM_ID",
    "make_jupiter_schema_set",
    "make_meteora_dlmm_schema_set",
]
