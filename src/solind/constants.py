from __future__ import annotations

# Anchor sighash namespaces
SIGHASH_GLOBAL_NAMESPACE = "global"
SIGHASH_EVENT_NAMESPACE = "event"

DISCRIMINATOR_SIZE = 8
PUBLIC_KEY_SIZE = 32

# sha256("anchor:event")[:8] byte-reversed: prefix of the self-CPI instruction carrying an emitted event
EVENT_IX_TAG = bytes.fromhex("e445a52e51cb9a1d")
