"""
Utility helpers.

Re-exports:
- bytes: hex and JSON-RPC quantity helpers
- hash: Keccak-256 and ENS namehash
"""

from .bytes import (ensure_bytes, from_hex, from_quantity, strip_0x, to_hex,
                    to_quantity)
from .hash import (keccak256, label_hash, namehash, normalize_name,
                   parent_namehash)

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "strip_0x",
    "ensure_bytes",
    "to_quantity",
    "from_quantity",
    # hash
    "keccak256",
    "normalize_name",
    "label_hash",
    "namehash",
    "parent_namehash",
]
