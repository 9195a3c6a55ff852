"""
Keccak-256 and ENS name hashing.

namehash('') = 0x00 * 32
namehash(label + '.' + rest) = keccak256(namehash(rest) + keccak256(label))

Names are normalized (NFKC, lower-case) before hashing, so 'Foo.ETH' and
'foo.eth' map to the same node.
"""

from __future__ import annotations

import unicodedata
from typing import Tuple

from eth_utils import keccak as _keccak

from .bytes import BytesLike, ensure_bytes

EMPTY_NODE = b"\x00" * 32


def keccak256(data: BytesLike) -> bytes:
    """Return Keccak-256 digest of *data* (bytes)."""
    return _keccak(ensure_bytes(data))


def normalize_name(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"name must be a string, got {type(name).__name__}")
    return unicodedata.normalize("NFKC", name).lower()


def label_hash(label: str) -> bytes:
    return keccak256(normalize_name(label).encode("utf-8"))


def namehash(name: str) -> bytes:
    """Return the 32-byte node identifier for a dotted name."""
    node = EMPTY_NODE
    name = normalize_name(name)
    if not name:
        return node
    for label in reversed(name.split(".")):
        node = keccak256(node + label_hash(label))
    return node


def parent_namehash(name: str) -> Tuple[bytes, bytes]:
    """
    Split a name into (namehash(parent), keccak256(first label)).

    'baz.bar.eth' -> (namehash('bar.eth'), keccak256('baz'))
    """
    name = normalize_name(name)
    label, _, parent = name.partition(".")
    return namehash(parent), label_hash(label)


__all__ = [
    "EMPTY_NODE",
    "keccak256",
    "normalize_name",
    "label_hash",
    "namehash",
    "parent_namehash",
]
