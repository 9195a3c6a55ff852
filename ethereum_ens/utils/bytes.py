"""
Hex and JSON-RPC quantity helpers.

Nodes exchange byte strings as 0x-prefixed hex ("data") and integers as
minimal 0x-prefixed hex ("quantities").
"""

from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """bytes-like values are copied to bytes; strings are parsed as hex data."""
    if isinstance(data, str):
        return from_hex(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes or hex text, got {type(data).__name__}")


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    text = bytes(b).hex()
    return "0x" + text if prefix else text


def from_hex(s: str) -> bytes:
    """'0xdead' / 'DEAD' -> b'\\xde\\xad'. An odd number of digits is rejected."""
    if not isinstance(s, str):
        raise TypeError(f"hex data must be str, got {type(s).__name__}")
    digits = strip_0x(s)
    if len(digits) & 1:
        raise ValueError(f"odd-length hex data: {s!r}")
    try:
        return bytes.fromhex(digits)
    except ValueError:
        raise ValueError(f"not hex data: {s!r}") from None


def strip_0x(s: str) -> str:
    return s[2:] if s[:2] in ("0x", "0X") else s


# --- JSON-RPC quantities ------------------------------------------------------


def to_quantity(n: int) -> str:
    """Encode a non-negative int as a JSON-RPC quantity ('0x0', '0x1a', ...)."""
    if n < 0:
        raise ValueError("quantities must be non-negative")
    return hex(n)


def from_quantity(q: Union[str, int]) -> int:
    """Quantity ('0x1a'), decimal text ('26', as returned by net_version) or int -> int."""
    if isinstance(q, int):
        return q
    return int(q, 16) if q[:2] in ("0x", "0X") else int(q, 10)


__all__ = [
    "BytesLike",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "strip_0x",
    "to_quantity",
    "from_quantity",
]
