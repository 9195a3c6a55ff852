"""
ABI record codecs.

Resolvers store a contract ABI under a content type, a power of two:

    1  JSON text (UTF-8)
    2  zlib-compressed JSON text
    4  CBOR

A lookup passes the bitmask of the content types the caller can decode
(`SUPPORTED_CONTENT_TYPES`) and gets back `(content_type, payload)`, where
content type 0 means "no ABI recorded".
"""

from __future__ import annotations

import json
import zlib
from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Dict, List

import cbor2

from .errors import AbiDecodeError, AbiError
from .utils.bytes import BytesLike

NO_ABI = 0


@dataclass(frozen=True)
class AbiCodec:
    content_type: int
    name: str
    encode: Callable[[List[Any]], bytes]
    decode: Callable[[bytes], Any]


def _json_encode(abi: List[Any]) -> bytes:
    return json.dumps(abi, separators=(",", ":")).encode("utf-8")


def _json_decode(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))


def _zlib_encode(abi: List[Any]) -> bytes:
    return zlib.compress(_json_encode(abi))


def _zlib_decode(data: bytes) -> Any:
    return _json_decode(zlib.decompress(data))


def _cbor_encode(abi: List[Any]) -> bytes:
    return cbor2.dumps(abi, canonical=True)


def _cbor_decode(data: bytes) -> Any:
    return cbor2.loads(data)


ABI_CODECS: Dict[int, AbiCodec] = {
    c.content_type: c
    for c in (
        AbiCodec(1, "json", _json_encode, _json_decode),
        AbiCodec(2, "zlib-json", _zlib_encode, _zlib_decode),
        AbiCodec(4, "cbor", _cbor_encode, _cbor_decode),
    )
}

SUPPORTED_CONTENT_TYPES = reduce(lambda acc, ct: acc | ct, ABI_CODECS, 0)


def get_codec(content_type: int) -> AbiCodec:
    try:
        return ABI_CODECS[int(content_type)]
    except KeyError:
        raise AbiDecodeError(f"unsupported ABI content type {content_type}", content_type=int(content_type)) from None


def decode_abi(content_type: int, payload: BytesLike) -> Any:
    """
    Decode an ABI record payload; any failure is an AbiDecodeError.
    """
    codec = get_codec(content_type)
    try:
        return codec.decode(bytes(payload))
    except (ValueError, zlib.error, cbor2.CBORDecodeError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        raise AbiDecodeError(f"malformed {codec.name} ABI payload: {e}", content_type=codec.content_type) from e


def encode_abi(abi: List[Any], content_type: int = 1) -> bytes:
    """Encode an ABI definition for `setABI` with a single content type."""
    if content_type not in ABI_CODECS:
        raise AbiError(f"content type must be one of {sorted(ABI_CODECS)}, got {content_type}")
    return ABI_CODECS[content_type].encode(abi)


__all__ = [
    "NO_ABI",
    "AbiCodec",
    "ABI_CODECS",
    "SUPPORTED_CONTENT_TYPES",
    "get_codec",
    "decode_abi",
    "encode_abi",
]
