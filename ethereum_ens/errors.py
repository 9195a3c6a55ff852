"""
Typed error classes for the ENS client.

These are raised by rpc/http, contracts/client, the ABI codecs and the
registry/resolver layer so callers can catch specific failure modes while
still being able to catch the base `EnsError`.

`NameNotFound` is a module-level singleton: every lookup of a name without a
configured resolver raises this same object, so callers may compare with
`exc is NameNotFound`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "EnsError",
    "NameNotFoundError",
    "NameNotFound",
    "RpcError",
    "TxError",
    "AbiError",
    "AbiDecodeError",
    "ConfigurationError",
    "UnknownNetworkError",
    "ContractNotBoundError",
    "JsonRpcCode",
    "from_jsonrpc_error",
]


class EnsError(Exception):
    """Base class for all client errors."""


class NameNotFoundError(EnsError):
    """The registry maps the name to the zero resolver address."""


NameNotFound = NameNotFoundError("ENS name not found")


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 standard codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000
    # Local transport failure (no response from the node)
    TRANSPORT_ERROR = -32098


@dataclass(eq=False)
class RpcError(EnsError):
    """Raised when a JSON-RPC call fails or returns an error object."""

    code: int
    message: str
    method: Optional[str] = None
    data: Optional[Any] = None
    request_id: Optional[Any] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:
        text = f"{self.method or 'rpc'} failed ({self.code}): {self.message}"
        extras = {"id": self.request_id, "http": self.http_status, "data": self.data}
        shown = ", ".join(f"{k}={v!r}" for k, v in extras.items() if v is not None)
        return f"{text} [{shown}]" if shown else text

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        """The standard code this error carries, or None for node-specific codes."""
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


@dataclass(eq=False)
class TxError(EnsError):
    """A transaction was mined with status 0, or its receipt was unreadable."""

    message: str
    tx_hash: Optional[str] = None
    receipt: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.message} (tx {self.tx_hash})" if self.tx_hash else self.message


@dataclass(eq=False)
class AbiError(EnsError):
    """
    An ABI could not be validated, or a call could not be encoded or its
    return value decoded (unknown function, wrong argument count or type).
    """

    message: str
    function: Optional[str] = None
    parameter: Optional[str] = None

    def __str__(self) -> str:
        if self.function and self.parameter:
            return f"{self.function}, {self.parameter}: {self.message}"
        if self.function or self.parameter:
            return f"{self.function or self.parameter}: {self.message}"
        return self.message


@dataclass(eq=False)
class AbiDecodeError(AbiError):
    """An ABI record could not be decoded (unknown content type or bad payload)."""

    content_type: Optional[int] = None

    def __str__(self) -> str:
        return f"ABI record with content type {self.content_type}: {self.message}"


class ConfigurationError(EnsError):
    """The client was configured in a way that cannot work."""


class UnknownNetworkError(ConfigurationError):
    """No registry address is known for the connected network."""

    def __init__(self, network_id: Any):
        super().__init__(f"no ENS registry known for network id {network_id!r}; pass an explicit registry address")
        self.network_id = network_id


class ContractNotBoundError(EnsError):
    """A contract call was attempted before an address was bound."""


def from_jsonrpc_error(err: Mapping[str, Any], **context: Any) -> RpcError:
    """
    Build an RpcError from a response's `error` member.

    *context* carries `method`, `request_id` and `http_status` from the request.
    """
    if not isinstance(err, Mapping):
        err = {"message": str(err)}
    return RpcError(
        code=int(err.get("code", JsonRpcCode.SERVER_ERROR)),
        message=str(err.get("message") or "JSON-RPC error"),
        data=err.get("data"),
        **context,
    )
