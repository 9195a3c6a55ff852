"""
ethereum_ens.contracts.client
=============================

A small ABI-driven contract client that:
- Encodes function calls from an ABI (selector + `eth_abi` arguments)
- Executes read-only calls with `eth_call`
- Sends state-changing calls with `eth_sendTransaction` (node-managed accounts)
- Decodes return values with the same ABI

The client is intentionally thin and delegates to:
- `ethereum_ens.types.abi` for ABI validation and method descriptors
- `eth_abi` for the binary encoding
- any object with an async `request(method, params)` for transport
  (normally `ethereum_ens.rpc.http.AsyncRpcClient`)

Example
-------
    rpc = AsyncRpcClient("http://127.0.0.1:8545")
    token = Contract(rpc, abi, "0x5FbDB2315678afecb367f032d93F642f64180aa3")

    supply = await token.call("totalSupply")
    tx_hash = await token.transact("transfer", [to, 10], {"from": sender})
"""

from __future__ import annotations

from typing import (Any, Dict, Mapping, Optional, Protocol, Sequence, Union)

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import to_checksum_address

from ..errors import AbiError, ContractNotBoundError
from ..types.abi import Abi, MethodDescriptor, function_table, load_abi
from ..utils.bytes import from_hex, to_hex, to_quantity


class _Rpc(Protocol):
    async def request(self, method: str, params: Any = None) -> Any: ...


JsonDict = Dict[str, Any]

# eth_sendTransaction fields carried as hex quantities
_QUANTITY_FIELDS = ("gas", "gasPrice", "value", "nonce", "maxFeePerGas", "maxPriorityFeePerGas", "chainId")


def _coerce_arg(typ: str, value: Any) -> Any:
    """Adapt friendly Python values (hex strings, numeric strings) to what eth_abi expects."""
    if typ.endswith("]"):
        inner = typ[: typ.rindex("[")]
        return [_coerce_arg(inner, v) for v in value]
    if typ.startswith("("):
        return value
    if typ == "address" and isinstance(value, str):
        return to_checksum_address(value)
    if typ.startswith("bytes") and isinstance(value, str):
        return from_hex(value)
    if typ.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 0)
    return value


def tx_params(options: Optional[Mapping[str, Any]]) -> JsonDict:
    """Transaction options -> JSON-RPC transaction object."""
    out: JsonDict = {}
    for k, v in (options or {}).items():
        if k in _QUANTITY_FIELDS and isinstance(v, int):
            out[k] = to_quantity(v)
        else:
            out[k] = v
    return out


class Contract:
    """
    ABI-driven client for one contract, optionally bound to an address.

    Parameters
    ----------
    rpc : object with `async request(method, params)`.
    abi : list of JSON ABI entries (or its JSON text).
    address : 0x-address; may be bound later with `with_address`.
    """

    def __init__(self, rpc: _Rpc, abi: Union[Sequence[Mapping[str, Any]], str], address: Optional[str] = None):
        self._rpc = rpc
        self._abi: Abi = load_abi(abi)
        self._functions: Dict[str, MethodDescriptor] = function_table(self._abi)
        self._address: Optional[str] = to_checksum_address(address) if address is not None else None

    def __repr__(self) -> str:
        return f"Contract(address={self._address!r}, functions={len(self._abi)})"

    # ------------------------------------------------------------------ Accessors

    @property
    def address(self) -> Optional[str]:
        return self._address

    @property
    def abi(self) -> Abi:
        return self._abi

    @property
    def rpc(self) -> _Rpc:
        return self._rpc

    @property
    def functions(self) -> Mapping[str, MethodDescriptor]:
        """Method descriptors keyed by bare name and by full signature."""
        return self._functions

    def with_address(self, address: str) -> "Contract":
        """Return a copy of this contract bound to *address*."""
        return type(self)(self._rpc, self._abi, address)

    def get_function(self, fn: Union[str, MethodDescriptor]) -> MethodDescriptor:
        if isinstance(fn, MethodDescriptor):
            return fn
        try:
            return self._functions[fn]
        except KeyError:
            raise AbiError("Function not found in ABI", function=fn) from None

    def _bound_address(self) -> str:
        if self._address is None:
            raise ContractNotBoundError("contract has no address; bind one with with_address()")
        return self._address

    # ------------------------------------------------------------------ Encoding/decoding

    def encode_call_data(self, fn: Union[str, MethodDescriptor], args: Optional[Sequence[Any]] = None) -> bytes:
        """
        Encode function call data (4-byte selector + encoded args).
        """
        desc = self.get_function(fn)
        args = list(args or [])
        if len(args) != desc.arity:
            raise AbiError(f"expected {desc.arity} arguments, got {len(args)}", function=desc.signature)
        try:
            values = [_coerce_arg(t, v) for t, v in zip(desc.input_types, args)]
            return desc.selector + abi_encode(list(desc.input_types), values)
        except (EncodingError, ValueError, TypeError, OverflowError) as e:
            raise AbiError(f"encode failed: {e}", function=desc.signature) from e

    def decode_return(self, fn: Union[str, MethodDescriptor], data: bytes) -> Any:
        """
        Decode return bytes: None without outputs, the value for one output,
        a tuple for several.
        """
        desc = self.get_function(fn)
        if not desc.output_types:
            return None
        try:
            values = abi_decode(list(desc.output_types), bytes(data))
        except (DecodingError, ValueError) as e:
            raise AbiError(f"decode failed: {e}", function=desc.signature) from e
        return values[0] if len(values) == 1 else tuple(values)

    # ------------------------------------------------------------------ Calls

    async def call(
        self,
        fn: Union[str, MethodDescriptor],
        args: Optional[Sequence[Any]] = None,
        *,
        block: Union[str, int] = "latest",
    ) -> Any:
        """
        Execute a read-only call via `eth_call` and decode the result.
        """
        desc = self.get_function(fn)
        calldata = self.encode_call_data(desc, args)
        to = self._bound_address()
        tag = to_quantity(block) if isinstance(block, int) else block
        raw = await self._rpc.request("eth_call", [{"to": to, "data": to_hex(calldata)}, tag])
        return self.decode_return(desc, from_hex(raw))

    async def transact(
        self,
        fn: Union[str, MethodDescriptor],
        args: Optional[Sequence[Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Send a state-changing call via `eth_sendTransaction`.

        `options` carries web3-style fields (`from`, `gas`, `gasPrice`,
        `value`, `nonce`, ...). Returns the transaction hash.
        """
        desc = self.get_function(fn)
        calldata = self.encode_call_data(desc, args)
        tx = tx_params(options)
        tx["to"] = self._bound_address()
        tx["data"] = to_hex(calldata)
        return await self._rpc.request("eth_sendTransaction", [tx])


__all__ = ["Contract", "tx_params"]
