"""
ethereum_ens.resolver
=====================

`Resolver` wraps a resolver contract interface for one name. Every function
of the interface is exposed as an async method whose first argument, the
name's node, is supplied automatically:

    r = ens.resolver("foo.eth")
    addr = await r.addr()                      # eth_call addr(node)
    tx = await r.setAddr("0x1234...")          # eth_sendTransaction setAddr(node, addr)
    tx = await r.setAddr("0x1234...", {"from": owner, "gas": 100_000})

The resolver contract's address is looked up in the registry lazily, on the
first awaited call, and at most once per Resolver object. If the registry has
no resolver for the name, that lookup and every call depending on it raise
the `NameNotFound` singleton.

Whether a function is executed as a call or a transaction is decided per
invocation from its ABI descriptor (`constant` / `stateMutability`).
"""

from __future__ import annotations

import asyncio
import logging
from typing import (TYPE_CHECKING, Any, Awaitable, Callable, List, Mapping,
                    Optional, Sequence)

from .codecs import NO_ABI, SUPPORTED_CONTENT_TYPES, decode_abi, encode_abi
from .contracts.client import Contract
from .errors import AbiError, NameNotFound
from .types.abi import MethodDescriptor
from .utils.bytes import to_hex

if TYPE_CHECKING:  # pragma: no cover
    from .ens import ENS

log = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_zero_address(address: Optional[str]) -> bool:
    return address is None or int(address, 16) == 0


class Resolver:
    """
    Proxy for the resolver contract of one name.

    Parameters
    ----------
    ens : the ENS instance that created this resolver (registry + accounts).
    node : namehash of the name.
    contract : unbound Contract carrying the resolver interface.
    """

    def __init__(self, ens: "ENS", node: bytes, contract: Contract):
        self.ens = ens
        self.node = node
        self._contract = contract
        self._instance_future: Optional["asyncio.Future[Contract]"] = None

    def __repr__(self) -> str:
        return f"Resolver(node={to_hex(self.node)})"

    # ------------------------------------------------------------------ Resolver address

    def _instance(self) -> "asyncio.Future[Contract]":
        if self._instance_future is None:
            self._instance_future = asyncio.ensure_future(self._bind())
        return self._instance_future

    async def _bind(self) -> Contract:
        registry = await asyncio.shield(self.ens.registry())
        address = await registry.call("resolver", [self.node])
        if is_zero_address(address):
            log.debug("no resolver for node %s", to_hex(self.node))
            raise NameNotFound.with_traceback(None)
        log.debug("node %s resolved by %s", to_hex(self.node), address)
        return self._contract.with_address(address)

    async def resolver_address(self) -> str:
        """Address of the resolver contract for this name."""
        instance = await asyncio.shield(self._instance())
        return instance.address  # type: ignore[return-value]

    # ------------------------------------------------------------------ Dispatch

    @property
    def functions(self) -> Mapping[str, MethodDescriptor]:
        return self._contract.functions

    async def call(self, signature: str, *args: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Invoke resolver function *signature* (bare name or full signature)
        with `[node, *args]`.

        Read-only functions run through `eth_call`; the rest are sent as
        transactions and return the transaction hash. One positional argument
        beyond the declared ones must be a mapping: for transactions it is the
        transaction options unless `options=` is given, otherwise it is ignored.
        """
        instance = await asyncio.shield(self._instance())
        desc = instance.get_function(signature)
        params: List[Any] = list(args)
        if len(params) >= desc.arity:
            trailing = params.pop()
            if not isinstance(trailing, Mapping):
                raise AbiError(
                    f"extra argument must be a mapping of transaction options, got {type(trailing).__name__}",
                    function=desc.signature,
                )
            if not desc.constant and options is None:
                options = trailing

        call_args = [self.node, *params]
        if desc.constant:
            return await instance.call(desc, call_args)

        tx_options = await self.ens.transaction_options(options)
        log.debug("sending %s from %s", desc.signature, tx_options.get("from"))
        return await instance.transact(desc, call_args, tx_options)

    def method(self, signature: str) -> Callable[..., Awaitable[Any]]:
        """Return the bound async callable for *signature*."""
        if signature not in self._contract.functions:
            raise AttributeError(f"resolver interface has no function {signature!r}")

        async def _method(*args: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
            return await self.call(signature, *args, options=options)

        _method.__name__ = signature
        _method.__qualname__ = f"Resolver.{signature}"
        return _method

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        contract = self.__dict__.get("_contract")
        if name.startswith("_") or contract is None or name not in contract.functions:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self.method(name)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | {k for k in self._contract.functions if k.isidentifier()})

    # ------------------------------------------------------------------ Reverse records & ABIs

    async def reverse_addr(self) -> "Resolver":
        """Resolver for the reverse record of the address this name's `addr()` returns."""
        address = await self.call("addr")
        return self.ens.reverse(address)

    async def abi(self, allow_reverse_fallback: bool = True) -> Optional[Any]:
        """
        ABI recorded for this name.

        Without a record on the name itself, the reverse record of its
        `addr()` is consulted once (never further); None if neither has one.
        """
        content_type, payload = await self.call("ABI", SUPPORTED_CONTENT_TYPES)
        if content_type == NO_ABI:
            if not allow_reverse_fallback:
                return None
            log.debug("no ABI on %s; checking reverse record", to_hex(self.node))
            reverse = await self.reverse_addr()
            return await reverse.abi(False)
        return decode_abi(content_type, payload)

    async def set_abi(
        self,
        abi: Sequence[Mapping[str, Any]],
        content_type: int = 1,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Store *abi* on this name under a single content type."""
        payload = encode_abi(list(abi), content_type)
        return await self.call("setABI", content_type, payload, options=options)

    async def contract(self) -> Optional[Contract]:
        """
        Contract at this name's `addr()` using the ABI from `abi()`.

        Returns None when no ABI was found or the address is unset.
        """
        abi, address = await asyncio.gather(self.abi(), self.call("addr"))
        if abi is None or is_zero_address(address):
            return None
        return self.ens.client.contract(abi, address)


__all__ = ["Resolver", "ZERO_ADDRESS", "is_zero_address"]
