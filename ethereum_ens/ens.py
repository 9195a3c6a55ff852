"""
ethereum_ens.ens
================

`ENS` is the entry point: it holds the registry handle and hands out
`Resolver` objects.

    from ethereum_ens import ENS

    async with ENS("http://127.0.0.1:8545") as ens:
        addr = await ens.resolver("foo.eth").addr()
        owner = await ens.owner("foo.eth")
        name = await ens.reverse(addr).name()

Calls that talk to the node are coroutines. `resolver()` and `reverse()`
return immediately; the resolver address is looked up when the first call on
the returned object is awaited.

Functions that create transactions take an optional `options` mapping with
web3-style fields (`from`, `gas`, `gasPrice`, `value`, ...). Without a
`from`, the node's first account is used.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from eth_utils import to_checksum_address

from .client import ClientFactory, EthClient, create_client
from .config import EnsConfig
from .contracts.client import Contract
from .contracts.interfaces import REGISTRY_INTERFACE, RESOLVER_INTERFACE
from .errors import ConfigurationError, UnknownNetworkError
from .resolver import Resolver
from .rpc.http import AsyncRpcClient
from .utils.bytes import strip_0x
from .utils.hash import namehash, parent_namehash

log = logging.getLogger(__name__)

# Registry deployments by network id (net_version)
REGISTRY_ADDRESSES: Dict[int, str] = {
    1: "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e",  # mainnet
    3: "0x112234455c3a32fd11230c42e7bccd4a84e02010",  # ropsten
    4: "0xe7410170f87102DF0055eB195163A03B7F2Bff4A",  # rinkeby
    5: "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e",  # goerli
    11155111: "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e",  # sepolia
}

REVERSE_SUFFIX = "addr.reverse"


def reverse_name(address: str) -> str:
    """'0xAbC...' -> 'abc....addr.reverse'"""
    return f"{strip_0x(address).lower()}.{REVERSE_SUFFIX}"


class ENS:
    """
    Client for an ENS registry.

    Parameters
    ----------
    provider : RPC URL, AsyncRpcClient (or anything with an async
        `request()`), or a ready EthClient.
    address : registry address. Without it the registry is picked from
        REGISTRY_ADDRESSES by the node's network id.
    client : EthClient instance or factory overriding the one derived from
        `provider`.
    """

    def __init__(
        self,
        provider: Any,
        address: Optional[str] = None,
        client: Optional[Any] = None,
        *,
        timeout: float = 30.0,
    ):
        self.client: EthClient = create_client(provider, client, timeout=timeout)
        self._registry_address = to_checksum_address(address) if address is not None else None
        self._registry_contract = self.client.contract(REGISTRY_INTERFACE)
        self._registry_future: Optional["asyncio.Future[Contract]"] = None

    @classmethod
    def from_config(cls, config: Optional[EnsConfig] = None, client: Optional[ClientFactory] = None) -> "ENS":
        cfg = config or EnsConfig.from_env()
        rpc = AsyncRpcClient(cfg.rpc_url, timeout=cfg.request_timeout, headers=cfg.http_headers())
        return cls(rpc, cfg.registry_address, client)

    def __repr__(self) -> str:
        return f"ENS(registry={self._registry_address or 'auto'}, client={self.client!r})"

    async def __aenter__(self) -> "ENS":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()

    # ------------------------------------------------------------------ Registry

    def registry(self) -> "asyncio.Future[Contract]":
        """
        Future for the registry contract, computed once per ENS instance.
        Must be called from a running event loop.

        The future is shared: await it through `asyncio.shield` so one
        cancelled caller leaves it running for the others.
        """
        if self._registry_future is None:
            self._registry_future = asyncio.ensure_future(self._load_registry())
        return self._registry_future

    async def _load_registry(self) -> Contract:
        if self._registry_address is not None:
            return self._registry_contract.with_address(self._registry_address)
        network_id = await self.client.network_id()
        try:
            address = REGISTRY_ADDRESSES[network_id]
        except KeyError:
            raise UnknownNetworkError(network_id) from None
        log.debug("network %s: using ENS registry %s", network_id, address)
        return self._registry_contract.with_address(address)

    async def transaction_options(self, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Copy of *options* with `from` defaulting to the node's first account."""
        opts = dict(options or {})
        if "from" not in opts:
            accounts = await self.client.accounts()
            if not accounts:
                raise ConfigurationError("node reports no accounts; pass options={'from': ...}")
            opts["from"] = accounts[0]
        return opts

    async def _send(self, fn: str, args: Sequence[Any], options: Optional[Mapping[str, Any]]) -> str:
        registry = await asyncio.shield(self.registry())
        tx_options = await self.transaction_options(options)
        log.debug("registry %s from %s", fn, tx_options["from"])
        return await registry.transact(fn, args, tx_options)

    # ------------------------------------------------------------------ Resolvers

    def resolver(self, name: str, abi: Optional[Sequence[Mapping[str, Any]]] = None) -> Resolver:
        """
        Resolver object for *name*. With no `abi`, the default interface
        (`has`, `addr`, `setAddr`, `name`, `setName`, `ABI`, `setABI`) is used.
        """
        node = namehash(name)
        return Resolver(self, node, self.client.contract(list(abi or RESOLVER_INTERFACE)))

    def reverse(self, address: str, abi: Optional[Sequence[Mapping[str, Any]]] = None) -> Resolver:
        """Resolver object for the reverse record of *address*."""
        return self.resolver(reverse_name(address), abi)

    # ------------------------------------------------------------------ Registry records

    async def owner(self, name: str) -> str:
        """Owner address of *name*."""
        registry = await asyncio.shield(self.registry())
        return await registry.call("owner", [namehash(name)])

    async def resolver_address(self, name: str) -> str:
        """Resolver address recorded for *name*; the zero address when unset."""
        registry = await asyncio.shield(self.registry())
        return await registry.call("resolver", [namehash(name)])

    async def set_owner(self, name: str, address: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Transfer *name* to *address*. The sending account must own the name.
        Returns the transaction hash.
        """
        return await self._send("setOwner", [namehash(name), address], options)

    async def set_resolver(self, name: str, address: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """Point *name* at the resolver contract *address*. Returns the transaction hash."""
        return await self._send("setResolver", [namehash(name), address], options)

    async def set_subnode_owner(self, name: str, address: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Assign *name* to *address* from its parent: for 'baz.bar.eth' the
        sender must own 'bar.eth'. Returns the transaction hash.
        """
        parent, label = parent_namehash(name)
        return await self._send("setSubnodeOwner", [parent, label, address], options)


__all__ = ["ENS", "REGISTRY_ADDRESSES", "REVERSE_SUFFIX", "reverse_name"]
