"""
ethereum_ens.client
===================

The contract-call client the ENS layer talks to, and the factory that picks
an implementation for a given provider.

- `EthClient`         : the protocol the ENS layer relies on
- `JsonRpcEthClient`  : implementation over any async JSON-RPC `request()`
- `create_client`     : explicit adapter factory (no process-wide state)

Example
-------
    client = create_client("http://127.0.0.1:8545")
    accounts = await client.accounts()
    registry = client.contract(REGISTRY_INTERFACE, "0x0000...2e1e")
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import (Any, Callable, Dict, List, Optional, Protocol, Union,
                    runtime_checkable)

from .contracts.client import Contract
from .errors import TxError
from .rpc.http import AsyncRpcClient
from .types.abi import Abi
from .utils.bytes import from_quantity

log = logging.getLogger(__name__)


class _Rpc(Protocol):
    async def request(self, method: str, params: Any = None) -> Any: ...


@runtime_checkable
class EthClient(Protocol):
    """Minimal chain client used by ENS and Resolver."""

    async def network_id(self) -> int: ...

    async def accounts(self) -> List[str]: ...

    def contract(self, abi: Abi, address: Optional[str] = None) -> Contract: ...


class JsonRpcEthClient:
    """EthClient over an async JSON-RPC transport."""

    def __init__(self, rpc: _Rpc):
        self.rpc = rpc

    def __repr__(self) -> str:
        return f"JsonRpcEthClient(rpc={self.rpc!r})"

    async def network_id(self) -> int:
        return from_quantity(await self.rpc.request("net_version", []))

    async def accounts(self) -> List[str]:
        return list(await self.rpc.request("eth_accounts", []) or [])

    def contract(self, abi: Abi, address: Optional[str] = None) -> Contract:
        return Contract(self.rpc, abi, address)

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Receipt dict, or None while the transaction is pending."""
        res = await self.rpc.request("eth_getTransactionReceipt", [tx_hash])
        if res in (None, False, ""):
            return None
        if not isinstance(res, dict):
            raise TxError(f"unexpected receipt payload: {type(res)!r}", tx_hash=tx_hash)
        return res

    async def wait_for_receipt(
        self,
        tx_hash: str,
        *,
        timeout_s: float = 60.0,
        poll_interval_s: float = 0.5,
        max_interval_s: float = 2.5,
        backoff: float = 1.25,
    ) -> Dict[str, Any]:
        """
        Poll for a receipt until it arrives or timeout is reached.

        Raises:
            TimeoutError on timeout
            TxError when the mined transaction reports status 0
        """
        deadline = time.monotonic() + float(timeout_s)
        interval = float(poll_interval_s)

        while True:
            rec = await self.get_transaction_receipt(tx_hash)
            if rec is not None:
                if "status" in rec and from_quantity(rec["status"]) == 0:
                    raise TxError("transaction reverted", tx_hash=tx_hash, receipt=rec)
                return rec

            if time.monotonic() >= deadline:
                raise TimeoutError(f"timeout waiting for receipt (tx={tx_hash}, timeout_s={timeout_s})")

            await asyncio.sleep(interval)
            interval = min(interval * float(backoff), float(max_interval_s))

    async def aclose(self) -> None:
        close = getattr(self.rpc, "aclose", None)
        if close is not None:
            await close()


ClientFactory = Callable[[Any], EthClient]


def create_client(
    provider: Any,
    client: Union[EthClient, ClientFactory, None] = None,
    *,
    timeout: float = 30.0,
) -> EthClient:
    """
    Pick the EthClient implementation for *provider*.

    - `client` given: an EthClient instance is used as-is; any other callable
      is treated as a factory and called with the provider.
    - provider already an EthClient: used as-is.
    - provider with an async `request()` (AsyncRpcClient or compatible):
      wrapped in JsonRpcEthClient.
    - provider a URL string: a new AsyncRpcClient is built for it.
    """
    if client is not None:
        if not isinstance(client, type) and isinstance(client, EthClient):
            return client
        if callable(client):
            return client(provider)
        raise TypeError(f"client must be an EthClient or a factory, got {type(client).__name__}")
    if not isinstance(provider, type) and isinstance(provider, EthClient):
        return provider
    if callable(getattr(provider, "request", None)):
        return JsonRpcEthClient(provider)
    if isinstance(provider, str):
        log.debug("building JSON-RPC client for %s", provider)
        return JsonRpcEthClient(AsyncRpcClient(provider, timeout=timeout))
    raise TypeError(f"unsupported provider type: {type(provider).__name__}")


__all__ = ["EthClient", "JsonRpcEthClient", "create_client", "ClientFactory"]
