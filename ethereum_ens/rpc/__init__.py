"""
ethereum_ens.rpc
----------------

JSON-RPC transport.

    from ethereum_ens.rpc import AsyncRpcClient
    rpc = AsyncRpcClient(url="http://localhost:8545")
"""

from __future__ import annotations

from .http import AsyncRpcClient

__all__ = ["AsyncRpcClient"]
