"""
HTTP JSON-RPC client (async).

- Uses httpx.AsyncClient; a custom transport can be injected for tests.
- No retries: transport failures surface as RpcError on the first attempt.

Example:
    from ethereum_ens.rpc.http import AsyncRpcClient

    async with AsyncRpcClient("http://localhost:8545") as rpc:
        block = await rpc.request("eth_blockNumber")
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from itertools import count
from typing import (Any, Dict, Iterator, Mapping, Optional, Sequence, Union)

import httpx

from ..errors import JsonRpcCode, RpcError, from_jsonrpc_error
from ..version import __version__ as CLIENT_VERSION

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class AsyncRpcClient:
    """Asynchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.AsyncBaseTransport] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=_now_ms()))
    _client: Optional[httpx.AsyncClient] = field(init=False, default=None)

    def _http(self) -> httpx.AsyncClient:
        # Created lazily so the client binds to the running event loop.
        if self._client is None:
            merged_headers: Dict[str, str] = {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"ethereum-ens-py/{CLIENT_VERSION}",
            }
            if self.headers:
                merged_headers.update(dict(self.headers))
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=merged_headers,
                transport=self.transport,
            )
        return self._client

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "AsyncRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # --- public API ------------------------------------------------------

    async def request(self, method: str, params: Params = None, *, id: Optional[Union[int, str]] = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = self._make_payload(method, params, id)
        log.debug("rpc -> %s id=%s", method, payload["id"])
        return await self._send(payload)

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params, id: Optional[Union[int, str]] = None) -> Dict[str, Any]:
        # named params stay an object; anything else is sent positionally
        if isinstance(params, Mapping):
            wire: Any = dict(params)
        elif params is None:
            wire = []
        elif isinstance(params, (str, bytes, bytearray)) or not isinstance(params, Sequence):
            wire = [params]
        else:
            wire = list(params)
        return {
            "jsonrpc": "2.0",
            "id": next(self._id_counter) if id is None else id,
            "method": method,
            "params": wire,
        }

    async def _send(self, payload: Dict[str, Any]) -> JSON:
        method = payload["method"]
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        try:
            r = await self._http().post(self.url, content=body)
        except httpx.HTTPError as e:
            raise RpcError(
                code=JsonRpcCode.TRANSPORT_ERROR,
                message="Network error",
                method=method,
                data=str(e),
                request_id=payload["id"],
            ) from e
        # Avoid raise_for_status() to keep the error body visible below
        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Non-JSON response from RPC",
                method=method,
                data=f"HTTP {r.status_code}: {r.text[:256]}",
                http_status=r.status_code,
            ) from e

        if not isinstance(resp, dict):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Invalid JSON-RPC response type",
                method=method,
                data=type(resp).__name__,
                http_status=r.status_code,
            )
        if resp.get("error") is not None:
            raise from_jsonrpc_error(
                resp["error"], method=method, request_id=resp.get("id"), http_status=r.status_code
            )
        if "result" not in resp:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Malformed JSON-RPC response",
                method=method,
                data=resp,
                http_status=r.status_code,
            )
        return resp["result"]


__all__ = ["AsyncRpcClient", "JSON", "Params"]
