"""
Client configuration: RPC endpoint, registry address, HTTP timeout and User-Agent.

Values come from keyword arguments, from `ENS_*` environment variables
(`EnsConfig.from_env`) or from CLI flags layered on top (`with_overrides`).
They are validated on construction.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .version import __version__

_DEFAULT_RPC = "http://127.0.0.1:8545"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name) or default


def _check_rpc_url(url: str) -> str:
    scheme, sep, rest = url.partition("://")
    if not sep or not rest or scheme.lower() not in ("http", "https"):
        raise ValueError(f"rpc_url must be an http(s) URL, got: {url!r}")
    return url


def _check_address(addr: Optional[str]) -> Optional[str]:
    if addr is None:
        return None
    if not _ADDRESS_RE.match(addr):
        raise ValueError(f"registry address must be 0x-prefixed 20-byte hex, got: {addr!r}")
    return addr


@dataclass
class EnsConfig:
    rpc_url: str = field(default_factory=lambda: _DEFAULT_RPC)
    # None means "derive from the connected network id"
    registry_address: Optional[str] = None
    request_timeout: float = 10.0
    user_agent: str = field(default_factory=lambda: f"ethereum-ens-py/{__version__}")

    def __post_init__(self) -> None:
        _check_rpc_url(self.rpc_url)
        _check_address(self.registry_address)

    @classmethod
    def from_env(cls, prefix: str = "ENS_") -> "EnsConfig":
        """
        Create config from environment variables:

        ENS_RPC_URL       (http/https)
        ENS_REGISTRY      (0x-address) optional
        ENS_TIMEOUT       (float seconds)
        ENS_USER_AGENT    (str)
        """
        return cls(
            rpc_url=_env(f"{prefix}RPC_URL", _DEFAULT_RPC) or _DEFAULT_RPC,
            registry_address=_env(f"{prefix}REGISTRY"),
            request_timeout=float(_env(f"{prefix}TIMEOUT", "10.0") or 10.0),
            user_agent=_env(f"{prefix}USER_AGENT", f"ethereum-ens-py/{__version__}")
            or f"ethereum-ens-py/{__version__}",
        )

    @classmethod
    def with_overrides(cls, base: Optional["EnsConfig"] = None, **overrides: Any) -> "EnsConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "registry_address": self.registry_address,
            "request_timeout": float(self.request_timeout),
            "user_agent": self.user_agent,
        }


__all__ = ["EnsConfig"]
