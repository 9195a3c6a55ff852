"""
ethereum-ens: Python client for the Ethereum Name Service.
Convenience exports for the most common APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import EnsConfig  # noqa: F401
from .errors import (  # noqa: F401
    AbiDecodeError,
    AbiError,
    ConfigurationError,
    EnsError,
    NameNotFound,
    NameNotFoundError,
    RpcError,
    TxError,
    UnknownNetworkError,
)

# Transport & contracts
from .rpc.http import AsyncRpcClient  # noqa: F401
from .contracts.client import Contract  # noqa: F401
from .client import EthClient, JsonRpcEthClient, create_client  # noqa: F401

# ENS
from .ens import ENS, REGISTRY_ADDRESSES, reverse_name  # noqa: F401
from .resolver import Resolver  # noqa: F401
from .codecs import SUPPORTED_CONTENT_TYPES, decode_abi, encode_abi  # noqa: F401

# Name hashing
from .utils.hash import namehash, parent_namehash  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "EnsConfig",
    "EnsError", "NameNotFound", "NameNotFoundError",
    "RpcError", "TxError", "AbiError", "AbiDecodeError",
    "ConfigurationError", "UnknownNetworkError",
    # Transport & contracts
    "AsyncRpcClient", "Contract",
    "EthClient", "JsonRpcEthClient", "create_client",
    # ENS
    "ENS", "Resolver", "REGISTRY_ADDRESSES", "reverse_name",
    "SUPPORTED_CONTENT_TYPES", "decode_abi", "encode_abi",
    # Name hashing
    "namehash", "parent_namehash",
]
