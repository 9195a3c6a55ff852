"""
JSON ABI definitions for the ENS registry and the default public resolver.
"""

from __future__ import annotations

from typing import List, Tuple

from ..types.abi import AbiFunction, AbiParam


def _fn(name: str, inputs: List[Tuple[str, str]], outputs: List[str], constant: bool) -> AbiFunction:
    params: List[AbiParam] = [{"name": n, "type": t} for n, t in inputs]
    return {
        "type": "function",
        "name": name,
        "constant": constant,
        "stateMutability": "view" if constant else "nonpayable",
        "inputs": params,
        "outputs": [{"name": "", "type": t} for t in outputs],
    }


REGISTRY_INTERFACE: List[AbiFunction] = [
    _fn("resolver", [("node", "bytes32")], ["address"], True),
    _fn("owner", [("node", "bytes32")], ["address"], True),
    _fn("setResolver", [("node", "bytes32"), ("resolver", "address")], [], False),
    _fn("setSubnodeOwner", [("node", "bytes32"), ("label", "bytes32"), ("owner", "address")], [], False),
    _fn("setOwner", [("node", "bytes32"), ("owner", "address")], [], False),
]

# Every resolver method takes the node as its first argument; it is supplied
# by the Resolver proxy.
RESOLVER_INTERFACE: List[AbiFunction] = [
    _fn("has", [("node", "bytes32"), ("kind", "bytes32")], ["bool"], True),
    _fn("addr", [("node", "bytes32")], ["address"], True),
    _fn("setAddr", [("node", "bytes32"), ("addr", "address")], [], False),
    _fn("name", [("node", "bytes32")], ["string"], True),
    _fn("setName", [("node", "bytes32"), ("name", "string")], [], False),
    _fn("ABI", [("node", "bytes32"), ("contentTypes", "uint256")], ["uint256", "bytes"], True),
    _fn("setABI", [("node", "bytes32"), ("contentType", "uint256"), ("data", "bytes")], [], False),
]

__all__ = ["REGISTRY_INTERFACE", "RESOLVER_INTERFACE"]
