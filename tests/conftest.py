"""
In-memory JSON-RPC node for ENS tests.

FakeNode answers `net_version`, `eth_accounts`, `eth_call`,
`eth_sendTransaction` and `eth_getTransactionReceipt`. Calls are decoded with
eth_abi against the deployed contract's ABI and executed on small Python
models of the registry and the public resolver, so the whole client stack
(Resolver -> Contract -> JSON-RPC payloads) is exercised.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pytest
from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import to_checksum_address

from ethereum_ens import ENS, RpcError
from ethereum_ens.codecs import encode_abi
from ethereum_ens.contracts.interfaces import REGISTRY_INTERFACE, RESOLVER_INTERFACE
from ethereum_ens.ens import reverse_name
from ethereum_ens.resolver import ZERO_ADDRESS
from ethereum_ens.types.abi import MethodDescriptor, function_table
from ethereum_ens.utils.bytes import from_hex, to_hex
from ethereum_ens.utils.hash import keccak256, namehash

ZERO = ZERO_ADDRESS

REGISTRY = to_checksum_address("0x" + "e1" * 20)
RESOLVER = to_checksum_address("0x" + "d1" * 20)
DEPLOYER = to_checksum_address("0xcafe" + "00" * 17 + "01")
OTHER = to_checksum_address("0x" + "0b" * 20)
ACCOUNT0 = to_checksum_address("0x" + "a0" * 20)
ACCOUNT1 = to_checksum_address("0x" + "a1" * 20)

FOO_ABI = [
    {"type": "function", "name": "test2", "inputs": [], "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view"},
    {"type": "event", "name": "Ping", "inputs": [], "anonymous": False},
]
DEPLOYER_ABI = [
    {"type": "function", "name": "test", "inputs": [{"name": "x", "type": "uint256"}], "outputs": [], "stateMutability": "nonpayable"},
    {"type": "function", "name": "ens", "inputs": [], "outputs": [{"name": "", "type": "address"}], "stateMutability": "view"},
]


class FakeRegistry:
    def __init__(self) -> None:
        self.records: Dict[bytes, Dict[str, str]] = {}

    def resolver(self, node: bytes) -> str:
        return self.records.get(node, {}).get("resolver", ZERO)

    def owner(self, node: bytes) -> str:
        return self.records.get(node, {}).get("owner", ZERO)

    def setResolver(self, node: bytes, resolver: str) -> None:
        self.records.setdefault(node, {})["resolver"] = resolver

    def setOwner(self, node: bytes, owner: str) -> None:
        self.records.setdefault(node, {})["owner"] = owner

    def setSubnodeOwner(self, node: bytes, label: bytes, owner: str) -> None:
        self.setOwner(keccak256(node + label), owner)


class FakeResolver:
    def __init__(self) -> None:
        self.addrs: Dict[bytes, str] = {}
        self.names: Dict[bytes, str] = {}
        self.abis: Dict[bytes, Dict[int, bytes]] = {}
        # serve stored ABIs whatever content types the caller supports
        self.ignore_mask = False

    def has(self, node: bytes, kind: bytes) -> bool:
        kind = kind.rstrip(b"\x00")
        if kind == b"addr":
            return node in self.addrs
        if kind == b"name":
            return node in self.names
        return False

    def addr(self, node: bytes) -> str:
        return self.addrs.get(node, ZERO)

    def setAddr(self, node: bytes, addr: str) -> None:
        self.addrs[node] = addr

    def name(self, node: bytes) -> str:
        return self.names.get(node, "")

    def setName(self, node: bytes, name: str) -> None:
        self.names[node] = name

    def ABI(self, node: bytes, content_types: int) -> Tuple[int, bytes]:
        for ct, data in sorted(self.abis.get(node, {}).items()):
            if self.ignore_mask or ct & content_types:
                return ct, data
        return 0, b""

    def setABI(self, node: bytes, content_type: int, data: bytes) -> None:
        self.abis.setdefault(node, {})[content_type] = data


class FakeNode:
    """Async JSON-RPC stub with the `request(method, params)` shape of AsyncRpcClient."""

    def __init__(self, net_id: int = 1, accounts: Optional[List[str]] = None) -> None:
        self.net_id = net_id
        self.node_accounts = [ACCOUNT0, ACCOUNT1] if accounts is None else accounts
        self.contracts: Dict[str, Tuple[Dict[bytes, MethodDescriptor], Any]] = {}
        self.requests: List[Tuple[str, Any]] = []
        self.executed: List[str] = []
        self.transactions: List[Dict[str, Any]] = []
        self.receipts: Dict[str, Dict[str, Any]] = {}

    def deploy(self, address: str, abi: List[Dict[str, Any]], impl: Any) -> None:
        by_selector = {d.selector: d for d in function_table(abi).values()}
        self.contracts[address.lower()] = (by_selector, impl)

    def methods(self) -> List[str]:
        return [m for m, _ in self.requests]

    def count(self, fn: str) -> int:
        return self.executed.count(fn)

    async def request(self, method: str, params: Any = None) -> Any:
        self.requests.append((method, params))
        if method == "net_version":
            return str(self.net_id)
        if method == "eth_accounts":
            return list(self.node_accounts)
        if method == "eth_call":
            return to_hex(self._execute(params[0]))
        if method == "eth_sendTransaction":
            tx = params[0]
            self._execute(tx)
            self.transactions.append(tx)
            tx_hash = to_hex(keccak256(str(len(self.transactions)).encode()))
            self.receipts[tx_hash] = {"transactionHash": tx_hash, "status": "0x1", "from": tx.get("from")}
            return tx_hash
        if method == "eth_getTransactionReceipt":
            return self.receipts.get(params[0])
        raise RpcError(code=-32601, message="method not found", method=method)

    def _execute(self, tx: Dict[str, Any]) -> bytes:
        target = self.contracts.get(tx["to"].lower())
        if target is None:
            raise RpcError(code=-32000, message="execution reverted", method="eth_call")
        by_selector, impl = target
        data = from_hex(tx["data"])
        desc = by_selector[data[:4]]
        args = abi_decode(list(desc.input_types), data[4:])
        self.executed.append(desc.name)
        result = getattr(impl, desc.name)(*args)
        if not desc.output_types:
            return b""
        if len(desc.output_types) == 1:
            result = (result,)
        return abi_encode(list(desc.output_types), list(result))


@dataclass
class World:
    node: FakeNode
    registry: FakeRegistry
    resolver: FakeResolver


def build_world(node: FakeNode, registry_address: str = REGISTRY) -> World:
    """
    foo.eth   -> addr DEPLOYER, ABI (json) on the name itself
    bar.eth   -> resolver set, no addr record
    baz.eth   -> addr DEPLOYER, no ABI (falls back to DEPLOYER's reverse record)
    <DEPLOYER>.addr.reverse -> name 'deployer.eth', ABI (zlib json)
    quux.eth  -> not in the registry
    """
    registry = FakeRegistry()
    resolver = FakeResolver()
    node.deploy(registry_address, REGISTRY_INTERFACE, registry)
    node.deploy(RESOLVER, RESOLVER_INTERFACE, resolver)

    registry.setOwner(namehash("eth"), ACCOUNT0)
    for name in ("foo.eth", "bar.eth", "baz.eth", reverse_name(DEPLOYER)):
        registry.setOwner(namehash(name), ACCOUNT0)
        registry.setResolver(namehash(name), RESOLVER)

    resolver.setAddr(namehash("foo.eth"), DEPLOYER)
    resolver.setAddr(namehash("baz.eth"), DEPLOYER)
    resolver.setName(namehash(reverse_name(DEPLOYER)), "deployer.eth")
    resolver.setABI(namehash("foo.eth"), 1, encode_abi(FOO_ABI, 1))
    resolver.setABI(namehash(reverse_name(DEPLOYER)), 2, encode_abi(DEPLOYER_ABI, 2))
    return World(node=node, registry=registry, resolver=resolver)


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def world(node: FakeNode) -> World:
    return build_world(node)


@pytest.fixture
def ens(world: World) -> ENS:
    return ENS(world.node, REGISTRY)
