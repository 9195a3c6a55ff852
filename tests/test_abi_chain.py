import pytest

from ethereum_ens import NameNotFound, NameNotFoundError
from ethereum_ens.codecs import encode_abi
from ethereum_ens.contracts.client import Contract
from ethereum_ens.ens import reverse_name
from ethereum_ens.errors import AbiDecodeError, RpcError
from ethereum_ens.utils.hash import namehash

from .conftest import ACCOUNT0, DEPLOYER, DEPLOYER_ABI, FOO_ABI, OTHER, RESOLVER


@pytest.fixture
def orphan(world):
    """qux.eth -> OTHER, whose reverse record exists but carries no ABI."""
    for name in ("qux.eth", reverse_name(OTHER)):
        world.registry.setOwner(namehash(name), ACCOUNT0)
        world.registry.setResolver(namehash(name), RESOLVER)
    world.resolver.setAddr(namehash("qux.eth"), OTHER)
    return world


@pytest.mark.asyncio
async def test_abi_recorded_on_the_name(ens, node):
    assert await ens.resolver("foo.eth").abi() == FOO_ABI
    assert node.count("ABI") == 1
    assert node.count("addr") == 0


@pytest.mark.asyncio
async def test_abi_falls_back_to_reverse_record(ens, node):
    assert await ens.resolver("baz.eth").abi() == DEPLOYER_ABI
    assert node.count("ABI") == 2
    assert node.count("addr") == 1


@pytest.mark.asyncio
async def test_fallback_can_be_disabled(ens, node):
    assert await ens.resolver("baz.eth").abi(False) is None
    assert node.count("ABI") == 1


@pytest.mark.asyncio
async def test_fallback_is_a_single_level(ens, node, orphan):
    assert await ens.resolver("qux.eth").abi() is None
    assert node.count("ABI") == 2
    assert node.count("addr") == 1


@pytest.mark.asyncio
async def test_fallback_to_unregistered_reverse_record(ens):
    # bar.eth has no addr record; the zero address has no reverse resolver
    with pytest.raises(NameNotFoundError) as ei:
        await ens.resolver("bar.eth").abi()
    assert ei.value is NameNotFound


@pytest.mark.asyncio
async def test_unsupported_content_type_is_fatal(ens, world):
    world.resolver.setABI(namehash("bar.eth"), 8, b"https://example.com/abi.json")
    world.resolver.ignore_mask = True
    with pytest.raises(AbiDecodeError) as ei:
        await ens.resolver("bar.eth").abi()
    assert ei.value.content_type == 8


@pytest.mark.asyncio
async def test_malformed_record_is_fatal(ens, world):
    world.resolver.setABI(namehash("bar.eth"), 2, b"not deflated")
    with pytest.raises(AbiDecodeError):
        await ens.resolver("bar.eth").abi()


@pytest.mark.asyncio
async def test_reverse_addr(ens):
    reverse = await ens.resolver("foo.eth").reverse_addr()
    assert reverse.node == namehash(reverse_name(DEPLOYER))
    assert await reverse.name() == "deployer.eth"


@pytest.mark.asyncio
async def test_contract_from_name(ens):
    contract = await ens.resolver("foo.eth").contract()
    assert isinstance(contract, Contract)
    assert contract.address == DEPLOYER
    assert contract.abi == FOO_ABI
    assert "test2" in contract.functions


@pytest.mark.asyncio
async def test_contract_from_reverse_abi(ens):
    contract = await ens.resolver("baz.eth").contract()
    assert contract.address == DEPLOYER
    assert set(contract.functions) >= {"test", "ens"}


@pytest.mark.asyncio
async def test_contract_without_abi(ens, orphan):
    assert await ens.resolver("qux.eth").contract() is None


@pytest.mark.asyncio
async def test_set_abi_then_read_it_back(ens, node, world):
    r = ens.resolver("bar.eth")
    await r.set_abi(FOO_ABI, 4)
    assert world.resolver.abis[namehash("bar.eth")][4] == encode_abi(FOO_ABI, 4)
    assert node.transactions[-1]["from"] == ACCOUNT0
    assert await ens.resolver("bar.eth").abi() == FOO_ABI


@pytest.mark.asyncio
async def test_contract_for_unknown_name(ens):
    with pytest.raises(NameNotFoundError) as ei:
        await ens.resolver("quux.eth").contract()
    assert ei.value is NameNotFound


@pytest.mark.asyncio
async def test_contract_propagates_node_errors(ens, world):
    # the registry points at an address with no resolver code behind it
    world.registry.setResolver(namehash("broken.eth"), OTHER)
    with pytest.raises(RpcError) as ei:
        await ens.resolver("broken.eth").contract()
    assert ei.value.message == "execution reverted"
