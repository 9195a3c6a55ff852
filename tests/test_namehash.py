import pytest

from ethereum_ens.utils.hash import (EMPTY_NODE, keccak256, label_hash,
                                     namehash, normalize_name, parent_namehash)


def test_keccak_of_empty_input():
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


def test_namehash_known_vectors():
    assert namehash("") == EMPTY_NODE
    assert namehash("eth").hex() == "93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
    assert namehash("foo.eth").hex() == "de9b09fd7c5f901e23a3f19fecc54828e9c848539801e86591bd9801b019f84f"


def test_namehash_is_recursive():
    assert namehash("baz.bar.eth") == keccak256(namehash("bar.eth") + keccak256(b"baz"))


def test_namehash_normalizes_case():
    assert normalize_name("BAZ.Bar.ETH") == "baz.bar.eth"
    assert namehash("BAZ.bar.eth") == namehash("baz.bar.eth")


def test_parent_namehash_splits_first_label():
    parent, label = parent_namehash("baz.bar.eth")
    assert parent == namehash("bar.eth")
    assert label == keccak256(b"baz")
    assert label == label_hash("BAZ")


def test_parent_of_top_level_name_is_root():
    parent, label = parent_namehash("eth")
    assert parent == EMPTY_NODE
    assert keccak256(parent + label) == namehash("eth")


def test_name_must_be_a_string():
    with pytest.raises(TypeError):
        namehash(b"foo.eth")  # type: ignore[arg-type]
