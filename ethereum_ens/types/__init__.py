"""
ethereum_ens.types
------------------

ABI shapes and the MethodDescriptor used by contract dispatch.
"""

from __future__ import annotations

from .abi import (Abi, AbiFunction, AbiParam, MethodDescriptor,
                  canonical_param_type, canonical_type,
                  function_table, is_valid_type, load_abi)

__all__ = [
    "Abi",
    "AbiFunction",
    "AbiParam",
    "MethodDescriptor",
    "load_abi",
    "function_table",
    "canonical_type",
    "canonical_param_type",
    "is_valid_type",
]
