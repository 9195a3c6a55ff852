"""
ethereum_ens.contracts
======================

Contract-call helpers.

Submodules
----------
- client     : Generic ABI-driven contract client (encode calls, decode returns).
- interfaces : ABI literals for the ENS registry and default resolver.
"""

from __future__ import annotations

from .client import Contract, tx_params
from .interfaces import REGISTRY_INTERFACE, RESOLVER_INTERFACE

__all__ = ["Contract", "tx_params", "REGISTRY_INTERFACE", "RESOLVER_INTERFACE"]
