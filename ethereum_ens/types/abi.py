"""
ABI datatypes & validation

This module defines:
- TypedDict shapes for JSON ABI entries (functions/events/parameters)
- A small validator/normalizer for ABI lists
- MethodDescriptor: the per-function record that drives call dispatch
- Helpers to compute canonical signatures and selectors

Validation is structural and type-string aware; the actual binary encoding is
left to `eth_abi` (see contracts/client.py).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import (Any, Dict, List, Literal, Mapping, Optional, Sequence,
                    Tuple, TypedDict)

from ..errors import AbiError
from ..utils.hash import keccak256

# --- Type-string parsing -----------------------------------------------------

_INT_RE = re.compile(r"^u?int(\d*)$")
_BYTES_RE = re.compile(r"^bytes(\d+)$")
_ARRAY_SUFFIX_RE = re.compile(r"(\[\]|\[\d+\])$")
_SCALARS = {"address", "bool", "string", "bytes"}


def _check_scalar(t: str) -> str:
    m = _INT_RE.match(t)
    if m:
        bits = m.group(1)
        if not bits:
            # 'uint' / 'int' are aliases of the 256-bit forms
            return t + "256"
        n = int(bits)
        if n <= 0 or n > 256 or n % 8:
            raise AbiError(f"Invalid integer width: {t}")
        return t
    m = _BYTES_RE.match(t)
    if m:
        n = int(m.group(1))
        if not 1 <= n <= 32:
            raise AbiError(f"Invalid fixed bytes width: {t}")
        return t
    if t in _SCALARS:
        return t
    raise AbiError(f"Unsupported base type: {t}")


def _peel_array_suffixes(t: str) -> Tuple[str, str]:
    """Return (base, suffixes) e.g. 'uint8[2][]' -> ('uint8', '[2][]')."""
    suffix = ""
    while True:
        m = _ARRAY_SUFFIX_RE.search(t)
        if not m:
            return t, suffix
        s = m.group(1)
        if s != "[]" and int(s[1:-1]) <= 0:
            raise AbiError("Fixed array dimension must be positive")
        suffix = s + suffix
        t = t[: -len(s)]


def canonical_param_type(p: Mapping[str, Any]) -> str:
    """
    Canonical type string of a JSON ABI parameter; tuples are expanded from
    their `components`, e.g. {'type': 'tuple[]', components: [...]} -> '(uint256,address)[]'.
    """
    typ = p.get("type")
    if not isinstance(typ, str) or not typ:
        raise AbiError("param.type must be a non-empty string", parameter=p.get("name"))
    base, suffix = _peel_array_suffixes(re.sub(r"\s+", "", typ))
    if base == "tuple":
        comps = p.get("components")
        if not isinstance(comps, list):
            raise AbiError("tuple parameter without components", parameter=p.get("name"))
        return "(" + ",".join(canonical_param_type(c) for c in comps) + ")" + suffix
    return _check_scalar(base) + suffix


def canonical_type(type_str: str) -> str:
    """Normalize a non-tuple type string: strip spaces, expand int aliases."""
    return canonical_param_type({"type": type_str})


def is_valid_type(type_str: str) -> bool:
    try:
        canonical_type(type_str)
        return True
    except AbiError:
        return False


# --- ABI shapes --------------------------------------------------------------


class AbiParam(TypedDict, total=False):
    name: str
    type: str
    components: List["AbiParam"]
    indexed: bool  # only meaningful for event inputs


class AbiFunction(TypedDict, total=False):
    type: Literal["function"]
    name: str
    inputs: List[AbiParam]
    outputs: List[AbiParam]
    constant: bool
    stateMutability: Literal["view", "pure", "nonpayable", "payable"]


Abi = List[Dict[str, Any]]

_ENTRY_TYPES = ("function", "event", "constructor", "fallback", "receive", "error")


# --- Validation & normalization ---------------------------------------------


def _require(cond: bool, msg: str, **where: Any) -> None:
    if not cond:
        raise AbiError(msg, **where)


def _validate_params(params: Any, ctx: str, fn: Optional[str]) -> None:
    _require(isinstance(params, list), f"{ctx} must be a list", function=fn)
    for p in params:
        _require(isinstance(p, dict), f"{ctx}: parameter must be an object", function=fn)
        name = p.get("name", "")
        _require(isinstance(name, str), f"{ctx}: param.name must be string", function=fn)
        canonical_param_type(p)


def _validate_fn(e: Dict[str, Any]) -> None:
    name = e.get("name")
    _require(isinstance(name, str) and bool(name), "function.name must be non-empty string")
    _validate_params(e.get("inputs", []), "function.inputs", name)
    _validate_params(e.get("outputs", []), "function.outputs", name)
    mut = e.get("stateMutability")
    _require(
        mut in (None, "view", "pure", "nonpayable", "payable"),
        "function.stateMutability invalid",
        function=name,
    )


def load_abi(abi: Any) -> Abi:
    """
    Validate an ABI given as a list of entries or its JSON text.

    Entries without a "type" default to "function" (legacy solc output).
    Returns a new list; the input is not mutated.
    """
    if isinstance(abi, (str, bytes, bytearray)):
        try:
            abi = json.loads(abi)
        except ValueError as e:
            raise AbiError(f"ABI is not valid JSON: {e}") from e
    _require(isinstance(abi, list), "ABI must be a list of entries")
    out: Abi = []
    for i, raw in enumerate(abi):
        _require(isinstance(raw, dict), f"ABI entry at index {i} must be an object")
        entry = dict(raw)
        entry.setdefault("type", "function")
        _require(entry["type"] in _ENTRY_TYPES, f"Unsupported ABI entry type: {entry['type']}")
        if entry["type"] == "function":
            _validate_fn(entry)
        out.append(entry)
    return out


# --- Method descriptors ------------------------------------------------------


def _is_constant(entry: Mapping[str, Any]) -> bool:
    if "constant" in entry:
        return bool(entry["constant"])
    return entry.get("stateMutability") in ("view", "pure")


@dataclass(frozen=True)
class MethodDescriptor:
    """One callable contract function: its types and whether it is read-only."""

    name: str
    input_types: Tuple[str, ...]
    output_types: Tuple[str, ...]
    constant: bool
    input_names: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        """e.g. setAddr(bytes32,address)"""
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        """First 4 bytes of keccak256(signature)."""
        return keccak256(self.signature.encode("utf-8"))[:4]

    @property
    def arity(self) -> int:
        return len(self.input_types)

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "MethodDescriptor":
        inputs = entry.get("inputs", [])
        return cls(
            name=entry["name"],
            input_types=tuple(canonical_param_type(p) for p in inputs),
            output_types=tuple(canonical_param_type(p) for p in entry.get("outputs", [])),
            constant=_is_constant(entry),
            input_names=tuple(p.get("name", "") for p in inputs),
        )


def function_table(abi: Sequence[Mapping[str, Any]]) -> Dict[str, MethodDescriptor]:
    """
    Map every function of *abi* by full signature and by bare name.

    For overloaded names the bare name refers to the first declared overload;
    the other overloads stay reachable through their signatures.
    """
    table: Dict[str, MethodDescriptor] = {}
    for entry in abi:
        if entry.get("type", "function") != "function":
            continue
        desc = MethodDescriptor.from_entry(entry)
        _require(desc.signature not in table, f"Duplicate ABI function: {desc.signature}")
        table[desc.signature] = desc
        table.setdefault(desc.name, desc)
    return table


__all__ = [
    "AbiParam",
    "AbiFunction",
    "Abi",
    "MethodDescriptor",
    "load_abi",
    "function_table",
    "canonical_type",
    "canonical_param_type",
    "is_valid_type",
]
