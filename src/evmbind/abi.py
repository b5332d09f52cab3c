"""Reads ABI documents and derives canonical types, signatures and selectors.

ABI type strings are parsed with the eth_abi type grammar. Tuple types are
first expanded from their JSON `components` into the `(t1,t2)` spelling so
that one canonical string serves for display, for the selector hash and as
the Type Mapper's fallback form.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from Crypto.Hash import keccak
from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import ABIType, BasicType, TupleType, normalize, parse

from evmbind.errors import InvalidAbiError
from evmbind.types import Parameter, TypeDescriptor, TypeKind

# Number of leading keccak256 bytes that make up a function selector.
SELECTOR_LENGTH = 4

_BASIC_KINDS = {
    "address": TypeKind.ADDRESS,
    "bool": TypeKind.BOOL,
    "string": TypeKind.STRING,
    "int": TypeKind.INT,
    "uint": TypeKind.UINT,
    "fixed": TypeKind.FIXED_POINT,
    "ufixed": TypeKind.FIXED_POINT,
}

# Integer spellings whose width suffix the grammar rejects, e.g. "uint25x".
_LOOSE_INT_RE = re.compile(r"^(u?)int\w*$")


# --- Document loading ---

def load_abi(text: Union[str, bytes]) -> List[Dict[str, Any]]:
    """Parses and structurally checks an ABI JSON document.

    Args:
        text: The raw ABI document.

    Returns:
        The list of ABI entries, in declaration order.

    Raises:
        InvalidAbiError: If the text is not JSON, or is not a list of entry
            objects with well-typed `name`, `type`, `inputs` and `outputs`.
    """
    try:
        document = json.loads(text)
    except ValueError as e:
        raise InvalidAbiError(str(e)) from e

    if not isinstance(document, list):
        raise InvalidAbiError("ABI document must be a JSON array of entries")
    for position, entry in enumerate(document):
        _check_entry(entry, position)
    return document


def _check_entry(entry: Any, position: int) -> None:
    if not isinstance(entry, dict):
        raise InvalidAbiError(f"ABI entry {position} is not an object")
    for key in ("name", "type", "stateMutability"):
        if key in entry and not isinstance(entry[key], str):
            raise InvalidAbiError(f"ABI entry {position}: '{key}' must be a string")
    for key in ("inputs", "outputs"):
        if key in entry:
            _check_params(entry[key], f"ABI entry {position} {key}")


def _check_params(params: Any, where: str) -> None:
    if not isinstance(params, list):
        raise InvalidAbiError(f"{where} must be a list")
    for i, param in enumerate(params):
        if not isinstance(param, dict):
            raise InvalidAbiError(f"{where}[{i}] is not an object")
        if not isinstance(param.get("type"), str):
            raise InvalidAbiError(f"{where}[{i}] has no type")
        if not isinstance(param.get("name", ""), str):
            raise InvalidAbiError(f"{where}[{i}]: 'name' must be a string")
        if "components" in param:
            _check_params(param["components"], f"{where}[{i}] components")


def functions(document: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Returns the callable function entries of an ABI in declaration order.

    Entries without a `type` are functions, as in the Solidity ABI spec.
    """
    return [entry for entry in document if entry.get("type", "function") == "function"]


def constructor(document: Sequence[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """Returns the constructor entry of an ABI, if it declares one."""
    for entry in document:
        if entry.get("type") == "constructor":
            return entry
    return None


# --- Types ---

def canonical_type(type_str: str, components: Optional[Sequence[Mapping[str, Any]]] = None) -> str:
    """Returns the canonical spelling of a JSON ABI type.

    Tuples are expanded from their components and aliases such as `uint`
    are normalized, e.g. ("tuple[]", [uint, address]) -> "(uint256,address)[]".
    """
    if type_str.startswith("tuple"):
        inner = ",".join(canonical_type(c["type"], c.get("components")) for c in components or ())
        type_str = f"({inner}){type_str[len('tuple'):]}"
    return normalize(type_str)


def parse_type(type_str: str, components: Optional[Sequence[Mapping[str, Any]]] = None) -> TypeDescriptor:
    """Parses a JSON ABI type into a `TypeDescriptor`.

    Never raises for an odd type string: an integer with an unusable width
    becomes an INT/UINT descriptor without a size, anything else the grammar
    rejects or finds out of range (e.g. "bytes33") becomes UNKNOWN with the
    string kept as its canonical form.
    """
    canonical = canonical_type(type_str, components)
    try:
        node = parse(canonical)
        node.validate()
    except (ParseError, ABITypeError):
        match = _LOOSE_INT_RE.match(canonical)
        if match:
            kind = TypeKind.UINT if match.group(1) else TypeKind.INT
            return TypeDescriptor(kind=kind, canonical=canonical)
        return TypeDescriptor(kind=TypeKind.UNKNOWN, canonical=canonical)
    return _describe(node, components or ())


def _describe(node: ABIType, components: Sequence[Mapping[str, Any]]) -> TypeDescriptor:
    canonical = node.to_type_str()

    if node.is_array:
        dim = node.arrlist[-1]
        return TypeDescriptor(
            kind=TypeKind.ARRAY,
            canonical=canonical,
            elem=_describe(node.item_type, components),
            length=dim[0] if dim else None,
        )

    if isinstance(node, TupleType):
        fields = []
        for i, sub in enumerate(node.components):
            entry = components[i] if i < len(components) else {}
            fields.append(Parameter(
                name=entry.get("name", ""),
                index=i,
                type=_describe(sub, entry.get("components") or ()),
            ))
        return TypeDescriptor(kind=TypeKind.TUPLE, canonical=canonical, components=tuple(fields))

    if not isinstance(node, BasicType):
        return TypeDescriptor(kind=TypeKind.UNKNOWN, canonical=canonical)
    if node.base == "bytes":
        if node.sub is None:
            return TypeDescriptor(kind=TypeKind.BYTES, canonical=canonical)
        return TypeDescriptor(kind=TypeKind.FIXED_BYTES, canonical=canonical, size=node.sub)

    kind = _BASIC_KINDS.get(node.base, TypeKind.UNKNOWN)
    size = node.sub if kind in (TypeKind.INT, TypeKind.UINT) else None
    return TypeDescriptor(kind=kind, canonical=canonical, size=size)


# --- Signatures ---

def signature(name: str, inputs: Sequence[Parameter]) -> str:
    """Returns the canonical signature, e.g. "transfer(address,uint256)"."""
    return f"{name}({','.join(p.type.canonical for p in inputs)})"


def selector(sig: str) -> bytes:
    """Returns the 4-byte selector: the leading bytes of keccak256(sig)."""
    k = keccak.new(digest_bits=256)
    k.update(sig.encode("utf-8"))
    return k.digest()[:SELECTOR_LENGTH]


def describe_method(
    name: str,
    inputs: Sequence[Parameter],
    outputs: Sequence[Parameter],
    state_mutability: str = "",
) -> str:
    """Formats a method the way go-ethereum's Method.String() does.

    Example:
        "function balanceOf(address owner) view returns(uint256)"
    """
    args = ", ".join(f"{p.type.canonical} {p.name}" for p in inputs)
    rets = ", ".join(f"{p.type.canonical} {p.name}" if p.name else p.type.canonical for p in outputs)
    # nonpayable is the default and is never printed
    state = "" if state_mutability in ("", "nonpayable") else f"{state_mutability} "
    return f"function {name}({args}) {state}returns({rets})"
