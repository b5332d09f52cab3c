"""Builds the `BindingModel` a renderer turns into Go source.

The builder is a pure transformation: parsed ABI entries and bytecode go in,
a frozen model comes out. The only collaborator it may call is the
interpreter used for constructor stripping.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from evmbind import abi
from evmbind.errors import (
    ConstructorArgumentsError,
    InvalidAbiError,
    InvalidParameterError,
    NameCollisionError,
)
from evmbind.interpreter import Interpreter
from evmbind.stripper import clean_hex, strip_constructor as run_constructor
from evmbind.typemap import map_type
from evmbind.types import BindingModel, MethodSignature, Parameter

logger = logging.getLogger(__name__)


def binding_name(method: str) -> str:
    """Exported Go name of a method: its first character upper-cased."""
    return method[:1].upper() + method[1:]


def embed_abi(document: Any) -> str:
    """Serializes an ABI document compactly, escaped for a Go string literal."""
    text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _resolve_name(raw_name: str, used: Mapping[str, Any]) -> str:
    # overloads become name0, name1, ... in the order they are declared
    name = raw_name
    idx = 0
    while name in used:
        name = f"{raw_name}{idx}"
        idx += 1
    return name


def _parameters(entries: Sequence[Mapping[str, Any]]) -> tuple:
    params = []
    for i, entry in enumerate(entries):
        descriptor = abi.parse_type(entry["type"], entry.get("components"))
        params.append(Parameter(
            name=entry.get("name", ""),
            index=i,
            type=descriptor,
            go_type=map_type(descriptor),
        ))
    return tuple(params)


def build_method(entry: Mapping[str, Any], method: str) -> MethodSignature:
    """
    Build the binding for a single ABI function entry.

    Args:
        entry: The ABI function entry.
        method: Key the function is registered under (differs from the
            declared name for overloads).

    Returns:
        The method binding, with mapped input and output types.
    """
    raw_name = entry["name"]
    inputs = _parameters(entry.get("inputs", []))
    outputs = _parameters(entry.get("outputs", []))
    state = entry.get("stateMutability", "")
    sig = abi.signature(raw_name, inputs)

    return MethodSignature(
        name=binding_name(method),
        method=method,
        raw_name=raw_name,
        selector="0x" + abi.selector(sig).hex(),
        signature=sig,
        raw=abi.describe_method(raw_name, inputs, outputs, state),
        state_mutability=state,
        inputs=inputs,
        outputs=outputs,
    )


def build(
    methods: Sequence[Mapping[str, Any]],
    package_name: str,
    abi_document: Any,
    bytecode: str,
    strip_constructor: bool = False,
    interpreter: Optional[Interpreter] = None,
) -> BindingModel:
    """
    Assemble the binding model for one contract.

    Args:
        methods: ABI entries as returned by `abi.load_abi`. Non-function
            entries are skipped; a constructor entry is checked when stripping.
        package_name: Go package the bindings are generated into.
        abi_document: The decoded ABI document to embed.
        bytecode: Hex bytecode, with or without 0x prefix.
        strip_constructor: Embed the runtime code returned by executing the
            constructor instead of the deployment code.
        interpreter: EVM used for stripping; required when stripping.

    Returns:
        The frozen binding model, methods in declaration order.

    Raises:
        InvalidAbiError: A function has no name.
        NameCollisionError: Two functions map to the same binding name.
        InvalidParameterError: Stripping requested without an interpreter.
        ConstructorArgumentsError: Stripping requested but the constructor
            takes arguments.
        InvalidBytecodeError: The bytecode is not hex.
        ExecutionError: The interpreter failed to run the constructor.
    """
    if strip_constructor:
        if interpreter is None:
            raise InvalidParameterError("constructor stripping requires an interpreter")
        ctor = abi.constructor(methods)
        if ctor is not None and ctor.get("inputs"):
            raise ConstructorArgumentsError(
                "cannot strip constructor code: the constructor takes "
                f"{len(ctor['inputs'])} argument(s)"
            )
        bytecode_text = run_constructor(bytecode, interpreter)
    else:
        bytecode_text = clean_hex(bytecode)

    used: Dict[str, Mapping[str, Any]] = {}
    exported: Dict[str, str] = {}
    bindings: List[MethodSignature] = []

    for entry in abi.functions(methods):
        raw_name = entry.get("name")
        if not raw_name:
            raise InvalidAbiError("ABI function entry has an empty name")

        method = _resolve_name(raw_name, used)
        used[method] = entry
        binding = build_method(entry, method)

        if binding.name in exported:
            raise NameCollisionError(
                f"methods {exported[binding.name]!r} and {method!r} both bind to {binding.name!r}",
                binding.name,
            )
        exported[binding.name] = method
        bindings.append(binding)
        logger.debug("bound %s as %s (%s)", binding.signature, binding.name, binding.selector)

    return BindingModel(
        package_name=package_name,
        abi_text=embed_abi(abi_document),
        bytecode_text=bytecode_text,
        methods=tuple(bindings),
    )


def build_from_text(
    abi_text: Union[str, bytes],
    bytecode: str,
    package_name: str,
    strip_constructor: bool = False,
    interpreter: Optional[Interpreter] = None,
) -> BindingModel:
    """Parse an ABI document and build its binding model in one step."""
    document = abi.load_abi(abi_text)
    return build(document, package_name, document, bytecode, strip_constructor, interpreter)
