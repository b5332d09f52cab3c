"""Defines the data model shared by the binding generator.

A generation run turns an ABI document into a `BindingModel`: the package
name, the embeddable ABI and bytecode text, and one `MethodSignature` per
ABI function in declaration order. Every model here is frozen; sequences are
tuples so that a built model cannot be altered before it is rendered.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

# Names a parameter cannot take in a generated function: Go keywords and
# predeclared identifiers, the imported packages, the package-level names of
# the generated file and the locals every binding body declares.
RESERVED_IDENTIFIERS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
    "any", "append", "bool", "byte", "cap", "close", "complex", "copy",
    "delete", "error", "false", "int", "int8", "int16", "int32", "int64",
    "len", "make", "new", "nil", "panic", "string", "true", "uint", "uint8",
    "uint16", "uint32", "uint64",
    "abi", "big", "common", "runtime", "strings",
    "ABI", "Bin", "code", "parsedABI", "mustParseABI",
    "input", "err", "ret", "res", "_",
})


class TypeKind(str, Enum):
    """The closed set of ABI type families a `TypeDescriptor` can carry."""
    ADDRESS = "address"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FIXED_BYTES = "fixed_bytes"
    BYTES = "bytes"
    STRING = "string"
    ARRAY = "array"
    TUPLE = "tuple"
    FIXED_POINT = "fixed_point"
    UNKNOWN = "unknown"


class TypeDescriptor(BaseModel):
    """A parsed ABI type.

    Attributes:
        kind: The type family.
        canonical: The canonical type string, with tuples expanded into
            their `(t1,t2)` form (e.g. "uint256", "(address,bytes32)[]").
        size: Bit width for integers, byte length for fixed byte arrays.
            None when the type string carries no (usable) size.
        elem: The item type when `kind` is ARRAY.
        length: The fixed length of an ARRAY, or None for a dynamic array.
        components: The named fields when `kind` is TUPLE.
    """
    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    canonical: str
    size: Optional[int] = None
    elem: Optional[TypeDescriptor] = None
    length: Optional[int] = None
    components: Tuple[Parameter, ...] = ()


class Parameter(BaseModel):
    """A single input or output of an ABI method.

    Attributes:
        name: The name as declared in the ABI; may be empty.
        index: Position of the parameter within its input or output list.
        type: The parsed ABI type.
        go_type: The Go type the parameter is bound to.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    index: int
    type: TypeDescriptor
    go_type: str = ""

    @property
    def identifier(self) -> str:
        """The Go identifier for this parameter.

        Synthesized as `arg<index>` when unnamed; a reserved name gets a
        trailing underscore.
        """
        if not self.name:
            return f"arg{self.index}"
        if self.name in RESERVED_IDENTIFIERS:
            return f"{self.name}_"
        return self.name


class MethodSignature(BaseModel):
    """One callable contract function and everything needed to bind it.

    Attributes:
        name: Exported binding name (first character upper-cased).
        method: Key the function is registered under in the parsed ABI,
            used for argument packing and result unpacking.
        raw_name: The function name exactly as declared.
        selector: 0x-prefixed hex of the 4-byte function selector.
        signature: Canonical signature, e.g. "transfer(address,uint256)".
        raw: Human-readable declaration, e.g.
            "function transfer(address to, uint256 value) returns(bool)".
        state_mutability: The declared state mutability, if any.
        inputs: Parameters in declaration order.
        outputs: Return values in declaration order.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    method: str
    raw_name: str
    selector: str
    signature: str
    raw: str
    state_mutability: str = ""
    inputs: Tuple[Parameter, ...] = ()
    outputs: Tuple[Parameter, ...] = ()


class BindingModel(BaseModel):
    """The root object handed to the renderer.

    Attributes:
        package_name: Go package the bindings are generated into.
        abi_text: Compact ABI JSON, escaped for a double-quoted Go literal.
        bytecode_text: Hex bytecode without 0x prefix, with or without the
            constructor code depending on configuration.
        methods: Method bindings in ABI declaration order.
    """
    model_config = ConfigDict(frozen=True)

    package_name: str
    abi_text: str
    bytecode_text: str
    methods: Tuple[MethodSignature, ...] = ()


TypeDescriptor.model_rebuild()
Parameter.model_rebuild()
