"""
evmbind: Go bindings for EVM contracts.

This package turns a contract's JSON ABI and bytecode into a Go source file
with one typed function per ABI method. Optionally, the deployment bytecode
is executed first so that only the runtime code is embedded.
"""

from .abi import load_abi, parse_type, selector, signature
from .builder import build, build_from_text
from .config import BindConfig
from .errors import (
    EvmBindError,
    InvalidParameterError,
    InvalidAbiError,
    InvalidBytecodeError,
    NameCollisionError,
    ConstructorArgumentsError,
    ExecutionError,
)
from .generator import generate
from .interpreter import Interpreter, Web3Interpreter
from .render import render
from .stripper import strip_constructor
from .typemap import map_type
from .types import BindingModel, MethodSignature, Parameter, TypeDescriptor, TypeKind

__all__ = [
    "load_abi",
    "parse_type",
    "selector",
    "signature",
    "build",
    "build_from_text",
    "BindConfig",
    "EvmBindError",
    "InvalidParameterError",
    "InvalidAbiError",
    "InvalidBytecodeError",
    "NameCollisionError",
    "ConstructorArgumentsError",
    "ExecutionError",
    "generate",
    "Interpreter",
    "Web3Interpreter",
    "render",
    "strip_constructor",
    "map_type",
    "BindingModel",
    "MethodSignature",
    "Parameter",
    "TypeDescriptor",
    "TypeKind",
]
