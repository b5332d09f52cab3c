"""Maps ABI type descriptors to Go types.

Only addresses, integers and byte arrays have a dedicated Go spelling.
Integers that do not fit a native fixed-width Go integer (any width other
than 8, 16, 32 or 64, or no usable width at all) are bound to `*big.Int`.
Every other type falls back to its canonical ABI spelling.
"""
from __future__ import annotations

import logging

from evmbind.types import TypeDescriptor, TypeKind

logger = logging.getLogger(__name__)

ADDRESS_TYPE = "common.Address"
BIG_INT_TYPE = "*big.Int"
BYTES_TYPE = "[]byte"

NATIVE_INT_WIDTHS = frozenset({8, 16, 32, 64})

# Canonical spellings that are already valid Go types.
_NATIVE_FALLBACKS = frozenset({TypeKind.BOOL, TypeKind.STRING})


def map_type(descriptor: TypeDescriptor) -> str:
    """Returns the Go type a value of the given ABI type is bound to.

    Args:
        descriptor: The parsed ABI type.

    Returns:
        The Go type name, e.g. "uint8", "*big.Int", "[32]byte". Types with
        no Go mapping return their canonical ABI spelling unchanged.
    """
    kind = descriptor.kind

    if kind is TypeKind.ADDRESS:
        return ADDRESS_TYPE

    if kind in (TypeKind.INT, TypeKind.UINT):
        if descriptor.size in NATIVE_INT_WIDTHS:
            prefix = "u" if kind is TypeKind.UINT else ""
            return f"{prefix}int{descriptor.size}"
        return BIG_INT_TYPE

    if kind is TypeKind.FIXED_BYTES:
        return f"[{descriptor.size}]byte"

    if kind is TypeKind.BYTES:
        return BYTES_TYPE

    if kind not in _NATIVE_FALLBACKS:
        logger.warning(
            "unsupported ABI type %r, falling back to canonical spelling", descriptor.canonical
        )
    return descriptor.canonical
