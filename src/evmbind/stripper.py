"""Recovers runtime bytecode from deployment bytecode.

Deployment bytecode is constructor logic followed by the code it installs.
Slicing at a fixed offset misses anything the constructor rewrites (e.g.
immutable values), so the deployment code is executed instead and the bytes
it returns are taken as the runtime code.
"""
from __future__ import annotations

import logging
import re

from eth_utils import remove_0x_prefix

from evmbind.errors import InvalidBytecodeError
from evmbind.interpreter import Interpreter

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def clean_hex(bytecode: str) -> str:
    """Strips whitespace and an optional 0x prefix from hex bytecode.

    Raises:
        InvalidBytecodeError: If what remains is not an even-length hex string.
    """
    text = remove_0x_prefix(bytecode.strip())
    if not _HEX_RE.fullmatch(text) or len(text) % 2:
        raise InvalidBytecodeError("bytecode is not an even-length hex string")
    return text


def strip_constructor(bytecode: str, interpreter: Interpreter) -> str:
    """Executes deployment bytecode with empty input and returns its output.

    Args:
        bytecode: Hex deployment bytecode, with or without a 0x prefix.
        interpreter: The EVM used to run the constructor.

    Returns:
        The runtime bytecode as lowercase hex without a 0x prefix.

    Raises:
        InvalidBytecodeError: If `bytecode` is not hex.
        ExecutionError: If the interpreter fails; propagated as raised.
    """
    code = bytes.fromhex(clean_hex(bytecode))
    logger.debug("executing %d bytes of deployment code", len(code))
    runtime = interpreter.execute(code, b"")
    logger.debug("constructor returned %d bytes of runtime code", len(runtime))
    return runtime.hex()
