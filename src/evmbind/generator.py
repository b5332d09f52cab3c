"""Runs one generation: read inputs, build the model, render, write."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Type

from evmbind.builder import build_from_text
from evmbind.config import BindConfig
from evmbind.errors import EvmBindError, InvalidAbiError, InvalidBytecodeError, InvalidParameterError
from evmbind.interpreter import Interpreter, Web3Interpreter
from evmbind.render import render

logger = logging.getLogger(__name__)


def generate(config: BindConfig, interpreter: Optional[Interpreter] = None) -> Path:
    """
    Generate the Go bindings described by `config`.

    The source is rendered completely in memory before the output file is
    opened, so a failure at any stage leaves no file behind.

    Args:
        config: The generation options.
        interpreter: EVM for constructor stripping. When stripping and none
            is given, a `Web3Interpreter` on `config.rpc_endpoint` is used.

    Returns:
        The path of the written file.

    Raises:
        InvalidParameterError: The output directory does not exist.
        InvalidAbiError, InvalidBytecodeError: An input file is not UTF-8.
        EvmBindError: Any build or stripping failure.
        OSError: The inputs cannot be read or the output cannot be written.
    """
    if not config.out_dir.is_dir():
        raise InvalidParameterError(f"output directory does not exist: {config.out_dir}")

    abi_text = _read_text(config.abi_path, InvalidAbiError)
    bytecode = _read_text(config.bin_path, InvalidBytecodeError)

    if config.strip_constructor and interpreter is None:
        interpreter = Web3Interpreter(config.rpc_endpoint, gas=config.gas)

    model = build_from_text(
        abi_text,
        bytecode,
        config.package_name,
        strip_constructor=config.strip_constructor,
        interpreter=interpreter,
    )
    source = render(model)

    config.output_path.write_text(source, encoding="utf-8")
    logger.info("wrote %d bindings to %s", len(model.methods), config.output_path)
    return config.output_path


def _read_text(path: Path, error: Type[EvmBindError]) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise error(f"{path} is not valid UTF-8: {e}") from e
